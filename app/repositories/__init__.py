"""
Repository layer: SQLAlchemy data access that flushes but never commits.
"""
