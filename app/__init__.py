"""HR access control and leave ledger service."""
