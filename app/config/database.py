"""
Database connection settings for the HR access and leave service.
Provides SQLAlchemy engine construction and session management.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import Settings

logger = logging.getLogger(__name__)

SLOW_QUERY_SECONDS = 0.5


def create_db_engine(settings: Settings) -> Engine:
    """Build the SQLAlchemy engine for the configured database URL."""
    connect_args = {}
    engine_kwargs = {"echo": settings.DB_ECHO, "pool_pre_ping": True}

    if settings.is_sqlite():
        # SQLite connections are handed between the threadpool workers FastAPI uses.
        connect_args["check_same_thread"] = False
    else:
        engine_kwargs.update(pool_size=20, max_overflow=10, pool_recycle=3600)

    engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, **engine_kwargs)

    if settings.is_sqlite():
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create sessionmaker bound to the engine."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Event listeners for performance monitoring
@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log query execution time - start timer"""
    conn.info.setdefault('query_start_time', []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log query execution time - stop timer and log if slow query"""
    total_time = time.time() - conn.info['query_start_time'].pop()

    if total_time > SLOW_QUERY_SECONDS:
        logger.warning(
            f"Slow query detected ({total_time:.4f}s): {statement[:100]}..."
        )


def get_db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Get database session with automatic cleanup"""
    session = session_factory()
    try:
        yield session
    except SQLAlchemyError as e:
        logger.error(f"Database session error: {str(e)}")
        session.rollback()
        raise
    except Exception:
        # Request-level failures (401, 404, ...) raised while the session is open.
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def get_db_context(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Context manager for database sessions"""
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database context error: {str(e)}")
        session.rollback()
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
