# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
SQLAlchemy engine, session factory, declarative base, and the FastAPI
dependency that provides a DB session per request.

The engine owns the process-wide connection pool.  At most
``settings.db_pool_size`` connections are open at once; a request that
finds the pool exhausted waits for a connection to be returned rather than
erroring out.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Local tooling only – SQLite ignores pool sizing
        return {"connect_args": {"check_same_thread": False}}
    return {
        # pool_pre_ping keeps idle connections alive across MySQL's wait_timeout
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": 0,
        "pool_timeout": None,
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    FastAPI dependency.  Yields a session for the duration of the request,
    then closes it, returning the connection to the pool.
    Use with Depends(get_db).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
