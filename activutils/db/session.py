"""
activutils/db/session.py
Engine and session factory for the preference store
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from activutils.core.config import settings
from activutils.db.base import Base
import activutils.models  # noqa: F401  registers tables on Base.metadata

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def make_engine(database_url: str = None):
    url = database_url or settings.DATABASE_URL
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    # in-memory databases live per connection, share a single one
    if url in IN_MEMORY_SQLITE_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def make_session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine) -> None:
    """Create missing tables"""
    Base.metadata.create_all(bind=engine)

