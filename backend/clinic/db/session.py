import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def _mask_url_password(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return url


def get_engine(database_url: str = None):
    """Return a cached SQLAlchemy engine, creating it on first call.

    The URL comes from the argument or DATABASE_URL, so tests can point the
    application at SQLite before anything touches the database. Changing the
    URL disposes the previous engine.
    """
    global _engine, _SessionLocal, _database_url

    database_url = database_url or os.getenv("DATABASE_URL", "sqlite:///./clinic.db")
    if _engine is not None and _database_url == database_url:
        return _engine

    if _engine is not None:
        _engine.dispose()
        _SessionLocal = None

    url = make_url(database_url)
    if url.drivername.startswith("postgres"):
        _engine = create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,
            connect_args={
                "application_name": "clinic_crm",  # Visible in pg_stat_activity
                "connect_timeout": 10,
            },
        )
    elif url.drivername.startswith("sqlite") and url.database in (None, "", ":memory:"):
        # Share a single in-memory database across the process so DDL
        # persists across connections.
        _engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        _engine = create_engine(database_url)

    logger.info(
        "SQLAlchemy engine created",
        extra={
            "context": {
                "url": _mask_url_password(database_url),
                "dialect": _engine.dialect.name,
            }
        },
    )
    _database_url = database_url
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=get_engine()
        )
    return _SessionLocal


def SessionLocal():
    """Return a new Session instance bound to the current engine."""
    return get_sessionmaker()()


# Request-scoped session used by the SQL repositories inside Flask.
# create_app() removes it on app-context teardown.
db_session = scoped_session(SessionLocal)


def create_tables():
    """Create all tables in database using the lazy engine."""
    # Ensure models are registered on Base.metadata
    from clinic.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def drop_tables():
    from clinic.db import base  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
