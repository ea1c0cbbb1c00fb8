"""
Database Engine & Session Management
Pooled SQLAlchemy engine with dependency injection for FastAPI.
"""
import logging
import os
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from app.config import get_settings
from app.errors import TransientStoreFailure

logger = logging.getLogger(__name__)
settings = get_settings()


def _engine_options(database_url: str) -> dict:
    """Pool and driver options for the configured backend."""
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        # Ensure data directory exists
        if url.database and url.database != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)
        return {
            "connect_args": {
                "check_same_thread": False,  # Required for SQLite
                "timeout": settings.DB_POOL_TIMEOUT_SECONDS,
            },
        }

    connect_args = {"connect_timeout": settings.DB_POOL_TIMEOUT_SECONDS}
    if settings.DB_SSL_REQUIRED:
        connect_args["sslmode"] = "require"
    return {
        "connect_args": connect_args,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": settings.DB_POOL_TIMEOUT_SECONDS,
        "pool_recycle": settings.DB_POOL_RECYCLE_SECONDS,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)


@event.listens_for(engine, "connect")
def _on_connect(dbapi_connection, connection_record):
    logger.info("Database connection opened (%s)", engine.url.get_backend_name())


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a database session, auto-closes on finish."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(db: Session, operation: str):
    """Translate connectivity failures of the backing store into TransientStoreFailure.

    The session is rolled back and the original error is logged and chained,
    so nothing is swallowed on the way up.
    """
    try:
        yield
    except (OperationalError, InterfaceError, PoolTimeoutError) as exc:
        db.rollback()
        logger.error("Store failure during %s: %s", operation, exc)
        raise TransientStoreFailure(details={"operation": operation}) from exc


def init_db():
    """Create all tables. Called once at application startup."""
    from app.models import user as _user_model         # noqa: F401
    from app.models import payment as _payment_model   # noqa: F401

    Base.metadata.create_all(bind=engine)
