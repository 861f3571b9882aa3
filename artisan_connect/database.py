"""Artisan Connect — Database Engine & Session Factory."""

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, Session, create_engine

from artisan_connect.config import settings
from artisan_connect.core.logging import get_logger

logger = get_logger("database")

db_url = settings.effective_database_url


def _mask_url(url: str) -> str:
    """URL with the password replaced by ***, safe to log or return."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable database url>"


def backend_name(url: str) -> str:
    return "sqlite" if url.startswith("sqlite") else "postgresql"


def build_engine(url: str):
    """Engine for `url`. SQLite is shared across threads; PostgreSQL gets a
    small pre-pinged pool recycled every five minutes."""
    if backend_name(url) == "sqlite":
        logger.info(f"📦 Database backend: SQLite ({url})")
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})

    logger.info(f"🐘 Database backend: PostgreSQL ({_mask_url(url)})")
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=300,
    )


engine = build_engine(db_url)


def test_connection() -> bool:
    """SELECT 1 against the engine; False on any failure."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("✅ Database reachable")
        return True
    except Exception as e:
        logger.error(f"❌ Database unreachable: {e}")
        return False


def init_db() -> None:
    """Create any missing tables."""
    # Registers the table models on SQLModel.metadata
    from artisan_connect.models import (  # noqa: F401
        artisan_models,
        audit_models,
        event_models,
    )

    SQLModel.metadata.create_all(engine)
    logger.info(f"✅ Tables ready: {', '.join(sorted(SQLModel.metadata.tables))}")


def get_session():
    """Dependency: one session per request."""
    with Session(engine) as session:
        yield session
