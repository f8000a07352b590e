from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from string_analyzer.config import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(url: str) -> Engine:
    """
    Build an engine for ``url``.

    SQLite connections are shared with FastAPI's threadpool, and a purely
    in-memory SQLite database is pinned to one connection so every session
    sees the same tables.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return create_engine(url, **options)


engine = create_db_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to provide a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Initialize database tables (runs once on startup)."""
    from string_analyzer.models import string_record  # noqa: F401  ensure models are registered
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created successfully.")
