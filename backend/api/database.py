"""
Database setup for the roll history.
SQLite file next to this module by default; set DATABASE_URL (e.g. Postgres) to override.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

DEFAULT_DB_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "rolls.db")


def resolve_database_url(raw_url: str | None) -> str:
    """
    Normalize a DATABASE_URL value.
    Hosted Postgres often hands out postgres://, which SQLAlchemy 2.x does not accept.
    """
    if not raw_url:
        return f"sqlite:///{DEFAULT_DB_FILE}"
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql://", 1)
    return raw_url


DATABASE_URL = resolve_database_url(os.environ.get("DATABASE_URL"))

# SQLite needs check_same_thread=False; Postgres does not use that arg
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency that yields a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables (on the app engine unless another is given)."""
    # Tables are registered on Base when the models module is imported
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
