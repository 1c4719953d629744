"""Database bootstrap helpers."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass


def make_session_factory(dsn: str) -> sessionmaker:
    """Build one engine + session factory for the given DSN."""

    engine = create_engine(dsn, pool_pre_ping=True)
    # `expire_on_commit=False` keeps ORM objects readable after commit in handlers.
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
