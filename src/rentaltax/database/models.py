"""SQLAlchemy models for rentaltax database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Scenario(Base):
    """Saved scenario model.

    Inputs are stored as the JSON text produced by the serialization module.
    """

    __tablename__ = "scenarios"

    id = Column(String, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    inputs_json = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


class LastSession(Base):
    """Auto-saved working inputs. Holds at most one row."""

    __tablename__ = "last_session"

    id = Column(Integer, primary_key=True)
    inputs_json = Column(Text, nullable=False)
    saved_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
