"""
SQLAlchemy ORM models for persistent storage.

Saved decks are stored as documents: metadata columns plus the flat card
list as JSON in catalog shape.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SavedDeckDB(Base):
    """A named deck saved by the user."""

    __tablename__ = "saved_decks"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    thumbnail: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Main entries then Extra entries, each a catalog card object
    cards: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)

    # Set explicitly so duplicates and updates control them
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<SavedDeckDB(id={self.id}, name={self.name})>"
