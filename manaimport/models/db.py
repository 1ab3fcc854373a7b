"""
SQLAlchemy ORM models for persistent storage.

Cards are stored one row per inventory record with their images kept
as a JSON document. Each completed run writes one collection row.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class MagicCardDB(Base):
    """
    An enriched card copy-group from the last import.

    Prices are stored in cents.
    """

    __tablename__ = "magic_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    set_code: Mapped[str] = mapped_column(String(16))
    set_name: Mapped[str] = mapped_column(String(255))
    rarity: Mapped[str] = mapped_column(String(32))
    layout: Mapped[str] = mapped_column(String(32))
    quantity: Mapped[int] = mapped_column(Integer)
    price: Mapped[int] = mapped_column(Integer)
    foil: Mapped[bool] = mapped_column(Boolean)
    manabox_id: Mapped[str] = mapped_column(String(64))
    scryfall_id: Mapped[str] = mapped_column(String(64), index=True)

    # {"front": {"small", "normal", "large"}, "back": {...}}; back only for multi-faced cards
    images: Mapped[dict[str, Any]] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<MagicCardDB(name={self.name}, set={self.set_code}, qty={self.quantity})>"


class MagicCollectionDB(Base):
    """Collection-wide totals written at the end of a successful import."""

    __tablename__ = "magic_collections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    total: Mapped[int] = mapped_column(Integer)
    value: Mapped[int] = mapped_column(Integer)
    updated: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<MagicCollectionDB(total={self.total}, value={self.value})>"
