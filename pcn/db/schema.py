"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameRecord(Base):
    """One PCN document. Nested parts (moves, meta, sides) are stored as JSON."""

    __tablename__ = "game_records"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    setup: Mapped[str]
    moves: Mapped[list[list[Any]]] = mapped_column(JSON, default=list)
    status: Mapped[Optional[str]]
    draw_offered_by: Mapped[Optional[str]]
    winner: Mapped[Optional[str]]
    meta: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    sides: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
