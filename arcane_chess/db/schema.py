"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    current_fen: Mapped[str]
    current_turn: Mapped[str] = mapped_column(String(5))
    move_count: Mapped[int] = mapped_column(default=0)
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    status: Mapped[str]
    result: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBGameMove(Base):
    __tablename__ = "game_moves"
    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    game_id: Mapped[UUID] = mapped_column(ForeignKey("games.id"), index=True)
    move_number: Mapped[int]
    player_name: Mapped[str]
    from_square: Mapped[str] = mapped_column(String(2))
    to_square: Mapped[str] = mapped_column(String(2))
    piece: Mapped[str] = mapped_column(String(1))
    captured_piece: Mapped[Optional[str]] = mapped_column(String(1))
    promotion: Mapped[Optional[str]] = mapped_column(String(1))
    is_check: Mapped[bool] = mapped_column(default=False)
    is_checkmate: Mapped[bool] = mapped_column(default=False)
    is_stalemate: Mapped[bool] = mapped_column(default=False)
    notation: Mapped[str] = mapped_column(String(10))
    fen_after: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
