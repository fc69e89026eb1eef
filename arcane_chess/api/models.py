"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from arcane_chess.chess.fen import is_valid_fen, is_valid_square
from arcane_chess.core.exceptions import InvalidRequestError
from arcane_chess.core.shared_types import Color, GameResult, PieceType, Status

PieceColor = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    color: Color
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        fen = value.strip()
        if not is_valid_fen(fen):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a FEN string.")
        return fen


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not is_valid_square(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class ListGamesRequest(BaseModel):
    """Without a status, the open games are listed: those waiting for a second player and those in progress."""

    status: Optional[Status] = None


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    fen_state: str
    current_turn: Color
    move_count: int
    status: Status
    result: Optional[GameResult] = None


class GameListResponse(BaseModel):
    games: list[GameResponse]


class MoveResponse(BaseModel):
    game_id: UUID
    move_number: int
    piece: PieceType
    color: Color
    captured_piece: Optional[PieceType] = None
    notation: str
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    fen_after: str
    status: Status
    result: Optional[GameResult] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Color
    legal_moves: list[str]


class MoveHistoryResponse(BaseModel):
    game_id: UUID
    moves_uci: list[str]
    notation: list[str]
