"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) use the models defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service and DB layers."""

    current_fen: str
    current_turn: PieceColor
    move_count: int
    registered_players: dict[PieceColor, PlayerName]
    status: str
    result: Optional[str] = None


@dataclass
class MoveModel:
    """
    One accepted move, as recorded in the game's move list.

    Pieces are stored by their FEN letter (uppercase: white, lowercase: black).
    """

    move_number: int
    player_name: PlayerName
    from_square: str
    to_square: str
    piece: str
    captured_piece: Optional[str]
    promotion: Optional[str]
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    notation: str
    fen_after: str
