"""Pieces as the domain layer sees them: a type and a color, plus the marker for an empty square."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    WHITE = auto()
    BLACK = auto()


# FEN letters (black / lower case versions)
FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}
PIECE_TO_FEN: dict[PieceType, str] = {
    piece_type: letter for letter, piece_type in FEN_TO_PIECE.items()
}


def opponent_of(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, letter: str) -> Self:
        """Upper case for white, lower case for black. A letter that is not a piece raises KeyError."""
        color = Color.WHITE if letter.isupper() else Color.BLACK
        return cls(FEN_TO_PIECE[letter.lower()], color)

    def to_fen(self) -> str:
        letter = PIECE_TO_FEN[self.type]
        return letter.upper() if self.color == Color.WHITE else letter

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY


# Marker stored on (and returned for) squares without a piece
EMPTY = Piece(PieceType.EMPTY, Color.NONE)
