"""Moves: the request to go from one square to another, and the record of a move the engine accepted."""

from dataclasses import dataclass
from typing import Optional, Self

from arcane_chess.chess.pieces import Piece, PieceType
from arcane_chess.chess.square import Square


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": move the piece that was on g8 to f6
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a move that passed validation.

    * piece: the piece that moved
    * captured_piece: whatever stood on the target square (None if it was empty)
    * promotion: piece type a pawn promoted into. Promotion is not implemented, so always None.
    * is_check / is_checkmate / is_stalemate: the situation of the opponent after the move
    * notation: simplified algebraic notation (see `build_notation()`)
    * fen_after: encoding of the position after the move
    """

    piece: Piece
    captured_piece: Optional[Piece]
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    notation: str
    fen_after: str
    promotion: Optional[PieceType] = None


def build_notation(piece: Piece, to_square: Square, is_capture: bool) -> str:
    """
    Simplified algebraic notation
    ---

    <piece letter, omitted for pawns><'x' if a piece was taken><target square>

    ex) "e4", "Nf3", "Bxf7", "xd5" (a pawn taking on d5)

    NOTE: no disambiguation, no check(mate) suffix, no castling notation.
    """
    piece_letter = "" if piece.type == PieceType.PAWN else piece.to_fen().upper()
    capture_mark = "x" if is_capture else ""
    return f"{piece_letter}{capture_mark}{to_square.to_algebraic()}"
