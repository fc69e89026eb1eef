"""
Helpers for the FEN encoding of a position.

<piece placement> <side to move> <castling rights> <en passant square> <halfmove clock> <fullmove number>

ex) rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 (the standard starting position)

The Position parses FEN permissively (see position.py). The strict validators below are used where input
should be rejected instead, i.e. when a client requests a custom starting position.
"""

from enum import Enum
from itertools import combinations
from typing import Callable

from arcane_chess.chess.pieces import FEN_TO_PIECE, Color
from arcane_chess.chess.square import BOARD_DIMENSIONS, Square, is_square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
FEN_FIELD_COUNT = 6
NO_RIGHTS = "-"


class CastlingDirection(Enum):
    """One flag per direction in the Position. The values are the FEN letters."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


# FEN always lists the rights in this order
CASTLING_ORDER: tuple[CastlingDirection, ...] = (
    CastlingDirection.WHITE_KING_SIDE,
    CastlingDirection.WHITE_QUEEN_SIDE,
    CastlingDirection.BLACK_KING_SIDE,
    CastlingDirection.BLACK_QUEEN_SIDE,
)

# "-" plus every non-empty subset of "KQkq", letters kept in order
VALID_CASTLING_ENCODINGS: list[str] = [NO_RIGHTS] + [
    "".join(direction.value for direction in subset)
    for size in range(1, len(CASTLING_ORDER) + 1)
    for subset in combinations(CASTLING_ORDER, size)
]


CASTLING_COLOR: dict[CastlingDirection, Color] = {
    CastlingDirection.WHITE_KING_SIDE: Color.WHITE,
    CastlingDirection.WHITE_QUEEN_SIDE: Color.WHITE,
    CastlingDirection.BLACK_KING_SIDE: Color.BLACK,
    CastlingDirection.BLACK_QUEEN_SIDE: Color.BLACK,
}

# Where the rook has to stand (unmoved) for the castling right to keep existing
CASTLING_ROOK_SQUARES: dict[CastlingDirection, Square] = {
    CastlingDirection.WHITE_KING_SIDE: Square.from_algebraic("h1"),
    CastlingDirection.WHITE_QUEEN_SIDE: Square.from_algebraic("a1"),
    CastlingDirection.BLACK_KING_SIDE: Square.from_algebraic("h8"),
    CastlingDirection.BLACK_QUEEN_SIDE: Square.from_algebraic("a8"),
}


def castling_from_fen(castling: str) -> dict[CastlingDirection, bool]:
    """A direction keeps its right only when its letter shows up in the field ('-' has none of them)."""
    return {direction: direction.value in castling for direction in CASTLING_ORDER}


def castling_to_fen(castling_rights: dict[CastlingDirection, bool]) -> str:
    """inverse of castling_from_fen()"""
    letters = "".join(
        direction.value for direction in CASTLING_ORDER if castling_rights[direction]
    )
    return letters or NO_RIGHTS


# --- STRICT VALIDATION ---
def is_valid_fen(fen: str) -> bool:
    """Exactly six space separated fields, each of which passes its own check."""
    fields = fen.split(" ")
    if len(fields) != FEN_FIELD_COUNT:
        return False
    return all(check(value) for check, value in zip(FIELD_CHECKS, fields))


def is_valid_position(placement: str) -> bool:
    """
    Piece placement: one entry per rank separated by '/', each of them covering exactly all files.

    A rank entry consists of piece letters (one file each) and digits 1-8 (that many empty files).
    """
    num_ranks, num_files = BOARD_DIMENSIONS
    rank_entries = placement.split("/")
    if len(rank_entries) != num_ranks:
        return False
    return all(_files_covered(entry) == num_files for entry in rank_entries)


def _files_covered(rank_entry: str) -> int:
    """Number of files a single rank entry describes (-1 if it holds something that is neither piece nor digit)"""
    covered = 0
    for character in rank_entry:
        if character in "12345678":
            covered += int(character)
        elif character.lower() in FEN_TO_PIECE:
            covered += 1
        else:
            return -1
    return covered


def is_valid_color_code(color: str) -> bool:
    return color in ("w", "b")


def is_valid_castling_rights(castling: str) -> bool:
    return castling in VALID_CASTLING_ENCODINGS


def is_valid_en_passant(en_passant: str) -> bool:
    """'-' when no pawn just made a double step"""
    return en_passant == "-" or is_valid_square(en_passant)


def is_valid_square(square: str) -> bool:
    return is_square_name(square)


def is_valid_move_counter(counter: str) -> bool:
    """plain ASCII digits only"""
    return counter.isascii() and counter.isdecimal()


# one check per FEN field, in field order
FIELD_CHECKS: tuple[Callable[[str], bool], ...] = (
    is_valid_position,
    is_valid_color_code,
    is_valid_castling_rights,
    is_valid_en_passant,
    is_valid_move_counter,
    is_valid_move_counter,
)
