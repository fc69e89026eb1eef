"""
Representation of a single position: the configuration of pieces on the board + everything else encoded in a FEN string.

The Position is the one object the rule engine mutates. It is owned by a single engine, there is no sharing between games.
"""

from dataclasses import dataclass
from typing import Optional, Self

from arcane_chess.chess.fen import (
    FEN_FIELD_COUNT,
    STARTING_FEN,
    CastlingDirection,
    castling_from_fen,
    castling_to_fen,
    is_valid_move_counter,
    is_valid_position,
    is_valid_square,
)
from arcane_chess.chess.pieces import EMPTY, Color, Piece
from arcane_chess.chess.square import BOARD_DIMENSIONS, Square
from arcane_chess.core.log import get_logger

logger = get_logger(__name__)

Grid = list[list[Piece]]


def empty_grid() -> Grid:
    num_ranks, num_files = BOARD_DIMENSIONS
    return [[EMPTY for _ in range(num_files)] for _ in range(num_ranks)]


def grid_from_fen(placement: str) -> Grid:
    """Construct the grid using the first part of the FEN string, the one that denotes the board position.

    ex. standard starting position:
    rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
    means:
    * black pieces are on the 8th rank (grid rank 0), starting with a rook on a8, knight on b8, etc.
    * pawns cover 7th rank entirely
    * ranks 6 through 3 have 8 consecutive empty squares
    * rank 2 are the white pawns (capital letters)
    * 1st rank (grid rank 7) are the white pieces.
    """
    grid = empty_grid()
    for rank, fen_one_rank in enumerate(placement.split("/")):
        file = 0
        for character in fen_one_rank:
            if character.isalpha():
                # a letter directly denotes the piece that should be created
                grid[rank][file] = Piece.from_fen(character)
                file += 1
            else:
                # A number denotes the amount of empty squares after each other
                file += int(character)
    return grid


def grid_to_fen(grid: Grid) -> str:
    """Ranks are separated by slashes in FEN string."""
    return "/".join(_rank_to_fen(row) for row in grid)


def _rank_to_fen(row: list[Piece]) -> str:
    """FEN string of a single rank"""
    fen_characters: list[str] = []
    empty_count = 0
    for piece in row:
        if not piece.is_empty:
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())
        else:
            empty_count += 1

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        fen_characters.append(str(empty_count))
    return "".join(fen_characters)


def _parse_counter(counter: str) -> int:
    """Move counters that are not plain ASCII digits are left at zero"""
    return int(counter) if is_valid_move_counter(counter) else 0


@dataclass
class Position:
    """
    Data that can be constructed from a FEN string.
    ----

    * squares: 8x8 grid. squares[rank][file], with rank 0 the 8th rank and file 0 the a-file. Empty squares hold the EMPTY marker.
    * side_to_move: white or black
    * castling_rights: one flag per castling direction
    * en_passant_target: the square skipped by a pawn that just moved two squares (if any)
    * halfmove_clock: counts the moves since the last pawn move or capture (50-move rule)
    * fullmove_number: starts at 1 and increments after every move black makes
    """

    squares: Grid
    side_to_move: Color
    castling_rights: dict[CastlingDirection, bool]
    en_passant_target: Optional[Square]
    halfmove_clock: int
    fullmove_number: int

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """
        Parse the FEN into data
        ---

        Parsing is permissive: a string with fewer than 6 fields, or a board part that does not describe an 8x8 board,
        silently gets replaced by the standard starting position. Counters that are not numbers are set to zero.
        """
        parts = fen.split(" ")
        if len(parts) < FEN_FIELD_COUNT or not is_valid_position(parts[0]):
            logger.warning(
                "Cannot interpret %r as a position. Using the starting position.", fen
            )
            parts = STARTING_FEN.split(" ")

        placement, active_color, castling_str, en_passant_algebraic = parts[:4]
        half_move_clock, num_turns = parts[4:6]

        return cls(
            squares=grid_from_fen(placement),
            side_to_move=Color.BLACK if active_color == "b" else Color.WHITE,
            castling_rights=castling_from_fen(castling_str),
            en_passant_target=(
                Square.from_algebraic(en_passant_algebraic)
                if is_valid_square(en_passant_algebraic)
                else None
            ),
            halfmove_clock=_parse_counter(half_move_clock),
            fullmove_number=_parse_counter(num_turns),
        )

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN)

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        active_color = "w" if self.side_to_move == Color.WHITE else "b"
        castling_str = castling_to_fen(self.castling_rights)
        en_passant_algebraic = (
            self.en_passant_target.to_algebraic()
            if self.en_passant_target is not None
            else "-"
        )
        return (
            f"{grid_to_fen(self.squares)} {active_color} {castling_str} "
            f"{en_passant_algebraic} {self.halfmove_clock} {self.fullmove_number}"
        )

    # --- ACCESSORS ---
    # NOTE: Out of range coordinates read as an empty square and writes to them are ignored.
    # Path walking loops rely on this, so do not raise here. Square names are validated in Square.from_algebraic instead.
    def piece_at(self, rank: int, file: int) -> Piece:
        if not Square(rank, file).is_within_bounds():
            return EMPTY
        return self.squares[rank][file]

    def set_piece(self, rank: int, file: int, piece: Piece) -> None:
        if not Square(rank, file).is_within_bounds():
            return
        self.squares[rank][file] = piece

    def piece(self, square: Square) -> Piece:
        return self.piece_at(square.rank, square.file)

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """
        Relocate whatever stands on from_square to to_square.

        No legality checks at all: that is the job of the rule engine.
        """
        if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
            return
        piece_that_moved = self.piece(from_square)
        self.set_piece(to_square.rank, to_square.file, piece_that_moved)
        self.set_piece(from_square.rank, from_square.file, EMPTY)

    # --- QUERIES ---
    def locate(self, piece: Piece) -> Optional[Square]:
        """First square (scanning from the 8th rank down, a-file to h-file) holding the given piece"""
        return next(
            (square for square, found in self.occupied_squares() if found == piece),
            None,
        )

    def squares_of(self, color: Color) -> list[Square]:
        return [
            square for square, piece in self.occupied_squares() if piece.color == color
        ]

    def occupied_squares(self) -> list[tuple[Square, Piece]]:
        return [
            (Square(rank, file), piece)
            for rank, row in enumerate(self.squares)
            for file, piece in enumerate(row)
            if not piece.is_empty
        ]
