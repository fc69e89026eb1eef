"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from arcane_chess.core.exceptions import InvalidSquareError

# (number of ranks, number of files)
BOARD_DIMENSIONS = (8, 8)

# the only characters allowed in a square name. NOTE: str.isdecimal() would also let through non-ASCII digits
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[1]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[0] + 1))


def is_square_name(name: str) -> bool:
    """file letter a-h followed by rank digit 1-8"""
    return len(name) == 2 and name[0] in FILE_NAMES and name[1] in RANK_NAMES


@dataclass(frozen=True)
class Square:
    """
    Board coordinates as stored in the position grid.

    Rank 0 is the top rank of the FEN placement (the 8th rank), rank 7 the 1st rank.
    File 0 is the a-file, file 7 the h-file.
    """

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        if not is_square_name(sq):
            raise InvalidSquareError(f"invalid square: {sq!r}")
        file = FILE_NAMES.index(sq[0])
        rank = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file]}{BOARD_DIMENSIONS[0] - self.rank}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )
