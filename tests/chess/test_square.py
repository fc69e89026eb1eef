"""Unit tests for arcane_chess/chess/square.py"""

from string import ascii_lowercase

import pytest

from arcane_chess.chess.square import BOARD_DIMENSIONS, Square
from arcane_chess.core.exceptions import InvalidSquareError


@pytest.mark.parametrize(
    "rank, file, notation",
    [
        (rank, file, f"{ascii_lowercase[file]}{8 - rank}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(rank: int, file: int, notation: str) -> None:
    """'a8' maps to rank 0, file 0 and 'h1' to rank 7, file 7"""
    square = Square.from_algebraic(notation)
    assert square.rank == rank
    assert square.file == file


@pytest.mark.parametrize(
    "rank, file, notation",
    [
        (rank, file, f"{ascii_lowercase[file]}{8 - rank}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_to_algebraic_notation(rank: int, file: int, notation: str) -> None:
    square = Square(rank, file)
    assert square.to_algebraic() == notation


def test_corner_squares() -> None:
    assert Square.from_algebraic("a8") == Square(0, 0)
    assert Square.from_algebraic("h1") == Square(7, 7)
    assert Square.from_algebraic("e4") == Square(4, 4)


@pytest.mark.parametrize(
    "name",
    [
        "z9",  # both out of range
        "e9",  # rank beyond range
        "e0",  # rank before range
        "i4",  # file beyond range
        "E4",  # capital letters are not file names
        "e",  # too short
        "e44",  # too long
        "",
        "4e",  # wrong order
        "ee",  # rank is not a number
        "e٤",  # Arabic-Indic four
        "e４",  # fullwidth four
        "a¹",  # superscript one
    ],
)
def test_invalid_square_names(name: str) -> None:
    with pytest.raises(InvalidSquareError):
        Square.from_algebraic(name)


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for rank in range(BOARD_DIMENSIONS[0]):
        for file in range(BOARD_DIMENSIONS[1]):
            assert Square(rank, file).is_within_bounds()


def test_square_out_of_bounds() -> None:
    assert not Square(BOARD_DIMENSIONS[0], 0).is_within_bounds()
    assert not Square(0, BOARD_DIMENSIONS[1]).is_within_bounds()
    assert not Square(-1, -1).is_within_bounds()
