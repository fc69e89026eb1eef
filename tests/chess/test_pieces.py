"""Unit tests for arcane_chess/chess/pieces.py"""

import pytest

from arcane_chess.chess.pieces import (
    EMPTY,
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    Color,
    Piece,
    PieceType,
    opponent_of,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize(
    "piece_type",
    [piece_type for piece_type in PieceType if piece_type != PieceType.EMPTY],
)
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type].lower()


def test_empty_marker() -> None:
    assert EMPTY.is_empty
    assert EMPTY.color == Color.NONE
    assert not Piece.from_fen("K").is_empty


def test_opponent() -> None:
    assert opponent_of(Color.WHITE) == Color.BLACK
    assert opponent_of(Color.BLACK) == Color.WHITE
