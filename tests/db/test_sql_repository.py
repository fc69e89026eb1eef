"""Unit tests for arcane_chess/db/sql_repository.py"""

from unittest.mock import patch
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from arcane_chess.core.exceptions import RepositoryError
from arcane_chess.core.models import GameModel, MoveModel
from arcane_chess.core.shared_types import Color, GameResult, Status
from arcane_chess.db.sql_repository import SQLGameRepository

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def mock_game() -> GameModel:
    return GameModel(
        current_fen=STARTING_FEN,
        current_turn=Color.WHITE,
        move_count=0,
        registered_players={"white": "player_white", "black": "player_black"},
        status=Status.IN_PROGRESS,
    )


def mock_move(move_number: int, from_square: str, to_square: str) -> MoveModel:
    return MoveModel(
        move_number=move_number,
        player_name="player_white" if move_number % 2 else "player_black",
        from_square=from_square,
        to_square=to_square,
        piece="P" if move_number % 2 else "p",
        captured_piece=None,
        promotion=None,
        is_check=False,
        is_checkmate=False,
        is_stalemate=False,
        notation=to_square,
        fen_after="FEN string",
    )


@pytest.fixture
def repo(db_session_repo: Session) -> SQLGameRepository:
    return SQLGameRepository(db_session_repo)


def test_create_game(repo: SQLGameRepository) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = mock_game()
    record_in_db, game_id = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert isinstance(game_id, UUID)
    assert record_in_db == model


def test_get_game_by_id(repo: SQLGameRepository) -> None:
    """Create a game, then fetch it from db."""
    expected_game, game_id = repo.create_game(mock_game())
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(repo: SQLGameRepository) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(mock_game())
    assert repo.get_game(uuid4()) is None


def test_update_game(repo: SQLGameRepository) -> None:
    _, game_id = repo.create_game(mock_game())

    updated = mock_game()
    updated.current_fen = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 1"
    updated.current_turn = Color.WHITE
    updated.move_count = 4
    updated.status = Status.CHECKMATE
    updated.result = GameResult.BLACK_WINS

    stored = repo.update_game(game_id, updated)
    assert stored == updated
    assert repo.get_game(game_id) == updated


def test_update_registered_players(repo: SQLGameRepository) -> None:
    """Changes inside the JSON column are persisted"""
    waiting = mock_game()
    waiting.registered_players = {"white": "player_white"}
    waiting.status = Status.WAITING_FOR_PLAYERS
    _, game_id = repo.create_game(waiting)

    joined = repo.get_game(game_id)
    assert joined is not None
    joined.registered_players["black"] = "player_black"
    repo.update_game(game_id, joined)

    stored = repo.get_game(game_id)
    assert stored is not None
    assert stored.registered_players == {
        "white": "player_white",
        "black": "player_black",
    }


def test_update_unknown_game(repo: SQLGameRepository) -> None:
    assert repo.update_game(uuid4(), mock_game()) is None


def test_delete_game(repo: SQLGameRepository) -> None:
    model = mock_game()
    _, game_id = repo.create_game(model)
    repo.record_move(game_id, mock_game(), mock_move(1, "e2", "e4"))

    deleted = repo.delete_game(game_id)
    assert deleted == model
    assert repo.get_game(game_id) is None
    assert repo.list_moves(game_id) == []


def test_delete_unknown_game(repo: SQLGameRepository) -> None:
    assert repo.delete_game(uuid4()) is None


def test_record_and_list_moves(repo: SQLGameRepository) -> None:
    _, game_id = repo.create_game(mock_game())
    first = mock_move(1, "e2", "e4")
    second = mock_move(2, "e7", "e5")

    assert repo.record_move(game_id, mock_game(), first) == first
    assert repo.record_move(game_id, mock_game(), second) == second
    assert repo.list_moves(game_id) == [first, second]


def test_moves_are_listed_in_order(repo: SQLGameRepository) -> None:
    _, game_id = repo.create_game(mock_game())
    for move in [mock_move(3, "g1", "f3"), mock_move(1, "e2", "e4"), mock_move(2, "e7", "e5")]:
        repo.record_move(game_id, mock_game(), move)
    assert [move.move_number for move in repo.list_moves(game_id)] == [1, 2, 3]


def test_moves_of_other_games_are_not_listed(repo: SQLGameRepository) -> None:
    _, game_id = repo.create_game(mock_game())
    _, other_id = repo.create_game(mock_game())
    repo.record_move(game_id, mock_game(), mock_move(1, "e2", "e4"))
    repo.record_move(other_id, mock_game(), mock_move(1, "d2", "d4"))

    [move] = repo.list_moves(other_id)
    assert move.from_square == "d2"


def test_capture_is_stored(repo: SQLGameRepository) -> None:
    _, game_id = repo.create_game(mock_game())
    move = mock_move(3, "e4", "d5")
    move.captured_piece = "p"
    move.notation = "xd5"
    repo.record_move(game_id, mock_game(), move)
    assert repo.list_moves(game_id)[0].captured_piece == "p"


def test_record_move_on_unknown_game(repo: SQLGameRepository) -> None:
    assert repo.record_move(uuid4(), mock_game(), mock_move(1, "e2", "e4")) is None


def test_record_move_stores_game_state(repo: SQLGameRepository) -> None:
    _, game_id = repo.create_game(mock_game())
    after_move = mock_game()
    after_move.current_fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 1"
    after_move.current_turn = Color.BLACK
    after_move.move_count = 1

    repo.record_move(game_id, after_move, mock_move(1, "e2", "e4"))
    assert repo.get_game(game_id) == after_move
    assert len(repo.list_moves(game_id)) == 1


def test_failed_commit_stores_neither_move_nor_game(
    repo: SQLGameRepository, db_session_repo: Session
) -> None:
    """The move row and the game record go in together or not at all"""
    original, game_id = repo.create_game(mock_game())
    after_move = mock_game()
    after_move.current_fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 1"
    after_move.current_turn = Color.BLACK
    after_move.move_count = 1

    commit_failure = OperationalError("COMMIT", {}, Exception("disk I/O error"))
    with patch.object(db_session_repo, "commit", side_effect=commit_failure):
        with pytest.raises(RepositoryError):
            repo.record_move(game_id, after_move, mock_move(1, "e2", "e4"))

    assert repo.list_moves(game_id) == []
    assert repo.get_game(game_id) == original


def test_list_games_by_status(repo: SQLGameRepository) -> None:
    waiting = mock_game()
    waiting.status = Status.WAITING_FOR_PLAYERS
    finished = mock_game()
    finished.status = Status.CHECKMATE
    finished.result = GameResult.WHITE_WINS

    _, waiting_id = repo.create_game(waiting)
    _, playing_id = repo.create_game(mock_game())
    _, finished_id = repo.create_game(finished)

    open_games = dict(
        repo.list_games([Status.WAITING_FOR_PLAYERS, Status.IN_PROGRESS])
    )
    assert open_games == {waiting_id: waiting, playing_id: mock_game()}

    [(game_id, game)] = repo.list_games([Status.CHECKMATE])
    assert game_id == finished_id
    assert game.result == GameResult.WHITE_WINS

    assert repo.list_games([Status.STALEMATE]) == []
