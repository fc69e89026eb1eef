"""GameRepository backed by SQLAlchemy: one row per game in `games`, one row per accepted move in `game_moves`."""

from typing import Collection
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from arcane_chess.core.exceptions import RepositoryError
from arcane_chess.core.models import GameModel, MoveModel
from arcane_chess.core.shared_types import Status
from arcane_chess.db.schema import DBGame, DBGameMove


class SQLGameRepository:
    """All methods commit right away. The session is owned by the caller."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """None if there is no game with this id."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Insert the game under a fresh UUID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            current_fen=game.current_fen,
            current_turn=game.current_turn,
            move_count=game.move_count,
            registered_players=game.registered_players,
            status=game.status,
            result=game.result,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored record. None if there is no game with this id."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record (and the moves played in it)."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.execute(delete(DBGameMove).where(DBGameMove.game_id == game_id))
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def list_games(
        self, statuses: Collection[Status]
    ) -> list[tuple[UUID, GameModel]]:
        query = (
            select(DBGame)
            .where(DBGame.status.in_([str(status) for status in statuses]))
            .order_by(DBGame.created_at)
        )
        return [
            (game_db.id, self._to_model(game_db)) for game_db in self.db.scalars(query)
        ]

    def record_move(
        self, game_id: UUID, game: GameModel, move: MoveModel
    ) -> MoveModel | None:
        """
        Append an accepted move and overwrite the game record in a single commit.

        If the commit fails, the session is rolled back, so neither the move nor the new game state is stored.
        """
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        move_db = DBGameMove(
            game_id=game_id,
            move_number=move.move_number,
            player_name=move.player_name,
            from_square=move.from_square,
            to_square=move.to_square,
            piece=move.piece,
            captured_piece=move.captured_piece,
            promotion=move.promotion,
            is_check=move.is_check,
            is_checkmate=move.is_checkmate,
            is_stalemate=move.is_stalemate,
            notation=move.notation,
            fen_after=move.fen_after,
        )
        self.db.add(move_db)
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise RepositoryError(
                f"Could not store move {move.move_number} of game {game_id}."
            ) from exc
        self.db.refresh(move_db)
        return self._move_to_model(move_db)

    def list_moves(self, game_id: UUID) -> list[MoveModel]:
        query = (
            select(DBGameMove)
            .where(DBGameMove.game_id == game_id)
            .order_by(DBGameMove.move_number)
        )
        return [self._move_to_model(move_db) for move_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        game_db.current_fen = game.current_fen
        game_db.current_turn = game.current_turn
        game_db.move_count = game.move_count
        # assign a new dict, otherwise the JSON column does not register the change
        game_db.registered_players = dict(game.registered_players)
        game_db.status = game.status
        game_db.result = game.result

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Row -> transport model. The players dict is copied, callers are free to mutate it."""
        return GameModel(
            current_fen=game_db.current_fen,
            current_turn=game_db.current_turn,
            move_count=game_db.move_count,
            registered_players=dict(game_db.registered_players),
            status=game_db.status,
            result=game_db.result,
        )

    def _move_to_model(self, move_db: DBGameMove) -> MoveModel:
        return MoveModel(
            move_number=move_db.move_number,
            player_name=move_db.player_name,
            from_square=move_db.from_square,
            to_square=move_db.to_square,
            piece=move_db.piece,
            captured_piece=move_db.captured_piece,
            promotion=move_db.promotion,
            is_check=move_db.is_check,
            is_checkmate=move_db.is_checkmate,
            is_stalemate=move_db.is_stalemate,
            notation=move_db.notation,
            fen_after=move_db.fen_after,
        )
