"""Protocol repository (SQLAlchemy implementation in sql_repository.py, dictionary-backed one in the tests)"""

from typing import Collection, Protocol
from uuid import UUID

from arcane_chess.core.models import GameModel, MoveModel
from arcane_chess.core.shared_types import Status


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record (and the moves played in it)."""
        ...

    def list_games(
        self, statuses: Collection[Status]
    ) -> list[tuple[UUID, GameModel]]:
        """Games whose status is one of the given ones, oldest first."""
        ...

    def record_move(
        self, game_id: UUID, game: GameModel, move: MoveModel
    ) -> MoveModel | None:
        """Store an accepted move together with the game state it led to, in one go. None if the game does not exist."""
        ...

    def list_moves(self, game_id: UUID) -> list[MoveModel]:
        """Moves of the game, in the order they were played."""
        ...
