"""Orchestration of communication from API models to business logic and persistence layers (and the reverse direction)."""

from contextlib import contextmanager
from threading import Lock
from typing import Iterator, Optional
from uuid import UUID

from arcane_chess.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameListResponse,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    ListGamesRequest,
    MoveHistoryResponse,
    MoveRequest,
    MoveResponse,
)
from arcane_chess.chess.engine import RuleEngine
from arcane_chess.chess.fen import STARTING_FEN
from arcane_chess.chess.move import MoveResult
from arcane_chess.chess.pieces import Color as DomainColor
from arcane_chess.chess.pieces import Piece
from arcane_chess.chess.position import Position
from arcane_chess.core.config import Settings, get_settings
from arcane_chess.core.exceptions import (
    GameStateError,
    NotYourTurnError,
    RepositoryError,
)
from arcane_chess.core.log import get_logger
from arcane_chess.core.models import GameModel, MoveModel
from arcane_chess.core.shared_types import Color, GameResult, PieceType, Status
from arcane_chess.db.repository import GameRepository

logger = get_logger(__name__)


class GameService:
    """
    Orchestration of layers for chess games.

    The service owns the game record: who plays which color, whose turn it is, the status, and the result.
    The RuleEngine only validates and applies a single move on the position stored in that record.
    """

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()
        self._locks: dict[UUID, Lock] = {}
        self._locks_guard = Lock()

    # -- Service API ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Register a new game with the requesting player as its only player."""

        position = Position.from_fen(request.starting_fen or STARTING_FEN)
        new_game = GameModel(
            current_fen=position.to_fen(),
            current_turn=_to_shared_color(position.side_to_move),
            move_count=0,
            registered_players={request.color: request.player_name},
            status=Status.WAITING_FOR_PLAYERS,
        )

        stored_game, game_id = self.repo.create_game(new_game)
        logger.info("Game %s created by %s", game_id, request.player_name)
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game. They get whatever color is left."""

        with self._game_lock(request.game_id):
            game = self._fetch_game(request.game_id)
            if game.status != Status.WAITING_FOR_PLAYERS:
                raise GameStateError(
                    f"Cannot join this game. Game is not accepting new players. status: {game.status}"
                )
            if request.player_name in game.registered_players.values():
                raise GameStateError(
                    f"Player {request.player_name} already joined this game."
                )

            taken_color = Color(next(iter(game.registered_players)))
            game.registered_players[taken_color.opponent] = request.player_name
            game.status = Status.IN_PROGRESS
            self.repo.update_game(request.game_id, game)

        logger.info("Player %s joined game %s", request.player_name, request.game_id)
        return self._create_game_response(request.game_id, game)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        1. game has to be in progress and it has to be your turn
        2. let the RuleEngine validate and apply the move (its errors propagate unchanged)
        3. flip the turn, count the move, and end the game on checkmate / stalemate
        4. store the move and the updated game together

        The lock of a game is dropped once the game is over.
        """
        with self._game_lock(request.game_id):
            game = self._fetch_game(request.game_id)
            self._assert_in_progress(game)
            self._assert_your_turn(game, request.player_name)

            engine = self._build_engine(game)
            result = engine.validate_move(request.from_square, request.to_square)

            mover = Color(game.current_turn)
            game.current_fen = result.fen_after
            game.move_count += 1
            game.current_turn = mover.opponent
            self._update_game_status(game, result, mover)

            move = self._create_move_model(game, request, result)
            self.repo.record_move(request.game_id, game, move)
            if game.result:
                self._release_lock(request.game_id)

        logger.info(
            "Game %s: %s played %s (move %d)",
            request.game_id,
            mover,
            result.notation,
            game.move_count,
        )
        return MoveResponse(
            game_id=request.game_id,
            move_number=move.move_number,
            piece=_to_shared_piece_type(result.piece),
            color=mover,
            captured_piece=(
                _to_shared_piece_type(result.captured_piece)
                if result.captured_piece
                else None
            ),
            notation=result.notation,
            is_check=result.is_check,
            is_checkmate=result.is_checkmate,
            is_stalemate=result.is_stalemate,
            fen_after=result.fen_after,
            status=game.status,
            result=game.result,
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve the set of legal moves (UCI notation) for the player whose turn it is."""

        game = self._fetch_game(request.game_id)
        self._assert_in_progress(game)
        self._assert_your_turn(game, request.player_name)

        engine = self._build_engine(game)
        color = Color(game.current_turn)
        moves = engine.legal_moves(_to_domain_color(color))
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=color,
            legal_moves=[move.to_uci() for move in moves],
        )

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def list_games(self, request: ListGamesRequest) -> GameListResponse:
        """Games with the requested status, or the open ones (waiting for players / in progress) if none was given."""
        statuses = (
            [request.status]
            if request.status
            else [Status.WAITING_FOR_PLAYERS, Status.IN_PROGRESS]
        )
        games = self.repo.list_games(statuses)
        return GameListResponse(
            games=[self._create_game_response(game_id, game) for game_id, game in games]
        )

    def move_history(self, request: GetGameRequest) -> MoveHistoryResponse:
        """The moves played so far, in order."""
        self._fetch_game(request.game_id)
        moves = self.repo.list_moves(request.game_id)
        return MoveHistoryResponse(
            game_id=request.game_id,
            moves_uci=[f"{move.from_square}{move.to_square}" for move in moves],
            notation=[move.notation for move in moves],
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Remove the game and its moves."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        self._release_lock(request.game_id)

    # -- Internal helpers --
    @contextmanager
    def _game_lock(self, game_id: UUID) -> Iterator[None]:
        """Moves on the same game are handled one at a time."""
        with self._locks_guard:
            lock = self._locks.setdefault(game_id, Lock())
        with lock:
            yield

    def _release_lock(self, game_id: UUID) -> None:
        with self._locks_guard:
            self._locks.pop(game_id, None)

    def _build_engine(self, game: GameModel) -> RuleEngine:
        """
        Load the stored position. The side to move comes from the game record,
        since the engine does not flip it in the FEN by default.
        """
        position = Position.from_fen(game.current_fen)
        position.side_to_move = _to_domain_color(Color(game.current_turn))
        return RuleEngine(position, advance_turn=self.settings.engine_advances_turn)

    def _assert_in_progress(self, game: GameModel) -> None:
        if game.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {game.status}")

    def _assert_your_turn(self, game: GameModel, player: str) -> None:
        """Only the player owning the color to move may ask for legal moves or move."""
        player_to_move = game.registered_players.get(game.current_turn)
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {player_to_move} to make a move first."
            )

    def _update_game_status(
        self, game: GameModel, result: MoveResult, mover: Color
    ) -> None:
        """The player who delivers checkmate wins. Stalemate is a draw."""
        if result.is_checkmate:
            game.status = Status.CHECKMATE
            game.result = (
                GameResult.WHITE_WINS if mover == Color.WHITE else GameResult.BLACK_WINS
            )
        elif result.is_stalemate:
            game.status = Status.STALEMATE
            game.result = GameResult.DRAW

        if game.result:
            logger.info("Game over: %s, %s", game.status, game.result)

    def _create_move_model(
        self, game: GameModel, request: MoveRequest, result: MoveResult
    ) -> MoveModel:
        return MoveModel(
            move_number=game.move_count,
            player_name=request.player_name,
            from_square=request.from_square,
            to_square=request.to_square,
            piece=result.piece.to_fen(),
            captured_piece=(
                result.captured_piece.to_fen() if result.captured_piece else None
            ),
            promotion=None,
            is_check=result.is_check,
            is_checkmate=result.is_checkmate,
            is_stalemate=result.is_stalemate,
            notation=result.notation,
            fen_after=result.fen_after,
        )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """GameModel -> GameResponse. Stored values may be plain strings, the enums are rebuilt here."""
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            fen_state=model.current_fen,
            current_turn=Color(model.current_turn),
            move_count=model.move_count,
            status=Status(model.status),
            result=GameResult(model.result) if model.result else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Unknown ids raise RepositoryError."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model


# -- Conversions between the domain layer enums and the shared ones --
def _to_domain_color(color: Color) -> DomainColor:
    return DomainColor[color.name]


def _to_shared_color(color: DomainColor) -> Color:
    return Color[color.name]


def _to_shared_piece_type(piece: Piece) -> PieceType:
    return PieceType[piece.type.name]
