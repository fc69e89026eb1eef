"""
The RuleEngine is the entrypoint into the domain layer for the service layer.

It owns a single Position (one engine per game in progress) and is responsible for
validating a requested move, applying it, and reporting whether the opponent is now in check, checkmate, or stalemate.

NOTE: the engine is not thread-safe. Callers serialize access per game.
"""

from typing import Iterator, Optional, Self

from arcane_chess.chess.fen import (
    CASTLING_COLOR,
    CASTLING_ROOK_SQUARES,
    CastlingDirection,
)
from arcane_chess.chess.move import Move, MoveResult, build_notation
from arcane_chess.chess.pieces import EMPTY, Color, Piece, PieceType, opponent_of
from arcane_chess.chess.position import Position
from arcane_chess.chess.rules import is_move_legal
from arcane_chess.chess.square import BOARD_DIMENSIONS, Square
from arcane_chess.core.exceptions import (
    EmptySquareError,
    IllegalMoveError,
    InvalidSquareError,
    WrongColorError,
)
from arcane_chess.core.log import get_logger

logger = get_logger(__name__)


class RuleEngine:
    """
    Validates and applies moves on the Position it wraps.

    advance_turn:
        False (default): after a move only the piece is relocated. Side to move, move counters, en passant square,
        and castling rights stay as they are; the caller keeps track of whose turn it is.
        True: also flip the side to move and update the rest of the FEN bookkeeping.
    """

    def __init__(self, position: Position, advance_turn: bool = False) -> None:
        self.position = position
        self.advance_turn = advance_turn

    @classmethod
    def from_fen(cls, fen: str, advance_turn: bool = False) -> Self:
        return cls(Position.from_fen(fen), advance_turn=advance_turn)

    @property
    def fen(self) -> str:
        return self.position.to_fen()

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def validate_move(self, from_square: str, to_square: str) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. parse both square names
        2. there should be a piece on the starting square
        3. ... and it should belong to the side to move
        4. the movement rule of the piece should allow going to the target square
        5. remember what got captured (if anything)
        6. move the piece
        7. check / checkmate / stalemate of the opponent
        8. notation + resulting FEN

        Up to step 5 nothing changes on the board. A rejected move raises one of the MoveValidationError subclasses.
        """
        origin = self._parse_square(from_square, "from")
        target = self._parse_square(to_square, "to")

        piece = self.position.piece(origin)
        if piece.is_empty:
            raise EmptySquareError(f"no piece at {from_square}")

        if piece.color != self.position.side_to_move:
            raise WrongColorError(
                f"not your piece: {piece.to_fen()} on {from_square} while it is {self.position.side_to_move.name.lower()} to move"
            )

        if not is_move_legal(origin, target, self.position):
            logger.debug("Rejected %s%s for %s", from_square, to_square, piece)
            raise IllegalMoveError(
                f"illegal move for {piece.to_fen()}: {from_square} -> {to_square}"
            )

        captured = self.position.piece(target)
        captured_piece: Optional[Piece] = None if captured.is_empty else captured

        # from here on the move is committed
        self.position.move_piece(origin, target)
        if self.advance_turn:
            self._update_bookkeeping(Move(origin, target), piece, captured_piece)

        opponent = opponent_of(piece.color)
        is_check = self.is_in_check(opponent)
        is_checkmate = is_check and not self.has_legal_moves(opponent)
        is_stalemate = not is_check and not self.has_legal_moves(opponent)
        if is_checkmate or is_stalemate:
            logger.info(
                "%s after %s%s",
                "Checkmate" if is_checkmate else "Stalemate",
                from_square,
                to_square,
            )

        return MoveResult(
            piece=piece,
            captured_piece=captured_piece,
            is_check=is_check,
            is_checkmate=is_checkmate,
            is_stalemate=is_stalemate,
            notation=build_notation(piece, target, captured_piece is not None),
            fen_after=self.position.to_fen(),
        )

    def legal_moves(self, color: Color) -> list[Move]:
        """
        All moves for the player with the 'color' pieces that do not leave their own king in check.
        Can be used to display the options to a user.
        """
        return list(self._iter_legal_moves(color))

    # --- CHECKS FOR ENDING THE GAME ---
    def is_in_check(self, color: Color) -> bool:
        """
        Is the king of 'color' under attack?
        ---

        Any piece of the opponent that could legally move onto the king's square attacks it.
        Without a king on the board (should not happen in a real game) there is no check.
        """
        king_square = self.position.locate(Piece(PieceType.KING, color))
        if king_square is None:
            return False

        attackers = self.position.squares_of(opponent_of(color))
        return any(
            is_move_legal(square, king_square, self.position) for square in attackers
        )

    def has_legal_moves(self, color: Color) -> bool:
        return next(self._iter_legal_moves(color), None) is not None

    def is_checkmate(self, color: Color) -> bool:
        return self.is_in_check(color) and not self.has_legal_moves(color)

    def is_stalemate(self, color: Color) -> bool:
        return not self.is_in_check(color) and not self.has_legal_moves(color)

    # -- LEGAL MOVES HELPERS ---
    def _iter_legal_moves(self, color: Color) -> Iterator[Move]:
        """
        Brute force: every piece of 'color' x every square on the board.
        ----

        1. keep the moves the movement rule of the piece allows
        2. try them on the board and drop those that leave your own king in check

        The trial move is undone before a move gets yielded, so stopping the iteration early leaves the board untouched.
        """
        num_ranks, num_files = BOARD_DIMENSIONS
        for from_square in self.position.squares_of(color):
            for rank in range(num_ranks):
                for file in range(num_files):
                    to_square = Square(rank, file)
                    if not is_move_legal(from_square, to_square, self.position):
                        continue
                    if self._is_putting_yourself_in_check(from_square, to_square, color):
                        continue
                    yield Move(from_square, to_square)

    def _is_putting_yourself_in_check(
        self, from_square: Square, to_square: Square, color: Color
    ) -> bool:
        """
        Return True if the move leaves the king of 'color' in check

        plan:
        1. remember what stands on both squares
        2. make the candidate move
        3. determine if king is in check
        4. put both squares back exactly as they were (also when step 3 blows up)
        """
        moving_piece = self.position.piece(from_square)
        original_target = self.position.piece(to_square)
        try:
            self.position.set_piece(to_square.rank, to_square.file, moving_piece)
            self.position.set_piece(from_square.rank, from_square.file, EMPTY)
            return self.is_in_check(color)
        finally:
            self.position.set_piece(from_square.rank, from_square.file, moving_piece)
            self.position.set_piece(to_square.rank, to_square.file, original_target)

    @staticmethod
    def _parse_square(name: str, endpoint: str) -> Square:
        try:
            return Square.from_algebraic(name)
        except InvalidSquareError as exc:
            raise InvalidSquareError(f"invalid {endpoint} square: {name!r}") from exc

    # --- FEN BOOKKEEPING (only with advance_turn) ---
    def _update_bookkeeping(
        self, move: Move, piece: Piece, captured_piece: Optional[Piece]
    ) -> None:
        """
        Update everything in the FEN state besides the piece placement.

        NOTE update the side to move LAST, the other checks depend on who made the move.
        """
        self._revoke_castling_rights_if_needed(move)

        ranks_moved = abs(move.to_square.rank - move.from_square.rank)
        if piece.type == PieceType.PAWN and ranks_moved == 2:
            self.position.en_passant_target = Square(
                rank=(move.from_square.rank + move.to_square.rank) // 2,
                file=move.from_square.file,
            )
        else:
            self.position.en_passant_target = None

        if piece.type == PieceType.PAWN or captured_piece is not None:
            self.position.halfmove_clock = 0
        else:
            self.position.halfmove_clock += 1

        if piece.color == Color.BLACK:
            self.position.fullmove_number += 1

        self.position.side_to_move = opponent_of(piece.color)

    def _revoke_castling_rights_if_needed(self, move: Move) -> None:
        """
        Checks which rights should get revoked
        ----

        1. If you are moving your king --> revoke both of your rights
        2. If a piece leaves a rook's starting square (your rook moving) --> revoke that direction
        3. If a piece lands on a rook's starting square (the rook gets taken) --> revoke that direction

        Once revoked, a right never comes back.
        """
        rights = self.position.castling_rights
        moving_piece = self.position.piece(move.to_square)
        for direction in CastlingDirection:
            if not rights[direction]:
                continue
            color = CASTLING_COLOR[direction]
            rook_square = CASTLING_ROOK_SQUARES[direction]
            if moving_piece == Piece(PieceType.KING, color):
                rights[direction] = False
            elif rook_square in (move.from_square, move.to_square):
                rights[direction] = False
