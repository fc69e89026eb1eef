"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define, per piece type, whether a piece may go from one square to another.

Every rule is a pure function of (from_square, to_square, piece, board). Whether the move leaves your own king in check
is decided later by the RuleEngine.
"""

from typing import Callable, Protocol

from arcane_chess.chess.pieces import Color, Piece, PieceType, opponent_of
from arcane_chess.chess.square import Square


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece_at(self, rank: int, file: int) -> Piece: ...


# Pawns start on the 2nd (white) or 7th (black) rank. In grid coordinates rank 0 is the 8th rank.
PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
# White moves UP the board, so towards the lower grid ranks. Black moves DOWN the board.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Walk from one square to the other, one step at a time, along a straight line or a diagonal.
    All squares in between (so excluding both endpoints) should be empty.

    NOTE: only meaningful for squares on a shared rank, file, or diagonal. The callers make sure of that.
    """
    rank_step = sign(to_square.rank - from_square.rank)
    file_step = sign(to_square.file - from_square.file)

    rank = from_square.rank + rank_step
    file = from_square.file + file_step
    while (rank, file) != (to_square.rank, to_square.file):
        if not board.piece_at(rank, file).is_empty:
            return False
        rank += rank_step
        file += file_step
    return True


# --- MOVEMENT RULES ---
def is_pawn_move_legal(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two in its first move (so when on its starting rank) if both squares in front of it are empty
    - takes diagonally, one square forward. There has to be an opponent's piece to take.

    NOTE: no en passant.
    """
    direction = PAWN_DIRECTION[piece.color]
    rank_diff = to_square.rank - from_square.rank
    file_diff = to_square.file - from_square.file
    target = board.piece_at(to_square.rank, to_square.file)

    if file_diff == 0:
        if rank_diff == direction:
            return target.is_empty
        if rank_diff == 2 * direction:
            skipped = board.piece_at(from_square.rank + direction, from_square.file)
            return (
                from_square.rank == PAWN_HOME_RANK[piece.color]
                and skipped.is_empty
                and target.is_empty
            )
        return False

    if abs(file_diff) == 1 and rank_diff == direction:
        return target.color == opponent_of(piece.color)

    return False


def is_knight_move_legal(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> bool:
    """Knights jump in an L-shape: two squares in one direction, one square in the other."""
    rank_diff = abs(to_square.rank - from_square.rank)
    file_diff = abs(to_square.file - from_square.file)
    return {rank_diff, file_diff} == {1, 2}


def is_bishop_move_legal(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    rank_diff = abs(to_square.rank - from_square.rank)
    file_diff = abs(to_square.file - from_square.file)
    if rank_diff != file_diff:
        return False
    return is_path_clear(from_square, to_square, board)


def is_rook_move_legal(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> bool:
    """Rooks move either horizontally or vertically"""
    if from_square.rank != to_square.rank and from_square.file != to_square.file:
        return False
    return is_path_clear(from_square, to_square, board)


def is_queen_move_legal(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_rook_move_legal(
        from_square, to_square, piece, board
    ) or is_bishop_move_legal(from_square, to_square, piece, board)


def is_king_move_legal(
    from_square: Square, to_square: Square, piece: Piece, board: Board
) -> bool:
    """
    The king can move by a single square at the time.

    NOTE: no castling.
    """
    return (
        abs(to_square.rank - from_square.rank) <= 1
        and abs(to_square.file - from_square.file) <= 1
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
IsLegalFn = Callable[[Square, Square, Piece, Board], bool]
MOVEMENT_RULES: dict[PieceType, IsLegalFn] = {
    PieceType.PAWN: is_pawn_move_legal,
    PieceType.KNIGHT: is_knight_move_legal,
    PieceType.BISHOP: is_bishop_move_legal,
    PieceType.ROOK: is_rook_move_legal,
    PieceType.QUEEN: is_queen_move_legal,
    PieceType.KING: is_king_move_legal,
}


def is_move_legal(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    Can the piece standing on from_square go to to_square?
    ---

    Shared checks first:
    * there has to be a piece to move
    * staying on the same square is not a move
    * you can never land on one of your own pieces

    Then hand over to the movement rule of the piece type.
    """
    piece = board.piece_at(from_square.rank, from_square.file)
    if piece.is_empty or from_square == to_square:
        return False

    target = board.piece_at(to_square.rank, to_square.file)
    if target.color == piece.color:
        return False

    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(from_square, to_square, piece, board)
