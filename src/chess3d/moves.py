"""
Geometry/Base movement and capturing rules on the 8x8x8 cube

Key idea: Use strategy pattern to define the destination sets for each piece type.

Destinations only follow the movement rules. Whether a move leaves your own king exposed is up to the Game.
"""

from dataclasses import dataclass
from itertools import permutations, product
from typing import Callable, Optional, Protocol

from src.chess3d.coordinate import Coordinate
from src.chess3d.pieces import Color, Piece, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Coordinate) -> Optional[Piece]: ...


Vector = tuple[int, int, int]


@dataclass(frozen=True)
class Move:
    """A move as it was played. `piece` is a snapshot of the mover after the move."""

    from_square: Coordinate
    to_square: Coordinate
    piece: Piece
    captured_piece: Optional[Piece] = None

    def to_notation(self) -> str:
        """ex. 'A21A41': the piece on A21 moved to A41"""
        return f"{self.from_square.to_notation()}{self.to_square.to_notation()}"


def parse_move_notation(notation: str) -> Optional[tuple[Coordinate, Coordinate]]:
    """Reverse of `Move.to_notation()`. Both halves are three characters long."""
    if len(notation) != 6:
        return None
    from_square = Coordinate.from_notation(notation[:3])
    to_square = Coordinate.from_notation(notation[3:])
    if from_square is None or to_square is None:
        return None
    return from_square, to_square


# --- DIRECTIONS ---
ROOK_DIRECTIONS: list[Vector] = [
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
]

# Every unit step that changes at least two axes: 12 face diagonals + 8 space diagonals
BISHOP_DIRECTIONS: list[Vector] = [
    delta
    for delta in product((-1, 0, 1), repeat=3)
    if sum(1 for d in delta if d != 0) >= 2
]

KING_DELTAS: list[Vector] = [
    delta for delta in product((-1, 0, 1), repeat=3) if delta != (0, 0, 0)
]

# L-shapes never leave the plane they start in: one axis always stays put
KNIGHT_DELTAS: list[Vector] = sorted(
    {
        delta
        for short, long in product((-1, 1), (-2, 2))
        for delta in permutations((short, long, 0))
    }
)


# --- MOVEMENT RULES ---
def sliding_destinations(
    piece: Piece, board: Board, directions: list[Vector]
) -> set[Coordinate]:
    """
    Raycasting algorithm
    -----

    Move along each direction until we hit another piece or the edge of the board.
    An opponent's piece can be captured (so it is included), your own piece blocks the ray.
    """
    destinations: set[Coordinate] = set()
    for dx, dy, dz in directions:
        target_square = piece.position
        while True:
            target_square = target_square.shifted(dx, dy, dz)
            if not target_square.is_within_bounds():
                break

            piece_found = board.piece_at(target_square)
            if piece_found is None:
                destinations.add(target_square)
                continue

            # only need to add the first occupied square found if it is the opponent's
            if piece_found.is_opponent_of(piece):
                destinations.add(target_square)
            break
    return destinations


def single_step_destinations(
    piece: Piece, board: Board, deltas: list[Vector]
) -> set[Coordinate]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump to a square"""
    destinations: set[Coordinate] = set()
    for dx, dy, dz in deltas:
        target_square = piece.position.shifted(dx, dy, dz)
        if not target_square.is_within_bounds():
            continue

        piece_found = board.piece_at(target_square)
        if piece_found is None or piece_found.is_opponent_of(piece):
            destinations.add(target_square)
    return destinations


def pawn_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """
    A pawn:
    - moves by a single square forward (along y). White moves up the board, Black moves down.
    - can move by two squares as long as it has not moved before.
    - climbs one layer along z, in the same direction it moves forward.
    - takes diagonally, in its own layer or one layer up/down.
    """
    destinations: set[Coordinate] = set()
    direction = 1 if piece.color == Color.WHITE else -1

    def _is_empty(square: Coordinate) -> bool:
        return square.is_within_bounds() and board.piece_at(square) is None

    def _holds_opponent(square: Coordinate) -> bool:
        if not square.is_within_bounds():
            return False
        piece_found = board.piece_at(square)
        return piece_found is not None and piece_found.is_opponent_of(piece)

    # pawn pushes
    single_step = piece.position.shifted(0, direction, 0)
    if _is_empty(single_step):
        destinations.add(single_step)

        double_step = piece.position.shifted(0, 2 * direction, 0)
        if not piece.has_moved and _is_empty(double_step):
            destinations.add(double_step)

    # climbing to the next layer
    vertical_step = piece.position.shifted(0, 0, direction)
    if _is_empty(vertical_step):
        destinations.add(vertical_step)

    # pawns take diagonally: within the layer, and one layer up or down
    for dx, dz in product((-1, 1), (0, 1, -1)):
        target_square = piece.position.shifted(dx, direction, dz)
        if _holds_opponent(target_square):
            destinations.add(target_square)

    return destinations


def knight_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """Knights jump in an L-shape within the xy-, xz- or yz-plane"""
    return single_step_destinations(piece, board, KNIGHT_DELTAS)


def bishop_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """Bishops move along face diagonals (two axes change) and space diagonals (all three axes change)"""
    return sliding_destinations(piece, board, BISHOP_DIRECTIONS)


def rook_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """Rooks move along a single axis"""
    return sliding_destinations(piece, board, ROOK_DIRECTIONS)


def queen_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """
    The Queen combines the rook moves (along an axis) and bishop moves (along a diagonal)
    """
    return rook_destinations(piece, board) | bishop_destinations(piece, board)


def king_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """
    The king can move to any of the (up to) 26 neighbouring cells.

    No castling in three dimensions.
    """
    return single_step_destinations(piece, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
DestinationsFn = Callable[[Piece, Board], set[Coordinate]]
MOVEMENT_RULES: dict[PieceType, DestinationsFn] = {
    PieceType.PAWN: pawn_destinations,
    PieceType.KNIGHT: knight_destinations,
    PieceType.BISHOP: bishop_destinations,
    PieceType.ROOK: rook_destinations,
    PieceType.QUEEN: queen_destinations,
    PieceType.KING: king_destinations,
}


def legal_destinations(piece: Piece, board: Board) -> set[Coordinate]:
    """All squares the piece may move to according to the movement rules of its type"""
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(piece, board)


def is_legal_move(piece: Piece, target: Coordinate, board: Board) -> bool:
    return target in legal_destinations(piece, board)
