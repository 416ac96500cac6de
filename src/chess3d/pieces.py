"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto

from src.chess3d.coordinate import Coordinate


class PieceType(Enum):
    PAWN = auto()
    ROOK = auto()
    KNIGHT = auto()
    BISHOP = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()


def opponent_of(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


@dataclass
class Piece:
    """
    A piece knows where it stands. The Board updates `position` in place when it moves.

    NOTE: `has_moved` only matters for pawns (double step), but is tracked for every piece.
    """

    type: PieceType
    color: Color
    position: Coordinate
    has_moved: bool = False

    def is_opponent_of(self, other: "Piece") -> bool:
        return self.color != other.color
