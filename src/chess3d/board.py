"""The Board is the only keeper of piece placement on the cube. It knows nothing about movement rules."""

from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Self

from src.chess3d.coordinate import BOARD_DIMENSIONS, Coordinate
from src.chess3d.pieces import Color, Piece, PieceType

# Order of the pieces on the back rank, along the x-axis
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# NOTE: pawns of both colors start on the bottom layer, even though Black's back rank sits on the top layer
PAWN_LAYER = 1


@dataclass
class Board:
    position: dict[Coordinate, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Self:
        """Convenience method: build a board from pieces that already know their position"""
        board = cls()
        for piece in pieces:
            board.place_piece(piece)
        return board

    @classmethod
    def setup(cls) -> Self:
        """
        Standard starting arrangement
        ----

        * White: back rank on y=1, pawns on y=2, all on the bottom layer (z=1)
        * Black: back rank on y=8 on the top layer (z=8), pawns on y=7 on the bottom layer
        """
        board = cls()
        board._setup_side(Color.WHITE, back_rank_y=1, pawn_y=2, back_rank_z=1)
        board._setup_side(
            Color.BLACK,
            back_rank_y=BOARD_DIMENSIONS[1],
            pawn_y=BOARD_DIMENSIONS[1] - 1,
            back_rank_z=BOARD_DIMENSIONS[2],
        )
        return board

    def _setup_side(
        self, color: Color, back_rank_y: int, pawn_y: int, back_rank_z: int
    ) -> None:
        for x in range(1, BOARD_DIMENSIONS[0] + 1):
            self.place_piece(
                Piece(PieceType.PAWN, color, Coordinate(x, pawn_y, PAWN_LAYER))
            )
        for x, piece_type in enumerate(BACK_RANK, start=1):
            self.place_piece(
                Piece(piece_type, color, Coordinate(x, back_rank_y, back_rank_z))
            )

    def place_piece(self, piece: Piece) -> None:
        """Overwrites whatever stands on the square"""
        self.position[piece.position] = piece

    def piece_at(self, square: Coordinate) -> Optional[Piece]:
        return self.position.get(square)

    def is_occupied(self, square: Coordinate) -> bool:
        return square in self.position

    def remove_piece(self, square: Coordinate) -> Optional[Piece]:
        return self.position.pop(square, None)

    def relocate(
        self, from_square: Coordinate, to_square: Coordinate
    ) -> Optional[Piece]:
        """
        Update the position on the board
        ---

        Returns the piece captured on the target square (if any).
        Nothing happens when the starting square is empty.
        """
        moving_piece = self.piece_at(from_square)
        if moving_piece is None:
            return None

        captured_piece = self.remove_piece(to_square)
        self.remove_piece(from_square)
        moving_piece.position = to_square
        moving_piece.has_moved = True
        self.place_piece(moving_piece)
        return captured_piece

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self.position.values() if piece.color == color]

    def snapshot(self) -> list[Piece]:
        """Copies of all pieces: safe to hand out to anyone who should only look at the board"""
        return [replace(piece) for piece in self.position.values()]

    def copy(self) -> "Board":
        return deepcopy(self)
