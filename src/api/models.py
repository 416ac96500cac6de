"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess3d.coordinate import Coordinate
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status


def _validate_square_text(value: str) -> str:
    """Squares can be typed as 'x,y,z' or in algebraic style ('A11')"""
    if Coordinate.parse(value) is None:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a square on the board. Use 'x,y,z' or notation like 'A11'."
        )
    return value


def parse_square(value: str) -> Coordinate:
    """For the service: text already passed validation, so it must parse"""
    square = Coordinate.parse(value)
    if square is None:
        raise InvalidRequestError(f"Cannot interpret {value!r} as a square.")
    return square


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    # None: fall back to the configured default
    filter_self_check: Optional[bool] = None


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalDestinationsRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_text(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_text(value)


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    type: PieceType
    color: Color
    square: str  # key notation 'x,y,z'
    has_moved: bool


class GameResponse(BaseModel):
    game_id: UUID
    current_turn: Color
    status: Status
    move_history: list[str]
    pieces: list[PieceResponse]
    winner: Optional[Color] = None


class LegalDestinationsResponse(BaseModel):
    game_id: UUID
    square: str
    destinations: list[str]


class MoveResponse(BaseModel):
    accepted: bool
    game: GameResponse
