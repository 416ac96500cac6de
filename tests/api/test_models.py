from uuid import UUID, uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    LegalDestinationsRequest,
    MoveRequest,
    parse_square,
)
from src.chess3d.coordinate import Coordinate
from src.core.exceptions import InvalidRequestError


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_self_check_filtering_is_optional() -> None:
    """Not supplying the option means: use whatever is configured."""
    request = CreateGameRequest()
    assert request.filter_self_check is None

    request = CreateGameRequest(filter_self_check=True)
    assert request.filter_self_check


# -- Validation - MoveRequest --
@pytest.mark.parametrize(
    "from_square, to_square",
    [("A21", "A41"), ("1,2,1", "1,4,1"), ("a21", "1,4,1")],
)
def test_valid_square_names(mock_id: UUID, from_square: str, to_square: str) -> None:
    """Test that MoveRequest accepts both ways of writing a square."""
    request = MoveRequest(
        game_id=mock_id, from_square=from_square, to_square=to_square
    )
    assert request.from_square == from_square
    assert request.to_square == to_square


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",
        "A1",  # too short
        "I11",  # there is no I-file
        "A19",  # layer 9 does not exist
        "1,2",  # only two axes
        "0,1,1",  # off the board
        "ß11",  # uppercases to more than one letter
        "ﬀ11",
        "A1١",  # not an ASCII digit
    ],
)
def test_invalid_from_square(mock_id: UUID, square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, from_square=square, to_square="A41")


@pytest.mark.parametrize("square", ["nonsense", "H89", "9,9,9"])
def test_invalid_to_square(mock_id: UUID, square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, from_square="A21", to_square=square)


# -- Validation - LegalDestinationsRequest --
def test_destinations_request(mock_id: UUID) -> None:
    request = LegalDestinationsRequest(game_id=mock_id, square="B11")
    assert request.square == "B11"

    with pytest.raises(InvalidRequestError):
        _ = LegalDestinationsRequest(game_id=mock_id, square="B1")

    with pytest.raises(InvalidRequestError):
        _ = LegalDestinationsRequest(game_id=mock_id, square="ß11")


def test_parse_square() -> None:
    assert parse_square("B11") == Coordinate(2, 1, 1)
    assert parse_square("2,1,1") == Coordinate(2, 1, 1)
    with pytest.raises(InvalidRequestError):
        parse_square("Z99")
