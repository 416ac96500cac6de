"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.chess3d.board import Board
from src.chess3d.coordinate import Coordinate
from src.chess3d.pieces import Color, Piece, PieceType
from src.core.config import Settings
from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_settings() -> Settings:
    """Settings that never touch a file on disk, regardless of the environment."""
    return Settings(
        database_url=DATABASE_URL,
        database_echo=False,
        filter_self_check=False,
        log_level="DEBUG",
    )


@pytest.fixture
def kings_only_board() -> Board:
    """
    Only the two kings, far away from each other in opposite corners of the cube.
    Start from here and add the pieces a test needs.
    """
    return Board.from_pieces(
        [
            Piece(PieceType.KING, Color.WHITE, Coordinate(8, 8, 8)),
            Piece(PieceType.KING, Color.BLACK, Coordinate(1, 1, 1)),
        ]
    )


@pytest.fixture
def boxed_in_black_king() -> Board:
    """
    Black king in the corner (1,1,1), every neighbouring cell taken by a black pawn.

    Black pawns move towards lower y / z, so none of these pawns can go anywhere: Black has no moves at all.
    The white king sits in the opposite corner. Add white pieces to decide between checkmate and stalemate.
    """
    board = Board.from_pieces(
        [
            Piece(PieceType.KING, Color.WHITE, Coordinate(8, 8, 8)),
            Piece(PieceType.KING, Color.BLACK, Coordinate(1, 1, 1)),
        ]
    )
    for dx in (0, 1):
        for dy in (0, 1):
            for dz in (0, 1):
                if (dx, dy, dz) == (0, 0, 0):
                    continue
                board.place_piece(
                    Piece(PieceType.PAWN, Color.BLACK, Coordinate(1 + dx, 1 + dy, 1 + dz))
                )
    return board
