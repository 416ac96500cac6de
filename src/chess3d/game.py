"""
The Game class is the entrypoint into the domain layer for the service layer (and for any UI that drives a match directly).
It is responsible for orchestrating everything required to play a turn:
validating the request, updating the board, recording the move, handing the turn over and deciding the state of the game.

A rejected move is a normal outcome: methods return False / an empty set instead of raising.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional, Self

from src.chess3d.board import Board
from src.chess3d.coordinate import Coordinate
from src.chess3d.moves import Move, legal_destinations, parse_move_notation
from src.chess3d.pieces import Color, Piece, PieceType, opponent_of
from src.core.exceptions import GameStateError
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class GameState(Enum):
    ACTIVE = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


TERMINAL_STATES = (GameState.CHECKMATE, GameState.STALEMATE)


def find_king(board: Board, color: Color) -> Optional[Piece]:
    return next(
        (piece for piece in board.pieces_of(color) if piece.type == PieceType.KING),
        None,
    )


def is_king_in_check(board: Board, color: Color) -> bool:
    """
    Is any opponent piece able to move onto the king's square?

    NOTE: A board without a king of this color is reported as 'not in check'.
    """
    king = find_king(board, color)
    if king is None:
        return False

    return any(
        king.position in legal_destinations(piece, board)
        for piece in board.pieces_of(opponent_of(color))
    )


def leaves_king_in_check(
    board: Board, from_square: Coordinate, to_square: Coordinate
) -> bool:
    """
    Return True if the move puts (or leaves) the mover's king in check

    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    moving_piece = board.piece_at(from_square)
    if moving_piece is None:
        return False
    trial_board = board.copy()
    trial_board.relocate(from_square, to_square)
    return is_king_in_check(trial_board, moving_piece.color)


@dataclass
class Game:
    board: Board
    current_turn: Color = Color.WHITE
    moves: list[Move] = field(default_factory=list)
    state: GameState = GameState.ACTIVE
    filter_self_check: bool = False

    @classmethod
    def new_game(cls, filter_self_check: bool = False) -> Self:
        """Standard starting position, White to move."""
        return cls.from_position(Board.setup(), Color.WHITE, filter_self_check)

    @classmethod
    def from_position(
        cls,
        board: Board,
        current_turn: Color = Color.WHITE,
        filter_self_check: bool = False,
    ) -> Self:
        """Start from any arrangement of pieces. The state is derived from the position, never passed in."""
        game = cls(
            board=board,
            current_turn=current_turn,
            filter_self_check=filter_self_check,
        )
        game._update_game_state()
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has
        ---

        Pieces have no identity beyond their square, so the only faithful way back is to replay the moves from the start.
        """
        game = cls.new_game(filter_self_check=model.filter_self_check)
        for notation in model.moves:
            squares = parse_move_notation(notation)
            if squares is None:
                raise GameStateError(f"Cannot read move {notation!r} in game record.")
            if not game.attempt_move(*squares):
                raise GameStateError(
                    f"Move {notation!r} in game record is not legal in the replayed position."
                )

        if game.current_turn.name.lower() != model.current_turn:
            raise GameStateError(
                f"Replayed game has {game.current_turn.name.lower()} to move, record says {model.current_turn!r}."
            )
        if game.state.name.lower() != model.state:
            raise GameStateError(
                f"Replayed game is in state {game.state.name.lower()}, record says {model.state!r}."
            )
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            moves=[move.to_notation() for move in self.moves],
            current_turn=self.current_turn.name.lower(),
            state=self.state.name.lower(),
            filter_self_check=self.filter_self_check,
        )

    @property
    def is_over(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def winner(self) -> Optional[Color]:
        """
        Only checkmate has a winner.
        The player who is to move just got mated, so the opponent must be the winner.
        """
        if self.state != GameState.CHECKMATE:
            return None
        return opponent_of(self.current_turn)

    def piece_at(self, square: Coordinate) -> Optional[Piece]:
        """A copy: callers outside the game should never be able to move pieces around behind its back"""
        piece = self.board.piece_at(square)
        return replace(piece) if piece is not None else None

    def legal_destinations_for(self, square: Coordinate) -> set[Coordinate]:
        """
        Destinations for the piece a player selected.
        ----

        Empty if there is no piece, or it is not that piece's turn.
        """
        piece = self.board.piece_at(square)
        if piece is None or piece.color != self.current_turn:
            return set()
        return self._destinations(piece)

    def attempt_move(self, from_square: Coordinate, to_square: Coordinate) -> bool:
        """
        Attempt to make a move
        -----

        1. the game must still be going
        2. there must be a piece on the starting square
        3. it must be that piece's turn
        4. the target square must be one of its legal destinations

        Then: update the board, record the move, hand over the turn and update the state of the game.
        """
        if self.is_over:
            return self._reject(
                from_square, to_square, f"game is over ({self.state.name.lower()})"
            )

        piece = self.board.piece_at(from_square)
        if piece is None:
            return self._reject(from_square, to_square, "no piece on starting square")

        if piece.color != self.current_turn:
            return self._reject(from_square, to_square, "not this color's turn")

        if to_square not in self._destinations(piece):
            return self._reject(from_square, to_square, "not a legal destination")

        captured_piece = self.board.relocate(from_square, to_square)
        self.moves.append(
            Move(
                from_square=from_square,
                to_square=to_square,
                piece=replace(piece),
                captured_piece=captured_piece,
            )
        )
        self.current_turn = opponent_of(self.current_turn)
        self._update_game_state()
        return True

    # -- PRIVATE HELPERS ---
    def _reject(
        self, from_square: Coordinate, to_square: Coordinate, reason: str
    ) -> bool:
        logger.debug(
            "Rejected move %s -> %s: %s",
            from_square.to_notation(),
            to_square.to_notation(),
            reason,
        )
        return False

    def _destinations(self, piece: Piece) -> set[Coordinate]:
        """Movement rules, optionally with moves that expose your own king removed."""
        destinations = legal_destinations(piece, self.board)
        if not self.filter_self_check:
            return destinations
        return {
            square
            for square in destinations
            if not leaves_king_in_check(self.board, piece.position, square)
        }

    def _has_moves(self, color: Color) -> bool:
        """
        Does any piece have somewhere to go?

        NOTE: without `filter_self_check`, a move counts even if it would leave the own king in check.
        """
        return any(self._destinations(piece) for piece in self.board.pieces_of(color))

    def _update_game_state(self) -> None:
        """Decide the state for the player who is now to move"""
        in_check = is_king_in_check(self.board, self.current_turn)
        has_moves = self._has_moves(self.current_turn)

        if in_check:
            new_state = GameState.CHECK if has_moves else GameState.CHECKMATE
        else:
            new_state = GameState.ACTIVE if has_moves else GameState.STALEMATE

        if new_state != GameState.ACTIVE:
            logger.info(
                "%s to move: %s", self.current_turn.name.lower(), new_state.name.lower()
            )
        self.state = new_state
