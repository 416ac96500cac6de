"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalDestinationsRequest,
    LegalDestinationsResponse,
    MoveRequest,
    MoveResponse,
    PieceResponse,
    parse_square,
)
from src.chess3d.game import Game
from src.core.config import Settings, configure_logging, get_settings
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, PieceType, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a 3D chess game."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        """Without explicit settings, the service reads the configuration and sets up logging from it."""
        self.repo = repository
        if settings is None:
            settings = get_settings()
            configure_logging(settings)
        self.settings = settings

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game from the standard position."""

        filter_self_check = (
            request.filter_self_check
            if request.filter_self_check is not None
            else self.settings.filter_self_check
        )
        new_game = Game.new_game(filter_self_check=filter_self_check)

        # Store the GameModel in the repository
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            "Created game %s (filter_self_check=%s)", game_id, filter_self_check
        )

        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_destinations(
        self, request: LegalDestinationsRequest
    ) -> LegalDestinationsResponse:
        """Squares the selected piece can move to (empty if it is not that piece's turn)."""
        game = self._load_game(request.game_id)
        destinations = game.legal_destinations_for(parse_square(request.square))
        return LegalDestinationsResponse(
            game_id=request.game_id,
            square=request.square,
            destinations=sorted(square.to_key() for square in destinations),
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        A rejected move is not an error: the response says it was not accepted and nothing gets stored.
        """
        game = self._load_game(request.game_id)

        accepted = game.attempt_move(
            parse_square(request.from_square), parse_square(request.to_square)
        )
        if accepted:
            self.repo.update_game(request.game_id, game.to_model())
            logger.info(
                "Game %s: played %s, %s to move (%s)",
                request.game_id,
                game.moves[-1].to_notation(),
                game.current_turn.name.lower(),
                game.state.name.lower(),
            )

        return MoveResponse(
            accepted=accepted, game=self._create_game_response(request.game_id, game)
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        deleted = self.repo.delete_game(request.game_id)
        if deleted is not None:
            logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse (for game with given ID.)"""
        winner = game.winner
        return GameResponse(
            game_id=game_id,
            current_turn=Color(game.current_turn.name.lower()),
            status=Status(game.state.name.lower()),
            move_history=[move.to_notation() for move in game.moves],
            pieces=[
                PieceResponse(
                    type=PieceType(piece.type.name.lower()),
                    color=Color(piece.color.name.lower()),
                    square=piece.position.to_key(),
                    has_moved=piece.has_moved,
                )
                for piece in game.board.snapshot()
            ],
            winner=Color(winner.name.lower()) if winner is not None else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))
