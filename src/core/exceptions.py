"""
Custom exceptions used across layers.

NOTE: The rule engine itself never raises for a rejected move (it returns False). These are for the layers around it.
"""


class GameError(Exception):
    """Top-level exception: anything that went wrong while handling a game."""


class InvalidRequestError(GameError):
    """The request could not be interpreted (ex. square text that is not a coordinate)."""


class GameStateError(GameError):
    """A stored game record cannot be turned into a consistent Game."""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested game."""
