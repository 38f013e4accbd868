"""
Custom exceptions.

Illegal moves are NOT exceptions: the rules engines return the unchanged state and the service reports an advisory message.
These are reserved for misuse of the service layer.
"""


class GameError(Exception):
    """Top-level exception for anything raised by this package."""


class GameStateError(GameError):
    """The session is not in a state that allows the request (for instance: rolling while there are moves left)."""


class SessionNotFoundError(GameError):
    """No session is stored under the requested ID."""


class InvalidRequestError(GameError):
    """The request itself is malformed (raised from the pydantic validators)."""


class NotationError(GameError):
    """A move written in a game's notation could not be parsed."""
