"""
Service Errors

Exceptions raised by the game engine and the word corpus provider.
Each carries the HTTP status code the request adapter answers with.
"""


class GameServiceError(Exception):
    """Base class for all errors surfaced to the request adapter."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GameServiceError):
    """Raised when a guess is malformed (wrong length or non-letters)."""

    status_code = 400


class UnauthorizedError(GameServiceError):
    """Raised when a session belongs to a different owner."""

    status_code = 403


class NotFoundError(GameServiceError):
    """Raised when a session id is unknown or has expired."""

    status_code = 404


class ConflictError(GameServiceError):
    """Raised when an owner already has an active session, or the session is finished."""

    status_code = 409


class ServiceUnavailableError(GameServiceError):
    """Raised when the word corpus cannot be loaded or the shared store is unreachable."""

    status_code = 503
