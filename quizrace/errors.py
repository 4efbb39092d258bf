"""Domain errors raised by the quiz services.

Each error carries the HTTP status the API layer renders it with, so
services never import Flask response helpers.
"""


class QuizError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class NotFound(QuizError):
    status_code = 404


class InvalidState(QuizError):
    """Lifecycle violation, e.g. joining a started game."""
    status_code = 409


class Unauthorized(QuizError):
    status_code = 401


class Forbidden(Unauthorized):
    """Authenticated, but not the owner of the resource."""
    status_code = 403


class InvalidArgument(QuizError):
    status_code = 400


class RoomCodeExhausted(QuizError):
    status_code = 503
