"""
Domain errors raised by the page, question and reply services.
Each carries the HTTP status the API layer answers with; main.py registers one handler for ForumError.
"""
from fastapi import status


class ForumError(Exception):
    """Base for all domain errors. message is safe to show to the caller."""

    http_status: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"detail": self.message}


class NotFoundError(ForumError):
    """Referenced page, question, reply or user does not exist."""
    http_status = status.HTTP_404_NOT_FOUND


class ConflictError(ForumError):
    """Uniqueness violation: duplicate page name or user email."""
    http_status = status.HTTP_409_CONFLICT


class ValidationError(ForumError, ValueError):
    """Input fails a declared constraint. Also a ValueError so pydantic validators can raise it."""
    http_status = 422


class ForbiddenError(ForumError):
    """Caller is neither the owner nor (where allowed) an admin."""
    http_status = status.HTTP_403_FORBIDDEN


class UnauthorizedError(ForumError):
    """Caller identity could not be established."""
    http_status = status.HTTP_401_UNAUTHORIZED
