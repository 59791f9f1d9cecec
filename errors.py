"""
errors.py
---------
Application error hierarchy.

Repositories and services raise these and never catch them; the outward
boundary (route handlers, outside this package) maps them to a status code
and message with `AppError.to_dict()`.
"""


class AppError(Exception):
    """Base class for errors that carry a user-visible message and status."""

    status: int = 500

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status}}


class NotFoundError(AppError):
    """The requested record does not exist."""

    status = 404


class BadRequestError(AppError):
    """The request data cannot be applied."""

    status = 400


class DuplicateError(BadRequestError):
    """A unique constraint would be violated (membership pair, user email)."""


class EmptyInputError(BadRequestError):
    """An insert or update was attempted with no recognised fields."""


class UnauthorizedError(AppError):
    """No actor, or the actor's credentials are invalid."""

    status = 401


class ForbiddenError(AppError):
    """The actor is known but lacks the required relationship."""

    status = 403
