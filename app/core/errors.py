"""Application error taxonomy. Services raise these; app.main renders them as JSON."""


class AppError(Exception):
    """Base class for errors that map to a client-visible HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(AppError):
    """A uniqueness constraint would be violated (e.g. email already registered)."""

    status_code = 400


class UnauthorizedError(AppError):
    """Credentials did not match. The message never says which part was wrong."""

    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class InvalidArgumentError(AppError):
    """Malformed identifier or a field that may not be changed."""

    status_code = 400
