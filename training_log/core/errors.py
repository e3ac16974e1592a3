"""Error taxonomy shared by repositories, services and the HTTP layer.

Each error carries the HTTP status it maps to; the exception handlers in
`training_log.main` turn them into the JSON envelope.
"""


class AppError(Exception):
    """Base for all expected application errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Bad input shape or value."""

    status_code = 400


class AuthError(AppError):
    """Bad credentials, or a missing/expired/invalid token."""

    status_code = 401


class NotFoundError(AppError):
    """Referenced entity does not exist (for this user)."""

    status_code = 404


class ConflictError(AppError):
    """Duplicate unique key, e.g. an email that is already registered."""

    status_code = 409


class StorageError(AppError):
    """Storage adapter failure. Batch failures leave no partial rows behind."""

    status_code = 500


class IntegrityViolation(StorageError):
    """A write broke a unique or foreign-key constraint; nothing was applied."""
