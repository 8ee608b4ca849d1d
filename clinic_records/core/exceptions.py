"""Custom application exceptions."""

from sqlalchemy.exc import IntegrityError

# SQLSTATE codes raised by PostgreSQL for integrity violations
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception, raised for unique key violations."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class ReferenceViolationException(ConflictException):
    """A foreign key blocked the write.

    Raised when a restricted parent still has dependent rows, or when a child
    row points at a parent that does not exist.
    """

    def __init__(self, message: str = "Referenced row constraint violated"):
        """Initialize with 409 status code."""
        super().__init__(message)


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


def _integrity_code(exc: IntegrityError) -> str | None:
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        code = getattr(orig, attr, None)
        if isinstance(code, str):
            return code
    return None


def translate_integrity_error(exc: IntegrityError, context: str = "") -> AppException:
    """
    Map a database integrity error onto the application exception hierarchy.

    Args:
        exc: Integrity error raised by the driver
        context: Short description of the attempted operation

    Returns:
        The matching application exception (not raised)
    """
    code = _integrity_code(exc)
    detail = str(exc.orig).lower()
    prefix = f"{context}: " if context else ""

    if code == UNIQUE_VIOLATION or "unique" in detail or "duplicate" in detail:
        return ConflictException(f"{prefix}duplicate value violates a unique constraint")
    if code == FOREIGN_KEY_VIOLATION or "foreign key" in detail:
        return ReferenceViolationException(f"{prefix}foreign key constraint blocked the change")
    if code == CHECK_VIOLATION or "check constraint" in detail:
        return ValidationException(f"{prefix}check constraint failed")
    if code == NOT_NULL_VIOLATION or "not null" in detail or "not-null" in detail:
        return ValidationException(f"{prefix}required column is missing")
    return AppException(f"{prefix}integrity error", status_code=500)
