"""Domain errors raised by the repositories and services."""


class CMSError(Exception):
    """Base class for content-management errors."""

    code = "cms_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CMSError):
    """Target entity is absent or soft-deleted."""

    code = "not_found"


class ValidationFailedError(CMSError):
    """Input is malformed or out of range."""

    code = "validation_failed"


class ConflictError(CMSError):
    """The entity changed since the caller last read it."""

    code = "conflict"
