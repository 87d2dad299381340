"""
Error taxonomy for the EduPlatform core.

Every error carries a machine-readable ``kind`` and a human-readable
``message`` so the front end can pick a toast or redirect without parsing
strings.
"""


class PlatformError(Exception):
    """Base class for all errors raised by the core."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PlatformError):
    kind = "not_found"


class Forbidden(PlatformError):
    kind = "forbidden"


class ValidationError(PlatformError):
    kind = "validation"


class IngestionError(PlatformError):
    kind = "ingestion"


class AuthenticationError(PlatformError):
    """No active session, bad credentials, or wrong role for the page."""
    kind = "unauthenticated"
