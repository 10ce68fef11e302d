from typing import Optional


class ConfigurationError(Exception):
    """Raised at startup when a required setting is missing or invalid."""


class InvalidEmailError(ValueError):
    EMAIL_REQUIRED = "Email is required"
    INVALID_FORMAT = "Invalid email format"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class WaitlistStoreError(Exception):
    """Any failure reported by the waitlist table other than a duplicate email."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class DuplicateEmailError(WaitlistStoreError):
    pass


class NotificationError(Exception):
    pass
