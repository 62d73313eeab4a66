"""Custom exceptions for Rebound."""


class ReboundError(Exception):
    """Base exception for all Rebound errors."""

    pass


class ConfigurationError(ReboundError):
    """Raised when a sequence or retrier is built with invalid arguments."""

    pass


class UnrecoverableError(ReboundError):
    """Aborts any retry loop immediately.

    Raise it directly, or chain it onto another exception
    (``raise LookupError("gone") from UnrecoverableError()``).
    """

    def __init__(self, message: str = "unrecoverable"):
        super().__init__(message)


class Cancelled(ReboundError):
    """Reason reported by a cancel token that was cancelled explicitly."""

    def __init__(self, message: str = "cancelled"):
        super().__init__(message)


class DeadlineExceeded(Cancelled):
    """Reason reported by a cancel token whose deadline passed."""

    def __init__(self, message: str = "deadline exceeded"):
        super().__init__(message)
