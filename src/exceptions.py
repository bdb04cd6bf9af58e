"""Exceptions raised by the reviews backend."""


class ReviewServiceError(Exception):
    """Base class for review service errors."""


class ValidationError(ReviewServiceError):
    """Client input failed validation. The message is safe to return to the caller."""


class PersistenceError(ReviewServiceError):
    """The document store failed during a request-scoped read or write."""


class StoreUnavailable(ReviewServiceError):
    """The document store could not be reached at startup after all retries."""
