"""
Daybook exception hierarchy.

All daybook exceptions inherit from DaybookError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class DaybookError(Exception):
    """Base exception class for all daybook errors."""


class ConfigurationError(DaybookError):
    """Raised for configuration errors (missing keys, invalid values)."""


class APIError(DaybookError):
    """Raised for API communication errors."""


class PersistenceError(APIError):
    """Raised when the journal persistence service rejects or fails a request."""


class EntryNotFoundError(PersistenceError):
    """Raised when a journal entry id does not exist in the store."""


class DataProcessingError(DaybookError):
    """Raised for data processing errors (unusable entry records)."""
