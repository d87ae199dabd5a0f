"""Errors raised by the calorie tracker core."""


class CalorieTrackerError(Exception):
    """Base class for tracker errors."""


class ValidationError(CalorieTrackerError):
    """Raised when user-submitted data is rejected."""


class LogImportError(CalorieTrackerError):
    """Raised when a CSV log import cannot be parsed."""


class StorageError(CalorieTrackerError):
    """Raised by key-value stores when a read or write fails."""


class StorageWarning(UserWarning):
    """Warning emitted when persistence fails but in-memory state is kept."""
