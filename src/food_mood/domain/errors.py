"""Errors raised across the insight and log store boundaries."""


class StoreUnavailableError(RuntimeError):
    """The log store could not be read."""


class PersistenceError(RuntimeError):
    """A write to the store failed or returned no row."""


class InsightNotFoundError(LookupError):
    """No insight with this id belongs to the user."""


class FoodLogNotFoundError(LookupError):
    """No food log with this id belongs to the user."""
