"""Error taxonomy shared by the booking wizard and the availability manager."""


class WashbookError(Exception):
    """Base class for all errors raised by this package."""


class IncompleteBookingError(WashbookError):
    """Raised by submit() when required draft fields are missing."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Cannot submit booking - missing required fields: {', '.join(self.missing_fields)}."
        )


class InvalidRuleError(WashbookError, ValueError):
    """Raised when an availability rule is malformed (bad day, bad clock, start >= end)."""


class InvalidBlockedTimeError(WashbookError, ValueError):
    """Raised when a blocked time does not end after it starts."""


class InvalidTimeLabelError(WashbookError, ValueError):
    """Raised when a time label or clock string cannot be parsed."""


class PersistenceError(WashbookError):
    """Raised by a store when a read or write is rejected.

    The core never interprets or retries these; they reach the caller
    unchanged.
    """
