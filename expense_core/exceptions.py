"""Domain-specific exceptions for the expense ledger core."""


class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class InvalidRecordError(ValidationError):
    """Raised when an expense record would break a ledger invariant."""


class MalformedLineError(ValueError):
    """Raised when a persisted line cannot be turned back into a record."""

    def __init__(self, message: str, line: str = "", line_number: int = 0) -> None:
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""
