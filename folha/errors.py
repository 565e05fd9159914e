"""Custom exceptions."""


class FolhaError(Exception):
    """Base exception for folha."""


class InvalidLoginError(FolhaError):
    """Raised when the backend rejects the credentials."""


class ConfigNotFoundError(FolhaError):
    """Raised when configuration is not found."""


class InvalidRangeError(FolhaError):
    """Raised when a date range starts after it ends."""

    def __init__(self, start, end) -> None:
        super().__init__(f"Range start {start} is after its end {end}")
        self.start = start
        self.end = end


class InvalidRecordError(FolhaError):
    """Raised when a time record cannot be parsed or built."""
