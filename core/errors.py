from __future__ import annotations


class JournalError(Exception):
    """Base for every failure surfaced to a caller as one message."""

    message = "Journal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class EmptyFileError(JournalError):
    message = "CSV file is empty"


class InvalidTimezoneError(JournalError):
    message = "Unknown timezone"


class NoValidTradesError(JournalError):
    message = "No valid trades to import"


class ImportFailedError(JournalError):
    message = "Failed to import trades"


class StorageError(JournalError):
    message = "Storage operation failed"


class DuplicateBrokerError(JournalError):
    message = "This broker already exists"


class NotFoundError(JournalError):
    message = "Not found"


class CsvDecodeError(JournalError):
    message = "Failed to parse CSV file"
