from __future__ import annotations

from .results import Outcome


class BookmanError(Exception):
    """Base error for bookman ledger operations."""

    outcome: Outcome = Outcome.INVALID_ARGUMENT


class InvalidArgument(BookmanError):
    """Raised when a value reaching the store is malformed or out of range."""

    outcome = Outcome.INVALID_ARGUMENT


class DuplicateKey(BookmanError):
    """Raised when inserting a serial that is already in the catalog."""

    outcome = Outcome.DUPLICATE_KEY


class KeyNotFound(BookmanError):
    """Raised when a serial is not in the catalog."""

    outcome = Outcome.KEY_NOT_FOUND


class InternalInconsistency(BookmanError):
    """Raised when the serial index and the catalog disagree."""

    outcome = Outcome.INTERNAL_INCONSISTENCY


class SourceNotFound(BookmanError):
    """Raised when the data file to load does not exist."""

    outcome = Outcome.NOT_FOUND


class CorruptFormat(BookmanError):
    """Raised when a data file cannot be decoded."""

    outcome = Outcome.CORRUPT_FORMAT


class VersionMismatch(BookmanError):
    """Raised when a data file was written by a different format version."""

    outcome = Outcome.VERSION_MISMATCH


class StorageIOError(BookmanError):
    """Raised when reading or writing the data file fails."""

    outcome = Outcome.IO_ERROR


ERRORS_BY_OUTCOME = {
    cls.outcome: cls
    for cls in (
        InvalidArgument,
        DuplicateKey,
        KeyNotFound,
        InternalInconsistency,
        SourceNotFound,
        CorruptFormat,
        VersionMismatch,
        StorageIOError,
    )
}
