from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .errors import BookmanError


class Outcome(str, Enum):
    SUCCESS = "success"
    INVALID_ARGUMENT = "invalid_argument"
    DUPLICATE_KEY = "duplicate_key"
    KEY_NOT_FOUND = "key_not_found"
    INTERNAL_INCONSISTENCY = "internal_inconsistency"
    NOT_FOUND = "not_found"
    CORRUPT_FORMAT = "corrupt_format"
    VERSION_MISMATCH = "version_mismatch"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class Result:
    """Outcome of a store or persistence operation.

    Exactly one ``outcome`` is set. On success ``value`` carries the payload
    (a record snapshot, a sequence of snapshots, a field value or a loaded
    store, depending on the operation). On failure ``message`` describes the
    cause and ``value`` is None.
    """

    outcome: Outcome
    value: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(Outcome.SUCCESS, value)

    @classmethod
    def failure(cls, error: "BookmanError") -> "Result":
        return cls(error.outcome, None, str(error))

    def unwrap(self) -> Any:
        """Return ``value`` on success, otherwise raise the matching error."""
        if self.ok:
            return self.value
        from .errors import ERRORS_BY_OUTCOME

        raise ERRORS_BY_OUTCOME[self.outcome](self.message or self.outcome.value)
