"""Single-user book inventory ledger.

The package provides:
- ``BookStore``: an in-memory catalog of book records with a serial index
- ``save``/``load``: the versioned line-oriented data file
- ``Ledger``: a store bound to its data file, as used by a shell
"""

# Data files carry this version and only files with the same one are read.
__version__ = "0.0.1"

from .errors import (  # noqa: E402
    BookmanError,
    CorruptFormat,
    DuplicateKey,
    InternalInconsistency,
    InvalidArgument,
    KeyNotFound,
    SourceNotFound,
    StorageIOError,
    VersionMismatch,
)
from .index import SerialIndex  # noqa: E402
from .ledger import Ledger  # noqa: E402
from .models import Record, RecordField, SortDirection, SortField  # noqa: E402
from .persistence import load, save  # noqa: E402
from .results import Outcome, Result  # noqa: E402
from .settings import BookmanSettings  # noqa: E402
from .store import BookStore  # noqa: E402

__all__ = [
    "__version__",
    "BookStore",
    "SerialIndex",
    "Ledger",
    "Record",
    "RecordField",
    "SortField",
    "SortDirection",
    "Outcome",
    "Result",
    "BookmanSettings",
    "save",
    "load",
    "BookmanError",
    "InvalidArgument",
    "DuplicateKey",
    "KeyNotFound",
    "InternalInconsistency",
    "SourceNotFound",
    "CorruptFormat",
    "VersionMismatch",
    "StorageIOError",
]
