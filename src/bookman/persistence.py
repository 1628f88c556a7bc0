"""Reading and writing a store's data file.

``save`` and ``load`` never raise for ledger conditions; they return a
:class:`~bookman.results.Result` whose outcome tells the caller what
happened. A missing data file is reported as ``NOT_FOUND`` so the caller
can start with a fresh catalog.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from . import __version__
from .codec import decode_catalog, encode_catalog
from .errors import CorruptFormat, SourceNotFound, StorageIOError, VersionMismatch
from .results import Result
from .store import BookStore

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def save(store: BookStore, destination: PathLike, version: str = __version__) -> Result:
    """Write ``store`` to ``destination``.

    The text is written to a sibling ``.tmp`` file which then replaces the
    destination, so a failed write never leaves a truncated data file under
    the real name. Returns ``SUCCESS`` with the destination path, or
    ``IO_ERROR`` carrying the underlying cause.
    """
    path = Path(destination)
    text = encode_catalog(store, version)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as exc:
        _discard(tmp)
        logger.error("Failed to save list '%s' to %s: %s", store.list_name, path, exc)
        return Result.failure(StorageIOError(f"cannot write {path}: {exc}"))
    logger.info("Saved %d records of '%s' to %s", store.count, store.list_name, path)
    return Result.success(path)


def load(
    source: PathLike,
    version: str = __version__,
    store_factory: Optional[Callable[[str], BookStore]] = None,
) -> Result:
    """Read a data file into a new store.

    Outcomes: ``SUCCESS`` with the store, ``NOT_FOUND`` when the file does
    not exist, ``CORRUPT_FORMAT``, ``VERSION_MISMATCH`` or ``IO_ERROR``.
    """
    path = Path(source)
    try:
        with path.open("r", encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        logger.info("No data file at %s", path)
        return Result.failure(SourceNotFound(f"{path} does not exist"))
    except UnicodeDecodeError as exc:
        logger.warning("Data file %s is not valid UTF-8: %s", path, exc)
        return Result.failure(CorruptFormat(f"{path} is not a text data file: {exc}"))
    except OSError as exc:
        logger.error("Failed to read %s: %s", path, exc)
        return Result.failure(StorageIOError(f"cannot read {path}: {exc}"))

    try:
        store = decode_catalog(text, version, store_factory)
    except (CorruptFormat, VersionMismatch) as exc:
        logger.warning("Rejected data file %s: %s", path, exc)
        return Result.failure(exc)
    logger.info("Loaded %d records of '%s' from %s", store.count, store.list_name, path)
    return Result.success(store)


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove temporary file %s", tmp, exc_info=True)
