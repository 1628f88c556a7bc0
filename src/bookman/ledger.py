from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import persistence
from .errors import StorageIOError
from .results import Outcome, Result
from .settings import BookmanSettings
from .store import BookStore

logger = logging.getLogger(__name__)


class Ledger:
    """One book store bound to one data file.

    This is the surface a shell talks to: ``open`` at startup, the store's
    operations while running, ``save`` on request. A missing data file opens
    as a fresh, empty list named after ``storage.default_list_name``.
    """

    def __init__(self, path: Optional[Path] = None, settings: Optional[BookmanSettings] = None) -> None:
        self.settings = settings or BookmanSettings()
        self.path = Path(path) if path is not None else self.settings.data_path()
        self._store = self._fresh_store()
        self._saved_revision = self._store.revision

    @property
    def store(self) -> BookStore:
        return self._store

    @property
    def has_unsaved_changes(self) -> bool:
        return self._store.revision != self._saved_revision

    def open(self) -> Result:
        """Load the data file, replacing the current store.

        Returns the load result unchanged. On ``NOT_FOUND`` and on every
        failure the ledger holds a fresh, empty store; a partially decoded
        list is never installed.
        """
        result = persistence.load(self.path, store_factory=self._fresh_store)
        if result.ok:
            self._store = result.value
        else:
            self._store = self._fresh_store()
            if result.outcome is Outcome.NOT_FOUND:
                logger.info("Starting new list '%s' at %s", self._store.list_name, self.path)
            else:
                logger.warning("Could not open %s (%s): %s", self.path, result.outcome.value, result.message)
        self._saved_revision = self._store.revision
        return result

    def save(self) -> Result:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Cannot create data directory %s: %s", self.path.parent, exc)
            return Result.failure(StorageIOError(f"cannot create {self.path.parent}: {exc}"))
        result = persistence.save(self._store, self.path)
        if result.ok:
            self._saved_revision = self._store.revision
        return result

    def _fresh_store(self, list_name: Optional[str] = None) -> BookStore:
        return BookStore(
            list_name or self.settings.storage.default_list_name,
            index_buckets=self.settings.catalog.index_buckets,
            max_name_length=self.settings.catalog.max_name_length,
        )
