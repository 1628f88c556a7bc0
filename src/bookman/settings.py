from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from platformdirs import user_config_dir, user_data_dir

from .index import DEFAULT_BUCKETS
from .models import DEFAULT_LIST_NAME, MAX_NAME_LENGTH, validate_token

logger = logging.getLogger(__name__)

APP_NAME = "bookman"
DEFAULT_DATA_FILE = "books.dat"
DATA_PATH_ENV = "BOOKMAN_DATA_PATH"


@dataclass
class StorageSettings:
    data_path: str = ""  # empty: books.dat in the user data dir
    default_list_name: str = DEFAULT_LIST_NAME


@dataclass
class CatalogSettings:
    max_name_length: int = MAX_NAME_LENGTH
    index_buckets: int = DEFAULT_BUCKETS


@dataclass
class LoggingSettings:
    level: str = "INFO"


@dataclass
class BookmanSettings:
    storage: StorageSettings = field(default_factory=StorageSettings)
    catalog: CatalogSettings = field(default_factory=CatalogSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @staticmethod
    def _read_mapping(path: Any, source: str) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{source} settings file must contain a mapping, got {type(data).__name__}")
        return data

    @classmethod
    def _merge_over(cls, defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``overrides`` into ``defaults``, descending into shared groups."""
        merged = dict(defaults)
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(defaults.get(key), dict):
                merged[key] = cls._merge_over(defaults[key], value)
            else:
                merged[key] = value
        return merged

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "BookmanSettings":
        groups = {"storage": StorageSettings, "catalog": CatalogSettings, "logging": LoggingSettings}
        unknown = sorted(str(key) for key in data if key not in groups)
        if unknown:
            raise ValueError(f"Unknown settings group(s): {', '.join(unknown)}")
        built: Dict[str, Any] = {}
        for name, group_cls in groups.items():
            values = data.get(name) or {}
            if not isinstance(values, dict):
                raise ValueError(f"settings group '{name}' must be a mapping")
            try:
                built[name] = group_cls(**values)
            except TypeError as exc:
                raise ValueError(f"Unknown key in settings group '{name}': {exc}") from exc
        settings = cls(**built)
        settings.validate()
        return settings

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "BookmanSettings":
        """Load settings from built-in defaults and an optional user file.

        If user_path is provided and exists, its values are merged over the
        packaged defaults. Raises ValueError for anything that is not a valid
        settings mapping.
        """
        try:
            defaults = cls._read_mapping(resources.files("bookman").joinpath("default_settings.yaml"), "packaged")
        except FileNotFoundError:
            logger.warning("Packaged default settings missing; using built-in values")
            defaults = dataclasses.asdict(BookmanSettings())

        overrides: Dict[str, Any] = {}
        if user_path is not None:
            if user_path.exists():
                overrides = cls._read_mapping(user_path, "user")
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        settings = cls._from_dict(cls._merge_over(defaults, overrides))
        logger.debug("Effective settings: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)

    def validate(self) -> None:
        if not isinstance(self.catalog.index_buckets, int) or self.catalog.index_buckets <= 0:
            raise ValueError("catalog.index_buckets must be a positive integer")
        if not isinstance(self.catalog.max_name_length, int) or not (
            0 < self.catalog.max_name_length <= MAX_NAME_LENGTH
        ):
            raise ValueError(f"catalog.max_name_length must be between 1 and {MAX_NAME_LENGTH}")
        validate_token(self.storage.default_list_name, "storage.default_list_name")
        if not isinstance(getattr(logging, str(self.logging.level).upper(), None), int):
            raise ValueError(f"Unknown log level: {self.logging.level}")

    def data_path(self) -> Path:
        """Resolve the data file: environment, then settings, then user data dir."""
        override = os.getenv(DATA_PATH_ENV, "").strip()
        if override:
            return Path(override).expanduser()
        if self.storage.data_path:
            return Path(self.storage.data_path).expanduser()
        return Path(user_data_dir(appname=APP_NAME)) / DEFAULT_DATA_FILE


def default_settings_path() -> Path:
    """Per-user settings file location."""
    return Path(user_config_dir(appname=APP_NAME)) / "settings.yaml"
