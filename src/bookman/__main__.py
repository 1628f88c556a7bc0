from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .ledger import Ledger
from .logging_config import configure_logging
from .models import SortDirection, SortField
from .results import Outcome
from .settings import BookmanSettings, default_settings_path


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="bookman",
        description="Print the contents of a bookman data file.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument("--data", dest="data_path", type=Path, default=None, help="Data file to read.")
    parser.add_argument(
        "--sort",
        choices=[f.value for f in SortField],
        default=None,
        help="Order records by name or price instead of file order.",
    )
    parser.add_argument("--desc", action="store_true", help="Sort in descending order.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    user_path = args.settings_path
    if user_path is None and default_settings_path().exists():
        user_path = default_settings_path()
    settings = BookmanSettings.load(user_path=user_path)
    configure_logging(default_level=logging.DEBUG if args.debug else settings.logging.level)

    ledger = Ledger(path=args.data_path, settings=settings)
    opened = ledger.open()
    if not opened.ok and opened.outcome is not Outcome.NOT_FOUND:
        print(f"Cannot read {ledger.path}: {opened.message}", file=sys.stderr)
        return 1

    store = ledger.store
    if args.sort:
        direction = SortDirection.DESCENDING if args.desc else SortDirection.ASCENDING
        records = store.sorted_view(args.sort, direction).unwrap()
    else:
        records = store.list_all().unwrap()

    print(f"{store.list_name} ({store.count} books) - {ledger.path}")
    for record in records:
        print(f"  {record.serial:>10}  {record.name:<32}  {record.price:>10}  {record.quantity:>8}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
