from __future__ import annotations

import logging
from typing import Callable, List, Optional

from . import __version__
from .errors import CorruptFormat, VersionMismatch
from .store import BookStore

logger = logging.getLogger(__name__)

FORMAT_TAG = "bookman"


def encode_catalog(store: BookStore, version: str = __version__) -> str:
    """Encode a store into the line-oriented data file format.

    Layout::

        bookman <version>
        <list name> <count>
        <serial> <name> <price> <quantity>    (count lines)
    """
    records = store.list_all().unwrap()
    lines = [f"{FORMAT_TAG} {version}", f"{store.list_name} {len(records)}"]
    lines.extend(record.to_line() for record in records)
    return "\n".join(lines) + "\n"


def decode_catalog(
    text: str,
    version: str = __version__,
    store_factory: Optional[Callable[[str], BookStore]] = None,
) -> BookStore:
    """Decode data file text into a new store.

    Raises :class:`VersionMismatch` when the header names another version,
    and :class:`CorruptFormat` for anything else that does not match the
    layout, including duplicate serials. No partially built store escapes.
    """
    lines = _content_lines(text)
    if not lines:
        raise CorruptFormat("data file is empty")

    header = lines[0].split()
    if len(header) != 2 or header[0] != FORMAT_TAG:
        raise CorruptFormat(f"unrecognised format tag line: {lines[0]!r}")
    if header[1] != version:
        raise VersionMismatch(f"data file version {header[1]} does not match {version}")

    if len(lines) < 2:
        raise CorruptFormat("missing list name and record count")
    list_line = lines[1].split()
    if len(list_line) != 2:
        raise CorruptFormat(f"malformed list line: {lines[1]!r}")
    list_name, declared = list_line[0], _parse_uint(list_line[1], "record count", 2)

    body = lines[2:]
    if len(body) != declared:
        raise CorruptFormat(f"declared {declared} records but found {len(body)} record lines")

    factory = store_factory or BookStore
    try:
        store = factory(list_name)
    except ValueError as exc:
        raise CorruptFormat(f"invalid list name {list_name!r}: {exc}") from exc

    for lineno, line in enumerate(body, start=3):
        fields = line.split()
        if len(fields) != 4:
            raise CorruptFormat(f"line {lineno}: expected 'serial name price quantity', got {line!r}")
        serial = _parse_uint(fields[0], "serial", lineno)
        price = _parse_uint(fields[2], "price", lineno)
        quantity = _parse_uint(fields[3], "quantity", lineno)
        result = store.insert(serial, fields[1], price, quantity)
        if not result.ok:
            raise CorruptFormat(f"line {lineno}: {result.message}")

    logger.debug("Decoded %d records for list '%s'", store.count, store.list_name)
    return store


def _content_lines(text: str) -> List[str]:
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _parse_uint(token: str, what: str, lineno: int) -> int:
    if not token.isdigit() or not token.isascii():
        raise CorruptFormat(f"line {lineno}: {what} {token!r} is not a non-negative integer")
    return int(token)
