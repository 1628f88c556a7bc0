from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from pydantic import ValidationError

from .errors import (
    BookmanError,
    DuplicateKey,
    InternalInconsistency,
    InvalidArgument,
    KeyNotFound,
)
from .index import DEFAULT_BUCKETS, SerialIndex
from .models import (
    DEFAULT_LIST_NAME,
    MAX_NAME_LENGTH,
    UINT_MAX,
    Record,
    RecordField,
    SortDirection,
    SortField,
    validate_token,
)
from .results import Result

logger = logging.getLogger(__name__)


def _as_result(method: Callable[..., Any]) -> Callable[..., Result]:
    """Run a store operation, mapping ledger errors onto a failed Result."""

    @functools.wraps(method)
    def wrapper(self: "BookStore", *args: Any, **kwargs: Any) -> Result:
        try:
            value = method(self, *args, **kwargs)
        except InternalInconsistency as exc:
            logger.error("%s on '%s' found an inconsistent catalog: %s", method.__name__, self.list_name, exc)
            return Result.failure(exc)
        except BookmanError as exc:
            logger.debug("%s rejected: %s", method.__name__, exc)
            return Result.failure(exc)
        return Result.success(value)

    return wrapper


def _check_count(name: str, value: Any, minimum: int = 0) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < minimum or value > UINT_MAX:
        raise InvalidArgument(f"{name} must be between {minimum} and {UINT_MAX}, got {value}")
    return value


class BookStore:
    """In-memory catalog of book records with a serial number index.

    Every lookup consults the index before touching the catalog, and every
    mutation updates both in the same call. Public operations return a
    :class:`~bookman.results.Result`; none of them raise for ledger errors.

    The record count is tracked separately from the catalog and checked
    before each mutation, so any drift between the count, the catalog and the
    index surfaces as ``INTERNAL_INCONSISTENCY`` instead of silent damage.
    """

    def __init__(
        self,
        list_name: str = DEFAULT_LIST_NAME,
        *,
        index_buckets: int = DEFAULT_BUCKETS,
        max_name_length: int = MAX_NAME_LENGTH,
    ) -> None:
        if not 0 < max_name_length <= MAX_NAME_LENGTH:
            raise ValueError(f"max_name_length must be between 1 and {MAX_NAME_LENGTH}")
        self._list_name = validate_token(list_name, "list name")
        self._max_name_length = max_name_length
        self._records: Dict[int, Record] = {}
        self._index = SerialIndex(index_buckets)
        self._count = 0
        self.revision = 0

    @property
    def list_name(self) -> str:
        return self._list_name

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    def __contains__(self, serial: object) -> bool:
        return serial in self._index

    def __iter__(self) -> Iterator[Record]:
        # Iterate a copy so callers may mutate the store while looping.
        return iter(tuple(self._records.values()))

    # Mutations

    @_as_result
    def insert(self, serial: int, name: str, price: int, quantity: int) -> Record:
        self._check_count_matches()
        record = self._build(serial=serial, name=name, price=price, quantity=quantity)
        if self._index.contains(record.serial):
            raise DuplicateKey(f"serial {record.serial} already exists")
        if record.serial in self._records:
            raise InternalInconsistency(f"serial {record.serial} is in the catalog but not indexed")
        self._records[record.serial] = record
        self._index.add(record.serial)
        self._count += 1
        self._mutated()
        logger.debug("Inserted %s into '%s'", record.to_line(), self._list_name)
        return record

    @_as_result
    def delete(self, serial: int) -> Record:
        record = self._locate(serial)
        del self._records[record.serial]
        self._index.remove(record.serial)
        self._count -= 1
        self._mutated()
        logger.debug("Deleted serial %s from '%s'", serial, self._list_name)
        return record

    @_as_result
    def update_field(self, serial: int, field: Any, value: Any) -> Record:
        """Replace one field (name, price or quantity) of a record."""
        try:
            field = RecordField(field)
        except ValueError:
            raise InvalidArgument(f"unknown field {field!r}") from None
        return self._update(serial, {field.value: value})

    @_as_result
    def update_fields(
        self,
        serial: int,
        *,
        name: Optional[str] = None,
        price: Optional[int] = None,
        quantity: Optional[int] = None,
    ) -> Record:
        """Replace any of name, price and quantity in one step.

        All new values are validated before any is applied; fields passed as
        None keep their current value.
        """
        changes = {
            key: value
            for key, value in (("name", name), ("price", price), ("quantity", quantity))
            if value is not None
        }
        if not changes:
            raise InvalidArgument("no fields to update")
        return self._update(serial, changes)

    @_as_result
    def sell(self, serial: int, quantity: int) -> Record:
        """Take ``quantity`` copies out of stock."""
        _check_count("quantity", quantity, minimum=1)
        current = self._locate(serial)
        if quantity > current.quantity:
            raise InvalidArgument(
                f"only {current.quantity} of serial {current.serial} in stock; requested {quantity}"
            )
        record = self._replace(current, {"quantity": current.quantity - quantity})
        logger.debug("Sold %d of serial %s; %d left", quantity, serial, record.quantity)
        return record

    # Queries

    @_as_result
    def query(self, serial: int) -> Record:
        return self._locate(serial)

    @_as_result
    def query_field(self, serial: int, field: Any) -> Any:
        try:
            field = RecordField(field)
        except ValueError:
            raise InvalidArgument(f"unknown field {field!r}") from None
        return getattr(self._locate(serial), field.value)

    @_as_result
    def list_all(self) -> Tuple[Record, ...]:
        return tuple(self._records.values())

    @_as_result
    def sorted_view(self, field: Any, direction: Any = SortDirection.ASCENDING) -> Tuple[Record, ...]:
        """Return every record ordered by name or price.

        Records with equal keys stay in ascending serial order in both
        directions.
        """
        try:
            field = SortField(field)
            direction = SortDirection(direction)
        except ValueError as exc:
            raise InvalidArgument(str(exc)) from None
        by_serial = sorted(self._records.values(), key=lambda r: r.serial)
        # sorted() is stable with reverse=True too, so serial order survives ties
        ordered = sorted(
            by_serial,
            key=lambda r: getattr(r, field.value),
            reverse=direction is SortDirection.DESCENDING,
        )
        return tuple(ordered)

    @_as_result
    def check_consistency(self) -> int:
        """Audit the count, the catalog and the index against each other."""
        self._check_count_matches()
        if len(self._index) != len(self._records):
            raise InternalInconsistency(
                f"index holds {len(self._index)} serials but the catalog holds {len(self._records)} records"
            )
        missing = [serial for serial in self._records if not self._index.contains(serial)]
        if missing:
            raise InternalInconsistency(f"serials missing from the index: {sorted(missing)}")
        return self._count

    # Internals

    def _build(self, **fields: Any) -> Record:
        try:
            record = Record(**fields)
        except ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise InvalidArgument(errors) from None
        if len(record.name) > self._max_name_length:
            raise InvalidArgument(f"name longer than {self._max_name_length} characters")
        return record

    def _locate(self, serial: Any) -> Record:
        _check_count("serial", serial)
        self._check_count_matches()
        if not self._index.contains(serial):
            raise KeyNotFound(f"serial {serial} does not exist")
        record = self._records.get(serial)
        if record is None:
            raise InternalInconsistency(f"serial {serial} is indexed but missing from the catalog")
        return record

    def _update(self, serial: int, changes: Dict[str, Any]) -> Record:
        current = self._locate(serial)
        record = self._replace(current, changes)
        logger.debug("Updated serial %s fields %s", serial, sorted(changes))
        return record

    def _replace(self, current: Record, changes: Dict[str, Any]) -> Record:
        record = self._build(**{**current.model_dump(), **changes})
        self._records[current.serial] = record
        self._mutated()
        return record

    def _check_count_matches(self) -> None:
        # Runs before any mutation so a drifted store is reported, not changed.
        if self._count != len(self._records):
            raise InternalInconsistency(
                f"count is {self._count} but the catalog holds {len(self._records)} records"
            )

    def _mutated(self) -> None:
        self.revision += 1
