from bookman import BookStore, Outcome
from bookman.errors import InternalInconsistency

import pytest


def _store() -> BookStore:
    s = BookStore("Shop", index_buckets=11)
    for serial in (1, 2, 3):
        s.insert(serial, f"book{serial}", serial * 10, serial)
    return s


def test_healthy_store_passes_audit():
    s = _store()
    result = s.check_consistency()
    assert result.ok
    assert result.value == 3


def test_indexed_serial_missing_from_catalog_is_reported():
    s = _store()
    del s._records[2]
    s._count -= 1

    assert s.delete(2).outcome is Outcome.INTERNAL_INCONSISTENCY
    assert s.query(2).outcome is Outcome.INTERNAL_INCONSISTENCY
    assert s.update_field(2, "price", 5).outcome is Outcome.INTERNAL_INCONSISTENCY
    assert s.check_consistency().outcome is Outcome.INTERNAL_INCONSISTENCY
    with pytest.raises(InternalInconsistency):
        s.query(2).unwrap()


def test_catalog_entry_missing_from_index_blocks_insert():
    s = _store()
    s._index.remove(3)

    result = s.insert(3, "again", 1, 1)
    assert result.outcome is Outcome.INTERNAL_INCONSISTENCY
    assert s.query(3).outcome is Outcome.KEY_NOT_FOUND
    assert s._records[3].name == "book3"


def test_count_drift_is_detected_on_mutation():
    s = _store()
    s._count += 1
    revision = s.revision

    assert s.insert(4, "book4", 1, 1).outcome is Outcome.INTERNAL_INCONSISTENCY
    assert 4 not in s
    assert 4 not in s._records
    assert s.count == 4

    assert s.delete(1).outcome is Outcome.INTERNAL_INCONSISTENCY
    assert 1 in s
    assert s.sell(2, 1).outcome is Outcome.INTERNAL_INCONSISTENCY
    assert s._records[2].quantity == 2
    assert s.revision == revision
    assert s.check_consistency().outcome is Outcome.INTERNAL_INCONSISTENCY
