import pytest

from bookman.index import SerialIndex


def test_add_contains_remove():
    idx = SerialIndex(buckets=7)
    assert not idx.contains(3)

    idx.add(3)
    idx.add(10)  # same bucket as 3
    assert idx.contains(3)
    assert idx.contains(10)
    assert len(idx) == 2

    idx.remove(3)
    assert not idx.contains(3)
    assert idx.contains(10)
    assert len(idx) == 1


def test_add_and_remove_are_idempotent():
    idx = SerialIndex(buckets=5)
    idx.add(42)
    idx.add(42)
    assert len(idx) == 1

    idx.remove(42)
    idx.remove(42)
    idx.remove(7)
    assert len(idx) == 0
    assert 42 not in idx


def test_iteration_covers_every_bucket():
    idx = SerialIndex(buckets=3)
    for serial in (0, 1, 2, 3, 4, 5, 300):
        idx.add(serial)
    assert sorted(idx) == [0, 1, 2, 3, 4, 5, 300]
    assert idx.bucket_count == 3


def test_membership_operator_ignores_non_integers():
    idx = SerialIndex()
    idx.add(1)
    assert 1 in idx
    assert "1" not in idx


def test_bucket_count_must_be_positive():
    with pytest.raises(ValueError):
        SerialIndex(buckets=0)
