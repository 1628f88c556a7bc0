from __future__ import annotations

from typing import Iterator, List

DEFAULT_BUCKETS = 10007


class SerialIndex:
    """Membership set of serial numbers.

    Serials are hashed by modulo into a fixed number of buckets, each bucket
    holding a short chain of serials. The index stores keys only and never
    references record data.
    """

    def __init__(self, buckets: int = DEFAULT_BUCKETS) -> None:
        if buckets <= 0:
            raise ValueError("buckets must be positive")
        self._buckets: List[List[int]] = [[] for _ in range(buckets)]
        self._size = 0

    def _bucket(self, serial: int) -> List[int]:
        return self._buckets[serial % len(self._buckets)]

    def contains(self, serial: int) -> bool:
        return serial in self._bucket(serial)

    def add(self, serial: int) -> None:
        chain = self._bucket(serial)
        if serial in chain:
            return
        chain.append(serial)
        self._size += 1

    def remove(self, serial: int) -> None:
        chain = self._bucket(serial)
        try:
            chain.remove(serial)
        except ValueError:
            return
        self._size -= 1

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def __contains__(self, serial: object) -> bool:
        return isinstance(serial, int) and self.contains(serial)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        for chain in self._buckets:
            yield from chain
