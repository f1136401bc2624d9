from __future__ import annotations

from bisect import bisect_left, insort
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterator, List

from models.records import Measurement


class EmptyStoreError(LookupError):
    """Raised when bounds are requested from a store that holds no measurements."""


class RangeView:
    """Ordered, restartable view over the store entries inside a date window.

    Bounds are resolved on each iteration, so no records are copied.
    """

    def __init__(self, store: MeasurementStore, start: datetime, end: datetime) -> None:
        self._store = store
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[Measurement]:
        return self._store._iter_between(self.start, self.end)

    def __len__(self) -> int:
        lower, upper = self._store._bounds(self.start, self.end)
        return upper - lower

    def __bool__(self) -> bool:
        return len(self) > 0


class MeasurementStore:
    """In-memory measurements keyed by their combined date-time, kept in ascending order."""

    def __init__(self) -> None:
        self._keys: List[datetime] = []
        self._items: Dict[datetime, Measurement] = {}

    def insert(self, record: Measurement) -> None:
        key = record.date_time
        if key not in self._items:
            if not self._keys or key > self._keys[-1]:
                self._keys.append(key)
            else:
                insort(self._keys, key)
        self._items[key] = record

    def range_view(self, from_date: date, to_date: date) -> RangeView:
        """Entries from ``from_date`` 00:00:00 up to, not including, the day after ``to_date``."""
        start = datetime.combine(from_date, time.min)
        if to_date == date.max:
            end = datetime.max
        else:
            end = datetime.combine(to_date + timedelta(days=1), time.min)
        return RangeView(self, start, end)

    def first_key(self) -> datetime:
        if not self._keys:
            raise EmptyStoreError("No measurements have been loaded.")
        return self._keys[0]

    def last_key(self) -> datetime:
        if not self._keys:
            raise EmptyStoreError("No measurements have been loaded.")
        return self._keys[-1]

    def _bounds(self, start: datetime, end: datetime) -> tuple[int, int]:
        lower = bisect_left(self._keys, start)
        upper = bisect_left(self._keys, end, lo=lower)
        return lower, upper

    def _iter_between(self, start: datetime, end: datetime) -> Iterator[Measurement]:
        lower, upper = self._bounds(start, end)
        for index in range(lower, upper):
            yield self._items[self._keys[index]]

    def __iter__(self) -> Iterator[Measurement]:
        return (self._items[key] for key in self._keys)

    def __len__(self) -> int:
        return len(self._keys)
