"""Unit tests for the ordered in-memory measurement store."""

from __future__ import annotations

from datetime import date, datetime, time

import pytest

from datastore.measurement_store import EmptyStoreError, MeasurementStore
from models.records import Measurement


def _measurement(day: date, hour: int, temperature: float = 1.0, minute: int = 0, second: int = 0) -> Measurement:
    return Measurement(
        date=day,
        time=time(hour, minute, second),
        temperature=temperature,
        approved=True,
    )


def test_empty_store_has_no_bounds() -> None:
    store = MeasurementStore()

    assert len(store) == 0
    with pytest.raises(EmptyStoreError):
        store.first_key()
    with pytest.raises(EmptyStoreError):
        store.last_key()


def test_keys_stay_ordered_when_inserted_out_of_order() -> None:
    store = MeasurementStore()
    day = date(2000, 1, 1)
    for hour in (5, 1, 23, 0, 12):
        store.insert(_measurement(day, hour))

    assert [record.time.hour for record in store] == [0, 1, 5, 12, 23]
    assert store.first_key() == datetime(2000, 1, 1, 0)
    assert store.last_key() == datetime(2000, 1, 1, 23)


def test_insert_with_existing_key_overwrites() -> None:
    store = MeasurementStore()
    day = date(2000, 1, 1)

    store.insert(_measurement(day, 3, temperature=1.0))
    store.insert(_measurement(day, 3, temperature=7.5))

    assert len(store) == 1
    assert [record.temperature for record in store] == [7.5]


def test_range_view_includes_whole_days() -> None:
    store = MeasurementStore()
    store.insert(_measurement(date(1999, 12, 31), 23, minute=59, second=59))
    store.insert(_measurement(date(2000, 1, 1), 0))
    store.insert(_measurement(date(2000, 1, 2), 23, minute=59, second=59))
    store.insert(_measurement(date(2000, 1, 3), 0))

    view = store.range_view(date(2000, 1, 1), date(2000, 1, 2))

    assert [record.date_time for record in view] == [
        datetime(2000, 1, 1, 0, 0, 0),
        datetime(2000, 1, 2, 23, 59, 59),
    ]
    assert len(view) == 2


def test_range_view_is_restartable() -> None:
    store = MeasurementStore()
    for hour in range(4):
        store.insert(_measurement(date(2000, 1, 1), hour))

    view = store.range_view(date(2000, 1, 1), date(2000, 1, 1))

    assert list(view) == list(view)
    assert len(list(view)) == 4


def test_range_view_shares_records_with_store() -> None:
    store = MeasurementStore()
    record = _measurement(date(2000, 1, 1), 0)
    store.insert(record)

    (viewed,) = store.range_view(date(2000, 1, 1), date(2000, 1, 1))

    assert viewed is record


def test_range_view_outside_data_is_empty() -> None:
    store = MeasurementStore()
    store.insert(_measurement(date(2000, 1, 1), 0))

    view = store.range_view(date(2001, 1, 1), date(2001, 1, 2))

    assert not view
    assert list(view) == []


def test_range_view_up_to_last_representable_date() -> None:
    store = MeasurementStore()
    store.insert(_measurement(date.max, 23, minute=59, second=59))
    store.insert(_measurement(date(2000, 1, 1), 0))

    view = store.range_view(date(2000, 1, 1), date.max)

    assert len(view) == 2
    assert [record.date for record in view] == [date(2000, 1, 1), date.max]
