from __future__ import annotations

from datetime import date, datetime, time

import pytest

from models.records import Measurement, parse_measurement


def test_parse_measurement_approved_reading() -> None:
    record = parse_measurement("2000-01-01;06:00:00;-1.5;G\n")

    assert record == Measurement(
        date=date(2000, 1, 1),
        time=time(6, 0, 0),
        temperature=-1.5,
        approved=True,
    )
    assert record.date_time == datetime(2000, 1, 1, 6, 0, 0)


def test_any_other_flag_is_not_approved() -> None:
    assert parse_measurement("2000-01-01;06:00:00;3.2;Y").approved is False
    assert parse_measurement("2000-01-01;06:00:00;3.2;g").approved is False
    assert parse_measurement("2000-01-01;06:00:00;3.2;G;extra").approved is False


@pytest.mark.parametrize(
    ("line", "reason"),
    [
        ("2000-01-01;06:00:00;3.2", "expected 4 fields"),
        ("2000-13-01;06:00:00;3.2;G", "invalid date"),
        ("2000-01-01;25:00:00;3.2;G", "invalid time"),
        ("2000-01-01;06:00:00;warm;G", "invalid temperature"),
        ("2000-01-01;06:00:00;NaN;G", "invalid temperature"),
        ("2000-01-01;06:00:00;inf;G", "invalid temperature"),
        ("2000-01-01;06:00:00;-inf;G", "invalid temperature"),
        ("2000-01-01;06:00:00;1e400;G", "invalid temperature"),
    ],
)
def test_parse_measurement_rejects_malformed_lines(line: str, reason: str) -> None:
    with pytest.raises(ValueError, match=reason):
        parse_measurement(line)


def test_measurement_is_immutable() -> None:
    record = parse_measurement("2000-01-01;06:00:00;3.2;G")

    with pytest.raises(AttributeError):
        record.temperature = 10.0  # type: ignore[misc]
