"""Domain models shared across services."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time

APPROVED_FLAG = "G"
FIELD_SEPARATOR = ";"


@dataclass(frozen=True, slots=True)
class Measurement:
    """A single station reading parsed from a ``date;time;temperature;flag`` line."""

    date: date
    time: time
    temperature: float
    approved: bool

    @property
    def date_time(self) -> datetime:
        return datetime.combine(self.date, self.time)


def parse_measurement(line: str) -> Measurement:
    """Parse one delimited record, raising ``ValueError`` with a short reason."""
    fields = line.strip().split(FIELD_SEPARATOR, 3)
    if len(fields) != 4:
        raise ValueError("expected 4 fields")

    date_raw, time_raw, temperature_raw, flag_raw = (field.strip() for field in fields)

    try:
        day = date.fromisoformat(date_raw)
    except ValueError as exc:
        raise ValueError("invalid date") from exc

    try:
        time_of_day = time.fromisoformat(time_raw)
    except ValueError as exc:
        raise ValueError("invalid time") from exc

    try:
        temperature = float(temperature_raw)
    except ValueError as exc:
        raise ValueError("invalid temperature") from exc
    if not math.isfinite(temperature):
        raise ValueError("invalid temperature")

    return Measurement(
        date=day,
        time=time_of_day,
        temperature=temperature,
        approved=flag_raw == APPROVED_FLAG,
    )
