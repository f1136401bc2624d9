"""Range queries over the loaded measurement store."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_EVEN, Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from datastore.measurement_store import EmptyStoreError, MeasurementStore
from services.errors import InvalidRangeError, NoMatchingDataError, QueryError, RangeReason
from services.loader import load_measurements
from settings import get_settings

logger = logging.getLogger(__name__)

_PERCENT_QUANTUM = Decimal("0.01")


class QueryKind(str, Enum):
    average = "average"
    missing = "missing"
    approved = "approved"


@dataclass(frozen=True)
class DailyAverage:
    date: date
    average: float

    def format_line(self) -> str:
        return f"{self.date} average temperature: {self.average} degrees Celsius"


@dataclass(frozen=True)
class DailyMissing:
    date: date
    missing: int

    def format_line(self) -> str:
        return f"{self.date} missing {self.missing} values"


@dataclass(frozen=True)
class ApprovedShare:
    from_date: date
    to_date: date
    approved: int
    total: int
    percentage: Decimal

    def format_line(self) -> str:
        return f"Approved values between {self.from_date} and {self.to_date}: {self.percentage} %"


@dataclass(frozen=True)
class QueryOutcome:
    """Report lines on success, or the error that prevented them."""

    lines: Tuple[str, ...] = field(default_factory=tuple)
    error: Optional[QueryError | EmptyStoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def round_half_away_from_zero(value: float, digits: int = 2) -> float:
    scale = 10**digits
    scaled = math.floor(abs(value) * scale + 0.5)
    # adding 0.0 turns -0.0 into 0.0
    return math.copysign(scaled, value) / scale + 0.0


def approved_percentage(approved: int, total: int) -> Decimal:
    share = Decimal(approved) * 100 / Decimal(total)
    return share.quantize(_PERCENT_QUANTUM, rounding=ROUND_HALF_EVEN)


class QueryEngine:
    """Read-only analytics over a :class:`MeasurementStore`."""

    def __init__(self, store: MeasurementStore, readings_per_day: int = 24) -> None:
        self.store = store
        self.readings_per_day = readings_per_day

    def check_range(self, from_date: date, to_date: date) -> None:
        """Raise if the range is reversed or not fully inside the stored data."""
        if from_date > to_date:
            raise InvalidRangeError(
                RangeReason.reversed,
                from_date,
                to_date,
                "End date appears to be before start date.",
            )

        first = self.store.first_key()
        last = self.store.last_key()

        if from_date < first.date():
            raise InvalidRangeError(
                RangeReason.start_before_data,
                from_date,
                to_date,
                "Start date appears to be before first available data. "
                f"First data in dataset: {first.isoformat()}",
            )
        if from_date > last.date():
            raise InvalidRangeError(
                RangeReason.start_after_data,
                from_date,
                to_date,
                "Start date appears to be after the last available data. "
                f"Last data in dataset: {last.isoformat()}",
            )
        if to_date > last.date():
            raise InvalidRangeError(
                RangeReason.end_after_data,
                from_date,
                to_date,
                "End date appears to be after the last available data. "
                f"Last data in dataset: {last.isoformat()}",
            )

    def is_range_valid(self, from_date: date, to_date: date) -> bool:
        try:
            self.check_range(from_date, to_date)
        except EmptyStoreError:
            logger.info(
                "Range rejected, store is empty",
                extra={"from_date": from_date, "to_date": to_date, "reason": "empty"},
            )
            return False
        except InvalidRangeError as exc:
            logger.info(
                exc.message,
                extra={"from_date": from_date, "to_date": to_date, "reason": exc.reason.value},
            )
            return False
        return True

    def daily_averages(self, from_date: date, to_date: date) -> List[DailyAverage]:
        self.check_range(from_date, to_date)

        # Range views are date-time ordered, so dicts fill in ascending date order.
        temperatures: Dict[date, List[float]] = {}
        for record in self.store.range_view(from_date, to_date):
            temperatures.setdefault(record.date, []).append(record.temperature)

        return [
            DailyAverage(date=day, average=round_half_away_from_zero(sum(values) / len(values)))
            for day, values in temperatures.items()
        ]

    def daily_missing(self, from_date: date, to_date: date) -> List[DailyMissing]:
        self.check_range(from_date, to_date)

        missing: Dict[date, int] = {}
        for record in self.store.range_view(from_date, to_date):
            missing[record.date] = missing.get(record.date, self.readings_per_day) - 1

        entries = [
            DailyMissing(date=day, missing=max(count, 0)) for day, count in missing.items()
        ]
        entries.sort(key=lambda entry: (-entry.missing, entry.date))
        return entries

    def approved_share(self, from_date: date, to_date: date) -> ApprovedShare:
        self.check_range(from_date, to_date)

        approved = 0
        total = 0
        for record in self.store.range_view(from_date, to_date):
            total += 1
            if record.approved:
                approved += 1

        if total == 0:
            raise NoMatchingDataError(from_date, to_date)

        return ApprovedShare(
            from_date=from_date,
            to_date=to_date,
            approved=approved,
            total=total,
            percentage=approved_percentage(approved, total),
        )

    def run(self, kind: QueryKind, from_date: date, to_date: date) -> QueryOutcome:
        """Execute a query, reporting failures through the outcome instead of raising."""
        compute: Dict[QueryKind, Callable[[date, date], List[str]]] = {
            QueryKind.average: lambda start, end: [
                entry.format_line() for entry in self.daily_averages(start, end)
            ],
            QueryKind.missing: lambda start, end: [
                entry.format_line() for entry in self.daily_missing(start, end)
            ],
            QueryKind.approved: lambda start, end: [
                self.approved_share(start, end).format_line()
            ],
        }
        try:
            lines = compute[QueryKind(kind)](from_date, to_date)
        except (QueryError, EmptyStoreError) as exc:
            reason = exc.reason.value if isinstance(exc, InvalidRangeError) else type(exc).__name__
            logger.info(
                "Query produced no report",
                extra={"from_date": from_date, "to_date": to_date, "reason": reason},
            )
            return QueryOutcome(error=exc)
        return QueryOutcome(lines=tuple(lines))

    def average_temperatures(self, from_date: date, to_date: date) -> List[str]:
        return list(self.run(QueryKind.average, from_date, to_date).lines)

    def missing_values(self, from_date: date, to_date: date) -> List[str]:
        return list(self.run(QueryKind.missing, from_date, to_date).lines)

    def approved_values(self, from_date: date, to_date: date) -> List[str]:
        return list(self.run(QueryKind.approved, from_date, to_date).lines)


@lru_cache
def build_default_engine(data_path: Optional[str] = None) -> QueryEngine:
    """Load the configured data file into a fresh store and wire an engine to it."""
    settings = get_settings()
    path = Path(data_path or settings.data_path)
    store = MeasurementStore()
    load_measurements(path, store)
    return QueryEngine(store, readings_per_day=settings.readings_per_day)
