"""Line-oriented loading of station data files into a measurement store."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from datastore.measurement_store import MeasurementStore
from models.records import parse_measurement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadError:
    """A line that could not be parsed into a measurement."""

    line_number: int
    reason: str


@dataclass
class LoadReport:
    loaded: int = 0
    errors: List[LoadError] = field(default_factory=list)
    first: Optional[datetime] = None
    last: Optional[datetime] = None


def load_lines(lines: Iterable[str], store: MeasurementStore) -> LoadReport:
    """Parse each non-blank line and insert it; malformed lines are reported, not raised."""
    report = LoadReport()
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = parse_measurement(line)
        except ValueError as exc:
            report.errors.append(LoadError(line_number=line_number, reason=str(exc)))
            logger.warning(
                "Skipping malformed line",
                extra={"line_number": line_number, "reason": str(exc)},
            )
            continue
        store.insert(record)
        report.loaded += 1
        key = record.date_time
        if report.first is None or key < report.first:
            report.first = key
        if report.last is None or key > report.last:
            report.last = key

    return report


def load_measurements(path: Path, store: MeasurementStore) -> LoadReport:
    """Read ``path`` into ``store``. ``OSError`` propagates to the caller."""
    start_time = time.perf_counter()
    with path.open("r", encoding="utf-8") as handle:
        report = load_lines(handle, store)
    load_ms = int((time.perf_counter() - start_time) * 1000)

    logger.info(
        "Loaded weather data",
        extra={
            "path": str(path),
            "record_count": report.loaded,
            "error_count": len(report.errors),
            "load_ms": load_ms,
        },
    )
    return report
