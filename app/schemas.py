"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

import datetime as dt
from typing import List, Union

from pydantic import BaseModel, Field


class DailyAverageEntry(BaseModel):
    """Mean temperature for one calendar day."""

    date: dt.date
    average: float


class DailyMissingEntry(BaseModel):
    """Number of expected hourly readings absent on one calendar day."""

    date: dt.date
    missing: int = Field(..., ge=0)


class ApprovedShareEntry(BaseModel):
    approved: int = Field(..., ge=0)
    total: int = Field(..., ge=1)
    percentage: float = Field(..., ge=0, le=100)


class ReportResponse(BaseModel):
    """Formatted report lines together with the structured values behind them."""

    from_date: dt.date
    to_date: dt.date
    lines: List[str] = Field(default_factory=list)
    entries: List[Union[DailyAverageEntry, DailyMissingEntry, ApprovedShareEntry]] = Field(
        default_factory=list
    )


class RangeErrorDetail(BaseModel):
    reason: str
    message: str


class StoreBounds(BaseModel):
    """Extent of the loaded dataset."""

    record_count: int = Field(..., ge=0)
    first: dt.datetime
    last: dt.datetime
