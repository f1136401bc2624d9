"""Errors raised by the query layer."""

from __future__ import annotations

from datetime import date
from enum import Enum

from datastore.measurement_store import EmptyStoreError


class RangeReason(str, Enum):
    """Which bound check rejected a requested date range."""

    reversed = "reversed"
    start_before_data = "startBeforeData"
    start_after_data = "startAfterData"
    end_after_data = "endAfterData"


class QueryError(Exception):
    """Base class for query failures that callers may want to surface."""


class InvalidRangeError(QueryError):

    def __init__(self, reason: RangeReason, from_date: date, to_date: date, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.from_date = from_date
        self.to_date = to_date
        self.message = message


class NoMatchingDataError(QueryError):

    def __init__(self, from_date: date, to_date: date) -> None:
        super().__init__(f"No measurements between {from_date} and {to_date}.")
        self.from_date = from_date
        self.to_date = to_date


__all__ = [
    "EmptyStoreError",
    "InvalidRangeError",
    "NoMatchingDataError",
    "QueryError",
    "RangeReason",
]
