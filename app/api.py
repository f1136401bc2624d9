"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import date
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.schemas import (
    ApprovedShareEntry,
    DailyAverageEntry,
    DailyMissingEntry,
    RangeErrorDetail,
    ReportResponse,
    StoreBounds,
)
from datastore.measurement_store import EmptyStoreError
from services.errors import InvalidRangeError, NoMatchingDataError, QueryError
from services.query_engine import QueryEngine, build_default_engine

router = APIRouter()


def get_engine() -> QueryEngine:
    return build_default_engine()


def _raise_http(exc: QueryError | EmptyStoreError) -> NoReturn:
    if isinstance(exc, InvalidRangeError):
        detail = RangeErrorDetail(reason=exc.reason.value, message=exc.message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail.model_dump(),
        ) from exc
    if isinstance(exc, NoMatchingDataError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


@router.get(
    "/reports/averages",
    response_model=ReportResponse,
    summary="Average temperature per day, ascending by date.",
)
def average_report(
    from_date: date = Query(..., description="First date, included."),
    to_date: date = Query(..., description="Last date, included."),
    engine: QueryEngine = Depends(get_engine),
) -> ReportResponse:
    try:
        averages = engine.daily_averages(from_date, to_date)
    except (QueryError, EmptyStoreError) as exc:
        _raise_http(exc)
    return ReportResponse(
        from_date=from_date,
        to_date=to_date,
        lines=[entry.format_line() for entry in averages],
        entries=[DailyAverageEntry(date=entry.date, average=entry.average) for entry in averages],
    )


@router.get(
    "/reports/missing",
    response_model=ReportResponse,
    summary="Missing hourly readings per day, most missing first.",
)
def missing_report(
    from_date: date = Query(..., description="First date, included."),
    to_date: date = Query(..., description="Last date, included."),
    engine: QueryEngine = Depends(get_engine),
) -> ReportResponse:
    try:
        missing = engine.daily_missing(from_date, to_date)
    except (QueryError, EmptyStoreError) as exc:
        _raise_http(exc)
    return ReportResponse(
        from_date=from_date,
        to_date=to_date,
        lines=[entry.format_line() for entry in missing],
        entries=[DailyMissingEntry(date=entry.date, missing=entry.missing) for entry in missing],
    )


@router.get(
    "/reports/approved",
    response_model=ReportResponse,
    summary="Percentage of quality-approved readings in the period.",
)
def approved_report(
    from_date: date = Query(..., description="First date, included."),
    to_date: date = Query(..., description="Last date, included."),
    engine: QueryEngine = Depends(get_engine),
) -> ReportResponse:
    try:
        share = engine.approved_share(from_date, to_date)
    except (QueryError, EmptyStoreError) as exc:
        _raise_http(exc)
    return ReportResponse(
        from_date=from_date,
        to_date=to_date,
        lines=[share.format_line()],
        entries=[
            ApprovedShareEntry(
                approved=share.approved,
                total=share.total,
                percentage=float(share.percentage),
            )
        ],
    )


@router.get(
    "/measurements/bounds",
    response_model=StoreBounds,
    summary="Number of loaded measurements and their first and last date-time.",
)
async def measurement_bounds(engine: QueryEngine = Depends(get_engine)) -> StoreBounds:
    try:
        first = engine.store.first_key()
        last = engine.store.last_key()
    except EmptyStoreError as exc:
        _raise_http(exc)
    return StoreBounds(record_count=len(engine.store), first=first, last=last)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
