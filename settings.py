from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_DATA_PATH_ENV = "WEATHER_DATA_PATH"
_READINGS_PER_DAY_ENV = "READINGS_PER_DAY"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_DATA_PATH = "./data/smhi-opendata.csv"
DEFAULT_READINGS_PER_DAY = 24


@dataclass(frozen=True)
class Settings:
    data_path: str
    readings_per_day: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_readings_per_day(default: int) -> int:
    value = os.getenv(_READINGS_PER_DAY_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        data_path=_read_str_env(_DATA_PATH_ENV, DEFAULT_DATA_PATH),
        readings_per_day=_read_readings_per_day(DEFAULT_READINGS_PER_DAY),
        log_level=_read_log_level("INFO"),
    )
