from __future__ import annotations

from typing import Iterable

from services.query_engine import build_default_engine
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    data_file = tmp_path / "station.csv"
    data_file.write_text(
        "2000-01-01;00:00:00;1.0;G\n2000-01-01;01:00:00;2.0;Y\n", encoding="utf-8"
    )

    monkeypatch.setenv("WEATHER_DATA_PATH", str(data_file))
    monkeypatch.setenv("READINGS_PER_DAY", "12")
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    caches = (get_settings, build_default_engine)
    _clear_caches(caches)

    try:
        settings = get_settings()
        engine = build_default_engine()

        assert settings.data_path == str(data_file)
        assert settings.log_level == "DEBUG"
        assert engine.readings_per_day == 12
        assert len(engine.store) == 2
        assert engine.missing_values(engine.store.first_key().date(), engine.store.last_key().date()) == [
            "2000-01-01 missing 10 values"
        ]
    finally:
        _clear_caches(caches)


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("WEATHER_DATA_PATH", "   ")
    monkeypatch.setenv("READINGS_PER_DAY", "-3")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.data_path == "./data/smhi-opendata.csv"
        assert settings.readings_per_day == 24
        assert settings.log_level == "INFO"
    finally:
        get_settings.cache_clear()
