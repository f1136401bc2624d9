from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    data_path: Path
    readings_per_day: int


def load_config(
    data_path: Optional[Path] = None,
    readings_per_day: Optional[int] = None,
) -> CLIConfig:
    settings = get_settings()
    path = data_path if data_path is not None else Path(settings.data_path)
    if readings_per_day is None or readings_per_day <= 0:
        readings_per_day = settings.readings_per_day
    return CLIConfig(data_path=path, readings_per_day=readings_per_day)
