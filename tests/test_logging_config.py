from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.loader",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Skipping malformed line",
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_known_extra_keys_are_appended() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    line = formatter.format(_record(line_number=3, reason="invalid time", unrelated="x"))

    assert line == "WARNING Skipping malformed line | line_number=3 reason=invalid time"


def test_message_without_context_is_unchanged() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["path"])

    assert formatter.format(_record(reason="ignored")) == "Skipping malformed line"
