from __future__ import annotations

from typing import Iterable

import typer

from datastore.measurement_store import EmptyStoreError
from services.errors import InvalidRangeError, QueryError

NO_MATCH_MESSAGE = "No matching values for the provided query."


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def render_lines(lines: Iterable[str]) -> None:
    rendered = False
    for line in lines:
        typer.echo(line)
        rendered = True
    if not rendered:
        typer.echo(NO_MATCH_MESSAGE)


def render_error(error: QueryError | EmptyStoreError) -> None:
    if isinstance(error, InvalidRangeError):
        message = f"{error.message} (reason: {error.reason.value})"
    else:
        message = str(error)
    typer.secho(message, fg=typer.colors.RED, err=True)


MAIN_MENU = "\n".join(
    [
        "-------------------",
        "1. Average temperatures",
        "2. Missing values",
        "3. Approved values",
        "-------------------",
        "4. Quit",
    ]
)
