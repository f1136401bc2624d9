from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import MAIN_MENU, echo_heading, render_error, render_lines
from datastore.measurement_store import MeasurementStore
from logging_config import configure_logging
from services.loader import load_measurements
from services.query_engine import QueryEngine, QueryKind


@dataclass
class CLIState:
    config: CLIConfig
    engine: Optional[QueryEngine] = None


app = typer.Typer(
    help="Query average temperatures, missing readings and approval rates from station data.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise typer.BadParameter(f"{value!r} is not a date in YYYY-MM-DD format.") from exc


def build_engine(config: CLIConfig) -> QueryEngine:
    store = MeasurementStore()
    load_measurements(config.data_path, store)
    return QueryEngine(store, readings_per_day=config.readings_per_day)


def _get_engine(ctx: typer.Context) -> QueryEngine:
    state = _get_state(ctx)
    if state.engine is None:
        try:
            state.engine = build_engine(state.config)
        except OSError as exc:
            typer.secho(
                f"Could not read weather data from {state.config.data_path}: {exc.strerror or exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
    return state.engine


@app.callback()
def main(
    ctx: typer.Context,
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        "-f",
        help="Path to the ';'-delimited data file (defaults to WEATHER_DATA_PATH env).",
    ),
    readings_per_day: Optional[int] = typer.Option(
        None,
        "--readings-per-day",
        help="Expected readings per day when counting missing values.",
    ),
) -> None:
    """Entry point for the CLI."""
    ctx.obj = CLIState(config=load_config(data_path=data_file, readings_per_day=readings_per_day))


def _run_query(engine: QueryEngine, kind: QueryKind, from_date: date, to_date: date) -> bool:
    outcome = engine.run(kind, from_date, to_date)
    if outcome.error is not None:
        render_error(outcome.error)
    render_lines(outcome.lines)
    return outcome.ok


def _query_command(ctx: typer.Context, kind: QueryKind, start: str, end: str) -> None:
    from_date, to_date = _parse_date(start), _parse_date(end)
    if not _run_query(_get_engine(ctx), kind, from_date, to_date):
        raise typer.Exit(code=1)


@app.command("average")
def average_command(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="First date (YYYY-MM-DD), included."),
    end: str = typer.Argument(..., help="Last date (YYYY-MM-DD), included."),
) -> None:
    """Average temperature per day, ascending by date."""
    _query_command(ctx, QueryKind.average, start, end)


@app.command("missing")
def missing_command(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="First date (YYYY-MM-DD), included."),
    end: str = typer.Argument(..., help="Last date (YYYY-MM-DD), included."),
) -> None:
    """Missing hourly readings per day, most missing first."""
    _query_command(ctx, QueryKind.missing, start, end)


@app.command("approved")
def approved_command(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="First date (YYYY-MM-DD), included."),
    end: str = typer.Argument(..., help="Last date (YYYY-MM-DD), included."),
) -> None:
    """Percentage of quality-approved readings in the period."""
    _query_command(ctx, QueryKind.approved, start, end)


def _prompt_choice(minimum: int, maximum: int) -> int:
    while True:
        typer.echo(MAIN_MENU)
        raw = typer.prompt("", prompt_suffix="", default="", show_default=False)
        try:
            choice = int(raw.strip())
        except ValueError:
            choice = None
        if choice is not None and minimum <= choice <= maximum:
            return choice
        typer.echo(f"Invalid input. Enter a number between {minimum} and {maximum}")


def _prompt_date(label: str) -> date:
    typer.echo(label)
    while True:
        raw = typer.prompt("Enter date (YYYY-MM-DD)")
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            typer.echo("Invalid date")


_MENU_ACTIONS = {
    1: (QueryKind.average, "Calculate average temperature for dates"),
    2: (QueryKind.missing, "List dates with missing values between two dates"),
    3: (QueryKind.approved, "Calculate percentage of approved values between the two dates"),
}


@app.command("menu")
def menu_command(ctx: typer.Context) -> None:
    """Interactive menu that keeps prompting for queries until Quit is chosen."""
    engine = _get_engine(ctx)
    echo_heading("** Weather Data **")
    while True:
        choice = _prompt_choice(1, 4)
        if choice == 4:
            return
        kind, title = _MENU_ACTIONS[choice]
        typer.echo(title)
        from_date = _prompt_date("Start date (will be included)")
        to_date = _prompt_date("End date (will be included)")
        _run_query(engine, kind, from_date, to_date)


def run() -> None:
    configure_logging()
    app()
