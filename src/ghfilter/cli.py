"""CLI entry point for ghfilter.

This module provides the Typer-based CLI with commands:
- ghfilter validate: Validate configuration
- ghfilter describe: Print configured filters in plain English
- ghfilter check: Evaluate GitHub events read from a file or stdin

Exit codes:
- 0: Success
- 1: Configuration error
- 2: Input error
"""

from __future__ import annotations

import json
import sys
import time
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

from ghfilter import __version__
from ghfilter.config import load_config
from ghfilter.config.loader import ConfigError
from ghfilter.filters import FilterEngine
from ghfilter.github import EventFormatError, normalize_events
from ghfilter.logging import (
    configure_logging,
    get_logger,
    log_check_summary,
    log_decision,
    log_event_received,
)

if TYPE_CHECKING:
    from ghfilter.config.schema import Config
    from ghfilter.github import Event


class ExitCode(IntEnum):
    """CLI exit codes."""

    SUCCESS = 0
    CONFIG_ERROR = 1
    INPUT_ERROR = 2


app = typer.Typer(
    name="ghfilter",
    help="ghfilter - declarative condition filters for GitHub activity events.",
    add_completion=False,
    no_args_is_help=True,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ghfilter {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ghfilter - declarative condition filters for GitHub activity events."""


def _load_config_or_exit(config: Path | None) -> Config:
    try:
        return load_config(config)
    except ConfigError as e:
        typer.echo(
            typer.style(f"✗ {e}", fg=typer.colors.RED),
            err=True,
        )
        raise typer.Exit(ExitCode.CONFIG_ERROR) from e


@app.command()
def validate(
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate configuration without evaluating any events.

    Loads the configuration file, expands environment variables,
    and validates against the schema. Exits with code 0 if valid,
    or code 1 if there are errors. Regular expressions that never
    compile are reported once, as warnings on stderr.
    """
    configure_logging(verbose=verbose, json_output=False)

    cfg = _load_config_or_exit(config)
    typer.echo(typer.style("✓ Configuration is valid", fg=typer.colors.GREEN))

    if verbose:
        typer.echo("\nConfiguration summary:")
        typer.echo(f"  Version: {cfg.version}")
        typer.echo(f"  Filters: {len(cfg.filters)} ({len(cfg.get_enabled_filters())} enabled)")


@app.command()
def describe(
    config: ConfigOption = None,
) -> None:
    """Print every configured filter with its conditions in plain English."""
    configure_logging(json_output=False)

    cfg = _load_config_or_exit(config)
    if not cfg.filters:
        typer.echo("No filters configured.")
        return

    for named in cfg.filters:
        status = "" if named.enabled else " (disabled)"
        typer.echo(typer.style(f"{named.id}: {named.name}{status}", bold=True))
        if named.description:
            typer.echo(f"  {named.description}")
        lines = named.to_filter().describe()
        if not lines:
            typer.echo("  Matches every event")
        for line in lines:
            typer.echo(f"  - {line}")


def _read_events(source: str) -> list[Event]:
    """Read and normalize events from a path, or stdin when source is '-'.

    Input is read as bytes so ``json.loads`` detects the encoding; undecodable
    bytes are an input error like malformed JSON.
    """
    if source == "-":
        content = sys.stdin.buffer.read()
    else:
        try:
            content = Path(source).expanduser().read_bytes()
        except OSError as e:
            msg = f"Cannot read events file: {e}"
            raise EventFormatError(msg) from e

    try:
        data = json.loads(content)
    except UnicodeDecodeError as e:
        msg = f"Cannot decode events input: {e}"
        raise EventFormatError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in events input: {e}"
        raise EventFormatError(msg) from e

    return normalize_events(data)


@app.command()
def check(
    events: Annotated[
        str,
        typer.Argument(
            help="GitHub Events API JSON file (object or array); '-' reads stdin.",
        ),
    ] = "-",
    config: ConfigOption = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print one JSON record per matching event.",
        ),
    ] = False,
    verbose: VerboseOption = False,
) -> None:
    """Evaluate events against the configured filters and print the matches."""
    configure_logging(verbose=verbose)
    log = get_logger("ghfilter.cli")

    cfg = _load_config_or_exit(config)

    try:
        parsed = _read_events(events)
    except EventFormatError as e:
        typer.echo(
            typer.style(f"✗ {e}", fg=typer.colors.RED),
            err=True,
        )
        log.warning("input_rejected", source=events, error=str(e))
        raise typer.Exit(ExitCode.INPUT_ERROR) from e

    engine = FilterEngine(cfg.filters)
    start = time.monotonic()
    matched = 0

    for event in parsed:
        log_event_received(
            event_id=event.id,
            event_type=event.get_type(),
            repository=event.repo.name if event.repo else None,
        )
        result = engine.evaluate(event)
        log_decision(
            event_id=event.id,
            event_type=event.get_type(),
            filters_evaluated=result.filters_evaluated,
            matched_filter_ids=result.matched_filter_ids,
        )
        if not result.has_matches:
            continue

        matched += 1
        if json_output:
            record: dict[str, Any] = {
                "id": event.id,
                "type": event.get_type(),
                "repo": event.repo.name if event.repo else None,
                "matched_filters": result.matched_filter_ids,
            }
            typer.echo(json.dumps(record))
        else:
            filters = ", ".join(result.matched_filter_ids)
            typer.echo(f"✓ {event.display_name} [{filters}]")

    log_check_summary(
        events_read=len(parsed),
        events_matched=matched,
        duration_ms=(time.monotonic() - start) * 1000,
    )

    if not json_output:
        typer.echo(f"{matched} of {len(parsed)} event(s) matched")
