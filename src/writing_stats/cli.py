from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
import yaml

from .analyzer import analyze
from .config import StatisticsConfig, load_config
from .events import EventLogError, load_events, replay
from .models import DocumentSnapshot

app = typer.Typer(help="Writing statistics CLI.", no_args_is_help=True)


@app.callback()
def configure(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Writing statistics for documents and recorded editing sessions."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("analyze")
def analyze_file(
    input_path: Path = typer.Option(
        ..., "--input-path", exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    selection_start: int | None = typer.Option(
        None, "--selection-start", help="Start offset of the range to analyze."
    ),
    selection_end: int | None = typer.Option(
        None, "--selection-end", help="End offset of the range to analyze."
    ),
    words_per_page: int | None = typer.Option(None, "--words-per-page"),
    average_reading_wpm: int | None = typer.Option(None, "--reading-wpm"),
) -> None:
    """Analyze a text file and emit its metrics as JSON."""
    cfg = _load(config)
    if words_per_page is not None:
        cfg.words_per_page = words_per_page
    if average_reading_wpm is not None:
        cfg.average_reading_wpm = average_reading_wpm
    _validate(cfg)

    selection = None
    if (selection_start is None) != (selection_end is None):
        raise typer.BadParameter(
            "--selection-start and --selection-end must be given together."
        )
    if selection_start is not None and selection_end is not None:
        selection = (selection_start, selection_end)

    # Read bytes so undecodable input degrades instead of failing.
    snapshot = DocumentSnapshot.from_raw(input_path.read_bytes(), selection=selection)
    metrics = analyze(snapshot, cfg)
    payload = {"file": str(input_path), "metrics": metrics.to_dict()}
    typer.echo(json.dumps(payload, indent=2))


@app.command("replay")
def replay_events(
    events: Path = typer.Option(
        ..., "--events", exists=True, readable=True, dir_okay=False
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    initial_text: Path | None = typer.Option(
        None,
        "--initial-text",
        exists=True,
        dir_okay=False,
        help="File holding the document text at attach time.",
    ),
) -> None:
    """Replay a recorded event log and print every notification as JSON."""
    cfg = _load(config)
    try:
        parsed = load_events(events)
    except EventLogError as exc:
        raise typer.BadParameter(str(exc)) from exc
    text = initial_text.read_text(encoding="utf-8") if initial_text else ""
    recorded = replay(parsed, cfg, initial_text=text)
    typer.echo(
        json.dumps({"notifications": [item.to_dict() for item in recorded]}, indent=2)
    )


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = StatisticsConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _load(path: Path | None) -> StatisticsConfig:
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _validate(cfg: StatisticsConfig) -> None:
    try:
        cfg.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    main()
