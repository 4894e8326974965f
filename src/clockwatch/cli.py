"""CLI entry point for clockwatch. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import sys
import termios

import click

from clockwatch.config import LOG_LEVELS, load_config

logger = logging.getLogger(__name__)


def _configure_logging(log_file: str | None, log_level: str) -> None:
    # The screen belongs to the stopwatch; logs only ever go to a file
    if not log_file:
        logging.getLogger("clockwatch").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@click.command()
@click.option(
    "--max-fps",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Cap the redraw rate (default: uncapped)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write diagnostic logs to this file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for --log-file (default: warning)",
)
def main(max_fps, log_file, log_level):
    """Terminal stopwatch. <space> starts/pauses, l records a lap, q quits."""
    try:
        config = load_config(
            max_fps=max_fps,
            log_file=log_file,
            log_level=log_level.lower() if log_level else None,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    _configure_logging(config.log_file, config.log_level)

    from clockwatch.app import run_app

    try:
        run_app(config)
    except KeyboardInterrupt:
        sys.exit(130)
    except (OSError, termios.error) as e:
        logger.exception("Terminal failure")
        click.echo(f"clockwatch: terminal error: {e}", err=True)
        sys.exit(1)
