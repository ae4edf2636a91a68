"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path

import click

from kontrolhid import __version__

from .commands import config, display, monitor

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".kontrolhid" / "logs"
DEBUG_LOG_NAME = "kontrolhid-debug.log"

LOG_FORMAT = "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(verbose: int, debug: bool, log_file: Path | None, log_level: str) -> int:
    if log_file:
        return getattr(logging, log_level.upper())
    if debug or verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def _resolve_path(debug: bool, log_file: Path | None) -> Path:
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / DEBUG_LOG_NAME
    DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
    return DEFAULT_LOG_DIR / "kontrolhid.log"


def setup_logging(verbose: int, debug: bool, log_file: Path | None, log_level: str) -> Path:
    """
    Send log records to a rotating file.

    Nothing is logged to the terminal; the commands print their own
    output and the log keeps the per-report details.

    Args:
        verbose: -v count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: DEBUG level, written to ./kontrolhid-debug.log
        log_file: Explicit log file; `log_level` then decides the level
        log_level: DEBUG/INFO/WARNING/ERROR, only used with `log_file`

    Returns:
        Path of the log file
    """
    level = _resolve_level(verbose, debug, log_file, log_level)
    log_path = _resolve_path(debug, log_file)

    # Reader and scheduler threads log too; the thread name tells them apart
    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    logger.info(f"Logging to {log_path} at {logging.getLevelName(level)}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="kontrolhid")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v: INFO, -vv: DEBUG)")
@click.option("--debug", is_flag=True, help=f"Log at DEBUG level to ./{DEBUG_LOG_NAME}")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Custom log file path",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Level used with --log-file (default: INFO)",
)
def cli(ctx, verbose: int, debug: bool, log_file: Path | None, log_level: str):
    """
    kontrolhid - HID driver for Komplete Kontrol S-series (MK1) keyboards.

    \b
    Examples:
      # Print button, encoder and octave events
      kontrolhid monitor

      # Show two lines of text and some value bars
      kontrolhid display "HELLO" "WORLD" --bar 0=64 --bar 1=127

      # Light all keys red on an S88
      kontrolhid display "RED" --keys "#FF0000" --model S88

      # Show the configuration
      kontrolhid config show
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(monitor)
cli.add_command(display)
cli.add_command(config)

if __name__ == "__main__":
    cli()
