"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from .commands import ask, config, generate, init, learn, ports

logger = logging.getLogger(__name__)


def default_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log records go for the given options."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "midiforge-debug.log"
    return Path.home() / ".midiforge" / "logs" / "midiforge.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        The log file path
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Override with explicit log level if a file was given
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = default_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.pass_context
@click.version_option(version="0.1.0", prog_name="midiforge")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)")
@click.option(
    "--debug", is_flag=True, help="Enable debug mode (DEBUG level, logs to ./midiforge-debug.log)"
)
@click.option("--log-file", type=click.Path(path_type=Path), default=None, help="Custom log file path")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for file logging (default: INFO)",
)
def cli(ctx, verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    midiforge - firmware and mapping generator for RP2040 MIDI controllers.

    Describe IR codes, buttons, faders, encoders, keypads and multiplexers
    in a project file, then generate the Arduino sketch and the VirtualDJ
    mapping from it. IR codes can be learned live over USB serial.

    \b
    Examples:
      # Write a starter project
      midiforge init deck.json

      # Generate deck/deck.ino and deck.xml
      midiforge generate deck.json --out-dir build

      # Learn IR codes by pressing remote buttons
      midiforge learn deck.json --port /dev/ttyACM0 --output deck.json

      # List serial ports
      midiforge ports
    """
    ctx.ensure_object(dict)
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(init)
cli.add_command(generate)
cli.add_command(learn)
cli.add_command(ports)
cli.add_command(ask)
cli.add_command(config)

if __name__ == "__main__":
    cli()
