"""Error reporting shared by CLI commands."""

import functools
import logging
import sys

import click

from midiforge.exceptions import format_error_for_display

logger = logging.getLogger(__name__)


def report_errors(func):
    """
    Show failures as a message plus recovery hint and exit 1, without a traceback.

    click's own exceptions (usage errors, Abort) pass through unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except click.Abort:
            raise
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            click.echo("\nInterrupted.", err=True)
            sys.exit(130)
        except Exception as e:
            logger.exception(f"Command {func.__name__} failed")
            user_message, recovery_hint = format_error_for_display(e)

            click.echo("\n" + "=" * 70, err=True)
            click.echo(f"ERROR: {user_message}", err=True)
            click.echo("=" * 70, err=True)
            if recovery_hint:
                click.echo(f"\n{recovery_hint}", err=True)

            ctx = click.get_current_context(silent=True)
            log_path = ctx.find_root().obj.get("log_path") if ctx and ctx.find_root().obj else None
            if log_path:
                click.echo(f"\nFor details, check the log file: {log_path}", err=True)
            sys.exit(1)

    return wrapper
