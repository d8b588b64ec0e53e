"""Tool settings commands."""

import click
from pydantic import ValidationError

from midiforge.exceptions import wrap_pydantic_error
from midiforge.models import ToolConfig

from ..errors import report_errors


@click.group(name="config")
def config():
    """Show or change midiforge settings."""


@config.command(name="show")
@report_errors
def show():
    """Display current settings."""
    settings = ToolConfig.load_or_default()
    for name, value in settings.model_dump(mode="json").items():
        if name == "assistant_api_key" and value:
            value = "********"
        click.echo(f"{name}: {value}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@report_errors
def set_value(key: str, value: str):
    """
    Set KEY to VALUE and save.

    Use "none" to clear an optional setting.
    """
    if key not in ToolConfig.model_fields:
        raise click.ClickException(
            f"Unknown setting '{key}'. Known settings: {', '.join(ToolConfig.model_fields)}"
        )

    settings = ToolConfig.load_or_default()
    data = settings.model_dump(mode="json")
    data[key] = None if value.lower() == "none" else value

    try:
        updated = ToolConfig.model_validate(data)
    except ValidationError as e:
        raise wrap_pydantic_error(e, str(ToolConfig.default_path())) from e

    updated.save()
    click.echo(f"{key} updated")


@config.command(name="path")
def path():
    """Print the settings file location."""
    click.echo(str(ToolConfig.default_path()))
