"""Starter project command."""

from pathlib import Path

import click

from midiforge.models import ControllerProject
from midiforge.utils import PydanticPersistence

from ..errors import report_errors


@click.command()
@click.argument("project", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--name", "-n", default="MyRP2040Controller", help="Controller name")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@report_errors
def init(project: Path, name: str, force: bool):
    """Write a starter project with one IR mapping."""
    if project.exists() and not force:
        raise click.ClickException(f"{project} already exists (use --force to overwrite)")

    PydanticPersistence.save_json(ControllerProject.starter(name), project)
    click.echo(f"Wrote starter project to {project}")
    click.echo(f"Next: midiforge learn {project} --port <PORT>")
