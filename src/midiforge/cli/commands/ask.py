"""Assistant command."""

from pathlib import Path

import click

from midiforge.generators import FirmwareGenerator
from midiforge.services import AssistantService

from ..errors import report_errors
from .common import load_project, load_tool_config, project_argument


@click.command()
@project_argument
@click.argument("question")
@report_errors
def ask(project: Path, question: str):
    """Ask the assistant QUESTION about the firmware generated for PROJECT."""
    settings = load_tool_config()
    sketch = FirmwareGenerator().generate(load_project(project))

    assistant = AssistantService(settings.resolve_api_key(), settings.assistant_model)
    click.echo(assistant.ask(question, sketch))
