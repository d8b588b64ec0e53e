"""Generate command."""

from pathlib import Path
from typing import Optional

import click

from midiforge.services import GenerationService, ProjectEditorService

from ..errors import report_errors
from .common import load_project, load_tool_config, project_argument


@click.command()
@project_argument
@click.option(
    "--out-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: output_dir setting)",
)
@click.option("--firmware/--no-firmware", default=True, help="Generate the .ino sketch")
@click.option("--mapping/--no-mapping", default=True, help="Generate the mapping XML")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print instead of writing files")
@report_errors
def generate(project: Path, out_dir: Optional[Path], firmware: bool, mapping: bool, to_stdout: bool):
    """Generate firmware and mapping document from PROJECT."""
    editor = ProjectEditorService(load_project(project))
    generation = GenerationService(editor)

    if to_stdout:
        if firmware:
            click.echo(generation.firmware, nl=False)
        if mapping:
            click.echo(generation.mapping_document, nl=False)
        return

    target = out_dir or load_tool_config().output_dir or Path.cwd()
    for path in generation.write(target, firmware=firmware, mapping=mapping):
        click.echo(f"Wrote {path}")
