"""IR learning command."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click

from midiforge.generators import display_message
from midiforge.learning import LearningSequencer, SerialLearningSession
from midiforge.models import EntityKind
from midiforge.protocols import LearningEvent
from midiforge.services import GenerationService, ProjectEditorService
from midiforge.utils import PydanticPersistence

from ..errors import report_errors
from .common import load_project, load_tool_config, project_argument

logger = logging.getLogger(__name__)


class LearningEcho:
    """Prints learning progress (LearningObserver)."""

    def __init__(self, editor: ProjectEditorService):
        self._editor = editor

    def _describe(self, mapping_id: str) -> str:
        mapping = self._editor.get(EntityKind.IR_MAPPING, mapping_id)
        index = self._editor.project.ir_mappings.index(mapping) + 1
        return f"#{index} ({display_message(mapping)})"

    def on_learning_event(self, event: LearningEvent, mapping_id: Optional[str]) -> None:
        if event is LearningEvent.ARMED:
            click.echo(f"Press a remote button for mapping {self._describe(mapping_id)}...")
        elif event is LearningEvent.LEARNED:
            mapping = self._editor.get(EntityKind.IR_MAPPING, mapping_id)
            click.echo(f"  learned {mapping.ir_protocol.value} {mapping.ir_code}")
        elif event is LearningEvent.IDLE:
            click.echo("Learning finished.")


async def _run_session(session: SerialLearningSession, port: str) -> bool:
    if not await session.connect(port):
        return False
    try:
        await session.wait()
    finally:
        await session.disconnect()
    return True


@click.command()
@project_argument
@click.option("--port", "-p", default=None, help="Serial port (default: default_port setting)")
@click.option("--start-id", default=None, help="Id of the first IR mapping to learn")
@click.option("--baud", type=int, default=None, help="Baud rate (default: serial_baud setting)")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Export the updated project to this file",
)
@click.option(
    "--out-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory for generated files (default: output_dir setting)",
)
@report_errors
def learn(
    project: Path,
    port: Optional[str],
    start_id: Optional[str],
    baud: Optional[int],
    output: Optional[Path],
    out_dir: Optional[Path],
):
    """
    Learn IR codes for PROJECT from the controller's serial output.

    Flash a generated sketch first: it prints every received code. Mappings
    are learned in order starting at the first (or --start-id). Press
    Ctrl+C to stop early.
    """
    settings = load_tool_config()
    editor = ProjectEditorService(load_project(project))
    generation = GenerationService(editor)

    if not editor.project.ir_mappings:
        raise click.ClickException("The project has no IR mappings to learn")

    sequencer = LearningSequencer(editor)
    sequencer.register_observer(LearningEcho(editor))
    if start_id:
        sequencer.arm(start_id)
    else:
        sequencer.arm_first()

    session = SerialLearningSession(
        sequencer, baud_rate=baud or settings.serial_baud, stop_when_idle=True
    )
    port = port or settings.default_port

    try:
        connected = asyncio.run(_run_session(session, port))
    except KeyboardInterrupt:
        logger.info("Learning interrupted by user")
        click.echo("\nStopped.")
        connected = True

    if not connected:
        raise click.ClickException(
            f"Serial port {port or '(none)'} is not available. Run 'midiforge ports' to list ports."
        )

    for path in generation.write(out_dir or settings.output_dir or Path.cwd()):
        click.echo(f"Wrote {path}")
    if output:
        PydanticPersistence.save_json(editor.project, output)
        click.echo(f"Exported project to {output}")
