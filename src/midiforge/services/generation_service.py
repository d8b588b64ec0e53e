"""Keeps the generated firmware and mapping document in sync with the project."""

import logging
from pathlib import Path

from midiforge.generators import FirmwareGenerator, MappingDocumentGenerator
from midiforge.models import EntityKind
from midiforge.protocols import EditEvent
from midiforge.utils import sanitize

from .editor_service import ProjectEditorService

logger = logging.getLogger(__name__)


class GenerationService:
    """
    Regenerates both documents after every edit.

    Implements the EditObserver protocol. Regeneration is always full and
    synchronous: the documents are rebuilt from the current project each
    time, never patched.
    """

    def __init__(
        self,
        editor: ProjectEditorService,
        firmware_generator: FirmwareGenerator | None = None,
        mapping_generator: MappingDocumentGenerator | None = None,
    ):
        self._editor = editor
        self._firmware_generator = firmware_generator or FirmwareGenerator()
        self._mapping_generator = mapping_generator or MappingDocumentGenerator()
        self._firmware = ""
        self._mapping_document = ""
        self.generation_count = 0

        editor.register_observer(self)
        self.regenerate()

    @property
    def firmware(self) -> str:
        return self._firmware

    @property
    def mapping_document(self) -> str:
        return self._mapping_document

    def on_edit_event(self, event: EditEvent, kind: EntityKind | None, entity_id: str | None) -> None:
        """Handle edit events from the editor service."""
        logger.debug(f"Regenerating after {event.value} ({kind.value if kind else 'config'})")
        self.regenerate()

    def regenerate(self) -> tuple[str, str]:
        """Rebuild both documents from the current project."""
        project = self._editor.project
        self._firmware = self._firmware_generator.generate(project)
        self._mapping_document = self._mapping_generator.generate(project)
        self.generation_count += 1
        return self._firmware, self._mapping_document

    def file_stem(self) -> str:
        """Base file name shared by both documents."""
        return sanitize(self._editor.project.config.controller_name, "controller")

    def write(self, out_dir: Path, firmware: bool = True, mapping: bool = True) -> list[Path]:
        """
        Write the current documents to ``out_dir``.

        The sketch goes into ``<name>/<name>.ino`` as the Arduino IDE expects
        a sketch folder named after the file.

        Returns:
            Paths written

        Raises:
            OSError: If a file cannot be written
        """
        stem = self.file_stem()
        written = []
        if firmware:
            sketch = out_dir / stem / f"{stem}.ino"
            sketch.parent.mkdir(parents=True, exist_ok=True)
            sketch.write_text(self._firmware, encoding="utf-8")
            written.append(sketch)
        if mapping:
            document = out_dir / f"{stem}.xml"
            document.parent.mkdir(parents=True, exist_ok=True)
            document.write_text(self._mapping_document, encoding="utf-8")
            written.append(document)

        for path in written:
            logger.info(f"Wrote {path}")
        return written
