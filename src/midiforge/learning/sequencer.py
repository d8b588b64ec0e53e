"""IR learning state machine driven by the device's serial diagnostics."""

import logging
import re

from midiforge.exceptions import EntityNotFoundError
from midiforge.models import EntityKind, IrProtocol
from midiforge.protocols import LearningEvent, LearningObserver
from midiforge.services import ProjectEditorService
from midiforge.utils import ObserverManager

logger = logging.getLogger(__name__)

# Printed by the generated sketch for every new (non-repeat) IR frame
LINE_PATTERN = re.compile(r"Protocol:\s*(\w+)\s*Code:\s*(0x[0-9A-Fa-f]+)")


def infer_protocol(keyword: str) -> IrProtocol:
    """
    Map the protocol name printed by IRremote to an IrProtocol.

    Only SONY and RC5 are recognized; anything else counts as NEC.
    """
    keyword = keyword.upper()
    if "SONY" in keyword:
        return IrProtocol.SONY
    if "RC5" in keyword:
        return IrProtocol.RC5
    return IrProtocol.NEC


class LearningSequencer:
    """
    Binds received IR codes to IR mappings, one mapping at a time.

    States are idle (``armed_id is None``) and armed on one mapping. When a
    code arrives while armed, it is written to that mapping through the
    editor service and the sequencer moves on to the next mapping in
    collection order, or goes idle after the last one.

    The project and the armed id are read when each line is processed, so
    edits made between lines are always taken into account.
    """

    def __init__(self, editor: ProjectEditorService, ir_view_active: bool = True):
        """
        Initialize the sequencer.

        Args:
            editor: Editor service owning the project
            ir_view_active: Whether IR learning is currently accepted
        """
        self._editor = editor
        self._armed_id: str | None = None
        self.ir_view_active = ir_view_active
        self._observers = ObserverManager[LearningObserver](observer_type_name="learning")

    @property
    def armed_id(self) -> str | None:
        return self._armed_id

    @property
    def is_armed(self) -> bool:
        return self._armed_id is not None

    def register_observer(self, observer: LearningObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: LearningObserver) -> None:
        self._observers.unregister(observer)

    def arm(self, mapping_id: str) -> None:
        """
        Wait for a code for the given IR mapping.

        Raises:
            EntityNotFoundError: If no IR mapping has this id (state unchanged)
        """
        if not self._editor.exists(EntityKind.IR_MAPPING, mapping_id):
            raise EntityNotFoundError(EntityKind.IR_MAPPING.value, mapping_id)
        self._armed_id = mapping_id
        logger.info(f"Armed IR learning on {mapping_id}")
        self._observers.notify("on_learning_event", LearningEvent.ARMED, mapping_id)

    def arm_first(self) -> bool:
        """Arm the first IR mapping; returns False if there is none."""
        mappings = self._editor.project.ir_mappings
        if not mappings:
            return False
        self.arm(mappings[0].id)
        return True

    def cancel(self) -> None:
        """Go idle, whatever the current state."""
        was_armed = self.is_armed
        self._armed_id = None
        if was_armed:
            logger.info("IR learning stopped")
            self._observers.notify("on_learning_event", LearningEvent.IDLE, None)

    def on_disconnected(self) -> None:
        """The serial session ended; learning cannot continue."""
        self.cancel()

    def process_line(self, line: str) -> bool:
        """
        Handle one decoded line from the device.

        Returns:
            True if the line taught a code to a mapping
        """
        match = LINE_PATTERN.search(line)
        if match is None or not self.is_armed or not self.ir_view_active:
            return False

        target_id = self._armed_id
        mappings = self._editor.project.ir_mappings
        index = next((i for i, m in enumerate(mappings) if m.id == target_id), None)
        if index is None:
            logger.warning(f"Armed IR mapping {target_id} no longer exists, ignoring code")
            return False

        keyword, code = match.groups()
        self._editor.learn_ir_code(target_id, infer_protocol(keyword), code)
        self._observers.notify("on_learning_event", LearningEvent.LEARNED, target_id)

        mappings = self._editor.project.ir_mappings
        if index + 1 < len(mappings):
            self.arm(mappings[index + 1].id)
        else:
            self.cancel()
        return True
