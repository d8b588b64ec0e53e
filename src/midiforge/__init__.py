"""midiforge: firmware and mapping generator for RP2040 MIDI controllers."""

__version__ = "0.1.0"

from .generators import FirmwareGenerator, MappingDocumentGenerator
from .learning import LearningSequencer, SerialLearningSession
from .models import ControllerProject
from .services import ProjectEditorService

__all__ = [
    "ControllerProject",
    "FirmwareGenerator",
    "LearningSequencer",
    "MappingDocumentGenerator",
    "ProjectEditorService",
    "SerialLearningSession",
]
