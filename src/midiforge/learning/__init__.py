"""IR learning over the device's serial diagnostics."""

from .framing import LineFramer
from .sequencer import LINE_PATTERN, LearningSequencer, infer_protocol
from .session import SerialLearningSession
from .transport import PySerialTransport, SerialTransport, available_ports

__all__ = [
    "LINE_PATTERN",
    "LearningSequencer",
    "LineFramer",
    "PySerialTransport",
    "SerialLearningSession",
    "SerialTransport",
    "available_ports",
    "infer_protocol",
]
