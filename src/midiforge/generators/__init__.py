"""Generators for the firmware sketch and the mapping document."""

from .firmware import FirmwareGenerator, display_message, encoder_speed
from .mapping import MappingDocumentGenerator

__all__ = [
    "FirmwareGenerator",
    "MappingDocumentGenerator",
    "display_message",
    "encoder_speed",
]
