"""Generic helpers for midiforge.

- hexcodes / midi_bytes: hex normalization and status-byte arithmetic
- naming: identifier sanitizing for generated source
- observer: observer list management
- persistence: JSON load/save for Pydantic models
"""

from .hexcodes import normalize_hex
from .midi_bytes import status_byte, to_hex
from .naming import IdentifierRegistry, sanitize
from .observer import ObserverManager
from .persistence import PydanticPersistence

__all__ = [
    "IdentifierRegistry",
    "ObserverManager",
    "PydanticPersistence",
    "normalize_hex",
    "sanitize",
    "status_byte",
    "to_hex",
]
