"""Data models for controller projects and tool settings."""

from .config import ToolConfig
from .display import DisplayBus, DisplaySettings
from .edits import (
    ButtonChanges,
    DisplayBusChanges,
    DisplayChanges,
    EncoderChanges,
    FaderChanges,
    GeneratorConfigChanges,
    IrMappingChanges,
    KeypadChanges,
    MultiplexerChanges,
    MuxChannelChanges,
    editable_fields,
)
from .enums import DisplayFamily, DisplayType, EntityKind, IrProtocol, MidiType, MuxMode
from .mappings import (
    BUTTON_MIDI_TYPES,
    ButtonMapping,
    EncoderMapping,
    FaderMapping,
    IrMapping,
    KeypadMapping,
    Mapping,
    MultiplexerConfig,
    MuxChannelMapping,
    new_id,
)
from .project import ControllerProject, GeneratorConfig

__all__ = [
    # Enums
    "DisplayFamily",
    "DisplayType",
    "EntityKind",
    "IrProtocol",
    "MidiType",
    "MuxMode",
    # Mappings
    "BUTTON_MIDI_TYPES",
    "ButtonMapping",
    "EncoderMapping",
    "FaderMapping",
    "IrMapping",
    "KeypadMapping",
    "Mapping",
    "MultiplexerConfig",
    "MuxChannelMapping",
    "new_id",
    # Edits
    "ButtonChanges",
    "DisplayBusChanges",
    "DisplayChanges",
    "EncoderChanges",
    "FaderChanges",
    "GeneratorConfigChanges",
    "IrMappingChanges",
    "KeypadChanges",
    "MultiplexerChanges",
    "MuxChannelChanges",
    "editable_fields",
    # Project
    "ControllerProject",
    "DisplayBus",
    "DisplaySettings",
    "GeneratorConfig",
    # Settings
    "ToolConfig",
]
