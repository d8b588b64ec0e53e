"""Enumerations for controller projects."""

from enum import Enum


class MidiType(str, Enum):
    """MIDI message kinds a control can send."""

    NOTE_ON = "note_on"
    NOTE_OFF = "note_off"
    CC = "cc"
    PROGRAM_CHANGE = "program_change"

    @property
    def label(self) -> str:
        """Short label used in display messages."""
        return {
            MidiType.NOTE_ON: "Note",
            MidiType.NOTE_OFF: "Note Off",
            MidiType.CC: "CC",
            MidiType.PROGRAM_CHANGE: "PC",
        }[self]


class IrProtocol(str, Enum):
    """Infrared protocols decoded by the IRremote library."""

    NEC = "NEC"
    SONY = "SONY"
    RC5 = "RC5"
    RC6 = "RC6"
    SAMSUNG = "SAMSUNG"


class MuxMode(str, Enum):
    """How a multiplexer channel is read."""

    ANALOG = "analog"  # Potentiometer, always sends CC
    DIGITAL = "digital"  # Push button, sends its configured type


class DisplayFamily(str, Enum):
    """Display driver families, each backed by one Arduino library."""

    OLED = "oled"
    LCD = "lcd"


class DisplayType(str, Enum):
    """Supported I2C display modules."""

    SH1106 = "SH1106"
    SSD1306 = "SSD1306"
    LCD1602 = "LCD1602"
    LCD2004 = "LCD2004"

    @property
    def family(self) -> DisplayFamily:
        """Driver family for this module."""
        if self in (DisplayType.SH1106, DisplayType.SSD1306):
            return DisplayFamily.OLED
        return DisplayFamily.LCD

    @property
    def lcd_geometry(self) -> tuple[int, int]:
        """(columns, rows) of a character LCD."""
        if self is DisplayType.LCD2004:
            return (20, 4)
        return (16, 2)


class EntityKind(str, Enum):
    """Project collections that can be edited; the value is the attribute name."""

    IR_MAPPING = "ir_mappings"
    BUTTON = "buttons"
    FADER = "faders"
    ENCODER = "encoders"
    KEYPAD = "keypads"
    MULTIPLEXER = "multiplexers"
    MUX_CHANNEL = "mux_channels"
