"""Control mappings: IR codes, buttons, faders, encoders, keypads and multiplexers."""

import uuid
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

from midiforge.utils.hexcodes import normalize_hex

from .enums import IrProtocol, MidiType, MuxMode

# Buttons, keypads and multiplexed buttons only send notes or CCs
BUTTON_MIDI_TYPES = (MidiType.NOTE_ON, MidiType.CC)


def new_id() -> str:
    """Mint a short unique id for a freshly added entity."""
    return uuid.uuid4().hex[:8]


def _midi_channel():
    return Field(default=1, ge=1, le=16, description="MIDI channel (1-16)")


def _button_type(value: MidiType) -> MidiType:
    if value not in BUTTON_MIDI_TYPES:
        raise ValueError("only Note On and CC are supported here")
    return value


ButtonMidiType = Annotated[MidiType, AfterValidator(_button_type)]


def _data_byte(default: int, description: str):
    return Field(default=default, ge=0, le=127, description=description)


class Mapping(BaseModel):
    """Common base: every entity has an id and is validated on assignment."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_id, min_length=1, description="Unique id")


class IrMapping(Mapping):
    """Association between an infrared code and a MIDI message."""

    ir_code: str = Field(default="", description="IR command code, e.g. 0x45 (empty = not learned)")
    ir_protocol: IrProtocol = Field(default=IrProtocol.NEC, description="IR protocol")
    midi_type: MidiType = Field(default=MidiType.NOTE_ON, description="MIDI message kind")
    channel: int = _midi_channel()
    data1: int = _data_byte(60, "Note or controller number (program for Program Change)")
    data2: int = _data_byte(127, "Velocity or CC value (ignored for Program Change)")
    description: str | None = Field(default=None, description="Free-form note")
    action: str | None = Field(default=None, description="Mapping document action label")

    @field_validator("ir_code")
    @classmethod
    def _normalize_ir_code(cls, value: str) -> str:
        # Text without any hex digit is kept as typed; it never reaches dispatch
        value = value.strip()
        return normalize_hex(value) or value

    @property
    def normalized_code(self) -> str | None:
        """Canonical code, or None if the mapping has no usable code."""
        return normalize_hex(self.ir_code)


class ButtonMapping(Mapping):
    """A push button wired directly to a GPIO pin."""

    name: str = Field(default="Button", description="Button name")
    pin: int = Field(default=0, ge=0, description="GPIO pin")
    midi_type: ButtonMidiType = Field(default=MidiType.NOTE_ON, description="Note or CC")
    channel: int = _midi_channel()
    data1: int = _data_byte(60, "Note or controller number")
    action: str | None = Field(default=None, description="Mapping document action label")


class FaderMapping(Mapping):
    """A potentiometer or slide fader on an ADC pin."""

    name: str = Field(default="Fader", description="Fader name")
    pin: int = Field(default=26, ge=0, description="ADC-capable GPIO pin")
    channel: int = _midi_channel()
    cc_number: int = _data_byte(1, "Controller number")
    action: str | None = Field(default=None, description="Mapping document action label")


class EncoderMapping(Mapping):
    """A rotary encoder sending relative CC, with an optional push button."""

    name: str = Field(default="New Encoder", description="Encoder name")
    pin_a: int = Field(default=10, ge=0, description="Encoder A pin")
    pin_b: int = Field(default=11, ge=0, description="Encoder B pin")
    channel: int = _midi_channel()
    cc_number: int = _data_byte(20, "Controller number for rotation")
    multiplier: float = Field(default=1.0, gt=0, description="Speed multiplier")
    pin_button: int | None = Field(default=None, ge=0, description="Push button pin (optional)")
    button_midi_type: ButtonMidiType = Field(default=MidiType.NOTE_ON, description="Button message kind")
    button_channel: int | None = Field(
        default=None, ge=1, le=16, description="Button channel (None = rotation channel)"
    )
    button_data1: int = _data_byte(60, "Button note or controller number")
    action_rotate: str | None = Field(default=None, description="Action label for rotation")
    action_click: str | None = Field(default=None, description="Action label for the push button")

    @property
    def has_button(self) -> bool:
        return self.pin_button is not None

    @property
    def effective_button_channel(self) -> int:
        return self.button_channel if self.button_channel is not None else self.channel


def _default_keypad_values() -> list[list[int]]:
    return [[36 + row * 4 + col for col in range(4)] for row in range(4)]


def _empty_keypad_actions() -> list[list[str]]:
    return [["" for _ in range(4)] for _ in range(4)]


class KeypadMapping(Mapping):
    """A 4x4 button matrix scanned over four row and four column pins."""

    name: str = Field(default="Keypad", description="Keypad name")
    mode: ButtonMidiType = Field(default=MidiType.NOTE_ON, description="Notes or CCs")
    channel: int = _midi_channel()
    row_pins: tuple[int, int, int, int] = Field(default=(2, 3, 4, 5), description="Row pins")
    col_pins: tuple[int, int, int, int] = Field(default=(6, 7, 8, 9), description="Column pins")
    values: list[list[int]] = Field(default_factory=_default_keypad_values, description="4x4 note/CC numbers")
    actions: list[list[str]] | None = Field(
        default_factory=_empty_keypad_actions, description="4x4 action labels"
    )

    @field_validator("values")
    @classmethod
    def _check_values(cls, values: list[list[int]]) -> list[list[int]]:
        if len(values) != 4 or any(len(row) != 4 for row in values):
            raise ValueError("keypad values must be a 4x4 matrix")
        if any(not 0 <= v <= 127 for row in values for v in row):
            raise ValueError("keypad values must be between 0 and 127")
        return values

    @field_validator("actions")
    @classmethod
    def _check_actions(cls, actions: list[list[str]] | None) -> list[list[str]] | None:
        if actions is not None and (len(actions) != 4 or any(len(row) != 4 for row in actions)):
            raise ValueError("keypad actions must be a 4x4 matrix")
        return actions

    def action_at(self, row: int, col: int) -> str:
        """Action label of one cell ('' when unset)."""
        if self.actions is None:
            return ""
        return self.actions[row][col] or ""


class MultiplexerConfig(Mapping):
    """A CD74HC4051 (8 channels) or CD74HC4067 (16 channels) analog multiplexer."""

    name: str = Field(default="Multiplexer", description="Multiplexer name")
    arity: Literal[8, 16] = Field(default=16, description="Number of channels")
    address_pins: list[int] = Field(
        default_factory=lambda: [2, 3, 4, 5], min_length=3, max_length=4, description="S0-S3 pins"
    )
    signal_pin: int = Field(default=26, ge=0, description="Shared signal (Z) pin")

    @property
    def address_bits(self) -> int:
        return 3 if self.arity == 8 else 4

    @property
    def chip(self) -> str:
        return "CD74HC4051" if self.arity == 8 else "CD74HC4067"

    @model_validator(mode="after")
    def _check_address_pins(self) -> "MultiplexerConfig":
        if len(self.address_pins) < self.address_bits:
            raise ValueError(f"{self.arity}-channel multiplexer needs {self.address_bits} address pins")
        return self


class MuxChannelMapping(Mapping):
    """One channel of a multiplexer, read as a potentiometer or as a button."""

    mux_id: str = Field(description="Id of the owning multiplexer")
    channel_index: int = Field(default=0, ge=0, lt=16, description="Channel on the multiplexer")
    mode: MuxMode = Field(default=MuxMode.ANALOG, description="analog (pot) or digital (button)")
    midi_type: ButtonMidiType = Field(default=MidiType.CC, description="Message kind in digital mode")
    midi_channel: int = _midi_channel()
    number: int = _data_byte(20, "Controller or note number")
    action: str | None = Field(default=None, description="Mapping document action label")

    @property
    def effective_midi_type(self) -> MidiType:
        """Analog channels are always addressed as CC."""
        if self.mode is MuxMode.ANALOG:
            return MidiType.CC
        return self.midi_type
