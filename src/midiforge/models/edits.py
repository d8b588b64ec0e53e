"""Typed change sets accepted by the editor service, one per entity kind.

Each key is an editable field of the matching model; a key that is left
out keeps its current value. ``id`` and ownership fields (``mux_id``) are
never editable.
"""

from typing import Literal, TypedDict

from .enums import DisplayType, IrProtocol, MidiType, MuxMode


class IrMappingChanges(TypedDict, total=False):
    ir_code: str
    ir_protocol: IrProtocol
    midi_type: MidiType
    channel: int
    data1: int
    data2: int
    description: str | None
    action: str | None


class ButtonChanges(TypedDict, total=False):
    name: str
    pin: int
    midi_type: MidiType
    channel: int
    data1: int
    action: str | None


class FaderChanges(TypedDict, total=False):
    name: str
    pin: int
    channel: int
    cc_number: int
    action: str | None


class EncoderChanges(TypedDict, total=False):
    name: str
    pin_a: int
    pin_b: int
    channel: int
    cc_number: int
    multiplier: float
    pin_button: int | None
    button_midi_type: MidiType
    button_channel: int | None
    button_data1: int
    action_rotate: str | None
    action_click: str | None


class KeypadChanges(TypedDict, total=False):
    name: str
    mode: MidiType
    channel: int
    row_pins: tuple[int, int, int, int]
    col_pins: tuple[int, int, int, int]
    values: list[list[int]]
    actions: list[list[str]] | None


class MultiplexerChanges(TypedDict, total=False):
    name: str
    arity: Literal[8, 16]
    address_pins: list[int]
    signal_pin: int


class MuxChannelChanges(TypedDict, total=False):
    channel_index: int
    mode: MuxMode
    midi_type: MidiType
    midi_channel: int
    number: int
    action: str | None


class GeneratorConfigChanges(TypedDict, total=False):
    controller_name: str
    ir_pin: int
    use_led_feedback: bool


class DisplayChanges(TypedDict, total=False):
    enabled: bool
    type: DisplayType
    dual: bool
    inverted: bool
    split_layout: bool


class DisplayBusChanges(TypedDict, total=False):
    sda: int
    scl: int
    address: str


def editable_fields(changes_type: type) -> frozenset[str]:
    """Keys a change set may carry."""
    return changes_type.__optional_keys__ | changes_type.__required_keys__

