"""MIDI status-byte arithmetic for the mapping document."""

from midiforge.models.enums import MidiType

# Upper nibble of the status byte per message kind. Note Off is sent as a
# Note On with zero velocity, so it shares the Note On nibble.
_STATUS_BASE = {
    MidiType.NOTE_ON: 0x90,
    MidiType.NOTE_OFF: 0x90,
    MidiType.CC: 0xB0,
    MidiType.PROGRAM_CHANGE: 0xC0,
}


def to_hex(value: int) -> str:
    """Render a 7-bit data byte as two uppercase hex digits."""
    if not 0 <= value <= 127:
        raise ValueError(f"Data byte {value} out of range (0-127)")
    return f"{value:02X}"


def status_byte(midi_type: MidiType, channel: int) -> str:
    """
    Compute the status byte for a message kind on a 1-based channel.

    Example:
        >>> status_byte(MidiType.CC, 16)
        'BF'

    Raises:
        ValueError: If channel is outside 1-16
    """
    if not 1 <= channel <= 16:
        raise ValueError(f"MIDI channel {channel} out of range (1-16)")
    return f"{_STATUS_BASE[MidiType(midi_type)] + channel - 1:02X}"
