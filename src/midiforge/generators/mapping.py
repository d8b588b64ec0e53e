"""VirtualDJ-style mapping document generation."""

import logging
from xml.sax.saxutils import escape

from midiforge.models import ControllerProject, MidiType
from midiforge.utils import status_byte, to_hex

logger = logging.getLogger(__name__)

DEFAULT_ROTATE_ACTION = "browser_scroll"
DEFAULT_CLICK_ACTION = "browser_enter"

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def _attr(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


def _map_line(midi_type: MidiType, channel: int, data: int, action: str | None) -> str:
    value = f"{status_byte(midi_type, channel)} {to_hex(data)}"
    return f'    <map value="{value}" action="{_attr(action or "")}" />'


class MappingDocumentGenerator:
    """
    Generates the ``<mapper>`` XML that binds MIDI messages to actions.

    Entries are grouped by control category, each non-empty group preceded
    by a comment: multiplexer channels, faders, IR mappings, buttons,
    encoders, keypads.
    """

    def generate(self, project: ControllerProject) -> str:
        """Render the mapping document for ``project``."""
        groups = [
            ("Multiplexer Channels", self._mux_entries(project)),
            ("Faders & Pots", self._fader_entries(project)),
            ("IR Remote Mappings", self._ir_entries(project)),
            ("Physical Buttons", self._button_entries(project)),
            ("Rotary Encoders", self._encoder_entries(project)),
            ("Keypads", self._keypad_entries(project)),
        ]

        name = project.config.controller_name
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<mapper device="{_attr(name)}" author="midiforge" version="1.0">',
            f"  <info><name>{escape(name)}</name></info>",
            "  <mapping>",
        ]
        for title, entries in groups:
            if entries:
                lines.append(f"    <!-- {title} -->")
                lines.extend(entries)
        lines.append("  </mapping>")
        lines.append("</mapper>")

        logger.debug(f"Generated mapping document for {name}")
        return "\n".join(lines) + "\n"

    def _mux_entries(self, project: ControllerProject) -> list[str]:
        entries = []
        for mux in project.multiplexers:
            for channel in project.channels_of(mux.id):
                if channel.channel_index >= mux.arity:
                    continue
                entries.append(
                    _map_line(
                        channel.effective_midi_type,
                        channel.midi_channel,
                        channel.number,
                        channel.action,
                    )
                )
        return entries

    def _fader_entries(self, project: ControllerProject) -> list[str]:
        return [
            _map_line(MidiType.CC, fader.channel, fader.cc_number, fader.action)
            for fader in project.faders
        ]

    def _ir_entries(self, project: ControllerProject) -> list[str]:
        return [
            _map_line(mapping.midi_type, mapping.channel, mapping.data1, mapping.action)
            for mapping in project.ir_mappings
        ]

    def _button_entries(self, project: ControllerProject) -> list[str]:
        return [
            _map_line(button.midi_type, button.channel, button.data1, button.action)
            for button in project.buttons
        ]

    def _encoder_entries(self, project: ControllerProject) -> list[str]:
        entries = []
        for encoder in project.encoders:
            entries.append(
                _map_line(
                    MidiType.CC,
                    encoder.channel,
                    encoder.cc_number,
                    encoder.action_rotate or DEFAULT_ROTATE_ACTION,
                )
            )
            if encoder.has_button:
                entries.append(
                    _map_line(
                        encoder.button_midi_type,
                        encoder.effective_button_channel,
                        encoder.button_data1,
                        encoder.action_click or DEFAULT_CLICK_ACTION,
                    )
                )
        return entries

    def _keypad_entries(self, project: ControllerProject) -> list[str]:
        entries = []
        for keypad in project.keypads:
            for row in range(4):
                for col in range(4):
                    entries.append(
                        _map_line(
                            keypad.mode,
                            keypad.channel,
                            keypad.values[row][col],
                            keypad.action_at(row, col),
                        )
                    )
        return entries
