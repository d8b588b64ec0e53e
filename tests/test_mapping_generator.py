"""Tests for the mapping document generator."""

import re
import xml.etree.ElementTree as ET

import pytest

from midiforge.generators import MappingDocumentGenerator
from midiforge.models import EncoderMapping, IrMapping, MidiType

VALUE_PATTERN = re.compile(r"^[0-9A-F]{2} [0-9A-F]{2}$")


@pytest.fixture
def generator():
    return MappingDocumentGenerator()


def _maps(document: str) -> list[tuple[str, str]]:
    root = ET.fromstring(document.encode("utf-8"))
    return [(m.get("value"), m.get("action")) for m in root.iter("map")]


class TestMappingDocument:
    """Test document structure and entries."""

    @pytest.mark.unit
    def test_root_and_info(self, generator, full_project):
        root = ET.fromstring(generator.generate(full_project).encode("utf-8"))
        assert root.tag == "mapper"
        assert root.get("device") == "Deck Controller"
        assert root.get("author") == "midiforge"
        assert root.get("version") == "1.0"
        assert root.find("info/name").text == "Deck Controller"

    @pytest.mark.unit
    def test_entries_in_category_order(self, generator, full_project):
        entries = _maps(generator.generate(full_project))
        assert entries[:9] == [
            ("B0 14", "eq_high"),
            ("90 28", "sync"),
            ("B0 07", "volume"),
            ("90 3C", ""),
            ("B1 07", "volume"),
            ("90 3C", ""),
            ("90 3D", "cue"),
            ("B0 14", "browser_scroll"),
            ("90 40", "browser_enter"),
        ]
        keypad = entries[9:]
        assert len(keypad) == 16
        assert keypad[0] == ("90 24", "")
        assert keypad[-1] == ("90 33", "")

    @pytest.mark.unit
    def test_every_value_well_formed(self, generator, full_project):
        for value, _ in _maps(generator.generate(full_project)):
            assert VALUE_PATTERN.match(value)

    @pytest.mark.unit
    def test_group_comments_only_for_non_empty_groups(self, generator, empty_project):
        empty_project.ir_mappings = [IrMapping()]
        document = generator.generate(empty_project)
        assert "<!-- IR Remote Mappings -->" in document
        assert "<!-- Rotary Encoders -->" not in document
        assert "<!-- Keypads -->" not in document

    @pytest.mark.unit
    def test_empty_project(self, generator, empty_project):
        document = generator.generate(empty_project)
        assert _maps(document) == []
        assert "  <mapping>\n  </mapping>" in document

    @pytest.mark.unit
    def test_program_change_status(self, generator, empty_project):
        empty_project.ir_mappings = [
            IrMapping(midi_type=MidiType.PROGRAM_CHANGE, channel=10, data1=3, action="load")
        ]
        assert _maps(generator.generate(empty_project)) == [("C9 03", "load")]

    @pytest.mark.unit
    def test_encoder_click_uses_button_settings(self, generator, empty_project):
        empty_project.encoders = [
            EncoderMapping(
                channel=4,
                cc_number=21,
                pin_button=5,
                button_midi_type=MidiType.CC,
                button_channel=6,
                button_data1=22,
                action_rotate="jog",
                action_click="play",
            )
        ]
        assert _maps(generator.generate(empty_project)) == [("B3 15", "jog"), ("B5 16", "play")]

    @pytest.mark.unit
    def test_escaping(self, generator, empty_project):
        empty_project.config.controller_name = 'A&B "Deck" <1>'
        empty_project.ir_mappings = [IrMapping(action='deck 1 & "play"')]
        document = generator.generate(empty_project)

        root = ET.fromstring(document.encode("utf-8"))
        assert root.get("device") == 'A&B "Deck" <1>'
        assert root.find("info/name").text == 'A&B "Deck" <1>'
        assert _maps(document) == [("90 3C", 'deck 1 & "play"')]

    @pytest.mark.unit
    def test_keypad_cells_row_major_with_actions(self, generator, full_project):
        keypad = full_project.keypads[0]
        keypad.actions = [[f"r{r}c{c}" for c in range(4)] for r in range(4)]
        entries = _maps(generator.generate(full_project))[9:]
        assert [action for _, action in entries[:5]] == ["r0c0", "r0c1", "r0c2", "r0c3", "r1c0"]
