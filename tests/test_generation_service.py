"""Tests for GenerationService."""

import pytest

from midiforge.exceptions import ConfigValidationError
from midiforge.generators import FirmwareGenerator
from midiforge.models import EntityKind
from midiforge.services import GenerationService, ProjectEditorService


@pytest.fixture
def generation(editor, frozen_clock):
    return GenerationService(editor, firmware_generator=FirmwareGenerator(clock=frozen_clock))


class TestGenerationService:
    """Documents follow every edit."""

    @pytest.mark.unit
    def test_generates_on_creation(self, generation):
        assert generation.generation_count == 1
        assert "void setup() {" in generation.firmware
        assert generation.mapping_document.startswith('<?xml version="1.0"')

    @pytest.mark.unit
    def test_regenerates_after_every_edit(self, editor, generation):
        editor.update_ir_mapping("ir3", ir_code="0x33")
        assert generation.generation_count == 2
        assert "command == 0x33" in generation.firmware

        editor.remove(EntityKind.IR_MAPPING, "ir3")
        assert generation.generation_count == 3
        assert "command == 0x33" not in generation.firmware

    @pytest.mark.unit
    def test_failed_edit_does_not_regenerate(self, editor, generation):
        with pytest.raises(ConfigValidationError):
            editor.update_button("b1", channel=99)
        assert generation.generation_count == 1

    @pytest.mark.unit
    def test_regeneration_is_idempotent(self, generation):
        first = (generation.firmware, generation.mapping_document)
        assert generation.regenerate() == first

    @pytest.mark.unit
    def test_config_change_renames_device(self, editor, generation):
        editor.update_config(controller_name="Night Deck")
        assert 'device="Night Deck"' in generation.mapping_document
        assert generation.file_stem() == "Night_Deck"

    @pytest.mark.integration
    def test_write(self, generation, temp_dir):
        written = generation.write(temp_dir)
        assert written == [
            temp_dir / "Deck_Controller" / "Deck_Controller.ino",
            temp_dir / "Deck_Controller.xml",
        ]
        assert written[0].read_text(encoding="utf-8") == generation.firmware
        assert written[1].read_text(encoding="utf-8") == generation.mapping_document

    @pytest.mark.integration
    def test_write_mapping_only(self, temp_dir):
        generation = GenerationService(ProjectEditorService())
        assert generation.write(temp_dir, firmware=False) == [temp_dir / "MyRP2040Controller.xml"]
