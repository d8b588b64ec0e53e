"""Tests for project and settings models."""

import pytest
from pydantic import ValidationError

from midiforge.models import (
    ButtonMapping,
    ControllerProject,
    DisplayBus,
    DisplayFamily,
    DisplaySettings,
    DisplayType,
    EncoderMapping,
    IrMapping,
    KeypadMapping,
    MidiType,
    MultiplexerConfig,
    MuxChannelMapping,
    MuxMode,
    ToolConfig,
)


class TestIrMapping:
    """Test IrMapping validation."""

    @pytest.mark.unit
    def test_defaults(self):
        mapping = IrMapping()
        assert len(mapping.id) == 8
        assert mapping.ir_code == ""
        assert mapping.midi_type == MidiType.NOTE_ON
        assert (mapping.channel, mapping.data1, mapping.data2) == (1, 60, 127)
        assert mapping.normalized_code is None

    @pytest.mark.unit
    def test_code_normalized(self):
        mapping = IrMapping(ir_code=" 1a ")
        assert mapping.ir_code == "0x1A"
        assert mapping.normalized_code == "0x1A"

    @pytest.mark.unit
    def test_code_without_hex_digit_kept(self):
        mapping = IrMapping(ir_code="zz")
        assert mapping.ir_code == "zz"
        assert mapping.normalized_code is None

    @pytest.mark.unit
    def test_ids_unique(self):
        assert IrMapping().id != IrMapping().id

    @pytest.mark.unit
    def test_invalid_assignment_leaves_value(self):
        mapping = IrMapping(channel=3)
        with pytest.raises(ValidationError):
            mapping.channel = 17
        assert mapping.channel == 3

    @pytest.mark.unit
    def test_data_range(self):
        with pytest.raises(ValidationError):
            IrMapping(data1=128)


class TestControlMappings:
    """Test button, encoder and keypad models."""

    @pytest.mark.unit
    def test_button_rejects_program_change(self):
        with pytest.raises(ValidationError):
            ButtonMapping(midi_type=MidiType.PROGRAM_CHANGE)

    @pytest.mark.unit
    def test_button_accepts_cc_string(self):
        assert ButtonMapping(midi_type="cc").midi_type is MidiType.CC

    @pytest.mark.unit
    def test_encoder_button_channel_defaults_to_rotation(self):
        encoder = EncoderMapping(channel=5, pin_button=9)
        assert encoder.has_button
        assert encoder.effective_button_channel == 5
        encoder.button_channel = 2
        assert encoder.effective_button_channel == 2

    @pytest.mark.unit
    def test_encoder_multiplier_positive(self):
        with pytest.raises(ValidationError):
            EncoderMapping(multiplier=0)

    @pytest.mark.unit
    def test_keypad_default_values(self):
        keypad = KeypadMapping()
        assert keypad.values[0] == [36, 37, 38, 39]
        assert keypad.values[3][3] == 51
        assert keypad.action_at(1, 1) == ""

    @pytest.mark.unit
    def test_keypad_requires_4x4(self):
        with pytest.raises(ValidationError):
            KeypadMapping(values=[[1, 2, 3, 4]] * 3)
        with pytest.raises(ValidationError):
            KeypadMapping(actions=[["a"] * 3] * 4)

    @pytest.mark.unit
    def test_keypad_actions_optional(self):
        keypad = KeypadMapping(actions=None)
        assert keypad.action_at(0, 0) == ""


class TestMultiplexer:
    """Test multiplexer models."""

    @pytest.mark.unit
    def test_chip_from_arity(self):
        assert MultiplexerConfig(arity=8, address_pins=[1, 2, 3]).chip == "CD74HC4051"
        assert MultiplexerConfig().chip == "CD74HC4067"

    @pytest.mark.unit
    def test_sixteen_channels_need_four_pins(self):
        with pytest.raises(ValidationError):
            MultiplexerConfig(arity=16, address_pins=[1, 2, 3])

    @pytest.mark.unit
    def test_arity_restricted(self):
        with pytest.raises(ValidationError):
            MultiplexerConfig(arity=12)

    @pytest.mark.unit
    def test_analog_channel_is_always_cc(self):
        channel = MuxChannelMapping(mux_id="m", midi_type=MidiType.NOTE_ON)
        assert channel.mode is MuxMode.ANALOG
        assert channel.effective_midi_type is MidiType.CC
        channel.mode = MuxMode.DIGITAL
        assert channel.effective_midi_type is MidiType.NOTE_ON


class TestDisplay:
    """Test display settings."""

    @pytest.mark.unit
    def test_address_normalized(self):
        assert DisplayBus(address="3c").address == "0x3C"

    @pytest.mark.unit
    def test_address_must_be_hex(self):
        with pytest.raises(ValidationError):
            DisplayBus(address="xyz")

    @pytest.mark.unit
    def test_buses(self):
        display = DisplaySettings()
        assert len(display.buses) == 1
        display.dual = True
        assert [bus.address for bus in display.buses] == ["0x3C", "0x3D"]

    @pytest.mark.unit
    def test_family(self):
        assert DisplayType.SSD1306.family is DisplayFamily.OLED
        assert DisplayType.LCD2004.family is DisplayFamily.LCD
        assert DisplayType.LCD2004.lcd_geometry == (20, 4)


class TestControllerProject:
    """Test the project aggregate."""

    @pytest.mark.unit
    def test_defaults(self, empty_project):
        assert empty_project.config.controller_name == "MyRP2040Controller"
        assert empty_project.config.ir_pin == 15
        assert empty_project.config.display.primary.sda == 4

    @pytest.mark.unit
    def test_starter(self):
        project = ControllerProject.starter("Deck")
        assert project.config.controller_name == "Deck"
        assert len(project.ir_mappings) == 1

    @pytest.mark.unit
    def test_json_round_trip(self, full_project):
        restored = ControllerProject.model_validate_json(full_project.model_dump_json())
        assert restored == full_project

    @pytest.mark.unit
    def test_channels_sorted_by_index(self, full_project):
        full_project.mux_channels.reverse()
        assert [ch.id for ch in full_project.channels_of("m1")] == ["c1", "c2"]


class TestToolConfig:
    """Test tool settings."""

    @pytest.mark.unit
    def test_defaults(self):
        settings = ToolConfig()
        assert settings.serial_baud == 115200
        assert settings.output_dir is None

    @pytest.mark.unit
    def test_api_key_env_fallback(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
        assert ToolConfig().resolve_api_key() == "env-key"
        assert ToolConfig(assistant_api_key="own").resolve_api_key() == "own"

    @pytest.mark.integration
    def test_save_and_load(self, temp_dir):
        path = temp_dir / "config.json"
        ToolConfig(default_port="/dev/ttyACM0", output_dir=temp_dir).save(path)
        loaded = ToolConfig.load_or_default(path)
        assert loaded.default_port == "/dev/ttyACM0"
        assert loaded.output_dir == temp_dir

    @pytest.mark.integration
    def test_missing_file_gives_defaults(self, temp_dir):
        assert ToolConfig.load_or_default(temp_dir / "missing.json") == ToolConfig()
