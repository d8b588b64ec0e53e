"""Tests for identifier, hex and status-byte helpers."""

import pytest

from midiforge.models import MidiType
from midiforge.utils import IdentifierRegistry, normalize_hex, sanitize, status_byte, to_hex


class TestSanitize:
    """Test label sanitizing."""

    @pytest.mark.unit
    def test_whitespace_runs_become_underscore(self):
        assert sanitize("Play  Pause\tButton", "btn_1") == "Play_Pause_Button"

    @pytest.mark.unit
    def test_empty_label_uses_fallback(self):
        assert sanitize("", "btn_1") == "btn_1"

    @pytest.mark.unit
    @pytest.mark.parametrize("label", ["", "   ", "\n", "ü", "1", None])
    def test_never_empty(self, label):
        assert sanitize(label, "") != ""


class TestIdentifierRegistry:
    """Test per-document identifier allocation."""

    @pytest.mark.unit
    def test_duplicates_get_numeric_suffix(self):
        registry = IdentifierRegistry()
        assert registry.claim("Fader", "pot_a") == "Fader"
        assert registry.claim("Fader", "pot_b") == "Fader_2"
        assert registry.claim("Fader", "pot_c") == "Fader_3"

    @pytest.mark.unit
    def test_invalid_characters_replaced(self):
        registry = IdentifierRegistry()
        assert registry.claim("Vol-1 (L)", "pot_a") == "Vol_1__L_"

    @pytest.mark.unit
    def test_leading_digit_prefixed(self):
        registry = IdentifierRegistry()
        assert registry.claim("1st", "btn_a") == "_1st"

    @pytest.mark.unit
    def test_fallback_for_blank_label(self):
        registry = IdentifierRegistry()
        assert registry.claim("  ", "btn_ab12") == "_"
        assert registry.claim("", "btn_ab12") == "btn_ab12"
        assert "btn_ab12" in registry

    @pytest.mark.unit
    def test_reserved_names_never_handed_out(self):
        registry = IdentifierRegistry(reserved={"midi", "loop"})
        assert registry.claim("midi", "pot_a") == "midi_2"
        assert registry.claim("loop", "btn_a") == "loop_2"
        assert registry.claim("Volume", "pot_b") == "Volume"

    @pytest.mark.unit
    def test_derived_names_claimed_with_identifier(self):
        registry = IdentifierRegistry()
        assert registry.claim("pad", "keypad_a", derived=("_rowPins", "_colPins")) == "pad"
        assert "pad_rowPins" in registry
        assert registry.claim("pad_rowPins", "btn_a") == "pad_rowPins_2"

    @pytest.mark.unit
    def test_taken_derived_name_moves_whole_group(self):
        registry = IdentifierRegistry()
        registry.claim("pad_colPins", "btn_a")
        assert registry.claim("pad", "keypad_a", derived=("_rowPins", "_colPins")) == "pad_2"
        assert "pad_2_rowPins" in registry
        assert "pad_rowPins" not in registry


class TestNormalizeHex:
    """Test IR code normalization."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("45", "0x45"),
            ("0x1a", "0x1A"),
            ("0X1a", "0x1A"),
            ("  0xff ", "0xFF"),
            ("", None),
            ("zz", None),
            (None, None),
            ("0x", None),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_hex(raw) == expected


class TestStatusByte:
    """Test MIDI status-byte arithmetic."""

    @pytest.mark.unit
    def test_known_values(self):
        assert status_byte(MidiType.NOTE_ON, 1) == "90"
        assert status_byte(MidiType.CC, 16) == "BF"
        assert status_byte(MidiType.CC, 1) == "B0"
        assert status_byte(MidiType.PROGRAM_CHANGE, 3) == "C2"

    @pytest.mark.unit
    def test_note_off_shares_note_on_nibble(self):
        assert status_byte(MidiType.NOTE_OFF, 2) == "91"

    @pytest.mark.unit
    @pytest.mark.parametrize("channel", [0, 17])
    def test_channel_out_of_range(self, channel):
        with pytest.raises(ValueError):
            status_byte(MidiType.CC, channel)

    @pytest.mark.unit
    def test_to_hex(self):
        assert to_hex(0) == "00"
        assert to_hex(127) == "7F"
        with pytest.raises(ValueError):
            to_hex(128)
