"""Pytest fixtures for tests."""

from datetime import datetime
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from midiforge.models import (
    ButtonMapping,
    ControllerProject,
    EncoderMapping,
    FaderMapping,
    IrMapping,
    IrProtocol,
    KeypadMapping,
    MidiType,
    MultiplexerConfig,
    MuxChannelMapping,
    MuxMode,
)
from midiforge.services import ProjectEditorService


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def frozen_clock():
    """Clock that always returns the same instant."""
    return lambda: datetime(2024, 5, 17, 20, 15, 0)


@pytest.fixture
def empty_project():
    """Project with default settings and no controls."""
    return ControllerProject()


@pytest.fixture
def full_project():
    """Project with one of everything, plus a second unlearned IR mapping."""
    project = ControllerProject()
    project.config.controller_name = "Deck Controller"

    project.ir_mappings = [
        IrMapping(id="ir1", ir_code="45", description="Play"),
        IrMapping(
            id="ir2",
            ir_code="0x1a",
            ir_protocol=IrProtocol.SONY,
            midi_type=MidiType.CC,
            channel=2,
            data1=7,
            data2=100,
            action="volume",
        ),
        IrMapping(id="ir3", ir_code=""),
    ]
    project.buttons = [ButtonMapping(id="b1", name="Cue Button", pin=3, data1=61, action="cue")]
    project.faders = [FaderMapping(id="f1", name="Volume", pin=27, cc_number=7, action="volume")]
    project.encoders = [
        EncoderMapping(id="e1", name="Jog", pin_button=12, multiplier=1.5, button_data1=64)
    ]
    project.keypads = [KeypadMapping(id="k1", name="Pads")]
    project.multiplexers = [MultiplexerConfig(id="m1", name="Mux A", arity=8, address_pins=[2, 3, 4])]
    project.mux_channels = [
        MuxChannelMapping(id="c1", mux_id="m1", channel_index=0, number=20, action="eq_high"),
        MuxChannelMapping(
            id="c2",
            mux_id="m1",
            channel_index=1,
            mode=MuxMode.DIGITAL,
            midi_type=MidiType.NOTE_ON,
            number=40,
            action="sync",
        ),
    ]
    return project


@pytest.fixture
def learning_project():
    """Two IR mappings without codes."""
    project = ControllerProject()
    project.ir_mappings = [IrMapping(id="A"), IrMapping(id="B")]
    return project


@pytest.fixture
def editor(full_project):
    """Editor service over the full project."""
    return ProjectEditorService(full_project)
