"""Controller project: the aggregate every generator reads."""

from pydantic import BaseModel, ConfigDict, Field

from .display import DisplaySettings
from .mappings import (
    ButtonMapping,
    EncoderMapping,
    FaderMapping,
    IrMapping,
    KeypadMapping,
    MultiplexerConfig,
    MuxChannelMapping,
)


class GeneratorConfig(BaseModel):
    """Board-level settings shared by both generated documents."""

    model_config = ConfigDict(validate_assignment=True)

    controller_name: str = Field(
        default="MyRP2040Controller", description="Controller name (sketch and device id)"
    )
    ir_pin: int = Field(default=15, ge=0, description="IR receiver data pin")
    use_led_feedback: bool = Field(default=True, description="Blink the LED on IR reception")
    display: DisplaySettings = Field(default_factory=DisplaySettings, description="Display settings")


class ControllerProject(BaseModel):
    """
    Complete description of a controller.

    Collections are ordered: order drives declaration order in the firmware
    and, for IR mappings, dispatch priority.
    """

    config: GeneratorConfig = Field(default_factory=GeneratorConfig, description="Board settings")
    ir_mappings: list[IrMapping] = Field(default_factory=list, description="IR code mappings")
    buttons: list[ButtonMapping] = Field(default_factory=list, description="Direct buttons")
    faders: list[FaderMapping] = Field(default_factory=list, description="Direct faders")
    encoders: list[EncoderMapping] = Field(default_factory=list, description="Rotary encoders")
    keypads: list[KeypadMapping] = Field(default_factory=list, description="4x4 keypads")
    multiplexers: list[MultiplexerConfig] = Field(default_factory=list, description="Multiplexers")
    mux_channels: list[MuxChannelMapping] = Field(
        default_factory=list, description="Multiplexer channels"
    )

    def find_multiplexer(self, mux_id: str) -> MultiplexerConfig | None:
        return next((mux for mux in self.multiplexers if mux.id == mux_id), None)

    def channels_of(self, mux_id: str) -> list[MuxChannelMapping]:
        """Channels of one multiplexer, sorted by channel index."""
        return sorted(
            (ch for ch in self.mux_channels if ch.mux_id == mux_id), key=lambda ch: ch.channel_index
        )

    @classmethod
    def starter(cls, name: str = "MyRP2040Controller") -> "ControllerProject":
        """A new project with a single unlearned NEC mapping."""
        project = cls()
        project.config.controller_name = name
        project.ir_mappings.append(IrMapping(description="Play / Pause"))
        return project
