"""Status display settings."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from midiforge.utils.hexcodes import normalize_hex

from .enums import DisplayFamily, DisplayType


class DisplayBus(BaseModel):
    """I2C wiring of one display."""

    model_config = ConfigDict(validate_assignment=True)

    sda: int = Field(default=4, ge=0, description="SDA pin")
    scl: int = Field(default=5, ge=0, description="SCL pin")
    address: str = Field(default="0x3C", description="I2C address")

    @field_validator("address")
    @classmethod
    def _normalize_address(cls, value: str) -> str:
        normalized = normalize_hex(value)
        if normalized is None:
            raise ValueError("I2C address must be a hex value such as 0x3C")
        return normalized


def _secondary_bus() -> DisplayBus:
    return DisplayBus(sda=6, scl=7, address="0x3D")


class DisplaySettings(BaseModel):
    """Optional OLED or character LCD showing the last sent message."""

    model_config = ConfigDict(validate_assignment=True)

    enabled: bool = Field(default=False, description="Generate display code")
    type: DisplayType = Field(default=DisplayType.SH1106, description="Display module")
    dual: bool = Field(default=False, description="Drive a second display on the Wire1 bus")
    primary: DisplayBus = Field(default_factory=DisplayBus, description="First display bus")
    secondary: DisplayBus = Field(default_factory=_secondary_bus, description="Second display bus")
    inverted: bool = Field(default=False, description="Invert OLED colors / LCD backlight off")
    split_layout: bool = Field(default=False, description="Two-column Deck 1 / Deck 2 layout")

    @property
    def family(self) -> DisplayFamily:
        return self.type.family

    @property
    def buses(self) -> list[DisplayBus]:
        """Buses in use: the primary, plus the secondary when dual."""
        if self.dual:
            return [self.primary, self.secondary]
        return [self.primary]
