"""Tool settings model."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from midiforge.utils.persistence import PydanticPersistence

DEFAULT_CONFIG_DIR = Path.home() / ".midiforge"


class ToolConfig(BaseModel):
    """Settings for the midiforge command line tool."""

    # Serial learning
    serial_baud: int = Field(default=115200, gt=0, description="Serial baud rate of the device")
    default_port: str | None = Field(
        default=None, description="Serial port used when --port is omitted"
    )

    # Output
    output_dir: Path | None = Field(
        default=None,
        description="Directory for generated .ino and .xml files (None = current directory)",
    )

    # Assistant
    assistant_model: str = Field(
        default="gemini-2.5-flash", description="Generative model answering 'midiforge ask'"
    )
    assistant_api_key: str | None = Field(
        default=None,
        description="API key for the assistant (falls back to GEMINI_API_KEY / GOOGLE_API_KEY)",
    )

    @field_serializer("output_dir")
    def serialize_path(self, path: Path | None) -> str | None:
        """Serialize Path to string."""
        return str(path) if path else None

    def resolve_api_key(self) -> str | None:
        """Configured key, else the environment."""
        return (
            self.assistant_api_key
            or os.environ.get("GEMINI_API_KEY")
            or os.environ.get("GOOGLE_API_KEY")
        )

    @staticmethod
    def default_path() -> Path:
        return DEFAULT_CONFIG_DIR / "config.json"

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "ToolConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.midiforge/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_or_default(path or cls.default_path(), cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or self.default_path())
