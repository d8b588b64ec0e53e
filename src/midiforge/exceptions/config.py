"""Configuration-related exceptions.

- ConfigurationError: Base class for project and settings file errors
- ConfigFileInvalidError: File is empty or has invalid JSON syntax
- ConfigValidationError: A value fails validation (on load or on edit)
"""

from typing import Any, Optional

from .base import MidiForgeError


class ConfigurationError(MidiForgeError):
    """A project or settings file is invalid or cannot be loaded."""


class ConfigFileInvalidError(ConfigurationError):
    """File has invalid JSON syntax."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Initialize config file invalid error.

        Args:
            file_path: Path to the invalid file
            parse_error: The parsing error message
        """
        user_msg = "Configuration file has invalid syntax"
        recovery = (
            "Check for common JSON errors:\n"
            "  - Trailing commas (remove commas after last item)\n"
            "  - Missing quotes around strings\n"
            "  - Unclosed braces or brackets\n"
            f"  - Edit: {file_path}"
        )

        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            recovery = (
                f"Remove the trailing comma from {file_path}\n"
                "JSON doesn't allow commas after the last item in an object or array"
            )
        elif "empty" in parse_error.lower():
            user_msg = "Configuration file is empty"
            recovery = f"Delete {file_path} or run 'midiforge init' to write a starter project"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A configuration value fails validation."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Initialize config validation error.

        Args:
            field: The field that failed validation (dotted path)
            value: The rejected value
            error_msg: Why the value is invalid
            file_path: File the value came from, if any
        """
        user_msg = f"Invalid value for '{field}': {error_msg}"

        recovery = f"Update the '{field}' value"
        if file_path:
            recovery += f" in {file_path}"

        lowered = field.lower()
        if "channel" in lowered:
            recovery += "\nMIDI channels are numbered 1-16"
        elif "pin" in lowered:
            recovery += "\nPins are RP2040 GPIO numbers (0-29)"
        elif "data" in lowered or "number" in lowered or "values" in lowered:
            recovery += "\nMIDI data bytes range from 0 to 127"
        elif "baud" in lowered:
            recovery += "\nThe firmware talks at 115200 baud"

        super().__init__(
            user_message=user_msg,
            technical_message=f"Validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.field = field
        self.value = value
        self.file_path = file_path
