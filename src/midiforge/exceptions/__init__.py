"""
Custom exception hierarchy for midiforge.

```
MidiForgeError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── ProjectError
│   └── EntityNotFoundError
└── SerialConnectionError
    └── SerialPortNotFoundError
```

All exceptions expose `user_message`, `technical_message`, `recoverable`
and `recovery_hint`. See `midiforge.exceptions.handlers` for the helpers
that convert library errors into these types.

Example:

```python
from midiforge.exceptions import ConfigValidationError

raise ConfigValidationError(field="buttons[0].channel", value=17, error_msg="must be 1-16")

# User sees: "Invalid value for 'buttons[0].channel': must be 1-16"
# Recovery hint: "Update the 'buttons[0].channel' value\nMIDI channels are numbered 1-16"
```
"""

from .base import MidiForgeError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .connection import SerialConnectionError, SerialPortNotFoundError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_pydantic_error,
    wrap_serial_error,
)
from .project import EntityNotFoundError, ProjectError

__all__ = [
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Project
    "EntityNotFoundError",
    "ProjectError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_pydantic_error",
    "wrap_serial_error",
    # Base
    "MidiForgeError",
    # Serial
    "SerialConnectionError",
    "SerialPortNotFoundError",
]
