"""
Error handling utilities shared by services and the CLI.

Layering:

```
CLI            formats error.user_message / error.recovery_hint, logs details
  ^
  | MidiForgeError
  |
SERVICES       catch low-level errors (pydantic, pyserial, OS) and convert them
  ^
  | ValidationError, SerialException, OSError
  |
LIBRARIES      raise their own exception types
```

| Scenario | Use |
|----------|-----|
| Pydantic rejected a file or an edit | `wrap_pydantic_error(e, source)` |
| pyserial could not open a port | `wrap_serial_error(e, port)` |
| Show any exception to the user | `format_error_for_display(e)` |
| Log start/end of a critical section | `with ErrorContext("open serial port"): ...` |
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from .base import MidiForgeError
from .config import ConfigFileInvalidError, ConfigValidationError
from .connection import SerialConnectionError, SerialPortNotFoundError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager that logs the start, completion or failure of an operation.

    Example:
        ```python
        with ErrorContext("open serial port", logger_instance=logger):
            transport = transport_factory(port, baud_rate)
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True,
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val
        if isinstance(exc_val, MidiForgeError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def _field_path(error: dict[str, Any]) -> str:
    return ".".join(str(loc) for loc in error.get("loc", ())) or "value"


def wrap_pydantic_error(
    error: ValidationError, source: Optional[str] = None, field_prefix: str = ""
) -> MidiForgeError:
    """
    Convert a Pydantic ValidationError into a midiforge exception.

    Args:
        error: The ValidationError raised by Pydantic
        source: File path the data came from, if any
        field_prefix: Prepended to field paths (e.g., "ir_mappings[3]")

    Returns:
        ConfigFileInvalidError for JSON syntax errors, otherwise ConfigValidationError
    """
    errors = error.errors()

    json_errors = [err for err in errors if err.get("type") == "json_invalid"]
    if json_errors:
        reason = json_errors[0].get("ctx", {}).get("error") or json_errors[0].get("msg", "")
        return ConfigFileInvalidError(source or "<input>", str(reason))

    def qualify(path: str) -> str:
        if not field_prefix:
            return path
        return f"{field_prefix}.{path}" if path != "value" else field_prefix

    if len(errors) == 1:
        first = errors[0]
        return ConfigValidationError(
            field=qualify(_field_path(first)),
            value=first.get("input"),
            error_msg=first.get("msg", "validation failed"),
            file_path=source,
        )

    lines = [f"  - {qualify(_field_path(err))}: {err.get('msg', 'validation failed')}" for err in errors]
    return ConfigValidationError(
        field=field_prefix or "multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n" + "\n".join(lines),
        file_path=source,
    )


def wrap_serial_error(error: Exception, port: str) -> SerialConnectionError:
    """
    Convert a pyserial/OS error raised while opening a port.

    Args:
        error: The original exception
        port: Port name or URL that was being opened

    Returns:
        SerialPortNotFoundError when the port does not exist, otherwise
        a generic SerialConnectionError
    """
    error_msg = str(error)
    lowered = error_msg.lower()

    if "no such file" in lowered or "could not find" in lowered or "filenotfound" in lowered:
        return SerialPortNotFoundError(port, original_error=error_msg)

    if "busy" in lowered or "access is denied" in lowered or "permission denied" in lowered:
        return SerialConnectionError(
            f"Serial port {port} is in use or not accessible.",
            port=port,
            technical_message=f"Opening {port} failed: {error_msg}",
            recovery_hint=(
                "Close the Arduino serial monitor or any other program using the port. "
                "On Linux, add your user to the 'dialout' group."
            ),
        )

    return SerialConnectionError(
        f"Serial port error: {error_msg}",
        port=port,
        technical_message=f"Serial port {port} error: {error_msg}",
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, MidiForgeError):
        return error.user_message, error.recovery_hint

    return f"{type(error).__name__}: {error}", None
