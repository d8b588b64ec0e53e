"""Serial link exceptions.

- SerialConnectionError: Opening or reading the serial port failed
- SerialPortNotFoundError: The requested port does not exist
"""

from typing import Optional

from .base import MidiForgeError


class SerialConnectionError(MidiForgeError):
    """Serial port could not be opened or read."""

    def __init__(self, user_message: str, port: Optional[str] = None, **kwargs):
        """
        Initialize serial connection error.

        Args:
            user_message: User-friendly error message
            port: The port involved (if known)
        """
        kwargs.setdefault("recoverable", True)
        kwargs.setdefault(
            "recovery_hint",
            "Check the USB cable and close other serial monitors (Arduino IDE, screen). "
            "Run 'midiforge ports' to see available ports.",
        )
        super().__init__(user_message, **kwargs)
        self.port = port


class SerialPortNotFoundError(SerialConnectionError):
    """Requested serial port was not found."""

    def __init__(self, port: str, original_error: Optional[str] = None):
        """
        Initialize port-not-found error.

        Args:
            port: The port name that wasn't found
            original_error: Message from pyserial
        """
        tech_msg = f"Serial port {port} not found"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=f"Serial port {port} not found.",
            port=port,
            technical_message=tech_msg,
            recovery_hint="Plug in the controller and run 'midiforge ports' to see available ports.",
        )
