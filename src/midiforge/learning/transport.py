"""Serial transports for the learning session."""

import asyncio
import logging
from typing import Protocol

import serial
from serial.tools import list_ports

from midiforge.exceptions import wrap_serial_error

logger = logging.getLogger(__name__)


class SerialTransport(Protocol):
    """Byte source read by SerialLearningSession."""

    async def read(self) -> bytes:
        """Wait for the next chunk; an empty chunk means the stream ended."""
        ...

    async def close(self) -> None:
        """Close the port, making a pending read return."""
        ...


class PySerialTransport:
    """
    pyserial-backed transport.

    Reads block in a worker thread (``asyncio.to_thread``) without a
    timeout; ``close`` calls ``cancel_read`` so a pending read returns an
    empty chunk.
    """

    def __init__(self, port: str, baud_rate: int = 115200):
        """
        Open the port.

        Args:
            port: Device name or pyserial URL (e.g. ``/dev/ttyACM0``, ``COM3``)
            baud_rate: Baud rate

        Raises:
            SerialPortNotFoundError: If the port does not exist
            SerialConnectionError: If the port cannot be opened
        """
        self.port = port
        try:
            self._serial = serial.serial_for_url(port, baudrate=baud_rate, timeout=None)
        except (serial.SerialException, ValueError) as e:
            raise wrap_serial_error(e, port) from e
        self._closed = False
        logger.info(f"Opened serial port {port} at {baud_rate} baud")

    def _read_blocking(self) -> bytes:
        data = self._serial.read(1)
        waiting = self._serial.in_waiting if data else 0
        if waiting:
            data += self._serial.read(waiting)
        return data

    async def read(self) -> bytes:
        if self._closed:
            return b""
        return await asyncio.to_thread(self._read_blocking)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if hasattr(self._serial, "cancel_read"):
            self._serial.cancel_read()
        await asyncio.to_thread(self._serial.close)
        logger.info(f"Closed serial port {self.port}")


def available_ports() -> list[tuple[str, str]]:
    """Available serial ports as (device, description) pairs."""
    return [(info.device, info.description) for info in list_ports.comports()]
