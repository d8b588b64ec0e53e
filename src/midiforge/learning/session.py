"""Async serial session feeding the learning sequencer."""

import asyncio
import logging
from collections.abc import Callable

from midiforge.exceptions import ErrorContext, SerialPortNotFoundError

from .framing import LineFramer
from .sequencer import LearningSequencer
from .transport import PySerialTransport, SerialTransport

logger = logging.getLogger(__name__)

TransportFactory = Callable[[str, int], SerialTransport]


class SerialLearningSession:
    """
    Reads the device's serial output and hands each line to the sequencer.

    One reader task runs per connection. ``disconnect`` stops it and waits
    for both the task and the transport to finish, so a following
    ``connect`` never races with the previous port.
    Text left without a newline by a previous connection is dropped when
    the next one opens.

    Example:
        ```python
        session = SerialLearningSession(sequencer)
        if await session.connect("/dev/ttyACM0"):
            await session.wait()
        await session.disconnect()
        ```
    """

    def __init__(
        self,
        sequencer: LearningSequencer,
        transport_factory: TransportFactory = PySerialTransport,
        baud_rate: int = 115200,
        stop_when_idle: bool = False,
    ):
        """
        Initialize the session.

        Args:
            sequencer: Receives every complete line
            transport_factory: Opens a transport for (port, baud_rate)
            baud_rate: Baud rate passed to the factory
            stop_when_idle: End the read loop once the sequencer goes idle
        """
        self._sequencer = sequencer
        self._transport_factory = transport_factory
        self._baud_rate = baud_rate
        self.stop_when_idle = stop_when_idle

        self._transport: SerialTransport | None = None
        self._reader_task: asyncio.Task | None = None
        self._teardown_task: asyncio.Task | None = None
        self._keep_reading = False
        self._framer = LineFramer()
        self.lines_processed = 0

    @property
    def is_connected(self) -> bool:
        return self._reader_task is not None and not self._reader_task.done()

    async def connect(self, port: str | None) -> bool:
        """
        Open ``port`` and start reading.

        Returns:
            False if no port was given or the port does not exist

        Raises:
            SerialConnectionError: If the port exists but cannot be opened
        """
        if not port:
            logger.warning("No serial port given, learning is unavailable")
            return False

        if self._teardown_task is not None:
            await self._teardown_task
        if self._reader_task is not None:
            await self.disconnect()

        try:
            with ErrorContext(f"open serial port {port}", logger_instance=logger):
                transport = self._transport_factory(port, self._baud_rate)
        except SerialPortNotFoundError as e:
            logger.warning(f"Serial port not available: {e.technical_message}")
            return False

        self._transport = transport
        self._keep_reading = True
        self._framer.reset()
        self.lines_processed = 0
        self._reader_task = asyncio.create_task(self._read_loop(transport))
        logger.info(f"Learning session connected to {port}")
        return True

    async def _read_loop(self, transport: SerialTransport) -> None:
        framer = self._framer
        try:
            while self._keep_reading:
                chunk = await transport.read()
                if not chunk:
                    logger.info("Serial stream ended")
                    break
                for line in framer.feed(chunk):
                    logger.debug(f"Serial: {line}")
                    self._sequencer.process_line(line)
                    self.lines_processed += 1
                if self.stop_when_idle and not self._sequencer.is_armed:
                    logger.info("Nothing left to learn, stopping")
                    break
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Serial read loop failed: {e}", exc_info=True)
        finally:
            self._keep_reading = False
            await transport.close()
            self._sequencer.on_disconnected()

    async def wait(self) -> None:
        """Wait until the read loop ends (stream end, error or idle stop)."""
        if self._reader_task is not None:
            await asyncio.gather(self._reader_task, return_exceptions=True)

    async def disconnect(self) -> None:
        """Stop reading, close the transport and force the sequencer idle."""
        if self._teardown_task is None:
            self._teardown_task = asyncio.create_task(self._teardown())
        try:
            await self._teardown_task
        finally:
            self._teardown_task = None

    async def _teardown(self) -> None:
        self._keep_reading = False
        transport, task = self._transport, self._reader_task
        self._transport = None
        self._reader_task = None

        if transport is not None:
            await transport.close()
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        self._sequencer.on_disconnected()
        logger.info("Learning session disconnected")
