"""Byte stream to text line framing."""

import codecs


class LineFramer:
    """
    Turns serial chunks into complete text lines.

    Bytes are decoded incrementally as UTF-8, so a multi-byte character
    split across two chunks decodes correctly; malformed bytes become
    U+FFFD. The text after the last newline is kept until the next chunk.

    Example:
        ```python
        framer = LineFramer()
        framer.feed(b"Protocol: NEC Co")   # []
        framer.feed(b"de: 0x10\\n")         # ["Protocol: NEC Code: 0x10"]
        ```
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """Decode a chunk and return the lines it completed, stripped, in order."""
        self._buffer += self._decoder.decode(chunk)
        *complete, self._buffer = self._buffer.split("\n")
        return [line.strip() for line in complete if line.strip()]

    def reset(self) -> None:
        self._decoder.reset()
        self._buffer = ""
