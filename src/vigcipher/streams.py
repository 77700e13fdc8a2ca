import os
from typing import BinaryIO, Iterator

# Every byte value maps to exactly one character with the same code point.
BYTE_ENCODING = "latin-1"


def byte_chars(value: str) -> str:
    """Reinterpret a command-line string as one character per raw byte."""
    return os.fsencode(value).decode(BYTE_ENCODING)


def read_chars(stream: BinaryIO) -> Iterator[str]:
    """Lazily yield the stream one byte at a time as single characters."""
    while True:
        byte = stream.read(1)
        if not byte:
            return
        yield byte.decode(BYTE_ENCODING)


class ByteSink:
    """Write single-byte characters to a binary stream."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def write(self, s: str) -> int:
        return self._stream.write(s.encode(BYTE_ENCODING))

    def flush(self) -> None:
        self._stream.flush()
