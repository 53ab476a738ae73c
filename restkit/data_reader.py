"""Pull-based readers that hand out a response body piece by piece."""

from __future__ import annotations

from abc import ABC, abstractmethod

DEFAULT_CHUNK_SIZE = 1024 * 8


class DataReader(ABC):
    """A source of data that is read in pieces.

    Readers can be chained: each one does some specialised work, such as
    decompression, and pulls data from the next reader when it needs more.
    """

    @abstractmethod
    def is_eof(self) -> bool:
        """Return True when no more data will be produced."""

    @abstractmethod
    def read_some(self) -> bytes:
        """Return the next piece of data, or ``b""`` at the end."""

    @abstractmethod
    def finish(self) -> None:
        """Make sure no data is left pending for the current request."""


class BytesReader(DataReader):
    """A reader over an in-memory byte string, handed out in fixed-size chunks."""

    def __init__(self, data: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._data = bytes(data)
        self._chunk_size = chunk_size
        self._pos = 0

    def is_eof(self) -> bool:
        return self._pos >= len(self._data)

    def read_some(self) -> bytes:
        chunk = self._data[self._pos:self._pos + self._chunk_size]
        self._pos += len(chunk)
        return chunk

    def finish(self) -> None:
        self._pos = len(self._data)