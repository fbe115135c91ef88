"""Shared buffering logic for all sinks.

Backends subclass :class:`ByteSink` and implement ``_write_impl`` (the
physical write) and optionally ``_flush_impl`` and ``_close_impl``.
The chunking policy follows LLVM's ``raw_ostream``: large writes bypass the
buffer in capacity-sized multiples so the number of physical writes stays
small while memory stays bounded to one buffer.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable

from treecomplete.protocols import ByteStreamable, Writable

DEFAULT_BUFFER_SIZE = 1024


class ByteSink(ABC):
    """Base class for buffered and unbuffered byte sinks.

    Not usable on its own; see :class:`~treecomplete.stream.MemorySink` and
    :class:`~treecomplete.stream.FileSink`. A sink is **not** thread-safe;
    wrap it in a :class:`~treecomplete.stream.ThreadSafeSink` when it is shared.

    Parameters
    ----------
    buffered: bool
        If :obj:`True`, writes accumulate in memory until the buffer is full or
        :meth:`flush` is called. Otherwise every write goes straight to the backend.
    capacity: int
        Size of the buffer in bytes. Must be at least 1.
    """

    def __init__(self, *, buffered: bool = True, capacity: int = DEFAULT_BUFFER_SIZE):
        if capacity < 1:
            raise ValueError(f"Buffer capacity must be at least 1; got {capacity}.")
        self._buffered = buffered
        self._capacity = capacity
        self._buffer = bytearray()
        self._position = 0
        # Shared with every ThreadSafeSink wrapping this sink.
        self._lock = threading.RLock()

    @property
    def buffered(self) -> bool:
        return self._buffered

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def position(self) -> int:
        """Total number of bytes accepted by :meth:`write`, flushed or not."""
        return self._position

    @property
    def _available(self) -> int:
        return self._capacity - len(self._buffer)

    def write(self, data: Writable, /) -> None:
        """Write data to the sink.

        Parameters
        ----------
        data: int | str | bytes | bytearray | memoryview | ByteStreamable | Iterable[int]
            * ``int``: a single byte in ``range(256)``.
            * ``str``: written as UTF-8.
            * Bytes-like objects and iterables of ints: written as-is.
            * :class:`~treecomplete.protocols.ByteStreamable`: asked to write itself.
        """
        if isinstance(data, int):
            self._write_byte(data)
        elif isinstance(data, str):
            self._write_bytes(data.encode("utf-8"))
        elif isinstance(data, bytes):
            self._write_bytes(data)
        elif isinstance(data, bytearray | memoryview):
            self._write_bytes(bytes(data))
        elif isinstance(data, ByteStreamable):
            data.write_to(self)
        elif isinstance(data, Iterable):
            self._write_bytes(bytes(data))
        else:
            raise TypeError(f"Cannot write object of type {type(data).__name__} to a sink.")

    def flush(self) -> None:
        """Hand any buffered bytes to the backend and flush it."""
        if self._buffer:
            self._write_impl(bytes(self._buffer))
            self._buffer.clear()
        self._flush_impl()

    def close(self) -> None:
        """Flush the sink and release its backend."""
        self.flush()
        self._close_impl()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _write_byte(self, byte: int) -> None:
        if not 0 <= byte <= 255:
            raise ValueError(f"Byte must be in range(0, 256); got {byte}.")
        self._position += 1

        if not self._buffered:
            self._write_impl(bytes((byte,)))
            self._flush_impl()
            return

        if self._available == 0:
            self._write_impl(bytes(self._buffer))
            self._buffer.clear()
        self._buffer.append(byte)

    def _write_bytes(self, data: bytes) -> None:
        self._position += len(data)

        if not self._buffered:
            self._write_impl(data)
            self._flush_impl()
            return

        self._write_buffered(data)

    def _write_buffered(self, data: bytes) -> None:
        available = self._available
        if len(data) <= available:
            self._buffer += data
            return

        if not self._buffer:
            # Write out whole multiples of the capacity, keep the tail buffered.
            # The tail is always shorter than the capacity, so it always fits.
            cut = len(data) - len(data) % self._capacity
            self._write_impl(data[:cut])
            self._buffer += data[cut:]
            return

        # Top the buffer up, write it out, then start over with what is left.
        self._buffer += data[:available]
        self._write_impl(bytes(self._buffer))
        self._buffer.clear()
        self._write_buffered(data[available:])

    @abstractmethod
    def _write_impl(self, data: bytes) -> None:
        """Physically write ``data`` to the backend."""
        raise NotImplementedError

    def _flush_impl(self) -> None:
        """Flush the backend itself; no-op by default."""

    def _close_impl(self) -> None:
        """Release the backend; no-op by default."""
