from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteStreamable(Protocol):
    """An object that knows how to write itself to a :class:`Sink`."""

    def write_to(self, sink: "Sink", /) -> None: ...


Writable = int | str | bytes | bytearray | memoryview | ByteStreamable | Iterable[int]


class Sink(Protocol):
    """Anything bytes can be written to.

    Implemented by :class:`~treecomplete.stream.ByteSink` (and its backends) and
    by :class:`~treecomplete.stream.ThreadSafeSink`.
    """

    @property
    def position(self) -> int:
        """Number of bytes written so far, whether or not they have been flushed."""
        ...

    def write(self, data: Writable, /) -> None: ...

    def flush(self) -> None: ...
