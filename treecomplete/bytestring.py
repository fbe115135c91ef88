"""Immutable byte buffer produced by finished output operations."""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, overload

from attrs import field

from treecomplete.utils import frozen

if TYPE_CHECKING:
    from treecomplete.protocols import Sink


def _to_bytes(value: bytes | bytearray | memoryview | Iterable[int]) -> bytes:
    return bytes(value)


@frozen
class ByteString:
    """A sequence of bytes.

    Conceptually just an immutable ``bytes``, with helpers for the common
    operations done on finished output. Build byte strings with a
    :class:`~treecomplete.stream.MemorySink` and convert with
    :meth:`~treecomplete.stream.MemorySink.finalize` when complete.

    Parameters
    ----------
    contents: bytes | bytearray | memoryview | Iterable[int]
        Initial contents. Defaults to empty.
    """

    contents: bytes = field(default=b"", converter=_to_bytes)

    @classmethod
    def from_str(cls, string: str) -> "ByteString":
        """Create a byte string from the UTF-8 encoding of ``string``."""
        return cls(string.encode("utf-8"))

    def __len__(self) -> int:
        return len(self.contents)

    def __iter__(self) -> Iterator[int]:
        return iter(self.contents)

    def __bytes__(self) -> bytes:
        return self.contents

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> "ByteString": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(self.contents[index])
        return self.contents[index]

    def __str__(self) -> str:
        """Decode as UTF-8.

        Raises
        ------
        UnicodeDecodeError
            If the contents are not valid UTF-8.
        """
        return self.contents.decode("utf-8")

    @property
    def valid_description(self) -> str | None:
        """The UTF-8 decoded contents, or :obj:`None` if they are not valid UTF-8."""
        try:
            return self.contents.decode("utf-8")
        except UnicodeDecodeError:
            return None

    @property
    def c_string(self) -> str:
        """The contents decoded as UTF-8 up to the first NUL byte, replacing ill-formed sequences."""
        return self.contents.split(b"\x00", 1)[0].decode("utf-8", errors="replace")

    def write_to(self, sink: "Sink") -> None:
        sink.write(self.contents)
