from treecomplete.bytestring import ByteString
from treecomplete.stream._base import ByteSink


class MemorySink(ByteSink):
    """Sink that accumulates everything written to it in memory.

    The base class buffering is disabled since the whole stream already lives
    in memory.

    Example
    -------
    .. code-block:: python

        sink = MemorySink()
        sink.write("Hello, world!")
        assert sink.finalize() == ByteString(b"Hello, world!")
    """

    def __init__(self):
        super().__init__(buffered=False)
        self._contents = bytearray()

    def finalize(self) -> ByteString:
        """Contents of the sink as an immutable :class:`~treecomplete.ByteString`.

        Implicitly flushes the sink.
        """
        self.flush()
        return ByteString(self._contents)

    def getvalue(self) -> bytes:
        """Contents of the sink as ``bytes``; implicitly flushes the sink."""
        self.flush()
        return bytes(self._contents)

    def _write_impl(self, data: bytes) -> None:
        self._contents += data
