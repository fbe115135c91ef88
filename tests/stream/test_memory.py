from treecomplete import ByteString
from treecomplete.stream import MemorySink


def test_memory_sink_finalize():
    sink = MemorySink()
    sink.write("Hello, ")
    sink.write(b"world!")
    assert sink.finalize() == ByteString(b"Hello, world!")
    assert sink.position == 13


def test_memory_sink_getvalue():
    sink = MemorySink()
    assert sink.getvalue() == b""
    sink.write(0)
    assert sink.getvalue() == b"\x00"


def test_memory_sink_is_unbuffered():
    assert not MemorySink().buffered


def test_memory_sink_finalize_is_snapshot():
    sink = MemorySink()
    sink.write(b"a")
    first = sink.finalize()
    sink.write(b"b")
    assert first == ByteString(b"a")
    assert sink.finalize() == ByteString(b"ab")
