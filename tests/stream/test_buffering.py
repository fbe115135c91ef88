import pytest

from treecomplete.stream import DEFAULT_BUFFER_SIZE, as_repeating

from .recording import RecordingSink

DATA = bytes(range(256)) * 3


def _chunks(data: bytes, size: int):
    for i in range(0, len(data), size):
        yield data[i : i + size]


@pytest.mark.parametrize("capacity", [1, 2, 3, 7, 64, 1024])
@pytest.mark.parametrize("chunk_size", [1, 2, 5, 17, 100, len(DATA)])
def test_buffering_is_independent_of_chunking(capacity, chunk_size):
    sink = RecordingSink(capacity=capacity)
    for chunk in _chunks(DATA, chunk_size):
        sink.write(chunk)
    sink.flush()

    assert sink.contents == DATA
    assert all(sink.writes)


@pytest.mark.parametrize("capacity", [1, 3, 64])
def test_buffering_single_bytes(capacity):
    sink = RecordingSink(capacity=capacity)
    for byte in DATA:
        sink.write(byte)
    sink.flush()

    assert sink.contents == DATA
    assert all(len(w) <= capacity for w in sink.writes)


def test_position_counts_accepted_bytes():
    sink = RecordingSink(capacity=4)
    positions = [sink.position]
    for chunk in (b"ab", b"", b"cdefghij", b"k"):
        sink.write(chunk)
        positions.append(sink.position)
    sink.write(ord("l"))
    positions.append(sink.position)
    sink.flush()
    positions.append(sink.position)

    assert positions == [0, 2, 2, 10, 11, 12, 12]
    assert positions == sorted(positions)


def test_default_capacity():
    assert RecordingSink().capacity == DEFAULT_BUFFER_SIZE == 1024


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RecordingSink(capacity=0)


def test_write_fitting_in_buffer_is_deferred():
    sink = RecordingSink(capacity=4)
    sink.write(b"abcd")
    assert sink.writes == []

    sink.flush()
    assert sink.writes == [b"abcd"]
    assert sink.flushes == 1


def test_single_byte_when_buffer_full():
    sink = RecordingSink(capacity=4)
    sink.write(b"abcd")
    sink.write(ord("e"))
    assert sink.writes == [b"abcd"]

    sink.flush()
    assert sink.writes == [b"abcd", b"e"]


def test_large_write_into_empty_buffer():
    """Whole multiples of the capacity bypass the buffer, the tail is kept."""
    sink = RecordingSink(capacity=4)
    sink.write(b"0123456789")
    assert sink.writes == [b"01234567"]

    sink.flush()
    assert sink.writes == [b"01234567", b"89"]


def test_large_write_into_partial_buffer():
    sink = RecordingSink(capacity=4)
    sink.write(b"ab")
    sink.write(b"cdefghij")
    assert sink.writes == [b"abcd", b"efgh"]

    sink.flush()
    assert sink.writes == [b"abcd", b"efgh", b"ij"]


def test_flush_empty_buffer_skips_write():
    sink = RecordingSink()
    sink.flush()
    assert sink.writes == []
    assert sink.flushes == 1


def test_unbuffered_writes_through():
    sink = RecordingSink(buffered=False)
    sink.write(b"abc")
    sink.write(ord("d"))
    assert sink.writes == [b"abc", b"d"]
    assert sink.flushes == 2
    assert not sink.buffered


def test_write_types():
    sink = RecordingSink()
    sink.write("héllo ")
    sink.write(bytearray(b"a"))
    sink.write(memoryview(b"b"))
    sink.write([99, 100])
    sink.write(as_repeating("-", 2))
    sink.flush()
    assert sink.contents == "héllo abcd--".encode()


@pytest.mark.parametrize("byte", [-1, 256])
def test_write_byte_out_of_range(byte):
    sink = RecordingSink()
    with pytest.raises(ValueError):
        sink.write(byte)
    assert sink.position == 0


def test_write_unsupported_type():
    with pytest.raises(TypeError):
        RecordingSink().write(1.5)  # pyright: ignore[reportArgumentType]


def test_context_manager_closes():
    with RecordingSink() as sink:
        sink.write(b"abc")
    assert sink.writes == [b"abc"]
    assert sink.closes == 1
