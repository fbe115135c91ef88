import pytest

from treecomplete import ByteString
from treecomplete.stream import MemorySink


def test_bytestring_from_str():
    value = ByteString.from_str("héllo")
    assert bytes(value) == "héllo".encode()
    assert str(value) == "héllo"
    assert len(value) == 6


def test_bytestring_default_empty():
    assert ByteString() == ByteString(b"")
    assert len(ByteString()) == 0


def test_bytestring_accepts_iterables():
    assert ByteString([104, 105]) == ByteString(b"hi")
    assert ByteString(bytearray(b"hi")) == ByteString(b"hi")


def test_bytestring_hashable():
    assert len({ByteString(b"a"), ByteString(b"a"), ByteString(b"b")}) == 2


def test_bytestring_indexing():
    value = ByteString(b"abc")
    assert value[0] == ord("a")
    assert value[1:] == ByteString(b"bc")
    assert list(value) == [97, 98, 99]


def test_bytestring_invalid_utf8():
    value = ByteString(b"ab\xff")
    assert value.valid_description is None
    with pytest.raises(UnicodeDecodeError):
        str(value)


def test_bytestring_valid_description():
    assert ByteString(b"abc").valid_description == "abc"


def test_bytestring_c_string():
    assert ByteString(b"abc\x00def").c_string == "abc"
    assert ByteString(b"a\xffb").c_string == "a�b"


def test_bytestring_write_to():
    sink = MemorySink()
    sink.write(ByteString(b"abc"))
    assert sink.getvalue() == b"abc"
