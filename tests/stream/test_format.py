import pytest

from treecomplete.stream import MemorySink, as_repeating, as_separated_list


def _render(streamable) -> str:
    sink = MemorySink()
    sink.write(streamable)
    return sink.getvalue().decode()


def test_as_separated_list():
    assert _render(as_separated_list(["a", "b", "c"], ", ")) == "a, b, c"


def test_as_separated_list_empty():
    assert _render(as_separated_list([], ", ")) == ""


def test_as_separated_list_single():
    assert _render(as_separated_list(["a"], ", ")) == "a"


def test_as_separated_list_transform():
    assert _render(as_separated_list(["a", "b"], " ", str.upper)) == "A B"


def test_as_separated_list_nested():
    inner = as_separated_list(["x", "y"], "-")
    assert _render(as_separated_list([inner, "z"], " ")) == "x-y z"


def test_as_repeating():
    assert _render(as_repeating("ab", 3)) == "ababab"
    assert _render(as_repeating("ab", 0)) == ""


def test_as_repeating_negative():
    with pytest.raises(ValueError):
        as_repeating("ab", -1)


def test_streamables_compare_by_value():
    assert as_repeating("a", 2) == as_repeating("a", 2)
    assert as_separated_list(["a"], " ") == as_separated_list(("a",), " ")
