"""Buffered byte output with pluggable backends."""

from treecomplete.stream._base import DEFAULT_BUFFER_SIZE, ByteSink
from treecomplete.stream.file import FileSink
from treecomplete.stream.format import as_repeating, as_separated_list
from treecomplete.stream.memory import MemorySink
from treecomplete.stream.standard import StandardStreams, get_standard_streams
from treecomplete.stream.threadsafe import ThreadSafeSink

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "ByteSink",
    "FileSink",
    "MemorySink",
    "StandardStreams",
    "ThreadSafeSink",
    "as_repeating",
    "as_separated_list",
    "get_standard_streams",
]
