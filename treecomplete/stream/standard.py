"""Thread-safe sinks for the process's standard output and error."""

import functools
import threading

from treecomplete.stream.file import FileSink
from treecomplete.stream.threadsafe import ThreadSafeSink


class StandardStreams:
    """Owner of the standard output/error sinks.

    Sinks are created on first access and wrap the raw descriptors
    unbuffered, so output is visible immediately. Pass an instance around
    explicitly (or use :func:`get_standard_streams` for the process-wide one)
    rather than reaching for globals; tests can build their own instance around
    other descriptors.

    Parameters
    ----------
    stdout_fd: int
        Descriptor backing :attr:`stdout`.
    stderr_fd: int
        Descriptor backing :attr:`stderr`.
    """

    def __init__(self, stdout_fd: int = 1, stderr_fd: int = 2):
        self._fds = {"stdout": stdout_fd, "stderr": stderr_fd}
        self._sinks: dict[str, ThreadSafeSink] = {}
        self._lock = threading.Lock()

    def _get(self, name: str) -> ThreadSafeSink:
        with self._lock:
            try:
                return self._sinks[name]
            except KeyError:
                sink = ThreadSafeSink(FileSink.from_fd(self._fds[name], buffered=False))
                self._sinks[name] = sink
                return sink

    @property
    def stdout(self) -> ThreadSafeSink:
        return self._get("stdout")

    @property
    def stderr(self) -> ThreadSafeSink:
        return self._get("stderr")


@functools.cache
def get_standard_streams() -> StandardStreams:
    """Process-wide :class:`StandardStreams`, created on first call."""
    return StandardStreams()
