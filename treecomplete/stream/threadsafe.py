import threading

from treecomplete.protocols import Sink, Writable
from treecomplete.stream._base import ByteSink

# Used for sinks that don't carry their own lock.
_DEFAULT_LOCK = threading.RLock()


class ThreadSafeSink:
    """Serialize all access to a wrapped sink.

    If ``stream`` is a :class:`~treecomplete.stream.ByteSink`, the wrapper
    reuses that sink's lock, so separate :class:`ThreadSafeSink` instances
    around the *same* sink still serialize against each other. Other sinks
    share a single process-wide lock.

    A :class:`~treecomplete.protocols.ByteStreamable` written through the wrapper
    is written atomically, even if it performs several writes.
    """

    def __init__(self, stream: Sink):
        self.stream = stream
        self._lock = stream._lock if isinstance(stream, ByteSink) else _DEFAULT_LOCK

    @property
    def position(self) -> int:
        with self._lock:
            return self.stream.position

    def write(self, data: Writable, /) -> None:
        with self._lock:
            self.stream.write(data)

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()

    def close(self) -> None:
        """Close the wrapped sink, or just flush it if it cannot be closed."""
        with self._lock:
            close = getattr(self.stream, "close", None)
            if close is None:
                self.stream.flush()
            else:
                close()

    def flush_and_check(self) -> None:
        """Flush, then raise if the wrapped sink recorded a write failure.

        Raises
        ------
        StreamIOError
            If the wrapped sink has a ``check_error`` method and it reports a failure.
        """
        with self._lock:
            self.stream.flush()
            check_error = getattr(self.stream, "check_error", None)
            if check_error is not None:
                check_error()
