"""File-descriptor backed sink."""

import os
import warnings
from contextlib import suppress
from pathlib import Path

from treecomplete.exceptions import StreamIOError
from treecomplete.stream._base import DEFAULT_BUFFER_SIZE, ByteSink

_OPEN_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)


class FileSink(ByteSink):
    """Sink writing to an OS file descriptor with :func:`os.write`.

    Write failures do not raise; they are remembered and reported by
    :meth:`close`. This lets a buffered writer keep accepting input, with the
    caller checking for errors once at the end.

    Use :meth:`open` to write to a path, or :meth:`from_fd` to wrap an
    already-open descriptor such as stdout.

    Parameters
    ----------
    fd: int
        File descriptor to write to.
    path: Path | None
        Path the descriptor was opened from. Only used in error messages.
    close_fd: bool
        Close ``fd`` when the sink is closed.
        If the sink is garbage collected while still open, the descriptor is
        closed and a :class:`ResourceWarning` is emitted.
    buffered: bool
        See :class:`~treecomplete.stream.ByteSink`.
    capacity: int
        See :class:`~treecomplete.stream.ByteSink`.
    """

    def __init__(
        self,
        fd: int,
        *,
        path: Path | None = None,
        close_fd: bool = True,
        buffered: bool = True,
        capacity: int = DEFAULT_BUFFER_SIZE,
    ):
        super().__init__(buffered=buffered, capacity=capacity)
        self._fd = fd
        self.path = path
        self._close_fd = close_fd
        self._closed = False
        self._error = False

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        buffered: bool = True,
        capacity: int = DEFAULT_BUFFER_SIZE,
    ) -> "FileSink":
        """Open ``path`` for writing, truncating any existing file.

        Raises
        ------
        OSError
            If the file cannot be opened; e.g. :class:`FileNotFoundError`,
            :class:`PermissionError` or :class:`IsADirectoryError`.
        """
        path = Path(path)
        fd = os.open(path, _OPEN_FLAGS, 0o666)
        return cls(fd, path=path, close_fd=True, buffered=buffered, capacity=capacity)

    @classmethod
    def from_fd(
        cls,
        fd: int,
        *,
        close_fd: bool = False,
        buffered: bool = True,
        capacity: int = DEFAULT_BUFFER_SIZE,
    ) -> "FileSink":
        """Wrap an existing descriptor; by default it is left open on :meth:`close`."""
        return cls(fd, close_fd=close_fd, buffered=buffered, capacity=capacity)

    @property
    def fd(self) -> int:
        return self._fd

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def error(self) -> bool:
        """:obj:`True` if any write to the descriptor has failed."""
        return self._error

    def __repr__(self):
        return f"{type(self).__name__}(fd={self._fd}, path={self.path!r}, closed={self._closed})"

    def check_error(self) -> None:
        """Raise if any write to the descriptor has failed.

        Unlike :meth:`close`, the sink stays usable. Buffered data is not flushed.

        Raises
        ------
        StreamIOError
            If any write since the sink was opened failed.
        """
        if self._error:
            raise StreamIOError(self.path)

    def close(self) -> None:
        """Flush buffered data and close the descriptor (if owned).

        Closing an already-closed sink does nothing.

        Raises
        ------
        StreamIOError
            If any write since the sink was opened failed.
        """
        if self._closed:
            return
        try:
            self.flush()
        finally:
            self._closed = True
            if self._close_fd:
                try:
                    os.close(self._fd)
                except OSError:
                    self._error = True

        self.check_error()

    def __del__(self):
        if getattr(self, "_closed", True) or not self._close_fd:
            return
        warnings.warn(f"unclosed sink {self!r}", ResourceWarning, source=self, stacklevel=2)
        self.flush()
        self._closed = True
        with suppress(OSError):
            os.close(self._fd)

    def _write_impl(self, data: bytes) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed sink.")
        while True:
            try:
                written = os.write(self._fd, data)
            except InterruptedError:
                continue
            except OSError:
                self._error = True
            else:
                if written != len(data):
                    self._error = True
            break
