from pathlib import Path

from attrs import define

__all__ = [
    "ContractViolation",
    "ShellDetectionError",
    "StreamIOError",
    "TreeCompleteError",
    "TreeLoadError",
]


class ContractViolation(Exception):
    """The library was misconfigured by the calling program.

    Raised for an unnamed root tree, duplicate option names or short aliases,
    malformed option names, or running out of synthetic short names.
    """

    # This doesn't derive from TreeCompleteError since this is a developer error
    # rather than a runtime error.


class ShellDetectionError(Exception):
    """Raised when the shell type cannot be detected."""


@define
class TreeCompleteError(Exception):
    """Root exception for runtime errors."""

    msg: str | None = None
    """
    If set, override automatic message generation.
    """

    def __str__(self):
        return self.msg if self.msg is not None else ""


class StreamIOError(OSError):
    """A write to a sink's backend failed.

    Write failures are recorded when they happen and reported here, from
    :meth:`~treecomplete.stream.FileSink.close`, so that buffered writers keep
    accepting input until the caller checks.
    """

    def __init__(self, path: Path | None = None):
        self.path = path
        if path is None:
            super().__init__("I/O error while writing to stream.")
        else:
            super().__init__(f'I/O error while writing to "{path}".')


@define(kw_only=True)
class TreeLoadError(TreeCompleteError):
    """A tree definition could not be turned into an :class:`~treecomplete.ArgumentTree`."""

    source: str = ""
    """String identifying where the definition came from (usually a file path)."""

    keys: tuple[str, ...] = ()
    """Path of keys leading to the offending entry."""

    def __str__(self):
        location = self.source
        if self.keys:
            location += "::" + ".".join(self.keys)
        message = self.msg or "Invalid tree definition."
        return f"{location}: {message}" if location else message
