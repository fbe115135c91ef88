__version__ = "0.1.0"

__all__ = [
    "Argument",
    "ArgumentTree",
    "ByteSink",
    "ByteString",
    "CompletionHint",
    "ContractViolation",
    "FileSink",
    "Filename",
    "Function",
    "MemorySink",
    "NoCompletion",
    "Option",
    "Positional",
    "Shell",
    "ShellDetectionError",
    "StreamIOError",
    "ThreadSafeSink",
    "TreeCompleteError",
    "TreeLoadError",
    "Unspecified",
    "ValueKind",
    "Values",
    "config",
    "generate",
    "generate_completion_script",
    "get_standard_streams",
    "write_script",
]

from treecomplete.bytestring import ByteString
from treecomplete.completion import Shell, generate, generate_completion_script, write_script
from treecomplete.exceptions import (
    ContractViolation,
    ShellDetectionError,
    StreamIOError,
    TreeCompleteError,
    TreeLoadError,
)
from treecomplete.stream import ByteSink, FileSink, MemorySink, ThreadSafeSink, get_standard_streams
from treecomplete.tree import (
    Argument,
    ArgumentTree,
    CompletionHint,
    Filename,
    Function,
    NoCompletion,
    Option,
    Positional,
    Unspecified,
    ValueKind,
    Values,
)


def __getattr__(name: str):
    """Lazy-load the tree file loaders."""
    if name == "config":
        import importlib

        module = importlib.import_module("treecomplete.config")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
