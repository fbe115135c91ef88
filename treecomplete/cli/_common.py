import os

from rich.console import Console
from rich.markup import escape

from treecomplete.completion import Shell, detect_shell
from treecomplete.exceptions import ContractViolation, ShellDetectionError, TreeCompleteError

DEBUG_ENV_VAR = "TREECOMPLETE_DEBUG"

error_console = Console(stderr=True, highlight=False)

# Errors reported as a one-line message; anything else is a bug and keeps its traceback.
CLI_ERRORS = (TreeCompleteError, ContractViolation, ShellDetectionError, OSError, ValueError)


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV_VAR))


def report_error(e: BaseException) -> int:
    """Print ``e`` to the error console; returns the exit code."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", soft_wrap=True)
    return 1


def resolve_shell(shell: Shell | None) -> Shell:
    if shell is not None:
        return shell
    try:
        return detect_shell()
    except ShellDetectionError:
        raise ShellDetectionError("Could not auto-detect shell. Please specify --shell explicitly.") from None
