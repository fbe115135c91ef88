"""Generate a completion script from a tree definition file."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from treecomplete.cli import app
from treecomplete.cli._common import CLI_ERRORS, debug_enabled, report_error, resolve_shell
from treecomplete.completion import Shell, generate as generate_functions, write_script
from treecomplete.config import load_tree
from treecomplete.stream import FileSink, get_standard_streams


@app.command
def generate(
    tree_file: Path,
    *,
    shell: Shell | None = None,
    output: Annotated[Path | None, Parameter(name=["--output", "-o"])] = None,
    standalone: bool = True,
    allow_unknown: bool = False,
) -> int:
    """Generate a shell completion script.

    Parameters
    ----------
    tree_file : Path
        Tree definition file (``.toml``, ``.json``, ``.yaml`` or ``.yml``).
    shell : Literal["bash", "zsh", "fish"] | None
        Shell to generate for. If not specified, attempts to auto-detect current shell.
    output : Path | None
        Output file. If not specified, prints to stdout.
    standalone : bool
        Write a complete script that registers itself with the shell.
        With ``--no-standalone``, only the completion functions are written.
    allow_unknown : bool
        Warn about unrecognized keys in the tree file instead of failing.
    """
    try:
        tree = load_tree(tree_file, allow_unknown=allow_unknown)
        shell = resolve_shell(shell)
        emit = write_script if standalone else generate_functions

        if output is None:
            stdout = get_standard_streams().stdout
            emit(tree, shell, stdout)
            stdout.flush_and_check()
        else:
            with FileSink.open(output) as sink:
                emit(tree, shell, sink)
    except CLI_ERRORS as e:
        if debug_enabled():
            raise
        return report_error(e)
    return 0
