"""Shell completion installation utilities.

This module handles the installation of completion scripts to shell-specific
locations and the updating of shell RC files to load completions.
"""

from pathlib import Path

from treecomplete.completion._base import Shell, root_function_name
from treecomplete.completion.generate import write_script
from treecomplete.stream.file import FileSink
from treecomplete.tree import ArgumentTree


def get_default_completion_path(shell: Shell, prog_name: str) -> Path:
    """Get the default completion script path for a given shell.

    Parameters
    ----------
    shell : Literal["bash", "zsh", "fish"]
        Shell type.
    prog_name : str
        Program name for the completion script.

    Returns
    -------
    Path
        Default installation path for the shell. The parent directory is not created.

    Raises
    ------
    ValueError
        If shell type is unsupported.
    """
    home = Path.home()
    if shell == "zsh":
        return home / ".zsh" / "completions" / f"_{prog_name}"
    elif shell == "bash":
        return home / ".local" / "share" / "bash-completion" / "completions" / prog_name
    elif shell == "fish":
        return home / ".config" / "fish" / "completions" / f"{prog_name}.fish"
    else:
        raise ValueError(f"Unsupported shell: {shell}")


def add_to_rc_file(script_path: Path, prog_name: str, shell: Shell) -> bool:
    """Add completion configuration to shell RC file.

    For bash, adds a source line to load the completion script.
    For zsh, adds the completion directory to fpath so compinit can find it.
    Fish loads its completion directory automatically, so nothing is added.

    Parameters
    ----------
    script_path : Path
        Path to the completion script.
    prog_name : str
        Program name for display in comments.
    shell : Literal["bash", "zsh", "fish"]
        Shell type.

    Returns
    -------
    bool
        True if configuration was added, False if it already existed or isn't needed.
    """
    if shell == "bash":
        rc_file = Path.home() / ".bashrc"
        config_line = f'[ -f "{script_path}" ] && . "{script_path}"'
        comment = f"# Load {prog_name} completion"
    elif shell == "zsh":
        rc_file = Path.home() / ".zshrc"
        config_line = f"fpath=({script_path.parent} $fpath)"
        comment = f"# {prog_name} completions"
    elif shell == "fish":
        return False
    else:
        raise ValueError(f"Unsupported shell: {shell}")

    if rc_file.exists():
        content = rc_file.read_text()
        if config_line in content:
            return False
        needs_newline = content and not content.endswith("\n")
    else:
        needs_newline = False

    with rc_file.open("a") as f:
        if needs_newline:
            f.write("\n")
        f.write(f"{comment}\n{config_line}\n")

    return True


def install_completion(
    tree: ArgumentTree,
    shell: Shell,
    output: Path | None = None,
    add_to_startup: bool = False,
) -> Path:
    """Write a complete completion script for ``tree`` and optionally register it.

    Parameters
    ----------
    tree : ArgumentTree
        Command to install completions for. Must have a ``command_name``.
    shell : Literal["bash", "zsh", "fish"]
        Shell type.
    output : Path | None
        Where to write the script. Defaults to :func:`get_default_completion_path`.
    add_to_startup : bool
        Also update the shell's RC file to load the script (see :func:`add_to_rc_file`).

    Returns
    -------
    Path
        Path the script was written to.

    Raises
    ------
    StreamIOError
        If writing the script failed.
    """
    root_function_name(tree)
    assert tree.command_name is not None
    prog_name = tree.command_name.split()[0]

    if output is None:
        output = get_default_completion_path(shell, prog_name)
    output.parent.mkdir(parents=True, exist_ok=True)

    with FileSink.open(output) as sink:
        write_script(tree, shell, sink)

    if add_to_startup:
        add_to_rc_file(output, prog_name, shell)

    return output
