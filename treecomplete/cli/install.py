"""Install a completion script for a tree definition file."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from treecomplete.cli import app
from treecomplete.cli._common import CLI_ERRORS, debug_enabled, report_error, resolve_shell
from treecomplete.completion import Shell, install_completion
from treecomplete.config import load_tree


@app.command
def install(
    tree_file: Path,
    *,
    shell: Shell | None = None,
    output: Annotated[Path | None, Parameter(name=["--output", "-o"])] = None,
    add_to_startup: bool = False,
) -> int:
    """Install a shell completion script.

    After installation, you may need to restart your shell or source your shell
    configuration file.

    Parameters
    ----------
    tree_file : Path
        Tree definition file (``.toml``, ``.json``, ``.yaml`` or ``.yml``).
    shell : Literal["bash", "zsh", "fish"] | None
        Shell type for completion. If not specified, attempts to auto-detect current shell.
    output : Path | None
        Output path for the completion script. If not specified, uses shell-specific default.
    add_to_startup : bool
        Add the script to the shell's startup file (``~/.bashrc`` or ``~/.zshrc``).
    """
    try:
        tree = load_tree(tree_file)
        shell = resolve_shell(shell)
        install_path = install_completion(tree, shell, output=output, add_to_startup=add_to_startup)
    except CLI_ERRORS as e:
        if debug_enabled():
            raise
        return report_error(e)

    print(f"✓ Completion script installed to {install_path}")
    completion_dir = install_path.parent
    if shell == "zsh":
        if add_to_startup:
            print(f"✓ Added {completion_dir} to fpath in {Path.home() / '.zshrc'}")
            print("\nNote: Ensure compinit is configured in your .zshrc (most zsh setups already have this).")
        else:
            print(f"\nTo enable completions, ensure {completion_dir} is in your $fpath.")
            print("Add this to your ~/.zshrc if not already present:")
            print(f"    fpath=({completion_dir} $fpath)")
            print("    autoload -Uz compinit && compinit")
        print("Restart your shell or run: exec zsh")
    elif shell == "bash":
        if add_to_startup:
            print(f"✓ Added completion loader to {Path.home() / '.bashrc'}")
        else:
            print("\nTo enable completions, add this to your ~/.bashrc:")
            print(f'    [ -f "{install_path}" ] && . "{install_path}"')
        print("Restart your shell or run: source ~/.bashrc")
    elif shell == "fish":
        print("\nFish loads completions from this directory automatically. Restart your shell to use them.")
    return 0
