"""Detect which shell the user is running, to pick a completion dialect."""

import os
import subprocess
from pathlib import Path

from treecomplete.completion._base import SHELLS, Shell
from treecomplete.exceptions import ShellDetectionError

SHELL_ENV_VAR = "TREECOMPLETE_SHELL"


def _shell_from_string(shell_string: str) -> Shell | None:
    """Find a supported shell name in a path or process name such as ``/bin/bash`` or ``-zsh``."""
    shell_lower = shell_string.lower()
    for shell in SHELLS:
        if shell in shell_lower:
            return shell
    return None


def _parent_process_name() -> str | None:
    try:
        result = subprocess.run(
            ["ps", "-p", str(os.getppid()), "-o", "comm="],
            capture_output=True,
            text=True,
            timeout=1,
        )
    except (subprocess.SubprocessError, OSError):
        return None
    if result.returncode != 0 or not result.stdout:
        return None
    return result.stdout.strip()


def detect_shell() -> Shell:
    """Detect the current shell type.

    Checked in order:

    1. The ``TREECOMPLETE_SHELL`` environment variable.
    2. Shell version variables (``ZSH_VERSION``, ``BASH_VERSION``, ``FISH_VERSION``).
    3. The parent process name.
    4. The ``SHELL`` environment variable.

    Returns
    -------
    Literal["bash", "zsh", "fish"]
        The detected shell type.

    Raises
    ------
    ShellDetectionError
        If the shell type cannot be determined from any detection method,
        or ``TREECOMPLETE_SHELL`` names an unsupported shell.
    """
    override = os.environ.get(SHELL_ENV_VAR)
    if override:
        if override not in SHELLS:
            raise ShellDetectionError(
                f"{SHELL_ENV_VAR}={override!r} is not a supported shell. Choose from {', '.join(SHELLS)}."
            )
        return override  # pyright: ignore[reportReturnType]

    if os.environ.get("ZSH_VERSION"):
        return "zsh"
    elif os.environ.get("BASH_VERSION"):
        return "bash"
    elif os.environ.get("FISH_VERSION"):
        return "fish"

    parent = _parent_process_name()
    if parent and (shell := _shell_from_string(parent)):
        return shell

    shell_path = os.environ.get("SHELL", "")
    if shell_path and (shell := _shell_from_string(Path(shell_path).name)):
        return shell

    raise ShellDetectionError("Unable to detect shell type.")
