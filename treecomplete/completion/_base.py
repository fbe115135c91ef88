"""Shared shell completion infrastructure.

Provides naming and text processing utilities. Each shell has its own
emitter module; nothing here produces shell code by itself.
"""

import re
from typing import Literal

from treecomplete.exceptions import ContractViolation
from treecomplete.tree import ArgumentTree

Shell = Literal["bash", "zsh", "fish"]
SHELLS: tuple[Shell, ...] = ("bash", "zsh", "fish")

_DEFAULT_ANNOTATION_RE = re.compile(r"\[default: .+?\]")


def root_function_name(tree: ArgumentTree) -> str:
    """Name of the completion function generated for the root of ``tree``.

    Child functions append ``_<subcommand>`` to their parent's name.

    Raises
    ------
    ContractViolation
        If the tree has no ``command_name``.
    """
    if not tree.command_name:
        raise ContractViolation("Cannot generate completions for a tree without a command_name.")
    return "_" + tree.command_name.replace(" ", "_")


def remove_default(text: str | None) -> str:
    """Remove ``[default: ...]`` annotations from usage text."""
    return _DEFAULT_ANNOTATION_RE.sub("", text or "")


def clean_text(text: str | None) -> str:
    """Remove default annotations and control characters, and collapse whitespace.

    Parameters
    ----------
    text : str | None
        Raw usage or overview text.

    Returns
    -------
    str
        Cleaned text (not shell-escaped).
    """
    text = remove_default(text)
    text = re.sub(r"[\x00-\x1f\x7f]", " ", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def escape_chars(text: str, chars: str) -> str:
    """Backslash-escape every character of ``chars`` (and backslash itself) in ``text``."""
    # Escape backslashes first to avoid double-escaping
    result = text.replace("\\", "\\\\")
    for char in chars:
        result = result.replace(char, f"\\{char}")
    return result


def escape_for_shell_pattern(name: str, chars: str = "*?[]") -> str:
    """Escape glob/pattern characters for shell case patterns.

    Both bash and zsh case patterns treat glob characters as special even inside
    quotes. This function escapes them with backslashes for literal matching.

    Parameters
    ----------
    name : str
        String to escape.
    chars : str
        Characters to escape. Default covers basic glob chars.
        For zsh, also pass "()|" for extended patterns.

    Returns
    -------
    str
        Escaped string safe for shell case patterns.
    """
    return escape_chars(name, chars)


def escape_double_quoted(text: str) -> str:
    r"""Escape characters that are special inside a POSIX double-quoted string.

    Covers ``\``, ``"``, ``$`` and `````.
    """
    return escape_chars(text, '"$`')


def escape_single_quoted(text: str) -> str:
    r"""Escape text for use inside a POSIX single-quoted string (``'`` becomes ``'\''``)."""
    return text.replace("'", r"'\''")
