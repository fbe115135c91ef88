"""Fish completion generator.

Fish completions are a flat list of ``complete`` commands, each optionally
gated by a condition (``-n``). Fish has no notion of positional arguments or
subcommand states, so positional arguments are not completed and subcommands
are tracked with generated helper functions:

``__fish_<name>_needs_command``
    Strips this command's options from the command line with fish's
    ``argparse``, returning success if no subcommand follows. Otherwise it
    prints the remaining words (subcommand first) and fails.

``__fish_<name>_using_command SUBCOMMAND...``
    Succeeds if the subcommand following this command is one of the arguments.

``argparse`` needs every option declared with a unique one-character name,
even options that don't have one; see :func:`synthesize_short_names`.
Single-dash long options such as ``-foo`` are respelled ``--foo`` before
they reach ``argparse``, which knows no other long form.
"""

import re
import string
from collections.abc import Iterable

from typing_extensions import assert_never

from treecomplete.completion._base import clean_text, escape_chars, root_function_name
from treecomplete.exceptions import ContractViolation
from treecomplete.protocols import Sink
from treecomplete.stream.format import as_separated_list
from treecomplete.tree import (
    ArgumentTree,
    Filename,
    Function,
    NoCompletion,
    Option,
    Unspecified,
    ValueKind,
    Values,
)

_SHORT_NAME_CHARACTERS = string.ascii_lowercase + string.ascii_uppercase


def generate(tree: ArgumentTree, sink: Sink) -> None:
    """Write fish ``complete`` commands for ``tree`` and all of its subcommands.

    Parameters
    ----------
    tree : ArgumentTree
        Tree to generate completions for. Must have a ``command_name``.
    sink : Sink
        Destination. Not flushed.
    """
    # Helper functions are named after the command, without the leading underscore.
    name = root_function_name(tree)[1:]
    assert tree.command_name is not None
    words = tree.command_name.split()
    sink.write(f"# Generates completions for {tree.command_name}\n#\n\n")

    # Multi-word commands are completed for the first word once the others were typed.
    context = tuple(f"__fish_seen_subcommand_from {_escape_fish_word(w)}" for w in words[1:])
    _generate_node(tree, name, words[0], context, sink, skip=len(words), parent=None)


def write_script(tree: ArgumentTree, sink: Sink) -> None:
    """Write a complete fish completion file, suitable for ``~/.config/fish/completions``."""
    generate(tree, sink)


def synthesize_short_names(options: Iterable[Option]) -> dict[str, str]:
    """Assign every option a unique one-character name for fish's ``argparse``.

    Options with a real short name keep it; the others get unused letters,
    lowercase first, then uppercase.

    Parameters
    ----------
    options : Iterable[Option]
        Options of a single command.

    Returns
    -------
    dict[str, str]
        Option name to its one-character name.

    Raises
    ------
    ContractViolation
        If a short name is used twice, or there are more options than letters.
    """
    options = list(options)
    assigned: dict[str, str] = {}
    used: set[str] = set()

    for option in options:
        if option.short_name is None:
            continue
        char = option.short_name[1]
        if char in used:
            raise ContractViolation(f"Short name is already in use: {option.short_name}")
        used.add(char)
        assigned[option.name] = char

    available = iter(c for c in _SHORT_NAME_CHARACTERS if c not in used)
    for option in options:
        if option.short_name is not None:
            continue
        try:
            assigned[option.name] = next(available)
        except StopIteration:
            raise ContractViolation("Ran out of unique synthetic short-name characters.") from None

    return assigned


def _arity(option: Option) -> str:
    if option.kind is ValueKind.FLAG:
        return ""
    if option.is_array:
        return "=+"
    if option.is_optional:
        return "=?"
    return "="


def _argparse_specs(options: tuple[Option, ...]) -> list[str]:
    """``argparse`` option specifications; synthetic short names use the ``x-long`` form."""
    short_names = synthesize_short_names(options)
    specs = []
    for option in options:
        separator = "-" if option.short_name is None else "/"
        specs.append(f"{short_names[option.name]}{separator}{option.name.lstrip('-')}{_arity(option)}")
    return specs


def _escape_fish_double_quoted(text: str) -> str:
    # Only backslash, quote and dollar are special inside fish double quotes; a backslash
    # before ( or [ would be kept literally.
    return escape_chars(text, '"$')


def _escape_fish_single_quoted(text: str) -> str:
    return escape_chars(text, "'")


def _escape_fish_word(text: str) -> str:
    """Backslash-escape a word used as an argument inside fish code."""
    return "".join(c if c.isalnum() or c in "_.,+:@%/=-" else f"\\{c}" for c in text)


def _condition(conditions: Iterable[str]) -> str:
    return "; and ".join(conditions)


def _long_form_rewrites(options: tuple[Option, ...]) -> str:
    """Commands respelling single-dash long options (``-foo``) as ``--foo`` in ``$cmd``.

    The option specs name such an option ``foo``, which ``argparse`` only accepts as ``--foo``.
    """
    lines = []
    for option in options:
        if option.name.startswith("--"):
            continue
        # The empty alternative keeps group 1 set for the replacement.
        pattern = _escape_fish_single_quoted(f"^{re.escape(option.name)}(|=.*)$")
        replacement = _escape_fish_single_quoted(f"-{option.name}$1")
        lines.append(f"    set -q cmd[1]; and set cmd (string replace -r -- '{pattern}' '{replacement}' $cmd)\n")
    return "".join(lines)


def _write_helpers(tree: ArgumentTree, name: str, parent: str | None, skip: int, sink: Sink) -> None:
    if parent is None:
        source = "(commandline -opc)"
        erase = f"cmd[1..{skip}]" if skip > 1 else "cmd[1]"
    else:
        # Only called once the parent's first remaining word is this command.
        source = f"(__fish_{parent}_needs_command)"
        erase = "cmd[1]"

    opts = " ".join(["    set -l opts"] + [f"'{spec}'" for spec in _argparse_specs(tree.options)])
    sink.write(
        f"function __fish_{name}_needs_command\n"
        "    # Figure out if the current invocation already has a command.\n"
        "    # Any options defined at this level may appear before the command.\n"
        f"{opts}\n"
        f"    set -l cmd {source}\n"
        f"    set -e {erase}\n"
        f"{_long_form_rewrites(tree.options)}"
        "    # Eat options defined above, leaving $argv[1] containing first unlisted parameter.\n"
        "    argparse -s $opts -- $cmd 2>/dev/null\n"
        "    or return 0 # in which case, nothing remaining after eating those options.\n"
        "\n"
        "    # If the first value in remaining arg list is set, this is a subcommand.\n"
        "    if set -q argv[1]\n"
        "        # Also print the remaining words, so this can be used to figure out what it is.\n"
        "        printf '%s\\n' $argv\n"
        "        return 1\n"
        "    end\n"
        "    return 0\n"
        "end\n"
        "\n"
        f"function __fish_{name}_using_command\n"
        f"    set -l cmd (__fish_{name}_needs_command)\n"
        '    test -z "$cmd"; and return 1\n'
        "    contains -- $cmd[1] $argv; and return 0\n"
        "    return 1\n"
        "end\n"
        "\n"
    )


def _write_option(option: Option, command: str, conditions: tuple[str, ...], sink: Sink) -> None:
    takes_value = option.kind is ValueKind.VALUE
    completion = option.completion
    allows_files = isinstance(completion, Filename | Unspecified)

    parts = ["complete"]
    if not takes_value:
        parts.append("-f")
    elif not allows_files:
        # -x is -r -f: a value is required, but not a file.
        parts.append("-x")
    parts += ["-c", command]
    if conditions:
        parts += ["-n", f"'{_escape_fish_single_quoted(_condition(conditions))}'"]
    if option.short_name is not None:
        parts += ["-s", option.short_name[1]]
    if option.name.startswith("--"):
        parts += ["-l", option.name[2:]]
    else:
        parts += ["-o", option.name[1:]]
    if takes_value and allows_files:
        parts.append("-r")

    match completion:
        case Values(values=values):
            words = " ".join(_escape_fish_double_quoted(value) for value, _ in values)
            parts += ["-a", f'"{words}"']
        case Function(name=function):
            parts += ["-a", f"'({_escape_fish_single_quoted(function)})'"]
        case NoCompletion() | Unspecified() | Filename():
            pass
        case _:
            assert_never(completion)

    description = clean_text(option.usage)
    if description:
        parts += ["-d", f'"{_escape_fish_double_quoted(description)}"']

    sink.write(as_separated_list(parts, " "))
    sink.write("\n")


def _generate_node(
    tree: ArgumentTree,
    name: str,
    command: str,
    context: tuple[str, ...],
    sink: Sink,
    *,
    skip: int,
    parent: str | None,
) -> None:
    needs_command = f"__fish_{name}_needs_command"
    if tree.has_subcommands:
        _write_helpers(tree, name, parent, skip, sink)

    # Options of the top-level command are always offered. A subcommand's options
    # are only offered until one of its own subcommands has been chosen.
    option_context = context
    if tree.has_subcommands and parent is not None:
        option_context = context + (needs_command,)
    for option in tree.options:
        _write_option(option, command, option_context, sink)

    for sub_name, subtree in tree.subcommands.items():
        parts = ["complete", "-f", "-c", command]
        parts += ["-n", f"'{_escape_fish_single_quoted(_condition(context + (needs_command,)))}'"]
        parts += ["-a", f"'{_escape_fish_single_quoted(sub_name)}'"]
        overview = clean_text(subtree.overview)
        if overview:
            parts += ["-d", f'"{_escape_fish_double_quoted(overview)}"']
        sink.write(as_separated_list(parts, " "))
        sink.write("\n")

    if tree.has_subcommands:
        sink.write("\n")

    for sub_name, subtree in tree.subcommands.items():
        sub_context = context + (f"__fish_{name}_using_command {_escape_fish_word(sub_name)}",)
        _generate_node(subtree, f"{name}_{sub_name}", command, sub_context, sink, skip=1, parent=name)
