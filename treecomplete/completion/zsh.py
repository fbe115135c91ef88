"""Zsh completion function generator.

Writes one function per tree node, built on the compsys ``_arguments``
builtin. Nodes with subcommands use a two-state machine: in the ``command``
state the subcommand name is completed with ``_describe``; in the ``arg``
state completion is handed over to the chosen subcommand's function.

The functions expect ``state`` and friends to be declared by the caller
(see :func:`write_script`).
"""

from typing_extensions import assert_never

from treecomplete.completion._base import (
    clean_text,
    escape_chars,
    escape_double_quoted,
    escape_for_shell_pattern,
    escape_single_quoted,
    root_function_name,
)
from treecomplete.protocols import Sink
from treecomplete.tree import (
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


def generate(tree: ArgumentTree, sink: Sink) -> None:
    """Write zsh completion functions for ``tree`` and all of its subcommands.

    Parameters
    ----------
    tree : ArgumentTree
        Tree to generate completions for. Must have a ``command_name``.
    sink : Sink
        Destination. Not flushed.
    """
    name = root_function_name(tree)
    assert tree.command_name is not None
    sink.write(
        f"# Generates completions for {tree.command_name}\n"
        "#\n"
        "# In the final compdef file, set the following file header:\n"
        "#\n"
        f"#     #compdef {tree.command_name.split()[0]}\n"
        "#     local context state state_descr line\n"
        "#     typeset -A opt_args\n"
        "\n"
    )
    _generate_function(tree, name, sink)


def write_script(tree: ArgumentTree, sink: Sink) -> None:
    """Write a complete zsh completion file, suitable for a directory in ``$fpath``."""
    name = root_function_name(tree)
    assert tree.command_name is not None
    sink.write(
        f"#compdef {tree.command_name.split()[0]}\n"
        "local context state state_descr line\n"
        "typeset -A opt_args\n"
        "\n"
    )
    generate(tree, sink)
    sink.write(f'{name} "$@"\n')


def _escape_zsh_description(text: str | None) -> str:
    """Clean usage text for the ``[...]`` part of an ``_arguments`` spec."""
    return escape_chars(clean_text(text), "[]")


def _escape_zsh_message(text: str | None) -> str:
    """Clean usage text for the ``:message:`` part of an ``_arguments`` spec."""
    return escape_chars(clean_text(text), ":")


def _action(hint: CompletionHint) -> str:
    """Map a completion hint to an ``_arguments`` action."""
    match hint:
        case NoCompletion():
            return " "
        case Unspecified():
            return "_default"
        case Values(values=values):
            specs = []
            for value, description in values:
                value = escape_chars(clean_text(value), "[]:")
                description = _escape_zsh_description(description)
                spec = f"{value}[{description}]" if description else value
                specs.append(f"'{escape_single_quoted(spec)}'")
            return "{_values ''" + "".join(f" {spec}" for spec in specs) + "}"
        case Filename():
            return "_files"
        case Function(name=function):
            return function
        case _:
            assert_never(hint)


def _positional_spec(argument: Positional) -> str:
    prefix = "*" if argument.is_array else ""
    colons = "::" if argument.is_optional else ":"
    message = _escape_zsh_message(argument.usage) or " "
    spec = f"{prefix}{colons}{message}:{_action(argument.completion)}"
    return f'"{escape_double_quoted(spec)}"'


def _option_spec(option: Option) -> str:
    description = _escape_zsh_description(option.usage)
    rest = f"[{description}]"
    if option.kind is ValueKind.VALUE:
        colons = "::" if option.is_optional else ":"
        message = _escape_zsh_message(option.usage) or " "
        rest += f"{colons}{message}:{_action(option.completion)}"
    rest = f'"{escape_double_quoted(rest)}"'

    if option.short_name is None:
        prefix = "*" if option.is_array else ""
        return f'"{prefix}{option.name}"{rest}'

    # Offering one spelling hides the other, unless the option may repeat.
    exclusion = '"*"' if option.is_array else f'"({option.name} {option.short_name})"'
    return f"{exclusion}{{{option.name},{option.short_name}}}{rest}"


def _generate_function(tree: ArgumentTree, name: str, sink: Sink) -> None:
    sink.write(f"{name}() {{\n    arguments=(\n")
    for positional in tree.positionals:
        sink.write(f"        {_positional_spec(positional)}\n")
    for option in tree.options:
        sink.write(f"        {_option_spec(option)}\n")

    if tree.has_subcommands:
        sink.write("        '(-): :->command'\n        '(-)*:: :->arg'\n")
    sink.write("    )\n    _arguments $arguments && return\n")

    if tree.has_subcommands:
        sink.write(
            "    case $state in\n"
            "        (command)\n"
            "            local modes\n"
            "            modes=(\n"
        )
        for sub_name, subtree in tree.subcommands.items():
            entry = f"{escape_chars(sub_name, ':')}:{clean_text(subtree.overview)}"
            sink.write(f"                '{escape_single_quoted(entry)}'\n")
        sink.write(
            "            )\n"
            '            _describe "mode" modes\n'
            "            ;;\n"
            "        (arg)\n"
            "            case ${words[1]} in\n"
        )
        for sub_name in tree.subcommands:
            sink.write(
                f"                ({escape_for_shell_pattern(sub_name, '*?[]()|')})\n"
                f"                    {name}_{sub_name}\n"
                "                    ;;\n"
            )
        sink.write("            esac\n            ;;\n    esac\n")
    sink.write("}\n\n")

    for sub_name, subtree in tree.subcommands.items():
        _generate_function(subtree, f"{name}_{sub_name}", sink)
