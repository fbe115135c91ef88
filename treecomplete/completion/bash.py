r"""Bash completion function generator.

Writes one bash function per node of an :class:`~treecomplete.ArgumentTree`.
Each function takes a single parameter, the index in ``COMP_WORDS`` where its
command's arguments start, and relies on the caller having set ``cur`` and
``prev`` (see :func:`write_script` for a complete, sourceable script).

Within a function, completions are chosen in this order:

1. If the cursor is at a positional argument's slot, complete that argument.
   Positional arguments are therefore completed before any option is
   suggested: ``tool pin <TAB>`` only offers the positional's values, while
   ``tool pin NAME <TAB>`` offers options as usual.
2. At the command's first argument, offer subcommands and options.
3. If the previous word is an option taking a value, complete that value.
4. If a subcommand has been typed, hand over to its function.
5. Otherwise, offer subcommands and options.

**Escaping Strategy:**

- Candidate words live in ``compgen -W "..."`` word lists; ``\``, ``"``, ``$``
  and ````` are backslash-escaped.
- Subcommand and option names in ``case`` patterns have glob characters escaped.
- Bash cannot display descriptions, so overviews only appear in comments.
"""

from typing_extensions import assert_never

from treecomplete.completion._base import (
    clean_text,
    escape_double_quoted,
    escape_for_shell_pattern,
    root_function_name,
)
from treecomplete.protocols import Sink
from treecomplete.stream.format import as_separated_list
from treecomplete.tree import (
    ArgumentTree,
    CompletionHint,
    Filename,
    Function,
    NoCompletion,
    Unspecified,
    ValueKind,
    Values,
)


def generate(tree: ArgumentTree, sink: Sink) -> None:
    """Write bash completion functions for ``tree`` and all of its subcommands.

    The output is not a complete script; the caller must define ``cur`` and
    ``prev`` and call the root function with the start position.

    Parameters
    ----------
    tree : ArgumentTree
        Tree to generate completions for. Must have a ``command_name``.
    sink : Sink
        Destination. Not flushed.
    """
    name = root_function_name(tree)
    sink.write(
        f"# Generates completions for {tree.command_name}\n"
        "#\n"
        "# Parameters\n"
        "# - the start position of this parser; set to 1 if unknown\n"
    )
    _generate_function(tree, name, sink)


def write_script(tree: ArgumentTree, sink: Sink) -> None:
    """Write a complete bash completion script, ready to be sourced.

    Requires the ``bash-completion`` package for file name completion.
    """
    name = root_function_name(tree)
    assert tree.command_name is not None
    words = tree.command_name.split()
    generate(tree, sink)
    sink.write(
        f"{name}__complete()\n"
        "{\n"
        "    local cur prev\n"
        "    COMPREPLY=()\n"
        '    cur="${COMP_WORDS[COMP_CWORD]}"\n'
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"\n'
        f"    {name} {len(words)}\n"
        "}\n"
        f"complete -F {name}__complete {words[0]}\n"
    )


def _candidates(tree: ArgumentTree) -> list[str]:
    """Subcommand names, then option names and short aliases."""
    words = list(tree.subcommands)
    for option in tree.options:
        words.extend(option.names)
    return words


def _write_compreply(words: list[str], indent: str, sink: Sink) -> None:
    sink.write(f'{indent}COMPREPLY=( $(compgen -W "')
    sink.write(as_separated_list(words, " ", escape_double_quoted))
    sink.write('" -- "$cur") )\n')


def _generate_function(tree: ArgumentTree, name: str, sink: Sink) -> None:
    candidates = _candidates(tree)

    overview = clean_text(tree.overview)
    if overview:
        sink.write(f"# {overview}\n")
    sink.write(f"function {name}\n{{\n")

    for index, argument in enumerate(tree.positionals):
        if isinstance(argument.completion, Unspecified):
            continue
        sink.write(f"    if [[ $COMP_CWORD == $(($1+{index})) ]]; then\n")
        _write_completion(argument.completion, sink)
        sink.write("    fi\n")

    sink.write("    if [[ $COMP_CWORD == $1 ]]; then\n")
    _write_compreply(candidates, "        ", sink)
    sink.write("        return\n    fi\n")

    sink.write("    case $prev in\n")
    for option in tree.options:
        if option.kind is ValueKind.FLAG or isinstance(option.completion, Unspecified):
            continue
        patterns = "|".join(escape_for_shell_pattern(n) for n in option.names)
        sink.write(f"        ({patterns})\n")
        _write_completion(option.completion, sink)
        sink.write("        ;;\n")
    sink.write("    esac\n")

    sink.write("    case ${COMP_WORDS[$1]} in\n")
    for sub_name in tree.subcommands:
        sink.write(
            f"        ({escape_for_shell_pattern(sub_name)})\n"
            f"            {name}_{sub_name} $(($1+1))\n"
            "            return\n"
            "        ;;\n"
        )
    sink.write("    esac\n")

    _write_compreply(candidates, "    ", sink)
    sink.write("}\n\n")

    for sub_name, subtree in tree.subcommands.items():
        _generate_function(subtree, f"{name}_{sub_name}", sink)


def _write_completion(hint: CompletionHint, sink: Sink) -> None:
    """Write the body completing a single argument value."""
    indent = "            "
    match hint:
        case NoCompletion():
            sink.write(f"{indent}return\n")
        case Unspecified():
            pass
        case Values(values=values):
            _write_compreply([value for value, _ in values], indent, sink)
            sink.write(f"{indent}return\n")
        case Filename():
            sink.write(f"{indent}_filedir\n{indent}return\n")
        case Function(name=function):
            sink.write(f"{indent}{function}\n{indent}return\n")
        case _:
            assert_never(hint)
