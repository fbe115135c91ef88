"""Entry points dispatching to the per-shell generators."""

from treecomplete.completion import bash, fish, zsh
from treecomplete.completion._base import SHELLS, Shell, root_function_name
from treecomplete.protocols import Sink
from treecomplete.stream.memory import MemorySink
from treecomplete.tree import ArgumentTree

_GENERATORS = {
    "bash": bash,
    "zsh": zsh,
    "fish": fish,
}


def _get_generator(shell: str):
    try:
        return _GENERATORS[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell: {shell!r}. Choose from {', '.join(SHELLS)}.") from None


def generate(tree: ArgumentTree, shell: Shell, sink: Sink) -> None:
    """Write completion functions for ``tree`` to ``sink``.

    The output is not a complete script: it still needs the small prologue
    described in the generated header comment (or use :func:`write_script`).
    The sink is not flushed; flushing is the caller's responsibility.

    Parameters
    ----------
    tree : ArgumentTree
        Command to generate completions for. Must have a ``command_name``.
    shell : Literal["bash", "zsh", "fish"]
        Shell dialect to generate.
    sink : Sink
        Destination of the generated text.

    Raises
    ------
    ContractViolation
        If ``tree`` has no ``command_name``, or fish short names cannot be assigned.
    ValueError
        If ``shell`` is not supported.
    """
    root_function_name(tree)
    _get_generator(shell).generate(tree, sink)


def write_script(tree: ArgumentTree, shell: Shell, sink: Sink) -> None:
    """Write a complete, directly loadable completion script for ``tree`` to ``sink``.

    Like :func:`generate`, but including the prologue and epilogue each shell needs:

    * bash: an entry function setting ``cur``/``prev``, registered with ``complete -F``.
    * zsh: the ``#compdef`` header and state variables, followed by a call to the root function.
    * fish: nothing extra.
    """
    root_function_name(tree)
    _get_generator(shell).write_script(tree, sink)


def generate_completion_script(tree: ArgumentTree, shell: Shell, *, standalone: bool = False) -> str:
    """Generate completions for ``tree`` and return them as a string.

    Parameters
    ----------
    tree : ArgumentTree
        Command to generate completions for.
    shell : Literal["bash", "zsh", "fish"]
        Shell dialect to generate.
    standalone : bool
        Produce a complete script (see :func:`write_script`) instead of just the functions.

    Returns
    -------
    str
        Generated shell code.
    """
    sink = MemorySink()
    if standalone:
        write_script(tree, shell, sink)
    else:
        generate(tree, shell, sink)
    return str(sink.finalize())
