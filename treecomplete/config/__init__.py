"""Load :class:`~treecomplete.ArgumentTree` definitions from TOML, JSON or YAML files.

A definition describes the root command; subcommands nest under ``subcommands``:

.. code-block:: toml

    command = "tool"
    overview = "Does things"

    [[positionals]]
    name = "target"
    completion = "filename"

    [[options]]
    name = "--color"
    short = "-c"
    usage = "When to use colors [default: auto]"
    kind = "value"
    completion = { values = [["auto", "Detect"], ["never", "Plain text"]] }

    [subcommands.build]
    overview = "Builds it"

``completion`` is one of ``"none"``, ``"unspecified"`` (the default),
``"filename"``, ``{ values = [...] }`` or ``{ function = "_shell_function" }``.
An option's ``kind`` defaults to ``"flag"``, or to ``"value"`` when it has a
``completion``; a positional's defaults to ``"value"``.
"""

__all__ = [
    "Json",
    "Toml",
    "TreeFile",
    "Yaml",
    "load_tree",
    "tree_from_dict",
    "tree_to_dict",
]

from pathlib import Path

from treecomplete.config._common import TreeFile, tree_from_dict, tree_to_dict
from treecomplete.config._json import Json
from treecomplete.config._toml import Toml
from treecomplete.config._yaml import Yaml
from treecomplete.tree import ArgumentTree

_LOADERS: dict[str, type[TreeFile]] = {
    ".toml": Toml,
    ".json": Json,
    ".yaml": Yaml,
    ".yml": Yaml,
}


def load_tree(path: str | Path, *, allow_unknown: bool = False) -> ArgumentTree:
    """Load a tree definition, choosing the format from the file suffix.

    Parameters
    ----------
    path: str | Path
        ``.toml``, ``.json``, ``.yaml`` or ``.yml`` file.
    allow_unknown: bool
        Warn about unrecognized keys instead of raising.

    Raises
    ------
    ValueError
        If the suffix isn't recognized.
    FileNotFoundError
        If the file doesn't exist.
    TreeLoadError
        If the file doesn't describe a valid tree.
    """
    path = Path(path)
    try:
        loader = _LOADERS[path.suffix.lower()]
    except KeyError:
        suffixes = ", ".join(_LOADERS)
        raise ValueError(f'Unsupported tree file "{path}"; expected one of {suffixes}.') from None
    return loader(path, allow_unknown=allow_unknown).load()
