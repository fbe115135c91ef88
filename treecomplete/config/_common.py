import errno
import os
import warnings
from abc import ABC, abstractmethod
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any

from attrs import define, field
from typing_extensions import assert_never

from treecomplete.exceptions import ContractViolation, TreeLoadError
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

_TREE_KEYS = frozenset({"command", "overview", "positionals", "options", "subcommands"})
_ARGUMENT_KEYS = frozenset({"name", "usage", "completion", "kind", "is_array", "is_optional"})
_OPTION_KEYS = _ARGUMENT_KEYS | {"short"}

_NAMED_HINTS: dict[str, type[CompletionHint]] = {
    "none": NoCompletion,
    "unspecified": Unspecified,
    "filename": Filename,
}


@define
class _Context:
    source: str
    allow_unknown: bool

    def error(self, keys: tuple[str, ...], msg: str) -> TreeLoadError:
        return TreeLoadError(msg=msg, source=self.source, keys=keys)

    def check_keys(self, data: Mapping[str, Any], allowed: frozenset[str], keys: tuple[str, ...]):
        unknown = sorted(str(k) for k in data if k not in allowed)
        if not unknown:
            return
        msg = f"Unknown key{'s' if len(unknown) > 1 else ''} {', '.join(map(repr, unknown))}."
        if not self.allow_unknown:
            raise self.error(keys, msg)
        location = ".".join(keys)
        warnings.warn(f"{self.source}{'::' + location if location else ''}: {msg}", UserWarning, stacklevel=2)

    def get(self, data: Mapping[str, Any], key: str, expected: type | tuple[type, ...], keys: tuple[str, ...]):
        value = data[key]
        if not isinstance(value, expected):
            if isinstance(expected, tuple):
                type_name = " or ".join(t.__name__ for t in expected)
            else:
                type_name = expected.__name__
            raise self.error(keys + (key,), f"Expected {type_name}, got {type(value).__name__}.")
        return value


def _parse_completion(value: Any, ctx: _Context, keys: tuple[str, ...]) -> CompletionHint:
    if isinstance(value, str):
        try:
            return _NAMED_HINTS[value]()
        except KeyError:
            choices = ", ".join(repr(k) for k in _NAMED_HINTS)
            raise ctx.error(keys, f"Unknown completion {value!r}; choose from {choices}.") from None

    if not isinstance(value, Mapping) or len(value) != 1:
        raise ctx.error(keys, 'Completion must be a string or a table with a single "values" or "function" key.')

    key, item = next(iter(value.items()))
    if key == "function" and isinstance(item, str) and item:
        return Function(item)
    if key != "values" or not isinstance(item, list):
        raise ctx.error(keys + (str(key),), 'Expected "values = [...]" or "function = NAME".')

    pairs = []
    for i, entry in enumerate(item):
        if isinstance(entry, str):
            pairs.append((entry, ""))
        elif isinstance(entry, list) and len(entry) == 2 and all(isinstance(x, str) for x in entry):
            pairs.append((entry[0], entry[1]))
        else:
            raise ctx.error(keys + ("values", str(i)), "Expected a value or a [value, description] pair.")
    return Values(pairs)


def _parse_argument(data: Any, cls: type[Positional] | type[Option], ctx: _Context, keys: tuple[str, ...]):
    if not isinstance(data, Mapping):
        raise ctx.error(keys, f"Expected a table, got {type(data).__name__}.")
    ctx.check_keys(data, _OPTION_KEYS if cls is Option else _ARGUMENT_KEYS, keys)
    if "name" not in data:
        raise ctx.error(keys, 'Missing required key "name".')

    kwargs: dict[str, Any] = {"name": ctx.get(data, "name", str, keys)}
    if "usage" in data:
        kwargs["usage"] = ctx.get(data, "usage", str, keys)
    if "short" in data:
        kwargs["short_name"] = ctx.get(data, "short", str, keys)
    if "completion" in data:
        kwargs["completion"] = _parse_completion(data["completion"], ctx, keys + ("completion",))
    if "kind" in data:
        kind = ctx.get(data, "kind", str, keys)
        try:
            kwargs["kind"] = ValueKind(kind)
        except ValueError:
            raise ctx.error(keys + ("kind",), f'Kind must be "flag" or "value", got {kind!r}.') from None
    elif cls is Option and "completion" in data:
        # Completing an option's value implies it takes one.
        kwargs["kind"] = ValueKind.VALUE
    for flag in ("is_array", "is_optional"):
        if flag in data:
            kwargs[flag] = ctx.get(data, flag, bool, keys)

    try:
        return cls(**kwargs)
    except ContractViolation as e:
        raise ctx.error(keys, str(e)) from e


def _parse_list(data: Mapping[str, Any], key: str, cls, ctx: _Context, keys: tuple[str, ...]) -> list:
    if key not in data:
        return []
    items = ctx.get(data, key, list, keys)
    return [_parse_argument(item, cls, ctx, keys + (key, str(i))) for i, item in enumerate(items)]


def _parse_tree(data: Any, ctx: _Context, keys: tuple[str, ...], *, root: bool) -> ArgumentTree:
    if not isinstance(data, Mapping):
        raise ctx.error(keys, f"Expected a table, got {type(data).__name__}.")
    ctx.check_keys(data, _TREE_KEYS, keys)

    command_name = None
    if "command" in data:
        command_name = ctx.get(data, "command", str, keys)
    elif root:
        raise ctx.error(keys, 'Missing required key "command".')

    overview = ctx.get(data, "overview", str, keys) if "overview" in data else ""
    positionals = _parse_list(data, "positionals", Positional, ctx, keys)
    options = _parse_list(data, "options", Option, ctx, keys)

    subcommands = {}
    if "subcommands" in data:
        for name, subtree in ctx.get(data, "subcommands", Mapping, keys).items():
            if not isinstance(name, str):
                raise ctx.error(keys + ("subcommands", str(name)), "Subcommand names must be strings.")
            subcommands[name] = _parse_tree(subtree, ctx, keys + ("subcommands", name), root=False)

    try:
        return ArgumentTree(command_name, overview, positionals, options, subcommands)
    except ContractViolation as e:
        raise ctx.error(keys, str(e)) from e


def tree_from_dict(data: Mapping[str, Any], *, source: str = "dict", allow_unknown: bool = False) -> ArgumentTree:
    """Build an :class:`~treecomplete.ArgumentTree` from plain data.

    Parameters
    ----------
    data: Mapping[str, Any]
        Parsed tree definition. See :mod:`treecomplete.config` for the format.
    source: str
        Identifies where ``data`` came from in error messages.
    allow_unknown: bool
        Warn about unrecognized keys instead of raising.

    Raises
    ------
    TreeLoadError
        If ``data`` doesn't describe a valid tree.
    """
    return _parse_tree(data, _Context(source, allow_unknown), (), root=True)


def _completion_to_data(hint: CompletionHint) -> Any:
    match hint:
        case NoCompletion():
            return "none"
        case Unspecified():
            return "unspecified"
        case Filename():
            return "filename"
        case Values(values=values):
            return {"values": [[value, description] for value, description in values]}
        case Function(name=name):
            return {"function": name}
        case _:
            assert_never(hint)


def _argument_to_data(argument: Positional | Option, default_kind: ValueKind) -> dict[str, Any]:
    data: dict[str, Any] = {"name": argument.name}
    if argument.short_name is not None:
        data["short"] = argument.short_name
    if argument.usage is not None:
        data["usage"] = argument.usage
    if not isinstance(argument.completion, Unspecified):
        data["completion"] = _completion_to_data(argument.completion)
    if argument.kind is not default_kind or "completion" in data:
        data["kind"] = argument.kind.value
    if argument.is_array:
        data["is_array"] = True
    if argument.is_optional:
        data["is_optional"] = True
    return data


def tree_to_dict(tree: ArgumentTree) -> dict[str, Any]:
    """Inverse of :func:`tree_from_dict`; keys holding default values are omitted."""
    data: dict[str, Any] = {}
    if tree.command_name is not None:
        data["command"] = tree.command_name
    if tree.overview:
        data["overview"] = tree.overview
    if tree.positionals:
        data["positionals"] = [_argument_to_data(p, ValueKind.VALUE) for p in tree.positionals]
    if tree.options:
        data["options"] = [_argument_to_data(o, ValueKind.FLAG) for o in tree.options]
    if tree.subcommands:
        data["subcommands"] = {name: tree_to_dict(subtree) for name, subtree in tree.subcommands.items()}
    return data


@define
class TreeFile(ABC):
    """Tree definition stored in a file.

    Subclasses only implement :meth:`_load_config` for their file format.
    """

    path: str | Path = field(converter=Path)
    allow_unknown: bool = field(default=False, kw_only=True)
    _source: str | None = field(default=None, alias="source", kw_only=True)

    @abstractmethod
    def _load_config(self, path: Path) -> Any:
        """Load the raw data structure from path.

        Parameters
        ----------
        path: Path
            Path to the file. Guaranteed to exist.

        Returns
        -------
        Any
            Parsed file contents; validated by :meth:`load`.
        """
        raise NotImplementedError

    @property
    def source(self) -> str:
        """Return a string identifying the definition file for error messages."""
        if self._source is not None:
            return self._source
        assert isinstance(self.path, Path)
        return str(self.path.absolute())

    @source.setter
    def source(self, value: str) -> None:
        self._source = value

    def load(self) -> ArgumentTree:
        """Read the file and build its :class:`~treecomplete.ArgumentTree`.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        TreeLoadError
            If the file can't be parsed, or doesn't describe a valid tree.
        """
        assert isinstance(self.path, Path)
        path = self.path.expanduser()
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.path))

        try:
            data = self._load_config(path)
        except TreeLoadError:
            raise
        except Exception as e:
            msg = getattr(type(e), "__name__", "")
            with suppress(IndexError):
                exception_msg = str(e.args[0])
                if msg:
                    msg += ": "
                msg += exception_msg
            raise TreeLoadError(msg=msg, source=self.source) from e

        return tree_from_dict(data, source=self.source, allow_unknown=self.allow_unknown)
