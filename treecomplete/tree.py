"""Declarative description of a command, its arguments and its subcommands."""

import re
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any

from attrs import field

from treecomplete.exceptions import ContractViolation
from treecomplete.utils import frozen, to_dict_converter, to_tuple_converter

__all__ = [
    "Argument",
    "ArgumentTree",
    "CompletionHint",
    "Filename",
    "Function",
    "NoCompletion",
    "Option",
    "Positional",
    "Unspecified",
    "ValueKind",
    "Values",
]

_SHORT_NAME_RE = re.compile(r"^-[A-Za-z0-9]$")


class ValueKind(Enum):
    """Whether an argument is a boolean flag or takes a value."""

    FLAG = "flag"
    VALUE = "value"


@frozen
class NoCompletion:
    """The argument takes a value, but no completions should be offered."""


@frozen
class Unspecified:
    """No completion behavior was specified; shells fall back to their defaults."""


def _values_converter(values: Iterable[str | tuple[str, str]]) -> tuple[tuple[str, str], ...]:
    out = []
    for value in values:
        if isinstance(value, str):
            out.append((value, ""))
        else:
            value, description = value
            out.append((str(value), str(description)))
    return tuple(out)


@frozen
class Values:
    """Complete from a fixed list of values.

    Parameters
    ----------
    values: Iterable[str | tuple[str, str]]
        Either bare values, or ``(value, description)`` pairs.
    """

    values: tuple[tuple[str, str], ...] = field(converter=_values_converter)


@frozen
class Filename:
    """Complete file names."""


@frozen
class Function:
    """Delegate completion to a shell function defined by the host application."""

    name: str


CompletionHint = NoCompletion | Unspecified | Values | Filename | Function


def _validate_option_name(instance, attribute, value: str):
    if not value.startswith("-") or not value.lstrip("-"):
        raise ContractViolation(f"Option name must start with '-' and be followed by a name; got {value!r}.")


def _validate_short_name(instance, attribute, value: str | None):
    if value is not None and not _SHORT_NAME_RE.match(value):
        raise ContractViolation(f"Short name must be a '-' followed by one letter or digit; got {value!r}.")


@frozen
class Positional:
    """A positional argument; consumed left to right in declaration order."""

    name: str
    usage: str | None = None
    completion: CompletionHint = field(factory=Unspecified)
    kind: ValueKind = ValueKind.VALUE
    is_array: bool = False
    is_optional: bool = False

    @property
    def short_name(self) -> None:
        return None


@frozen
class Option:
    """An option argument such as ``--verbose`` or ``-o FILE``."""

    name: str = field(validator=_validate_option_name)
    short_name: str | None = field(default=None, validator=_validate_short_name)
    usage: str | None = None
    completion: CompletionHint = field(factory=Unspecified)
    kind: ValueKind = ValueKind.FLAG
    is_array: bool = False
    is_optional: bool = False

    @property
    def names(self) -> tuple[str, ...]:
        """Long name followed by the short alias, if any."""
        if self.short_name is None:
            return (self.name,)
        return (self.name, self.short_name)


Argument = Positional | Option


@frozen
class ArgumentTree:
    """Read-only description of a command.

    Parameters
    ----------
    command_name: str | None
        Name used to invoke the command. May contain spaces for multi-word
        invocations (e.g. ``"git remote"``). Required on the root tree;
        subcommand trees take their name from their key in ``subcommands``.
    overview: str
        One-line description, shown next to the subcommand name in menus.
    positionals: Iterable[Positional]
        Positional arguments, in the order they are consumed.
    options: Iterable[Option]
        Option arguments. Names and short aliases must be unique.
    subcommands: Mapping[str, ArgumentTree]
        Subcommand name to subtree. Insertion order is kept and drives the
        order of generated menus.
    """

    command_name: str | None = None
    overview: str = ""
    positionals: tuple[Positional, ...] = field(default=(), converter=to_tuple_converter)
    options: tuple[Option, ...] = field(default=(), converter=to_tuple_converter)
    subcommands: Mapping[str, "ArgumentTree"] = field(factory=dict, converter=to_dict_converter, hash=False)

    def __attrs_post_init__(self):
        seen: dict[str, Option] = {}
        for option in self.options:
            for name in option.names:
                if name in seen:
                    raise ContractViolation(
                        f"{name!r} is used by both {seen[name].name!r} and {option.name!r} in {self._label}."
                    )
                seen[name] = option

        for name in self.subcommands:
            if not name or any(c.isspace() for c in name):
                raise ContractViolation(f"Invalid subcommand name {name!r} in {self._label}.")

    @property
    def _label(self) -> str:
        return repr(self.command_name) if self.command_name else "subcommand tree"

    @property
    def has_subcommands(self) -> bool:
        return bool(self.subcommands)

    def walk(self, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], "ArgumentTree"]]:
        """Depth-first iteration over this tree and all descendants.

        Yields
        ------
        tuple[tuple[str, ...], ArgumentTree]
            Subcommand path from this tree, and the tree at that path.
        """
        yield path, self
        for name, subtree in self.subcommands.items():
            yield from subtree.walk(path + (name,))

    def __getitem__(self, key: str | Iterable[str]) -> "ArgumentTree":
        """Get a descendant by subcommand name, or by an iterable of names."""
        if isinstance(key, str):
            return self.subcommands[key]
        tree = self
        for name in key:
            tree = tree.subcommands[name]
        return tree

    def to_dict(self) -> dict[str, Any]:
        """Plain-data representation, in the format read by :mod:`treecomplete.config`."""
        from treecomplete.config._common import tree_to_dict

        return tree_to_dict(self)
