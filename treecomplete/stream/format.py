"""Streamable objects implementing common formatted output.

These are written lazily: nothing is rendered until the object is handed to
:meth:`Sink.write <treecomplete.protocols.Sink.write>`.

.. code-block:: python

    sink.write(as_separated_list(["hello", "world"], " "))
"""

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from attrs import field

from treecomplete.utils import frozen, to_tuple_converter

if TYPE_CHECKING:
    from treecomplete.protocols import Sink, Writable


@frozen
class SeparatedList:
    items: tuple[Any, ...] = field(converter=to_tuple_converter)
    separator: str = ""
    transform: Callable[[Any], "Writable"] | None = field(default=None, eq=False)

    def write_to(self, sink: "Sink") -> None:
        for i, item in enumerate(self.items):
            if i:
                sink.write(self.separator)
            sink.write(item if self.transform is None else self.transform(item))


@frozen
class Repeating:
    string: str
    count: int

    def write_to(self, sink: "Sink") -> None:
        for _ in range(self.count):
            sink.write(self.string)


def as_separated_list(
    items: Iterable[Any],
    separator: str,
    transform: Callable[[Any], "Writable"] | None = None,
) -> SeparatedList:
    """Write each item, with ``separator`` between consecutive items.

    Parameters
    ----------
    items: Iterable[Any]
        Items to write. Each must be writable to a sink, after ``transform``.
    separator: str
        Written between items.
    transform: Callable | None
        Applied to each item before writing.
    """
    return SeparatedList(items, separator, transform)


def as_repeating(string: str, count: int) -> Repeating:
    """Write ``string`` ``count`` times.

    Raises
    ------
    ValueError
        If ``count`` is negative.
    """
    if count < 0:
        raise ValueError(f"Count should be >= 0; got {count}.")
    return Repeating(string, count)
