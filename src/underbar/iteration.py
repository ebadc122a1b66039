"""The traversal primitive and the trivial pass-through helpers.

`each` is the one way UNDERBAR walks a collection; every other collection
operation is written in terms of it (directly or through `underbar.fold.reduce`).
It dispatches on the collection's shape:

- ordered sequences (`collections.abc.Sequence`) are visited by ascending index;
- key-value mappings (`collections.abc.Mapping`) are visited in key-enumeration
  order, which is stable for a given mapping instance.

Further shapes can be supported by registering on `each`
(``@each.register(MyShape)``). Anything else raises ``TypeError``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from functools import singledispatch
from typing import Any, TypeVar

T = TypeVar("T")

Visitor = Callable[[Any, Any, Any], object]


def identity(value: T) -> T:
    """Return ``value`` unchanged.

    Handy as the default iterator wherever a caller may omit one.
    """
    return value


@singledispatch
def each(collection: Any, visitor: Visitor) -> None:
    """Call ``visitor(value, key_or_index, collection)`` for each element.

    Args:
        collection: An ordered sequence or a key-value mapping.
        visitor: Called once per element. Its return value is ignored.

    Raises:
        TypeError: If ``collection`` is neither a sequence nor a mapping.
    """
    raise TypeError(
        f"each() expects a sequence or a mapping, got {type(collection).__name__}"
    )


@each.register
def _each_mapping(collection: Mapping, visitor: Visitor) -> None:
    for key in collection:
        visitor(collection[key], key, collection)


@each.register
def _each_sequence(collection: Sequence, visitor: Visitor) -> None:
    for index in range(len(collection)):
        visitor(collection[index], index, collection)


def first(sequence: Sequence[T], n: int | None = None) -> T | list[T]:
    """Return the first element, or a new list of the first ``n`` elements."""
    if n is None:
        return sequence[0]
    return list(sequence[:n])


def last(sequence: Sequence[T], n: int | None = None) -> T | list[T]:
    """Return the last element, or a new list of the last ``n`` elements."""
    if n is None:
        return sequence[-1]
    return list(sequence[max(0, len(sequence) - n) :])
