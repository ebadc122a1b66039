"""Advanced collection operations composed from the primitives."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterator, MutableSequence, Sequence
from typing import Any, Protocol, TypeVar

from .fold import every, map
from .missing import MISSING
from .objects import get_property
from .search import filter, index_of

# pylint: disable=redefined-builtin

T = TypeVar("T")
S = TypeVar("S", bound=MutableSequence)

_EXHAUSTED = object()


class RandomSource(Protocol):
    """The slice of `random.Random` that `shuffle` needs."""

    def random(self) -> float: ...  # pragma: no cover


def shuffle(sequence: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """Return a uniformly shuffled copy of ``sequence`` (Fisher-Yates).

    Args:
        sequence: The values to shuffle; never mutated.
        rng: Source of randomness; defaults to the `random` module.

    Returns:
        A new list holding every element of ``sequence`` exactly once.
    """
    source = rng if rng is not None else random
    deck = list(sequence)
    remaining = len(deck)
    while remaining:
        pick = int(source.random() * remaining)
        remaining -= 1
        deck[remaining], deck[pick] = deck[pick], deck[remaining]
    return deck


def invoke(
    collection: Any, method_or_fn: str | Callable[..., Any], args: Sequence[Any] = ()
) -> list[Any]:
    """Call a method (by name) or a function on every element.

    A string names a method looked up on each element and called with
    ``args``. A callable is called as ``method_or_fn(element, *args)``, with
    the element in the receiver position.

    Returns:
        The call results, in traversal order.
    """
    if isinstance(method_or_fn, str):
        return map(collection, lambda element: getattr(element, method_or_fn)(*args))
    return map(collection, lambda element: method_or_fn(element, *args))


def sort_by(collection: S, key_or_fn: Any | Callable[[Any], Any]) -> S:
    """Sort ``collection`` in place, ascending by a property or a function.

    Args:
        collection: A mutable sequence (typically a list).
        key_or_fn: A callable projection, or a property name read with
            `underbar.objects.get_property`.

    Returns:
        ``collection`` itself. The sort is stable.

    Raises:
        TypeError: If the projections cannot be ordered against each other.
    """
    if callable(key_or_fn):
        collection.sort(key=key_or_fn)
    else:
        collection.sort(key=lambda element: get_property(element, key_or_fn))
    return collection


def zip(*sequences: Sequence[Any], fillvalue: Any = MISSING) -> list[tuple[Any, ...]]:
    """Group the i-th elements of every sequence into tuples.

    Shorter sequences are padded with ``fillvalue`` (``MISSING`` by default),
    so the result is as long as the longest input.

    Example:
        >>> zip(["a", "b", "c", "d"], [1, 2, 3])
        [('a', 1), ('b', 2), ('c', 3), ('d', MISSING)]
    """
    longest = max((len(sequence) for sequence in sequences), default=0)
    return [
        tuple(
            sequence[index] if index < len(sequence) else fillvalue
            for sequence in sequences
        )
        for index in range(longest)
    ]


def _is_nested(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def flatten(nested: Sequence[Any]) -> list[Any]:
    """Flatten arbitrarily deep nested sequences, depth-first, left to right.

    Strings and bytes are kept whole; anything that is not a sequence passes
    through at its original relative position. Depth is limited by memory
    only, not by the interpreter's recursion limit.

    Example:
        >>> flatten([1, [2], [3, [[4]]]])
        [1, 2, 3, 4]
    """
    results: list[Any] = []
    # one iterator per open nesting level, innermost last
    pending: list[Iterator[Any]] = [iter(nested)]
    while pending:
        value = next(pending[-1], _EXHAUSTED)
        if value is _EXHAUSTED:
            pending.pop()
        elif _is_nested(value):
            pending.append(iter(value))
        else:
            results.append(value)
    return results


def intersection(first: Sequence[T], *others: Sequence[Any]) -> list[T]:
    """Elements of ``first`` found in every one of ``others``.

    Membership uses `underbar.search.index_of`. ``first``'s order is kept and
    its duplicates are not collapsed.
    """
    return filter(
        first,
        lambda element: every(others, lambda other: index_of(other, element) >= 0),
    )


def difference(first: Sequence[T], *others: Sequence[Any]) -> list[T]:
    """Elements of ``first`` found in none of ``others``, in ``first``'s order."""
    return filter(
        first,
        lambda element: every(others, lambda other: index_of(other, element) < 0),
    )
