"""Transform and fold primitives.

`reduce` is the pivotal operation here: `contains`, `every` and `some` are
plain folds over it, and higher layers (`underbar.advanced`) lean on them in
turn.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from .iteration import each, identity
from .objects import get_property
from .search import Predicate, strict_equals

# pylint: disable=redefined-builtin

_UNSEEDED: Final = object()


def map(collection: Any, iterator: Callable[[Any], Any]) -> list[Any]:
    """Return ``iterator(value)`` for every traversed value, in order."""
    results: list[Any] = []
    each(collection, lambda value, _key, _collection: results.append(iterator(value)))
    return results


def pluck(collection: Any, key: Any) -> list[Any]:
    """Return the ``key`` property of every traversed element.

    Example:
        >>> pluck([{"age": 30}, {"age": 12}], "age")
        [30, 12]
    """
    return map(collection, lambda element: get_property(element, key))


def reduce(
    collection: Any,
    iterator: Callable[[Any, Any], Any],
    accumulator: Any = _UNSEEDED,
) -> Any:
    """Fold ``collection`` left to right with ``iterator(accumulator, value)``.

    When ``accumulator`` is given (``None`` included) it seeds the fold and
    every element is passed to ``iterator``. When it is omitted, the first
    traversed element becomes the seed and is never passed to ``iterator``,
    so a single-element collection comes back untouched.

    Args:
        collection: A sequence or a mapping. It is never mutated.
        iterator: The combining function.
        accumulator: Optional seed.

    Returns:
        The final accumulator.

    Raises:
        TypeError: If ``collection`` is empty and no seed was given.

    Example:
        >>> reduce([1, 2, 3], lambda total, n: total + n, 0)
        6
        >>> reduce([5], lambda total, n: total + n * n)
        5
    """
    seeded = accumulator is not _UNSEEDED

    def visit(value: Any, _key: Any, _collection: Any) -> None:
        nonlocal accumulator, seeded
        if seeded:
            accumulator = iterator(accumulator, value)
        else:
            accumulator = value
            seeded = True

    each(collection, visit)
    if not seeded:
        raise TypeError("reduce() of empty collection with no initial value")
    return accumulator


def contains(collection: Any, target: object) -> bool:
    """Return True if ``collection`` holds ``target`` (strict equality)."""
    return reduce(
        collection,
        lambda was_found, value: was_found or strict_equals(value, target),
        False,
    )


def every(collection: Any, predicate: Predicate | None = None) -> bool:
    """Return True if every element passes ``predicate`` (or is truthy).

    Vacuously True for an empty collection. ``predicate`` is not called again
    once an element has failed.
    """
    test = predicate if predicate is not None else identity
    return reduce(
        collection, lambda all_passed, value: all_passed and bool(test(value)), True
    )


def some(collection: Any, predicate: Predicate | None = None) -> bool:
    """Return True if any element passes ``predicate`` (or is truthy).

    Vacuously False for an empty collection. ``predicate`` is not called again
    once an element has passed.
    """
    test = predicate if predicate is not None else identity
    return reduce(
        collection, lambda any_passed, value: any_passed or bool(test(value)), False
    )
