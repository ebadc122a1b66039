"""Search and filtering primitives built on `underbar.iteration.each`."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from .iteration import each

T = TypeVar("T")

Predicate = Callable[[Any], object]


def strict_equals(left: object, right: object) -> bool:
    """Equality without cross-type coercion.

    Two values are strictly equal when they are the same object, or when they
    are of exactly the same type and compare equal. ``1``, ``1.0`` and
    ``True`` are therefore three different values.
    """
    return left is right or (type(left) is type(right) and left == right)


def index_of(sequence: Sequence[Any], target: object) -> int:
    """Return the first index holding ``target`` (strict equality), or -1."""
    for index, value in enumerate(sequence):
        if strict_equals(value, target):
            return index
    return -1


def filter(collection: Any, predicate: Predicate) -> list[Any]:  # pylint: disable=redefined-builtin
    """Return the traversed values for which ``predicate`` is truthy."""
    results: list[Any] = []

    def visit(value: Any, _key: Any, _collection: Any) -> None:
        if predicate(value):
            results.append(value)

    each(collection, visit)
    return results


def reject(collection: Any, predicate: Predicate) -> list[Any]:
    """Return the traversed values for which ``predicate`` is falsy.

    The complement of `filter`: together they partition the traversal.
    """
    results: list[Any] = []

    def visit(value: Any, _key: Any, _collection: Any) -> None:
        if not predicate(value):
            results.append(value)

    each(collection, visit)
    return results


def uniq(sequence: Sequence[T], key: Callable[[T], Any] | None = None) -> list[T]:
    """Return a duplicate-free list, keeping the first occurrence of each value.

    Args:
        sequence: The values to deduplicate.
        key: Optional projection defining identity. By default values are
            compared with `strict_equals`. Pass ``key=str`` to collapse values
            that stringify identically (``1`` and ``"1"`` become one entry).

    Returns:
        A new list in first-occurrence order.
    """
    seen: dict[Any, None] = {}
    unhashable_seen: list[Any] = []
    results: list[T] = []

    def visit(value: T, _index: int, _sequence: Any) -> None:
        identity_key = key(value) if key is not None else value
        # type() keeps 1, 1.0 and True apart in the dict
        tagged = (type(identity_key), identity_key)
        try:
            if tagged in seen:
                return
            seen[tagged] = None
        except TypeError:  # unhashable, fall back to a linear scan
            if index_of(unhashable_seen, identity_key) >= 0:
                return
            unhashable_seen.append(identity_key)
        results.append(value)

    each(sequence, visit)
    return results
