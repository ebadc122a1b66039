"""Helpers for merging key-value mappings and reading element properties."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, TypeVar

from .missing import MISSING

M = TypeVar("M", bound=MutableMapping)


def extend(target: M, *sources: Mapping[Any, Any]) -> M:
    """Copy every key of each source into ``target``; later sources win.

    Returns:
        ``target`` itself, mutated in place.
    """
    for source in sources:
        for key in source:
            target[key] = source[key]
    return target


def defaults(target: M, *sources: Mapping[Any, Any]) -> M:
    """Fill in keys that ``target`` does not define yet.

    A key is undefined when it is absent or holds ``MISSING``. The first
    source to define a key wins; existing values (``None`` included) are
    never overwritten.

    Returns:
        ``target`` itself, mutated in place.
    """
    for source in sources:
        for key in source:
            if target.get(key, MISSING) is MISSING:
                target[key] = source[key]
    return target


def get_property(element: Any, key: Any) -> Any:
    """Read ``key`` from ``element``.

    Mappings are subscripted. So is any element when ``key`` is not a string,
    which covers sequence indices such as ``get_property([1, 2], 0)``. A string
    key on anything else is read as an attribute.
    """
    if isinstance(element, Mapping) or not isinstance(key, str):
        return element[key]
    return getattr(element, key)
