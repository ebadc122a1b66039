"""Canonical argument keys for memoization.

`argument_key` turns a call's positional and keyword arguments into a
hashable, structural key:

- positional arguments and sequences are order-sensitive;
- mappings and sets are order-insensitive (they compare that way too);
- every atom is tagged with its type, so ``1``, ``1.0``, ``True`` and ``"1"``
  produce four different keys;
- argument lists that are equal by value produce equal keys.

Only primitives (``None``, ``bool``, ``int``, ``float``, ``complex``, ``str``,
``bytes``) and plain containers of them (``list``, ``tuple``, ``dict``,
``set``, ``frozenset``, nested arbitrarily) are supported. Anything else,
functions and cyclic structures included, raises
`UnserializableArgumentsError`.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Mapping
from typing import Any

from .errors import UnserializableArgumentsError

_ATOMS = (type(None), bool, int, float, complex, str, bytes)


def argument_key(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> Hashable:
    """Return the canonical cache key for a call's arguments.

    Args:
        args: Positional arguments, in call order.
        kwargs: Keyword arguments; their order does not matter.

    Returns:
        A hashable key. Two calls with equal-by-value arguments get equal keys.

    Raises:
        UnserializableArgumentsError: If an argument cannot be encoded.
    """
    active: set[int] = set()
    positional = tuple(_encode(value, active) for value in args)
    if not kwargs:
        return positional
    keywords = frozenset((name, _encode(value, active)) for name, value in kwargs.items())
    return (positional, keywords)


def _encode(value: Any, active: set[int]) -> Hashable:
    value_type = type(value)
    if value_type in _ATOMS:
        if value_type is float and math.isnan(value):
            return ("float", "nan")  # nan != nan would never hit the cache
        return (value_type.__name__, value)

    if not isinstance(value, (list, tuple, Mapping, set, frozenset)):
        raise UnserializableArgumentsError(
            value, "only primitives and plain containers are supported"
        )

    # Containers: guard against cycles along the current path.
    marker = id(value)
    if marker in active:
        raise UnserializableArgumentsError(value, "cyclic structure")
    active.add(marker)
    try:
        if isinstance(value, Mapping):
            return (
                "mapping",
                frozenset(
                    (_encode(key, active), _encode(item, active))
                    for key, item in value.items()
                ),
            )
        if isinstance(value, (set, frozenset)):
            return ("set", frozenset(_encode(item, active) for item in value))
        return (value_type.__name__, tuple(_encode(item, active) for item in value))
    finally:
        active.discard(marker)
