"""UNDERBAR

A small functional utility library: generic operations over collections
(ordered sequences and key-value mappings) and higher-order function
decorators (memoization, one-shot invocation, throttling, deferred execution).

Every operation is importable from the package root:

    >>> from underbar import reduce, flatten, memoize
    >>> reduce(flatten([1, [2, [3]]]), lambda total, n: total + n, 0)
    6
"""

import logging

from .advanced import (
    difference,
    flatten,
    intersection,
    invoke,
    shuffle,
    sort_by,
    zip,
)
from .fold import contains, every, map, pluck, reduce, some
from .functions import Memoized, Once, Throttled, delay, memoize, once, throttle
from .iteration import each, first, identity, last
from .missing import MISSING, is_missing
from .objects import defaults, extend
from .search import filter, index_of, reject, strict_equals, uniq

# pylint: disable=redefined-builtin

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "MISSING",
    "Memoized",
    "Once",
    "Throttled",
    "contains",
    "defaults",
    "delay",
    "difference",
    "each",
    "every",
    "extend",
    "filter",
    "first",
    "flatten",
    "identity",
    "index_of",
    "intersection",
    "invoke",
    "is_missing",
    "last",
    "map",
    "memoize",
    "once",
    "pluck",
    "reduce",
    "reject",
    "shuffle",
    "some",
    "sort_by",
    "strict_equals",
    "throttle",
    "uniq",
    "zip",
]
__version__ = "0.1.0"
