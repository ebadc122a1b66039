"""The ``MISSING`` marker for absent values.

``None`` is an ordinary value a collection can hold, so absence needs its own
marker. `underbar.advanced.zip` pads short inputs with ``MISSING`` and
`underbar.objects.defaults` treats a key holding it as not yet defined.
"""

from dataclasses import dataclass


@dataclass(frozen=True, repr=False)
class _MissingType:
    """Type of ``MISSING``. There is exactly one instance."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        # pickle and copy resolve the module-level name instead of rebuilding
        return "MISSING"


MISSING = _MissingType()


def is_missing(value: object) -> bool:
    """Return True if ``value`` is ``MISSING``."""
    return value is MISSING
