"""Label lookup for canonical category keys.

The almanac only emits canonical keys (``spring``, ``waxingcrescent``,
``cpnne`` ...). Turning them into display text in some language is the
job of a label lookup supplied by the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class LabelLookup(Protocol):
    """Callable returning the display label for a canonical key."""

    def __call__(self, key: str) -> str: ...


def identity_labels(key: str) -> str:
    """Use the canonical key itself as label."""
    return key


def mapping_labels(table: Mapping[str, str]) -> LabelLookup:
    """Label lookup backed by a mapping, falling back to the key.

    Example:
        ```python
        labels = mapping_labels({"spring": "Frühling", "cpn.short": "N"})
        labels("spring")  # -> "Frühling"
        labels("summer")  # -> "summer"
        ```
    """

    def lookup(key: str) -> str:
        return table.get(key, key)

    return lookup
