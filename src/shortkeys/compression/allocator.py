"""Short code allocation for field names.

This module turns field names into short codes that are unique within a naming
scope. Allocation is deterministic: the same names in the same order always
produce the same codes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


def _candidates(name: str) -> Iterator[str]:
    """Yield short code candidates for a lowercased name, in preference order."""
    first = name[:1]
    if first:
        yield first

    if len(name) >= 2:
        yield name[:2]

    for char in name[1:]:
        yield first + char

    suffix = 1
    while True:
        yield f"{first}{suffix}"
        suffix += 1


def short_name_for(name: str, used: set[str] | frozenset[str]) -> str:
    """Generate a short code for a field name, avoiding codes already in use.

    The name is lowercased, then the first unused candidate wins:

    1. First character (``summary`` -> ``s``)
    2. First two characters (``samples`` -> ``sa``)
    3. First character plus each later character (``source`` -> ``so``, ``su``, ...)
    4. First character plus an incrementing number (``ab`` -> ``a1``, ``a2``, ...)

    This function does not reserve the code; see ShortNameAllocator.

    Args:
        name: Original field name
        used: Codes already claimed in the naming scope

    Returns:
        A code not contained in ``used``

    Example:
        >>> short_name_for("summary", {"s"})
        'su'
        >>> short_name_for("ab", {"a", "ab"})
        'a1'
    """
    # _candidates() is unbounded, so next() always finds one
    return next(c for c in _candidates(str(name).lower()) if c not in used)


class ShortNameAllocator:
    """Allocates short codes within one naming scope.

    Every code handed out is reserved immediately, so later calls on the same
    allocator never see it again. Codes are never released.

    Example:
        >>> allocator = ShortNameAllocator()
        >>> allocator.allocate("summary")
        's'
        >>> allocator.allocate("samples")
        'sa'
        >>> allocator.allocate("source")
        'so'
    """

    def __init__(self, used: Iterable[str] = ()) -> None:
        """Initialize a naming scope.

        Args:
            used: Codes to treat as already claimed
        """
        self._used: set[str] = set(used)

    @property
    def used(self) -> frozenset[str]:
        """Codes claimed so far."""
        return frozenset(self._used)

    def __contains__(self, code: object) -> bool:
        return code in self._used

    def __len__(self) -> int:
        return len(self._used)

    def allocate(self, name: str) -> str:
        """Allocate and reserve a short code for ``name``.

        Args:
            name: Original field name

        Returns:
            The reserved short code
        """
        code = short_name_for(name, self._used)
        self._used.add(code)

        if len(code) > 1:
            logger.debug("Field %r collided on first letter, allocated %r", name, code)

        return code
