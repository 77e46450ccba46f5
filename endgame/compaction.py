"""
compaction.py
Rank of a value among the values not yet consumed, and its inverse.

Placing pieces one after another removes squares from the pool available to
the next piece. Indexing each piece into the remaining pool instead of the
full board leaves no codes for impossible overlaps:

    compact(value, removed) = value - #{r in removed : r < value}
    expand(compact(value, removed), removed) == value

Both directions of the state codec go through this pair only.
"""

from typing import Iterable


def compact(value: int, removed: Iterable[int]) -> int:
    """
    Rank of value among the integers not in removed.

    Args:
        value: Raw index, must not be in removed
        removed: Indices already consumed (any order, pairwise distinct)

    Returns:
        value shifted down by one for every smaller removed index
    """
    return value - sum(1 for r in removed if r < value)


def expand(code: int, removed: Iterable[int]) -> int:
    """
    Inverse of compact().

    Walks the removed indices in increasing order and moves the candidate
    past every one that is not above it. The pass is monotonic so a single
    sweep is enough.

    Args:
        code: Compacted index
        removed: Same consumed indices that were given to compact()

    Returns:
        Raw index, never a member of removed
    """
    value = code
    for r in sorted(removed):
        if r <= value:
            value += 1
    return value
