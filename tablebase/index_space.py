"""
index_space.py
The space of packed ids as seen by a search driver enumerating the table.

Not every 34-bit integer is a state: the black king code stops at 62, the
knight codes must be non-decreasing and stop at 59, and the target code
stops at 27. The helpers here tell valid ids apart without unpacking them,
so a driver can walk the table in large numpy chunks.
"""

import math
from typing import Iterator, List, Optional

import numpy as np

from endgame.config import (
    BOARD_SQUARES, DEFAULT_CHUNK_SIZE, PACKED_STATE_LIMIT, QUADRANT_SQUARES, RIM_SIZE
)
from endgame.fields import decode_fields, decode_fields_array
from endgame.square import Square
from endgame.state import State

# Largest code each compacted field can take
MAX_KING_B = BOARD_SQUARES - 2          # 63 squares left -> 0..62
MAX_KNIGHT = BOARD_SQUARES - 2 - 3      # highest knight picks from 60 squares -> 0..59
MAX_TARGET = RIM_SIZE - 1


def is_valid_packed(packed: int) -> bool:
    """True if State.unpack(packed) succeeds."""
    if not 0 <= packed < PACKED_STATE_LIMIT:
        return False

    f = decode_fields(packed)
    return (
        f.king_b <= MAX_KING_B
        and f.knight_0 <= f.knight_1 <= f.knight_2 <= MAX_KNIGHT
        and f.target <= MAX_TARGET
    )


def valid_mask(ids: np.ndarray) -> np.ndarray:
    """
    Vectorised is_valid_packed().

    Args:
        ids: Array of non-negative ids, anything from 2**34 up is invalid

    Returns:
        Boolean array, same shape as ids
    """
    ids = np.asarray(ids, dtype=np.uint64)
    f = decode_fields_array(ids)
    return (
        (ids < np.uint64(PACKED_STATE_LIMIT))
        & (f['king_b'] <= MAX_KING_B)
        & (f['knight_0'] <= f['knight_1'])
        & (f['knight_1'] <= f['knight_2'])
        & (f['knight_2'] <= MAX_KNIGHT)
        & (f['target'] <= MAX_TARGET)
    )


def count_valid_states() -> int:
    """
    Number of valid packed ids (= number of symmetry classes).

    Non-decreasing triples of knight codes in [0, 59] are the 3-subsets
    of 62 items.
    """
    return QUADRANT_SQUARES * (MAX_KING_B + 1) * math.comb(MAX_KNIGHT + 3, 3) * RIM_SIZE * 2


def iter_valid_ids(
    start: int = 0,
    stop: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[np.ndarray]:
    """
    Yield the valid ids of [start, stop) in increasing order.

    Args:
        start: First id to consider
        stop: One past the last id (default: end of the packed range)
        chunk_size: Ids examined per yielded array

    Yields:
        uint64 arrays of valid ids, possibly empty
    """
    if stop is None:
        stop = PACKED_STATE_LIMIT
    if not 0 <= start <= stop <= PACKED_STATE_LIMIT:
        raise ValueError(f"Invalid id range [{start}, {stop})")

    for lo in range(start, stop, chunk_size):
        ids = np.arange(lo, min(lo + chunk_size, stop), dtype=np.uint64)
        yield ids[valid_mask(ids)]


def sample_states(n: int, seed: Optional[int] = None) -> List[State]:
    """
    Draw random states (not normalized) with distinct piece squares.

    Args:
        n: Number of states
        seed: Seed for numpy's default_rng

    Returns:
        List of n states
    """
    rng = np.random.default_rng(seed)
    states = []
    for _ in range(n):
        pieces = rng.choice(BOARD_SQUARES, size=5, replace=False)
        king_a, king_b, *knights = (Square.from_index(int(i)) for i in pieces)
        states.append(State(
            king_a=king_a,
            king_b=king_b,
            knights=tuple(knights),
            target=Square.from_rim_index(int(rng.integers(RIM_SIZE))),
            side_to_move=bool(rng.integers(2)),
        ))
    return states
