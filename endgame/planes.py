"""
planes.py
Encode endgame states as tensor planes for a value network trained on the table.

Encoding scheme:
- 5 planes of 8x8 each, indexed [plane, y, x]
- Plane 0: White king
- Plane 1: Black king
- Plane 2: White knights
- Plane 3: Target square
- Plane 4: Side to move (all ones when white moves)

States are normalized first, so every member of a symmetry class gives the
same tensor.

The packing core does not use this module; it only reads states.
"""

from typing import Iterable

import torch

from endgame.config import BOARD_SIZE
from endgame.state import State

NUM_PLANES = 5


def encode_state(state: State) -> torch.Tensor:
    """
    Encode state as 5x8x8 tensor.

    Args:
        state: State to encode

    Returns:
        Tensor of shape [1, 5, 8, 8], dtype float32, binary values

    Invariant:
        Output is identical for all rotations of the same state
    """
    planes = torch.zeros((NUM_PLANES, BOARD_SIZE, BOARD_SIZE), dtype=torch.float32)
    _fill_planes(state.normalize(), planes)
    return planes.unsqueeze(0)


def encode_packed_batch(ids: Iterable[int]) -> torch.Tensor:
    """
    Encode a batch of packed ids.

    Args:
        ids: Valid packed ids

    Returns:
        Tensor of shape [N, 5, 8, 8]
    """
    ids = [int(i) for i in ids]
    planes = torch.zeros((len(ids), NUM_PLANES, BOARD_SIZE, BOARD_SIZE), dtype=torch.float32)
    for row, packed in enumerate(ids):
        _fill_planes(State.unpack(packed), planes[row])
    return planes


def _fill_planes(state: State, planes: torch.Tensor) -> None:
    """
    Helper: write a normalized state into planes (modified in-place).
    """
    planes[0, state.king_a.y, state.king_a.x] = 1.0
    planes[1, state.king_b.y, state.king_b.x] = 1.0
    for knight in state.knights:
        planes[2, knight.y, knight.x] = 1.0
    planes[3, state.target.y, state.target.x] = 1.0

    if state.side_to_move:
        planes[4, :, :] = 1.0
