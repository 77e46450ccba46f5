"""
fields.py
Fixed-width bit packing of the five state fields into one integer.

Layout (most significant first, see config.FIELD_LAYOUT):
    king_a:4 | king_b:6 | knight_0:6 | knight_1:6 | knight_2:6 | target:5 | turn:1
"""

from typing import Dict, NamedTuple

import numpy as np

from endgame.config import FIELD_LAYOUT, PACKED_STATE_LIMIT, field_shifts
from endgame.errors import ContractViolation

_SHIFTS = field_shifts()
_WIDTHS = dict(FIELD_LAYOUT)


class PackedFields(NamedTuple):
    """Field values of one packed state, before bit packing."""
    king_a: int
    king_b: int
    knight_0: int
    knight_1: int
    knight_2: int
    target: int
    turn: int

    @property
    def knights(self) -> tuple:
        return (self.knight_0, self.knight_1, self.knight_2)


def encode_fields(fields: PackedFields) -> int:
    """
    Pack field values into a single integer.

    Args:
        fields: Field values, each must fit its bit width

    Returns:
        Packed id in [0, 2**34)

    Raises:
        ContractViolation: If a field is negative or too wide
    """
    packed = 0
    for name, value in zip(PackedFields._fields, fields):
        width = _WIDTHS[name]
        if not 0 <= value < (1 << width):
            raise ContractViolation(f"Field {name}={value} does not fit in {width} bits")
        packed |= value << _SHIFTS[name]
    return packed


def decode_fields(packed: int) -> PackedFields:
    """
    Split a packed id into its field values. Exact inverse of encode_fields().

    Raises:
        ContractViolation: If packed is outside [0, 2**34)
    """
    if not 0 <= packed < PACKED_STATE_LIMIT:
        raise ContractViolation(f"Packed id {packed} out of range")

    return PackedFields(*(
        (packed >> _SHIFTS[name]) & ((1 << _WIDTHS[name]) - 1)
        for name in PackedFields._fields
    ))


def decode_fields_array(ids: np.ndarray) -> Dict[str, np.ndarray]:
    """
    Vectorised decode_fields() for a batch of packed ids.

    Args:
        ids: Array of packed ids, any integer dtype

    Returns:
        {field name: uint64 array of field values}, same shape as ids
    """
    ids = np.asarray(ids, dtype=np.uint64)
    return {
        name: (ids >> np.uint64(_SHIFTS[name])) & np.uint64((1 << _WIDTHS[name]) - 1)
        for name in PackedFields._fields
    }
