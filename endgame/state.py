"""
state.py
KNNN vs K endgame state, its symmetry canonicalization and its dense packing.

A state is the white king (king_a), the black king (king_b), three white
knights, a target square on the rim and the side to move. Rotating the
board by a quarter turn gives an equivalent state, so every state is packed
through its canonical representative:

1. Rotate until the white king sits in the bottom-left quadrant
2. Sort the knights by full-board index
3. Index each piece into the squares not consumed by earlier pieces
4. Bit-pack the five fields (see fields.py)

Invariant:
    State.unpack(s.pack()) == s and State.unpack(p).pack() == p
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from endgame.compaction import compact, expand
from endgame.config import QUADRANT_SIZE
from endgame.errors import ContractViolation
from endgame.fields import PackedFields, decode_fields, encode_fields
from endgame.square import Square


@dataclass(frozen=True, eq=False)
class State:
    """
    Immutable endgame state.

    Equality and hashing are symmetry-aware: two states are equal when
    their normalized forms agree, regardless of rotation or knight order.
    """

    king_a: Square
    king_b: Square
    knights: Tuple[Square, Square, Square]
    target: Square
    side_to_move: bool

    def __post_init__(self):
        object.__setattr__(self, 'knights', tuple(self.knights))

        if len(self.knights) != 3:
            raise ValueError(f"Expected 3 knights, got {len(self.knights)}")

        pieces = self.pieces()
        if len(set(pieces)) != len(pieces):
            raise ValueError(f"Pieces must stand on distinct squares: {[str(p) for p in pieces]}")

        if not self.target.is_on_rim():
            raise ValueError(f"Target {self.target} is not on the rim")

    def pieces(self) -> Tuple[Square, ...]:
        """The five occupied squares: kings first, then knights."""
        return (self.king_a, self.king_b) + self.knights

    # Transforms

    def map_squares(self, f: Callable[[Square], Square]) -> "State":
        """Apply one square transform to every square, keeping the turn."""
        return State(
            king_a=f(self.king_a),
            king_b=f(self.king_b),
            knights=tuple(f(knight) for knight in self.knights),
            target=f(self.target),
            side_to_move=self.side_to_move,
        )

    def rotate_clockwise(self) -> "State":
        return self.map_squares(Square.rotate_clockwise)

    def rotate_counterclockwise(self) -> "State":
        return self.map_squares(Square.rotate_counterclockwise)

    def rotate_half(self) -> "State":
        return self.map_squares(Square.rotate_half)

    def sort_knights(self) -> "State":
        """
        Return the state with knights in strictly increasing order.

        The middle knight is whatever is left after cancelling min and max
        out of the xor of all three indices. Needs pairwise distinct
        knights, which construction guarantees.

        Raises:
            ContractViolation: If the result is not strictly increasing
        """
        a, b, c = self.knights
        low = min(a, b, c)
        high = max(a, b, c)
        middle = Square.from_index(
            a.to_index() ^ b.to_index() ^ c.to_index() ^ low.to_index() ^ high.to_index()
        )

        if not low < middle < high:
            raise ContractViolation(f"Knights {a}, {b}, {c} cannot be ordered strictly")

        return State(self.king_a, self.king_b, (low, middle, high), self.target, self.side_to_move)

    def normalize(self) -> "State":
        """
        Canonical representative of the rotation class.

        Picks the rotation that moves king_a into the bottom-left quadrant
        (x < 4, y < 4), then sorts the knights. Idempotent.
        """
        right = self.king_a.x >= QUADRANT_SIZE
        top = self.king_a.y >= QUADRANT_SIZE

        if right and not top:
            rotated = self.rotate_clockwise()
        elif top and not right:
            rotated = self.rotate_counterclockwise()
        elif right and top:
            rotated = self.rotate_half()
        else:
            rotated = self

        return rotated.sort_knights()

    # Equality

    def _canonical_key(self) -> tuple:
        s = self.normalize()
        return (s.king_a, s.king_b, s.knights, s.target, s.side_to_move)

    def __eq__(self, other):
        if not isinstance(other, State):
            return NotImplemented
        return self._canonical_key() == other._canonical_key()

    def __hash__(self):
        return hash(self._canonical_key())

    # Packing

    def pack(self) -> int:
        """Dense id of this state's symmetry class."""
        return self.normalize()._pack_normalized()

    def _pack_normalized(self) -> int:
        king_a = self.king_a.to_index()
        king_b = self.king_b.to_index()

        consumed = [king_a, king_b]
        knight_codes = []
        for knight in self.knights:
            index = knight.to_index()
            knight_codes.append(compact(index, consumed))
            consumed.append(index)

        return encode_fields(PackedFields(
            king_a=self.king_a.to_quadrant_index(),
            king_b=compact(king_b, [king_a]),
            knight_0=knight_codes[0],
            knight_1=knight_codes[1],
            knight_2=knight_codes[2],
            target=self.target.to_rim_index(),
            turn=1 if self.side_to_move else 0,
        ))

    @classmethod
    def unpack(cls, packed: int) -> "State":
        """
        Rebuild the normalized state behind a packed id.

        Args:
            packed: Id produced by pack()

        Returns:
            Normalized state, already in canonical form

        Raises:
            ContractViolation: If a field does not decode to a board square
                or the knights do not come out strictly increasing
        """
        fields = decode_fields(packed)

        king_a = Square.from_quadrant_index(fields.king_a)
        king_b_index = expand(fields.king_b, [king_a.to_index()])

        consumed = [king_a.to_index(), king_b_index]
        knight_indices = []
        for code in fields.knights:
            index = expand(code, consumed)
            knight_indices.append(index)
            consumed.append(index)

        if not knight_indices[0] < knight_indices[1] < knight_indices[2]:
            raise ContractViolation(f"Packed id {packed} decodes to unordered knights {knight_indices}")

        return cls(
            king_a=king_a,
            king_b=Square.from_index(king_b_index),
            knights=tuple(Square.from_index(i) for i in knight_indices),
            target=Square.from_rim_index(fields.target),
            side_to_move=fields.turn == 1,
        )
