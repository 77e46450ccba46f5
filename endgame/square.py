"""
square.py
Board coordinate with the dense encodings used by the state codec.

Encodings:
- Full board: x + 8*y, in [0, 63] (same numbering as python-chess)
- Rim: the 28 edge squares, in [0, 27]
    bottom edge (y=0)         -> 0-7
    top edge (y=7)            -> 8-15
    left edge (x=0, y=1..6)   -> 16-21
    right edge (x=7, y=1..6)  -> 22-27
- Quadrant: bottom-left 4x4 block, x + 4*y, in [0, 15]
"""

from dataclasses import dataclass
from functools import total_ordering

import chess

from endgame.config import BOARD_SIZE, BOARD_SQUARES, QUADRANT_SIZE, QUADRANT_SQUARES, RIM_SIZE
from endgame.errors import ContractViolation

FILES = "abcdefgh"
RANKS = "12345678"

_LAST = BOARD_SIZE - 1


@total_ordering
@dataclass(frozen=True)
class Square:
    """
    Immutable (x, y) board coordinate, x = file and y = rank, both in [0, 7].

    Squares are ordered by their full-board index (rank-major scan).
    """

    x: int
    y: int

    def __post_init__(self):
        if not (0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE):
            raise ValueError(f"({self.x}, {self.y}) is not on the board")

    def __lt__(self, other):
        if not isinstance(other, Square):
            return NotImplemented
        return self.to_index() < other.to_index()

    def __str__(self) -> str:
        return FILES[self.x] + RANKS[self.y]

    # Full board

    @classmethod
    def from_index(cls, index: int) -> "Square":
        """Inverse of to_index()."""
        if not 0 <= index < BOARD_SQUARES:
            raise ContractViolation(f"Full-board index {index} out of range")
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    def to_index(self) -> int:
        return self.x + BOARD_SIZE * self.y

    # Rim

    def is_on_rim(self) -> bool:
        return self.x in (0, _LAST) or self.y in (0, _LAST)

    @classmethod
    def from_rim_index(cls, index: int) -> "Square":
        """
        Decode a rim code.

        Args:
            index: Rim code in [0, 27]

        Returns:
            Edge square for that code

        Raises:
            ContractViolation: If index is outside [0, 27]
        """
        if not 0 <= index < RIM_SIZE:
            raise ContractViolation(f"Rim index {index} out of range")

        if index < BOARD_SIZE:
            return cls(index, 0)
        if index < 2 * BOARD_SIZE:
            return cls(index - BOARD_SIZE, _LAST)
        if index < 2 * BOARD_SIZE + BOARD_SIZE - 2:
            return cls(0, index - 2 * BOARD_SIZE + 1)
        return cls(_LAST, index - 3 * BOARD_SIZE + 3)

    def to_rim_index(self) -> int:
        """
        Encode an edge square as a rim code in [0, 27].

        Raises:
            ContractViolation: If the square is not on the rim
        """
        if not self.is_on_rim():
            raise ContractViolation(f"{self} is not on the rim")

        if self.y == 0:
            return self.x
        if self.y == _LAST:
            return self.x + BOARD_SIZE
        if self.x == 0:
            # Corners already taken by the bottom and top edges
            return self.y - 1 + 2 * BOARD_SIZE
        return self.y - 1 + 2 * BOARD_SIZE + BOARD_SIZE - 2

    # Bottom-left quadrant

    def is_in_quadrant(self) -> bool:
        return self.x < QUADRANT_SIZE and self.y < QUADRANT_SIZE

    @classmethod
    def from_quadrant_index(cls, index: int) -> "Square":
        if not 0 <= index < QUADRANT_SQUARES:
            raise ContractViolation(f"Quadrant index {index} out of range")
        return cls(index % QUADRANT_SIZE, index // QUADRANT_SIZE)

    def to_quadrant_index(self) -> int:
        if not self.is_in_quadrant():
            raise ContractViolation(f"{self} is not in the bottom-left quadrant")
        return self.x + QUADRANT_SIZE * self.y

    # Rotations about the board centre

    def rotate_clockwise(self) -> "Square":
        return Square(self.y, _LAST - self.x)

    def rotate_counterclockwise(self) -> "Square":
        return Square(_LAST - self.y, self.x)

    def rotate_half(self) -> "Square":
        return Square(_LAST - self.x, _LAST - self.y)

    # Offsets

    def is_out_of_bounds(self, dx: int, dy: int) -> bool:
        """True if moving by (dx, dy) leaves the board."""
        x, y = self.x + dx, self.y + dy
        return not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE)

    def add(self, dx: int, dy: int) -> "Square":
        """
        Square reached by moving (dx, dy).

        Raises:
            ValueError: If the result leaves the board (check with
                is_out_of_bounds() first)
        """
        return Square(self.x + dx, self.y + dy)

    # Text and python-chess interop

    @classmethod
    def parse(cls, text: str) -> "Square":
        """
        Parse algebraic notation such as "e4".

        Args:
            text: Two characters, file a-h then rank 1-8

        Returns:
            Parsed square

        Raises:
            ValueError: Naming the defect (length, file or rank)
        """
        if len(text) != 2:
            raise ValueError(f"{text!r} is not a valid square (has to have length 2)")

        file_char, rank_char = text[0].lower(), text[1]
        if file_char not in FILES:
            raise ValueError(f"{text!r} is not a valid square (file has to be between 'a' and 'h')")
        if rank_char not in RANKS:
            raise ValueError(f"{text!r} is not a valid square (rank has to be between 1 and 8)")

        return cls(FILES.index(file_char), RANKS.index(rank_char))

    @classmethod
    def from_chess(cls, square: chess.Square) -> "Square":
        return cls(chess.square_file(square), chess.square_rank(square))

    def to_chess(self) -> chess.Square:
        return chess.square(self.x, self.y)
