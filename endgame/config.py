"""
config.py
Board constants and the packed-state wire format.

The field layout is a stable wire format: any persisted table indexed by
packed ids is invalidated if the order or width of a field changes.
"""

# Board geometry
BOARD_SIZE = 8
BOARD_SQUARES = BOARD_SIZE * BOARD_SIZE   # 64
QUADRANT_SIZE = BOARD_SIZE // 2           # 4
QUADRANT_SQUARES = QUADRANT_SIZE ** 2     # 16
RIM_SIZE = 4 * BOARD_SIZE - 4             # 28

# Wire format, most significant field first
# Format: (field name, bit width)
FIELD_LAYOUT = (
    ('king_a', 4),     # quadrant code of the white king
    ('king_b', 6),     # compacted full-board index of the black king
    ('knight_0', 6),   # compacted index of the lowest knight
    ('knight_1', 6),
    ('knight_2', 6),   # compacted index of the highest knight
    ('target', 5),     # rim code of the target square
    ('turn', 1),       # 1 = white to move
)

PACKED_BITS = sum(width for _, width in FIELD_LAYOUT)   # 34
PACKED_STATE_LIMIT = 1 << PACKED_BITS

# Notation glue
EDITOR_URL = "https://lichess.org/editor/"
FEN_SUFFIX_WHITE = " w - - 0 1"
FEN_SUFFIX_BLACK = " b - - 0 1"

# Verification defaults
DEFAULT_SAMPLE_SIZE = 2000
DEFAULT_CHUNK_SIZE = 1 << 20


def field_shifts() -> dict:
    """
    Get the bit offset of every field inside a packed id.

    Returns:
        Dictionary {field name: shift}, turn flag at shift 0
    """
    shifts = {}
    shift = PACKED_BITS
    for name, width in FIELD_LAYOUT:
        shift -= width
        shifts[name] = shift
    return shifts


def print_layout_summary():
    """Print summary of the packed-state wire format."""
    shifts = field_shifts()

    print("=" * 70)
    print("PACKED STATE LAYOUT")
    print("=" * 70)
    print(f"{'Field':<10} {'Bits':<6} {'Shift':<7} {'Max code':<10}")
    print("-" * 70)
    for name, width in FIELD_LAYOUT:
        print(f"{name:<10} {width:<6} {shifts[name]:<7} {(1 << width) - 1:<10}")
    print("-" * 70)
    print(f"Total: {PACKED_BITS} bits, packed ids in [0, {PACKED_STATE_LIMIT})")
    print("=" * 70)


if __name__ == "__main__":
    print_layout_summary()
