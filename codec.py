#!/usr/bin/env python3
"""
codec.py
CLI entrypoint for packing and unpacking endgame states.

Usage:
    python codec.py pack --fen "8/8/8/8/8/8/8/KNNN3k w - - 0 1" --target h1
    python codec.py unpack 123456789
    python codec.py editor --fen "8/8/8/8/8/8/8/KNNN3k w - - 0 1" --target h1
    python codec.py layout
"""

import argparse
import sys

from endgame.config import PACKED_STATE_LIMIT, print_layout_summary
from endgame.notation import editor_url, state_from_fen, state_to_fen
from endgame.state import State
from tablebase.index_space import is_valid_packed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pack KNNN vs K endgame states into dense table ids and back",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    pack_parser = subparsers.add_parser("pack", help="Print the packed id of a position")
    pack_parser.add_argument("--fen", type=str, required=True, help="Position in FEN")
    pack_parser.add_argument("--target", type=str, required=True, help="Target rim square, e.g. h1")

    unpack_parser = subparsers.add_parser("unpack", help="Print the position behind a packed id")
    unpack_parser.add_argument("packed", type=int, help=f"Packed id in [0, {PACKED_STATE_LIMIT})")

    editor_parser = subparsers.add_parser("editor", help="Print a board-editor link for a position")
    editor_parser.add_argument("--fen", type=str, required=True, help="Position in FEN")
    editor_parser.add_argument("--target", type=str, required=True, help="Target rim square, e.g. h1")

    subparsers.add_parser("layout", help="Print the packed-state wire format")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.command == "pack":
            state = state_from_fen(args.fen, args.target)
            print(state.pack())

        elif args.command == "unpack":
            if not is_valid_packed(args.packed):
                raise ValueError(f"{args.packed} is not a valid packed id")
            state = State.unpack(args.packed)
            print(f"FEN:    {state_to_fen(state)}")
            print(f"Target: {state.target}")
            print(f"Editor: {editor_url(state)}")

        elif args.command == "editor":
            print(editor_url(state_from_fen(args.fen, args.target)))

        elif args.command == "layout":
            print_layout_summary()

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
