#!/usr/bin/env python3
"""
Brute-force verification of the state codec.
Run this before building a table on top of the packed ids.

Checks:
- unpack(pack(s)) == s and pack(unpack(pack(s))) == pack(s) on random states
- All four rotations of a state pack to the same id
- pack(unpack(p)) == p on random valid ids
- Optional: pack(unpack(p)) == p on every valid id of one king_a slice

Usage:
    python verify_codec.py --samples 5000 --seed 7
    python verify_codec.py --king-a 0 --limit 5000000
"""

import argparse
import sys
import time

import numpy as np

from endgame.config import DEFAULT_SAMPLE_SIZE, PACKED_STATE_LIMIT, field_shifts
from endgame.state import State
from tablebase.index_space import count_valid_states, iter_valid_ids, sample_states, valid_mask


def check_state_roundtrip(states) -> int:
    failures = 0
    for state in states:
        packed = state.pack()
        restored = State.unpack(packed)
        if restored != state or restored.pack() != packed:
            failures += 1
            print(f"  roundtrip mismatch: {state} -> {packed} -> {restored}")
    return failures


def check_symmetry(states) -> int:
    failures = 0
    for state in states:
        packed = state.pack()
        rotations = (state.rotate_clockwise(), state.rotate_counterclockwise(), state.rotate_half())
        if any(r.pack() != packed for r in rotations):
            failures += 1
            print(f"  rotation changed packed id of {state}")
    return failures


def check_dense_roundtrip(ids) -> int:
    failures = 0
    for packed in ids:
        packed = int(packed)
        if State.unpack(packed).pack() != packed:
            failures += 1
            print(f"  dense id {packed} does not survive unpack/pack")
    return failures


def check_king_a_slice(king_a: int, limit: int) -> int:
    shift = field_shifts()['king_a']
    start = king_a << shift
    stop = min((king_a + 1) << shift, start + limit)

    failures = 0
    checked = 0
    t0 = time.time()
    for chunk in iter_valid_ids(start, stop, chunk_size=1 << 18):
        failures += check_dense_roundtrip(chunk)
        checked += len(chunk)
        if len(chunk):
            print(f"  ... {checked:,} ids checked ({time.time() - t0:.1f}s)")
    print(f"  {checked:,} valid ids in [{start}, {stop})")
    return failures


def verify_codec(samples: int, seed: int, king_a=None, limit: int = 1 << 22) -> bool:
    print("=" * 70)
    print("State Codec Verification")
    print("=" * 70)
    print(f"Valid packed ids: {count_valid_states():,} of {PACKED_STATE_LIMIT:,}")

    print(f"\nSampling {samples} random states (seed {seed})...")
    states = sample_states(samples, seed=seed)

    results = {}
    results['state roundtrip'] = check_state_roundtrip(states)
    results['symmetry invariance'] = check_symmetry(states)

    rng = np.random.default_rng(seed)
    candidates = rng.integers(0, PACKED_STATE_LIMIT, size=samples * 20, dtype=np.uint64)
    ids = candidates[valid_mask(candidates)][:samples]
    print(f"Drew {len(ids)} random valid ids")
    results['dense roundtrip'] = check_dense_roundtrip(ids)

    if king_a is not None:
        print(f"\nExhaustive pass over king_a = {king_a} (first {limit:,} ids)...")
        results['king_a slice'] = check_king_a_slice(king_a, limit)

    print("\n" + "=" * 70)
    print("Assessment")
    print("=" * 70)

    passed = True
    for name, failures in results.items():
        if failures:
            print(f"❌ FAIL: {name} ({failures} failures)")
            passed = False
        else:
            print(f"✓ PASS: {name}")

    print("=" * 70)
    return passed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Verify pack/unpack of endgame states",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--samples", type=int, default=DEFAULT_SAMPLE_SIZE, help="Random states and ids to check")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--king-a", type=int, default=None, choices=range(16), metavar="[0-15]",
                        help="Quadrant code of a king_a slice to check exhaustively")
    parser.add_argument("--limit", type=int, default=1 << 22, help="Ids of the slice to scan")
    args = parser.parse_args(argv)

    passed = verify_codec(args.samples, args.seed, king_a=args.king_a, limit=args.limit)
    return 0 if passed else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        print(f"\n❌ ERROR: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
