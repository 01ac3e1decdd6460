#!/usr/bin/env python3
"""Randomized roundtrip smoke test for huffman-coding.

Goal:
- deterministic (seeded) inputs across the interesting shapes: empty, single
  symbol, two symbols, skewed text, uniform random bytes
- pack -> verify --full -> unpack, compare sha256
- JSON report on stdout, non-zero exit on the first mismatch

Usage examples:
  python tools/smoke_roundtrip.py --iters 20
  python tools/smoke_roundtrip.py --iters 200 --seed 123 --max-size 65536

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
"""

from __future__ import annotations

import argparse
import hashlib
import json
import random
import string
import sys
import time
from pathlib import Path
from typing import Any


def _gen_case(rng: random.Random, kind: str, max_size: int) -> bytes:
    n = rng.randint(1, max_size)
    if kind == "empty":
        return b""
    if kind == "single":
        return bytes([rng.randrange(256)]) * n
    if kind == "two":
        a, b = rng.sample(range(256), 2)
        return bytes(rng.choice((a, a, a, b)) for _ in range(n))
    if kind == "text":
        alphabet = string.ascii_lowercase + "     \n.,"
        return "".join(rng.choice(alphabet) for _ in range(n)).encode("ascii")
    return bytes(rng.randrange(256) for _ in range(n))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="smoke_roundtrip.py", description="huffman-coding roundtrip smoke")
    ap.add_argument("--iters", type=int, default=20)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--max-size", type=int, default=8192)
    ns = ap.parse_args(argv)

    sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
    from huffman_coding.engine.container import pack_container, unpack_container  # noqa: E402
    from huffman_coding.verify import verify_container  # noqa: E402

    rng = random.Random(ns.seed)
    kinds = ("empty", "single", "two", "text", "random")
    runs: list[dict[str, Any]] = []

    for i in range(int(ns.iters)):
        kind = kinds[i % len(kinds)]
        data = _gen_case(rng, kind, int(ns.max_size))
        t0 = time.perf_counter()
        blob = pack_container(data)
        verify_container(blob, full=True)
        back = unpack_container(blob)
        dt = time.perf_counter() - t0

        ok = hashlib.sha256(back).digest() == hashlib.sha256(data).digest()
        runs.append(
            {
                "iter": i,
                "kind": kind,
                "size": len(data),
                "container_size": len(blob),
                "seconds": round(dt, 6),
                "ok": ok,
            }
        )
        if not ok:
            print(json.dumps({"ok": False, "runs": runs}, indent=2))
            print(f"[huffman-coding] roundtrip mismatch at iter {i} ({kind})", file=sys.stderr)
            return 1

    print(json.dumps({"ok": True, "seed": ns.seed, "runs": runs}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
