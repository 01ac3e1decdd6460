#!/usr/bin/env python3
"""Run the architecture boundary checks without pytest (CI pre-step / git hook)."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    test_path = repo_root / "tests" / "test_arch_boundaries.py"
    if not test_path.is_file():
        print("ERROR: tests/test_arch_boundaries.py not found.", file=sys.stderr)
        return 3

    spec = importlib.util.spec_from_file_location("_arch_boundaries", test_path)
    if spec is None or spec.loader is None:
        print(f"ERROR: cannot load {test_path}", file=sys.stderr)
        return 3
    mod = importlib.util.module_from_spec(spec)

    try:
        spec.loader.exec_module(mod)
        checks = [getattr(mod, n) for n in sorted(dir(mod)) if n.startswith("test_")]
        if not checks:
            print("ERROR: no checks found in test_arch_boundaries.py.", file=sys.stderr)
            return 3
        for fn in checks:
            fn()
        print(f"OK: architecture boundaries respected ({len(checks)} checks).")
        return 0
    except AssertionError as e:
        print(str(e), file=sys.stderr)
        return 2
    except Exception as e:
        print(f"ERROR: unexpected failure: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
