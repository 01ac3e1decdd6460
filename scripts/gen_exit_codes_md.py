#!/usr/bin/env python3
"""Generate docs/exit_codes.md from src/huffman_coding/errors.py (single source of truth).

With ``--check`` nothing is written: exit 1 if the file on disk is stale.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROG = "huffman-coding"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Render the exit code table to Markdown.")
    ap.add_argument("--check", action="store_true", help="only compare with the file on disk")
    ap.add_argument("-o", "--output", type=Path, default=None, help="default: docs/exit_codes.md")
    args = ap.parse_args(argv)

    repo = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo / "src"))

    from huffman_coding import errors  # noqa: E402

    out = args.output if args.output is not None else repo / "docs" / "exit_codes.md"
    text = errors.render_exit_codes_markdown()

    if args.check:
        current = out.read_text(encoding="utf-8") if out.exists() else None
        if current != text:
            print(f"[{PROG}] {out} non aggiornato: rigenera con scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[{PROG}] {out} OK")
        return 0

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    print(f"[{PROG}] wrote {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
