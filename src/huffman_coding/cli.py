"""huffman-coding CLI.

This is the stable CLI entrypoint (console-script: ``huffman-coding``).

Output policy:
  - results on stdout (plain text, or JSON with ``--json``)
  - one-line diagnostics on stderr, prefixed ``[huffman-coding]``
  - exit codes from ``huffman_coding.errors``
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from huffman_coding.errors import EXIT_GENERIC, EXIT_OK, HuffmanError, UsageError

PROG = "huffman-coding"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _require_file(path: Path) -> None:
    if not path.is_file():
        raise UsageError(f"file non trovato: {path}")


def _read_input(path: Path) -> bytes:
    _require_file(path)
    return path.read_bytes()


def _cmd_compress(input_path: Path, output_path: Path) -> int:
    from huffman_coding.engine.container import compress_file

    _require_file(input_path)
    compress_file(input_path, output_path)
    return EXIT_OK


def _cmd_decompress(input_path: Path, output_path: Path) -> int:
    from huffman_coding.engine.container import decompress_file

    _require_file(input_path)
    decompress_file(input_path, output_path)
    return EXIT_OK


def _cmd_verify(input_path: Path, *, full: bool) -> int:
    from huffman_coding.verify import verify_container_file

    verify_container_file(input_path, full=full)
    print("OK")
    return EXIT_OK


def _cmd_table(input_path: Path, *, as_json: bool) -> int:
    from huffman_coding.core.huffman_table import HuffmanTable

    table = HuffmanTable.from_bytes(_read_input(input_path))
    if as_json:
        obj = {str(sym): str(code) for sym, code in table.items()}
        print(json.dumps(obj, sort_keys=False))
        return EXIT_OK
    for sym, code in table.items():
        shown = chr(sym) if 0x21 <= sym < 0x7F else "."
        print(f"{sym:3d} {shown} {str(code) or '(empty)'}")
    return EXIT_OK


def _cmd_stats(input_path: Path, *, as_json: bool, zstd_level: int) -> int:
    from huffman_coding.stats import collect_stats

    st = collect_stats(_read_input(input_path), zstd_level=zstd_level)
    if as_json:
        print(json.dumps(st.to_dict(), sort_keys=True))
        return EXIT_OK
    print(f"input_size        {st.input_size}")
    print(f"distinct_symbols  {st.distinct_symbols}")
    print(f"entropy           {st.entropy_bits_per_symbol:.4f} bits/symbol")
    print(f"avg_code_length   {st.avg_code_length:.4f} bits/symbol")
    print(f"max_code_length   {st.max_code_length}")
    print(f"huffman_bits      {st.huffman_bits}")
    print(f"container_size    {st.container_size} ({st.ratio:.3f})")
    zs = "n/a (zstandard non installato)" if st.zstd_size is None else str(st.zstd_size)
    print(f"zstd_{st.zstd_level:<13d}{zs}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Static Huffman byte compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file into a HUF container")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress a HUF container")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Verify a HUF container")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Rebuild the tree and decode the bitstream")
    _add_common_args(p_v)

    p_t = sub.add_parser("table", help="Show the code table of a raw input file")
    p_t.add_argument("input", type=Path)
    p_t.add_argument("--json", action="store_true", help="Print {symbol: code} as JSON")
    _add_common_args(p_t)

    p_s = sub.add_parser("stats", help="Entropy / size report for a raw input file")
    p_s.add_argument("input", type=Path)
    p_s.add_argument("--json", action="store_true", help="Print the report as JSON")
    p_s.add_argument(
        "--zstd-level", type=int, default=19, help="zstd level for the reference size (default: 19)"
    )
    _add_common_args(p_s)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _cmd_compress(ns.input, ns.output)
        if ns.cmd == "decompress":
            return _cmd_decompress(ns.input, ns.output)
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, full=bool(ns.full))
        if ns.cmd == "table":
            return _cmd_table(ns.input, as_json=bool(ns.json))
        if ns.cmd == "stats":
            return _cmd_stats(ns.input, as_json=bool(ns.json), zstd_level=int(ns.zstd_level))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except HuffmanError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[{PROG}] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[{PROG}] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
