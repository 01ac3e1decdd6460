from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from huffman_coding.cli import main
from huffman_coding.errors import (
    EXIT_EMPTY_INPUT,
    EXIT_GENERIC,
    EXIT_INVALID_DATA,
    EXIT_OK,
    EXIT_UNSUPPORTED_VERSION,
    EXIT_USAGE,
)

pytestmark = pytest.mark.p1

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run_cli(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run huffman-coding CLI through a python -c wrapper.

    This avoids assuming the console-script entrypoint is installed.
    """
    cmd = [
        sys.executable,
        "-c",
        "from huffman_coding.cli import main; raise SystemExit(main())",
        *args,
    ]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(SRC_DIR), env.get("PYTHONPATH")) if p)
    return subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        env=env,
        text=True,
        capture_output=True,
    )


def test_cli_file_roundtrip_subprocess(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.huf"
    back = tmp_path / "back.txt"
    inp.write_text("ciao mondo\n" * 100, encoding="utf-8")

    r = _run_cli("compress", str(inp), str(out))
    assert r.returncode == 0, (r.stdout, r.stderr)

    r = _run_cli("verify", str(out), "--full")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert r.stdout.strip() == "OK"

    r = _run_cli("decompress", str(out), str(back))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_bytes() == inp.read_bytes()


def test_cli_roundtrip_in_process(tmp_path: Path) -> None:
    inp = tmp_path / "in.bin"
    out = tmp_path / "out.huf"
    back = tmp_path / "back.bin"
    inp.write_bytes(bytes(range(256)) * 4 + b"\x00" * 500)

    assert main(["compress", str(inp), str(out)]) == EXIT_OK
    assert main(["decompress", str(out), str(back)]) == EXIT_OK
    assert back.read_bytes() == inp.read_bytes()


def test_cli_empty_file_roundtrip(tmp_path: Path) -> None:
    inp = tmp_path / "empty"
    out = tmp_path / "empty.huf"
    back = tmp_path / "back"
    inp.write_bytes(b"")

    assert main(["compress", str(inp), str(out)]) == EXIT_OK
    assert main(["decompress", str(out), str(back)]) == EXIT_OK
    assert back.read_bytes() == b""


def test_cli_table_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "in.bin"
    inp.write_bytes(bytes([0, 0, 0, 1, 1, 2, 2, 3, 255]))

    assert main(["table", str(inp), "--json"]) == EXIT_OK
    obj = json.loads(capsys.readouterr().out)
    assert obj == {"0": "00", "1": "10", "2": "11", "3": "010", "255": "011"}


def test_cli_table_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"aab")

    assert main(["table", str(inp)]) == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines == [" 97 a 0", " 98 b 1"]


def test_cli_table_empty_input_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "empty"
    inp.write_bytes(b"")

    assert main(["table", str(inp)]) == EXIT_EMPTY_INPUT
    assert capsys.readouterr().err.startswith("[huffman-coding] ")


def test_cli_stats_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"aab")

    assert main(["stats", str(inp), "--json", "--zstd-level", "3"]) == EXIT_OK
    obj = json.loads(capsys.readouterr().out)
    assert obj["input_size"] == 3
    assert obj["huffman_bits"] == 3
    assert obj["container_size"] == 12
    assert obj["zstd_level"] == 3


def test_cli_stats_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"hello hello")

    assert main(["stats", str(inp)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "entropy" in out
    assert "container_size" in out


def test_cli_exit_codes(tmp_path: Path) -> None:
    missing = tmp_path / "missing.huf"
    assert main(["decompress", str(missing), str(tmp_path / "o")]) == EXIT_USAGE

    bad = tmp_path / "bad.huf"
    bad.write_bytes(b"XYZ\x01\x00\x00\x00")
    assert main(["decompress", str(bad), str(tmp_path / "o")]) == EXIT_GENERIC

    v2 = tmp_path / "v2.huf"
    v2.write_bytes(bytes.fromhex("48554602000000"))
    assert main(["verify", str(v2)]) == EXIT_UNSUPPORTED_VERSION

    # bits end in the middle of a code
    mid = tmp_path / "mid.huf"
    mid.write_bytes(bytes.fromhex("485546010913050003010201020101fc0102bd20"))
    assert main(["decompress", str(mid), str(tmp_path / "o")]) == EXIT_INVALID_DATA
    assert main(["verify", str(mid)]) == EXIT_OK
    assert main(["verify", str(mid), "--full"]) == EXIT_GENERIC


def test_cli_debug_reraises(tmp_path: Path) -> None:
    from huffman_coding.errors import BadMagic

    bad = tmp_path / "bad.huf"
    bad.write_bytes(b"nope")
    with pytest.raises(BadMagic):
        main(["decompress", str(bad), str(tmp_path / "o"), "--debug"])


def test_cli_usage_error_from_argparse() -> None:
    with pytest.raises(SystemExit) as ei:
        main([])
    assert ei.value.code == 2
