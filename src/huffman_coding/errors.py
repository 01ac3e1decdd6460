"""Typed errors for huffman-coding.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The core raises, never swallows: no retry, no partial output on failure.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNSUPPORTED_VERSION = 11
EXIT_EMPTY_INPUT = 12
EXIT_INVALID_DATA = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, missing input file, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt container, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Unsupported container version"),
    ExitCodeInfo(EXIT_EMPTY_INPUT, "EMPTY_INPUT", "No symbols to build a Huffman tree from"),
    ExitCodeInfo(
        EXIT_INVALID_DATA,
        "INVALID_DATA",
        "Bitstream does not decode against the tree (truncated/corrupted), or unknown symbol",
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/huffman_coding/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error extends `HuffmanError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffmanError(Exception):
    """Base error for huffman-coding."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffmanError):
    exit_code = EXIT_USAGE


class EmptyInput(HuffmanError):
    """Tree construction attempted on zero symbols."""

    exit_code = EXIT_EMPTY_INPUT


class SymbolNotFound(HuffmanError, KeyError):
    """A byte value is absent from the code table in use."""

    exit_code = EXIT_INVALID_DATA

    def __init__(self, symbol: int) -> None:
        super().__init__(symbol)
        self.symbol = int(symbol)

    def __str__(self) -> str:
        return f"symbol {self.symbol} not in code table"


class InvalidData(HuffmanError, ValueError):
    """The bit walk did not end on the root: truncated or corrupted input."""

    exit_code = EXIT_INVALID_DATA


class CorruptPayload(HuffmanError):
    exit_code = EXIT_GENERIC


class BadMagic(CorruptPayload):
    pass


class UnsupportedVersion(HuffmanError):
    exit_code = EXIT_UNSUPPORTED_VERSION
