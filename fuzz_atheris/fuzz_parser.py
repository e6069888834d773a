#!/usr/bin/env python3
# FUZZ_PLUGIN_HEADER_START
# FUZZ_PLUGIN: parser - .env Parser Contract
# Intentional: This header is intentionally placed for dynamic plugin discovery.
# FUZZ_PLUGIN_HEADER_END
""".env Parser Fuzzer (Atheris).

Targets EnvParser.parse with raw and grammar-shaped input. Every input must
produce either a dict or EnvFormatError; anything else is a finding.

Invariants checked:
- Exception contract: only EnvFormatError escapes parse()
- Error lines fall inside the source (1 <= line_number <= lines)
- Names in the result match [A-Za-z][A-Za-z0-9_]*
- CRLF and LF versions of a document parse identically
- Parsing is idempotent across fresh parser instances

Metrics:
- Pattern coverage (raw_text, grammar_soup, statements, crlf, idempotence)
- Error code distribution
- Real memory usage (RSS via psutil)
"""

from __future__ import annotations

import argparse
import gc
import logging
import re
import sys
import time
from dataclasses import dataclass, field

import atheris
import psutil

GC_INTERVAL = 1000

_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*\Z")

# Characters that drive every branch of the grammar
_GRAMMAR_ALPHABET = "AZaz09_=#'\"\\ \t\n\r-export"

_PATTERNS: tuple[str, ...] = (
    "raw_text",
    "grammar_soup",
    "grammar_soup",
    "statements",
    "statements",
    "crlf",
    "idempotence",
)


@dataclass
class ParserFuzzState:
    """Counters for the parser fuzzer."""

    iterations: int = 0
    findings: int = 0
    parsed: int = 0
    checkpoint_interval: int = 5000
    initial_memory_mb: float = 0.0
    peak_memory_mb: float = 0.0
    slowest_ms: float = 0.0
    pattern_coverage: dict[str, int] = field(default_factory=dict)
    error_codes: dict[str, int] = field(default_factory=dict)


class ParserFuzzError(Exception):
    """Raised when an unexpected exception or invariant breach is detected."""


_state = ParserFuzzState()
_process = psutil.Process()

# Suppress logging and instrument imports
logging.getLogger("envlexengine").setLevel(logging.CRITICAL)

with atheris.instrument_imports(include=["envlexengine"]):
    from envlexengine.diagnostics import EnvFormatError
    from envlexengine.syntax.parser import EnvParser

_parser = EnvParser()


# --- Input Generators ---


def _gen_statement(fdp: atheris.FuzzedDataProvider) -> str:
    """Build one mostly-valid statement with a random value shape."""
    name = "V" + "".join(
        fdp.PickValueInList(list("ABC_019")) for _ in range(fdp.ConsumeIntInRange(0, 4))
    )
    prefix = fdp.PickValueInList(["", "", "export ", "export\t"])
    body = fdp.ConsumeUnicodeNoSurrogates(fdp.ConsumeIntInRange(0, 24))
    shape = fdp.ConsumeIntInRange(0, 5)
    match shape:
        case 0:
            value = body
        case 1:
            value = "'" + body.replace("'", "") + "'"
        case 2:
            value = '"' + body + '"'
        case 3:
            value = f"'{body[:4]}'\"{body[4:8]}\"{body[8:]}"
        case 4:
            value = body + " # " + body
        case _:
            value = ""
    return f"{prefix}{name}={value}"


def _gen_document(fdp: atheris.FuzzedDataProvider) -> str:
    lines: list[str] = []
    for _ in range(fdp.ConsumeIntInRange(0, 8)):
        kind = fdp.ConsumeIntInRange(0, 4)
        if kind == 0:
            lines.append("# " + fdp.ConsumeUnicodeNoSurrogates(12))
        elif kind == 1:
            lines.append("")
        else:
            lines.append(_gen_statement(fdp))
    return "\n".join(lines)


# --- Contract ---


def _check_parse(source: str) -> dict[str, str] | None:
    """Parse source and enforce the exception and result contracts."""
    try:
        result = _parser.parse(source)
    except EnvFormatError as e:
        _state.error_codes[e.code.name] = _state.error_codes.get(e.code.name, 0) + 1
        normalized = source.replace("\r\n", "\n")
        if not 1 <= e.line_number <= normalized.count("\n") + 1:
            msg = f"line_number {e.line_number} outside source: {source!r}"
            raise ParserFuzzError(msg) from e
        return None
    except Exception as e:
        msg = f"{type(e).__name__} escaped parse(): {e} for {source!r}"
        raise ParserFuzzError(msg) from e

    if not isinstance(result, dict):
        msg = f"parse() returned {type(result).__name__}"
        raise ParserFuzzError(msg)
    for name, value in result.items():
        if not _NAME_RE.match(name) or not isinstance(value, str):
            msg = f"Invalid entry {name!r}={value!r} from {source!r}"
            raise ParserFuzzError(msg)
    _state.parsed += 1
    return result


# --- Patterns ---


def _pattern_raw_text(fdp: atheris.FuzzedDataProvider) -> None:
    _check_parse(fdp.ConsumeUnicodeNoSurrogates(fdp.remaining_bytes()))


def _pattern_grammar_soup(fdp: atheris.FuzzedDataProvider) -> None:
    size = fdp.ConsumeIntInRange(0, 64)
    _check_parse("".join(fdp.PickValueInList(list(_GRAMMAR_ALPHABET)) for _ in range(size)))


def _pattern_statements(fdp: atheris.FuzzedDataProvider) -> None:
    _check_parse(_gen_document(fdp))


def _pattern_crlf(fdp: atheris.FuzzedDataProvider) -> None:
    document = _gen_document(fdp)
    lf = _check_parse(document)
    crlf = _check_parse(document.replace("\n", "\r\n"))
    if lf != crlf:
        msg = f"CRLF changed the result for {document!r}: {lf!r} != {crlf!r}"
        raise ParserFuzzError(msg)


def _pattern_idempotence(fdp: atheris.FuzzedDataProvider) -> None:
    document = _gen_document(fdp)
    first = _check_parse(document)
    second = EnvParser().parse(document) if first is not None else None
    if first != second:
        msg = f"Fresh parser disagreed on {document!r}"
        raise ParserFuzzError(msg)


_PATTERN_DISPATCH = {
    "raw_text": _pattern_raw_text,
    "grammar_soup": _pattern_grammar_soup,
    "statements": _pattern_statements,
    "crlf": _pattern_crlf,
    "idempotence": _pattern_idempotence,
}


# --- Reporting ---


def _record_memory() -> None:
    rss_mb = _process.memory_info().rss / (1024 * 1024)
    _state.peak_memory_mb = max(_state.peak_memory_mb, rss_mb)


def _emit_report(label: str) -> None:
    print(
        f"[{label}] iterations={_state.iterations} parsed={_state.parsed} "
        f"findings={_state.findings} peak_rss={_state.peak_memory_mb:.1f}MB "
        f"slowest={_state.slowest_ms:.2f}ms",
        file=sys.stderr,
    )
    print(f"[{label}] patterns={_state.pattern_coverage}", file=sys.stderr)
    print(f"[{label}] errors={_state.error_codes}", file=sys.stderr)


def test_one_input(data: bytes) -> None:
    """Atheris entry point: fuzz EnvParser.parse."""
    if _state.iterations == 0:
        _state.initial_memory_mb = _process.memory_info().rss / (1024 * 1024)

    _state.iterations += 1
    if _state.iterations % _state.checkpoint_interval == 0:
        _emit_report("checkpoint")

    start_time = time.perf_counter()
    fdp = atheris.FuzzedDataProvider(data)
    pattern = _PATTERNS[_state.iterations % len(_PATTERNS)]
    _state.pattern_coverage[pattern] = _state.pattern_coverage.get(pattern, 0) + 1

    try:
        _PATTERN_DISPATCH[pattern](fdp)
    except ParserFuzzError:
        _state.findings += 1
        _emit_report("finding")
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        _state.slowest_ms = max(_state.slowest_ms, elapsed_ms)

        if _state.iterations % GC_INTERVAL == 0:
            gc.collect()

        if _state.iterations % 100 == 0:
            _record_memory()


def main() -> None:
    """Run the parser fuzzer with CLI support."""
    parser = argparse.ArgumentParser(
        description=".env parser fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    parser.add_argument(
        "--checkpoint-interval", type=int, default=5000,
        help="Emit report every N iterations (default: 5000)",
    )

    args, remaining = parser.parse_known_args()
    _state.checkpoint_interval = args.checkpoint_interval

    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=4096")

    sys.argv = [sys.argv[0], *remaining]

    print(".env Parser Fuzzer (Atheris)", file=sys.stderr)
    print("Target: EnvParser.parse", file=sys.stderr)

    atheris.Setup(sys.argv, test_one_input)
    try:
        atheris.Fuzz()
    finally:
        _emit_report("final")


if __name__ == "__main__":
    main()
