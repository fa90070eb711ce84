#!/usr/bin/env python
import argparse
import logging
from pathlib import Path

from frontmatterpy.diagnostics import Diagnostic
from frontmatterpy.header import DecoderErrorPolicy, HeaderOptions
from frontmatterpy.lexer import dump_tokens
from frontmatterpy.pipeline import run_header_diagnostics
from frontmatterpy.text import LineIndex


def format_diagnostic(diagnostic: Diagnostic, index: LineIndex) -> str:
    start, _ = index.range_positions(diagnostic.range)
    base = f"{start} {diagnostic.severity.upper()} {diagnostic.code}: {diagnostic.message}"
    if diagnostic.hint:
        return base + f" (hint: {diagnostic.hint})"
    return base


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump front-matter tokens and diagnostics for a document.")
    parser.add_argument("path", type=Path)
    parser.add_argument("--batch-size", type=int, default=10)
    parser.add_argument("--tokens", action="store_true", help="also print primitive tokens")
    parser.add_argument(
        "--decoder-errors",
        choices=[policy.value for policy in DecoderErrorPolicy],
        default=DecoderErrorPolicy.REPORT.value,
    )
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    text = args.path.read_text(encoding="utf-8")
    options = HeaderOptions(batch_size=args.batch_size, decoder_errors=DecoderErrorPolicy(args.decoder_errors))
    result = run_header_diagnostics(text, options)

    if result.block is None:
        print(f"No front matter found in {args.path}")
        return

    if args.tokens:
        dump_tokens(list(result.tokens))
        print()

    for name, record in result.records:
        status = "valid" if record.valid else "invalid"
        print(f"record {name} ({status}): {list(record.accepted_values)}")

    index = LineIndex(text)
    for diagnostic in result.diagnostics:
        print(format_diagnostic(diagnostic, index))

    print(f"\n{len(result.diagnostics)} diagnostics, has_errors={result.has_errors}")


if __name__ == "__main__":
    main()
