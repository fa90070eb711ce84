"""Whole-document entrypoints over the header aggregator."""

from __future__ import annotations

import asyncio

from frontmatterpy.header import FrontMatterHeader, HeaderOptions, find_front_matter
from frontmatterpy.lexer import Lexer
from frontmatterpy.pipeline.results import HeaderRunResult


async def collect_header_diagnostics(
    text: str,
    options: HeaderOptions | None = None,
) -> HeaderRunResult:
    """Locate, lex and validate the front-matter block of `text`."""
    block = find_front_matter(text)
    if block is None:
        return HeaderRunResult(source_text=text, block=None, tokens=(), records=(), diagnostics=())

    tokens = Lexer(text, start=block.content_range.start, end=block.content_range.end).lex()
    with FrontMatterHeader(tokens, content_range=block.content_range, options=options) as header:
        await header.start().wait_settled()
        return HeaderRunResult(
            source_text=text,
            block=block,
            tokens=tuple(tokens),
            records=header.records,
            diagnostics=header.diagnostics,
        )


def run_header_diagnostics(
    text: str,
    options: HeaderOptions | None = None,
) -> HeaderRunResult:
    """Synchronous wrapper running `collect_header_diagnostics` on a fresh event loop."""
    return asyncio.run(collect_header_diagnostics(text, options))
