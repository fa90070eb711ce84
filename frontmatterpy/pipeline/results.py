"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from frontmatterpy.diagnostics import Diagnostic, has_errors
from frontmatterpy.header import FrontMatterBlock
from frontmatterpy.lexer import Token
from frontmatterpy.schema import RecordValidationResult


@dataclass(frozen=True, slots=True)
class HeaderRunResult:
    """Result of validating the front-matter block of one document."""

    source_text: str
    block: FrontMatterBlock | None
    tokens: tuple[Token, ...]
    records: tuple[tuple[str, RecordValidationResult], ...]
    diagnostics: tuple[Diagnostic, ...]

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    def values(self, key: str) -> tuple[str, ...]:
        for name, record in self.records:
            if name == key:
                return record.accepted_values
        return ()
