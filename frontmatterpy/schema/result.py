"""Per-record validation carrier."""

from __future__ import annotations

from dataclasses import dataclass

from frontmatterpy.diagnostics import Diagnostic, has_errors


@dataclass(frozen=True, slots=True)
class RecordValidationResult:
    """Outcome of validating one metadata record.

    `accepted_values` keeps first-seen order and never contains duplicates.
    """

    key: str
    diagnostics: tuple[Diagnostic, ...] = ()
    accepted_values: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not has_errors(self.diagnostics)
