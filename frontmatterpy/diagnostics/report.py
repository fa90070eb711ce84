"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from frontmatterpy.diagnostics.codes import DiagnosticSpec
from frontmatterpy.diagnostics.diagnostic import Diagnostic
from frontmatterpy.text import TextRange


def diagnostic_from_spec(
    spec: DiagnosticSpec,
    range: TextRange,
    detail: str | None = None,
    *,
    hint: str | None = None,
) -> Diagnostic:
    message = spec.message if detail is None else f"{spec.message} {detail}"
    return Diagnostic(
        code=spec.code,
        message=message,
        range=range,
        severity=spec.severity,
        hint=hint if hint is not None else spec.hint,
        category=spec.category,
    )


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.is_error for d in diagnostics)


def diagnostics_payload(diagnostics: Iterable[Diagnostic]) -> list[dict[str, Any]]:
    """Plain-data view for consumers rendering markers outside this package."""
    return [
        {
            "severity": d.severity,
            "range": {"start": d.range.start, "end": d.range.end},
            "message": d.message,
            "code": d.code,
        }
        for d in diagnostics
    ]
