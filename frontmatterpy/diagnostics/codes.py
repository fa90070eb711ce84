"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


DECODER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with the same quote it was opened with, on the same line.",
    severity="error",
    category="decoder",
)

DECODER_UNTERMINATED_ARRAY: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODER_UNTERMINATED_ARRAY",
    message="Unterminated array, expected `]`.",
    hint="Close the array with `]` before the end of the metadata block.",
    severity="error",
    category="decoder",
)

DECODER_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODER_EXPECTED_VALUE",
    message="Expected a value.",
    severity="error",
    category="decoder",
)

DECODER_UNEXPECTED_TRAILING_TEXT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="DECODER_UNEXPECTED_TRAILING_TEXT",
    message="Unexpected text after value.",
    hint="Put one `name: value` record per line.",
    severity="error",
    category="decoder",
)

HEADER_DECODER_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="HEADER_DECODER_ERROR",
    message="Failed to decode the metadata block.",
    severity="error",
    category="header",
)

HEADER_UNKNOWN_RECORD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="HEADER_UNKNOWN_RECORD",
    message="Unknown metadata record will be ignored.",
    severity="warning",
    category="header",
)

HEADER_DUPLICATE_RECORD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="HEADER_DUPLICATE_RECORD",
    message="Duplicate metadata record will be ignored.",
    hint="Keep only one record per name in the metadata block.",
    severity="warning",
    category="header",
)

HEADER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="HEADER_UNEXPECTED_TOKEN",
    message="Unexpected token.",
    hint="Top-level entries must be `name: value` records.",
    severity="error",
    category="header",
)

RECORD_EXPECTED_ARRAY: Final[DiagnosticSpec] = DiagnosticSpec(
    code="RECORD_EXPECTED_ARRAY",
    message="Record must have an array value.",
    severity="error",
    category="record",
)

RECORD_INVALID_ITEM_TYPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="RECORD_INVALID_ITEM_TYPE",
    message="Array item must be a string.",
    severity="error",
    category="record",
)

RECORD_EMPTY_ITEM: Final[DiagnosticSpec] = DiagnosticSpec(
    code="RECORD_EMPTY_ITEM",
    message="Array item cannot be empty.",
    severity="warning",
    category="record",
)

RECORD_DUPLICATE_ITEM: Final[DiagnosticSpec] = DiagnosticSpec(
    code="RECORD_DUPLICATE_ITEM",
    message="Duplicate array item.",
    hint="Remove the repeated entry.",
    severity="warning",
    category="record",
)
