"""Diagnostics."""

from frontmatterpy.diagnostics.codes import (
    DECODER_EXPECTED_VALUE,
    DECODER_UNEXPECTED_TRAILING_TEXT,
    DECODER_UNTERMINATED_ARRAY,
    DECODER_UNTERMINATED_STRING,
    HEADER_DECODER_ERROR,
    HEADER_DUPLICATE_RECORD,
    HEADER_UNEXPECTED_TOKEN,
    HEADER_UNKNOWN_RECORD,
    RECORD_DUPLICATE_ITEM,
    RECORD_EMPTY_ITEM,
    RECORD_EXPECTED_ARRAY,
    RECORD_INVALID_ITEM_TYPE,
    DiagnosticSpec,
)
from frontmatterpy.diagnostics.diagnostic import Diagnostic, Severity
from frontmatterpy.diagnostics.report import (
    diagnostic_from_spec,
    diagnostics_payload,
    has_errors,
)

__all__ = [
    "DECODER_EXPECTED_VALUE",
    "DECODER_UNEXPECTED_TRAILING_TEXT",
    "DECODER_UNTERMINATED_ARRAY",
    "DECODER_UNTERMINATED_STRING",
    "HEADER_DECODER_ERROR",
    "HEADER_DUPLICATE_RECORD",
    "HEADER_UNEXPECTED_TOKEN",
    "HEADER_UNKNOWN_RECORD",
    "RECORD_DUPLICATE_ITEM",
    "RECORD_EMPTY_ITEM",
    "RECORD_EXPECTED_ARRAY",
    "RECORD_INVALID_ITEM_TYPE",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "diagnostic_from_spec",
    "diagnostics_payload",
    "has_errors",
]
