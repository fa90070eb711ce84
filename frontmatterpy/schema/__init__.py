"""Record schema and validators."""

from frontmatterpy.schema.result import RecordValidationResult
from frontmatterpy.schema.rules import EnumeratedStringListRule, RecordRule
from frontmatterpy.schema.schema import HeaderSchema, default_schema

__all__ = [
    "EnumeratedStringListRule",
    "HeaderSchema",
    "RecordRule",
    "RecordValidationResult",
    "default_schema",
]
