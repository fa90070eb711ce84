"""Structural decoder and structured token types."""

from frontmatterpy.decoder.decoder import DecoderError, StructuralDecoder, decode_tokens
from frontmatterpy.decoder.tokens import (
    ArrayValue,
    OtherValue,
    OtherValueKind,
    Record,
    RecordName,
    StringValue,
    StructuredToken,
    TriviaKind,
    TriviaToken,
    ValueToken,
    value_kind_name,
)

__all__ = [
    "ArrayValue",
    "DecoderError",
    "OtherValue",
    "OtherValueKind",
    "Record",
    "RecordName",
    "StringValue",
    "StructuralDecoder",
    "StructuredToken",
    "TriviaKind",
    "TriviaToken",
    "ValueToken",
    "decode_tokens",
    "value_kind_name",
]
