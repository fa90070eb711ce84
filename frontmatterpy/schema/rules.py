"""Record rules and rule contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from frontmatterpy.decoder import ArrayValue, RecordName, StringValue, ValueToken, value_kind_name
from frontmatterpy.diagnostics import (
    RECORD_DUPLICATE_ITEM,
    RECORD_EMPTY_ITEM,
    RECORD_EXPECTED_ARRAY,
    RECORD_INVALID_ITEM_TYPE,
    Diagnostic,
    diagnostic_from_spec,
)
from frontmatterpy.schema.result import RecordValidationResult


class RecordRule(Protocol):
    """Validates the value of the record named `key`."""

    @property
    def key(self) -> str: ...

    def validate(self, name: RecordName, value: ValueToken) -> RecordValidationResult: ...


@dataclass(frozen=True, slots=True)
class EnumeratedStringListRule:
    """Record whose value is an array of unique, non-empty strings."""

    key: str = "tools"
    item_label: str = "tool name"

    def validate(self, name: RecordName, value: ValueToken) -> RecordValidationResult:
        if name.text != self.key:
            raise ValueError(f"Record name must be `{self.key}`, got `{name.text}`.")

        diagnostics: list[Diagnostic] = []

        if not isinstance(value, ArrayValue):
            diagnostics.append(
                diagnostic_from_spec(
                    RECORD_EXPECTED_ARRAY,
                    value.range,
                    f"Record `{self.key}` got `{value.raw}`.",
                    hint=f'Use a list like `{self.key}: ["first", "second"]`.',
                )
            )
            return RecordValidationResult(key=self.key, diagnostics=tuple(diagnostics))

        # dict keeps insertion order and gives set membership
        accepted: dict[str, None] = {}
        for item in value.items:
            if not isinstance(item, StringValue):
                diagnostics.append(
                    diagnostic_from_spec(
                        RECORD_INVALID_ITEM_TYPE,
                        item.range,
                        f"Expected a {self.item_label}, got {value_kind_name(item)}.",
                    )
                )
                continue

            normalized = item.text.strip()
            if not normalized:
                diagnostics.append(
                    diagnostic_from_spec(
                        RECORD_EMPTY_ITEM,
                        item.range,
                        f"Empty {self.item_label}.",
                    )
                )
                continue

            if normalized in accepted:
                diagnostics.append(
                    diagnostic_from_spec(
                        RECORD_DUPLICATE_ITEM,
                        item.range,
                        f"{self.item_label.capitalize()} `{normalized}` is already listed.",
                    )
                )
                continue

            accepted[normalized] = None

        return RecordValidationResult(
            key=self.key,
            diagnostics=tuple(diagnostics),
            accepted_values=tuple(accepted),
        )
