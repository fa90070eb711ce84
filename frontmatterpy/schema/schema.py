"""Header schema: the set of record names a metadata block recognizes."""

from __future__ import annotations

from dataclasses import dataclass, field

from frontmatterpy.schema.rules import EnumeratedStringListRule, RecordRule


@dataclass(frozen=True, slots=True)
class HeaderSchema:
    rules: tuple[RecordRule, ...]
    _by_key: dict[str, RecordRule] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_key: dict[str, RecordRule] = {}
        for rule in self.rules:
            if not rule.key:
                raise ValueError("Record rule key cannot be empty.")
            if rule.key in by_key:
                raise ValueError(f"Duplicate record rule for key `{rule.key}`.")
            by_key[rule.key] = rule
        object.__setattr__(self, "_by_key", by_key)

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._by_key)

    def rule_for(self, name: str) -> RecordRule | None:
        return self._by_key.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_key


def default_schema() -> HeaderSchema:
    """Schema recognizing only the `tools` list."""
    return HeaderSchema((EnumeratedStringListRule(key="tools", item_label="tool name"),))
