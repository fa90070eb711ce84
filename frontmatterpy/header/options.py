"""Header aggregation configuration."""

from dataclasses import dataclass, field
from enum import StrEnum

from frontmatterpy.schema import HeaderSchema, default_schema
from frontmatterpy.stream import DEFAULT_BATCH_SIZE, DEFAULT_TICK_INTERVAL


class DecoderErrorPolicy(StrEnum):
    """What the header does with errors signaled by the structural decoder."""

    REPORT = "report"  # log and add a header-level error diagnostic
    LOG = "log"  # log only


@dataclass(frozen=True, slots=True)
class HeaderOptions:
    """Schema and scheduling parameters for one header run."""

    schema: HeaderSchema = field(default_factory=default_schema)
    batch_size: int = DEFAULT_BATCH_SIZE
    tick_interval: float = DEFAULT_TICK_INTERVAL
    decoder_errors: DecoderErrorPolicy = DecoderErrorPolicy.REPORT

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")
        if self.tick_interval < 0:
            raise ValueError(f"tick_interval cannot be negative, got {self.tick_interval}")

    @staticmethod
    def for_policy(policy: DecoderErrorPolicy) -> "HeaderOptions":
        return HeaderOptions(decoder_errors=policy)
