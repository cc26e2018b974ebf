from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from interaction.failures import FailureKind

DEFAULT_RETRYABLE_KINDS = frozenset(
    {
        FailureKind.STALE,
        FailureKind.NOT_INTERACTABLE,
        FailureKind.OBSCURED,
    }
)


@dataclass(frozen=True)
class RetryPolicy:
    """How long to keep trying and what counts as worth another try.

    Durations are seconds. The polling interval is fixed; there is no backoff.
    """

    max_wait: float = 10.0
    poll_interval: float = 0.5
    retryable_kinds: FrozenSet[FailureKind] = field(default=DEFAULT_RETRYABLE_KINDS)

    def __post_init__(self):
        if self.max_wait < 0:
            raise ValueError(f"max_wait must not be negative: {self.max_wait}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {self.poll_interval}")
        object.__setattr__(self, "retryable_kinds", frozenset(self.retryable_kinds))

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(max_wait=settings.max_wait, poll_interval=settings.poll_interval)

    def is_retryable(self, kind: FailureKind) -> bool:
        return kind in self.retryable_kinds

    def with_max_wait(self, max_wait: Optional[float]) -> "RetryPolicy":
        if max_wait is None:
            return self
        return replace(self, max_wait=max_wait)
