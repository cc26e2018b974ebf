from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from interaction.failures import InteractionFailure
from interaction.policy import RetryPolicy


class AttemptStatus(Enum):
    SUCCEEDED = "succeeded"
    RETRYABLE = "retryable"
    TERMINAL = "terminal"


@dataclass
class AttemptResult:
    status: AttemptStatus
    value: Any = None
    failure: Optional[InteractionFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.status is AttemptStatus.SUCCEEDED


@dataclass
class InteractionAttempt:
    locator: Any
    action: Callable
    number: int
    elapsed: float
    failure: Optional[InteractionFailure] = None


def classify(failure: InteractionFailure, policy: RetryPolicy) -> AttemptResult:
    if policy.is_retryable(failure.kind):
        return AttemptResult(status=AttemptStatus.RETRYABLE, failure=failure)
    return AttemptResult(status=AttemptStatus.TERMINAL, failure=failure)
