# interaction/failures.py
from enum import Enum
from typing import List, Optional


class FailureKind(Enum):
    NOT_FOUND = "not_found"
    STALE = "stale"
    NOT_INTERACTABLE = "not_interactable"
    OBSCURED = "obscured"
    TIMEOUT = "timeout"
    NAVIGATED_AWAY = "navigated_away"
    COMPOSITE = "composite"
    SESSION = "session"


class InteractionFailure(Exception):
    """Base for every failure the session adapters and the interactor raise."""

    kind: FailureKind = FailureKind.SESSION

    def __init__(self, message: str, locator=None):
        super().__init__(message)
        self.message = message
        self.locator = locator


class ElementNotFoundFailure(InteractionFailure):
    kind = FailureKind.NOT_FOUND


class StaleElementFailure(InteractionFailure):
    kind = FailureKind.STALE


class NotInteractableFailure(InteractionFailure):
    kind = FailureKind.NOT_INTERACTABLE


class ObscuredFailure(InteractionFailure):
    kind = FailureKind.OBSCURED


class SessionFailure(InteractionFailure):
    """Session-level problem (driver gone, browser closed). Never retried."""

    kind = FailureKind.SESSION


class InteractionTimeoutFailure(InteractionFailure):
    kind = FailureKind.TIMEOUT

    def __init__(
        self,
        locator,
        attempts: int,
        elapsed: float,
        last_failure: Optional[InteractionFailure] = None,
    ):
        cause = f"{type(last_failure).__name__}: {last_failure}" if last_failure else "no attempt completed"
        super().__init__(
            f"Gave up on {locator} after {attempts} attempt(s) in {elapsed:.2f}s. Last failure: {cause}",
            locator=locator,
        )
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_failure = last_failure


class NavigatedAwayFailure(InteractionFailure):
    kind = FailureKind.NAVIGATED_AWAY

    def __init__(self, message: str, locator=None, attempts: int = 0, last_failure=None):
        super().__init__(message, locator=locator)
        self.attempts = attempts
        self.last_failure = last_failure


class CompositeFailure(InteractionFailure):
    """One or more aggregated checks failed; carries every one of them."""

    kind = FailureKind.COMPOSITE

    def __init__(self, failures: List["CheckFailure"]):
        lines = [f"  - {f.description}: {f.detail}" for f in failures]
        super().__init__(f"{len(failures)} check(s) failed:\n" + "\n".join(lines))
        self.failures = failures

    @property
    def descriptions(self) -> List[str]:
        return [f.description for f in self.failures]


class CheckFailure:
    def __init__(self, description: str, detail: str, error: Optional[BaseException] = None):
        self.description = description
        self.detail = detail
        self.error = error

    def __repr__(self):
        return f"CheckFailure({self.description!r}, {self.detail!r})"


class StepFailure(Exception):
    """A scenario step failed; raised from the step's own error."""

    def __init__(self, step_name: str, error: BaseException, result=None):
        super().__init__(f"Step '{step_name}' failed: {type(error).__name__}: {error}")
        self.step_name = step_name
        self.error = error
        self.result = result
