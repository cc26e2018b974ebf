import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class StepSink(Protocol):
    """Receives step lifecycle events. Implementations must not raise or block."""

    def step_entered(self, index: int, name: str) -> None:
        ...

    def step_exited(self, index: int, name: str) -> None:
        ...

    def step_failed(self, index: int, name: str, error: BaseException) -> None:
        ...


class LoggingStepSink:
    def step_entered(self, index: int, name: str) -> None:
        logger.info(f"▶ Entering step {index}: {name}")

    def step_exited(self, index: int, name: str) -> None:
        logger.info(f"✓ Exiting step {index}: {name}")

    def step_failed(self, index: int, name: str, error: BaseException) -> None:
        logger.error(f"❌ Step {index} failed: {name} → {type(error).__name__}: {error}")
