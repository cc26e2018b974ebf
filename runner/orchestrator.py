import inspect
import logging
from typing import Any, Callable, Iterable, List, Optional

from interaction.failures import StepFailure
from runner.log_sink import LoggingStepSink, StepSink
from scenario.models import (
    ScenarioOutcome,
    ScenarioResult,
    ScenarioStatus,
    ScenarioStep,
    StepStatus,
)

logger = logging.getLogger(__name__)


class ScenarioRunner:

    def __init__(self, sink: Optional[StepSink] = None):
        """
        sink → receives entered/exited/failed events per step
               (defaults to LoggingStepSink)
        """
        self.sink = sink or LoggingStepSink()
        self.outcomes: List[ScenarioOutcome] = []

    async def run_async(self, steps: Iterable[ScenarioStep], name: Optional[str] = None) -> ScenarioResult:
        """
        Run the steps in order and stop at the first failing one.

        Raises StepFailure (from the step's own error) naming the failed step;
        the partial ScenarioResult is attached as `result`.
        """
        self.outcomes = []
        if name:
            logger.info(f"🚀 Start scenario: {name}")

        for idx, step in enumerate(steps, start=1):
            self._notify("step_entered", idx, step.name)
            try:
                value = step.action()
                if inspect.isawaitable(value):
                    await value
            except Exception as e:
                self.outcomes.append(
                    ScenarioOutcome(
                        step=idx,
                        name=step.name,
                        status=StepStatus.FAILED,
                        error=f"{type(e).__name__}: {e}",
                    )
                )
                self._notify("step_failed", idx, step.name, e)
                result = ScenarioResult(
                    status=ScenarioStatus.FAILED,
                    outcomes=list(self.outcomes),
                    failed_step=step.name,
                    error=e,
                )
                if name:
                    logger.error(f"❌ FAILED: {name} at step '{step.name}'")
                raise StepFailure(step.name, e, result) from e

            self.outcomes.append(ScenarioOutcome(step=idx, name=step.name, status=StepStatus.PASSED))
            self._notify("step_exited", idx, step.name)

        if name:
            logger.info(f"✅ PASSED: {name}")
        return ScenarioResult(status=ScenarioStatus.COMPLETED, outcomes=list(self.outcomes))

    async def run_step(self, name: str, action: Callable[[], Any]) -> ScenarioResult:
        """Run a single named step with the same logging and failure wrapping."""
        if name is None:
            raise ValueError("name must not be None")
        if action is None:
            raise ValueError("action must not be None")
        return await self.run_async([ScenarioStep(name, action)])

    def _notify(self, event: str, *args):
        try:
            getattr(self.sink, event)(*args)
        except Exception:
            logger.exception(f"Step sink failed on {event}; continuing")
