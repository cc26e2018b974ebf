# scenario/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional


class StepStatus(Enum):
    PASSED = "passed"
    FAILED = "failed"


class ScenarioStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ScenarioStep:
    name: str
    action: Callable[[], Any]

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Scenario step needs a non-empty name")
        if not callable(self.action):
            raise TypeError(f"Action of step '{self.name}' is not callable")


@dataclass
class ScenarioOutcome:
    step: int
    name: str
    status: StepStatus
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is StepStatus.PASSED


@dataclass
class ScenarioResult:
    status: ScenarioStatus
    outcomes: List[ScenarioOutcome] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def completed(self) -> bool:
        return self.status is ScenarioStatus.COMPLETED
