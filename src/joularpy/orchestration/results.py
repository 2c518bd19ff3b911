"""
Outcome records for the shutdown sequence.

Each step of the shutdown produces a StepResult instead of silently
swallowing its exception, so callers and tests can see which steps ran,
which failed and which were skipped because an earlier step failed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..validation import ErrorSeverity


class StepStatus(Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Outcome of one shutdown step."""

    name: str
    status: StepStatus = StepStatus.OK
    error: Optional[BaseException] = None
    severity: ErrorSeverity = ErrorSeverity.INFO

    @property
    def ok(self) -> bool:
        return self.status is StepStatus.OK


@dataclass
class ShutdownReport:
    """Ordered outcomes of a shutdown run."""

    steps: List[StepResult] = field(default_factory=list)

    def add(self, result: StepResult) -> StepResult:
        self.steps.append(result)
        return result

    def get(self, name: str) -> Optional[StepResult]:
        """Return the result of the step called ``name``, if it was recorded."""
        for step in self.steps:
            if step.name == name:
                return step
        return None

    @property
    def failed_steps(self) -> List[StepResult]:
        return [step for step in self.steps if step.status is StepStatus.FAILED]

    @property
    def skipped_steps(self) -> List[StepResult]:
        return [step for step in self.steps if step.status is StepStatus.SKIPPED]

    @property
    def ok(self) -> bool:
        return all(step.ok for step in self.steps)

    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self.steps]
