"""
Use case: Liveness check.

Input: None
Output: LivenessSnapshot
Side effects: None. Never touches a dependency.
Failure cases: None.
"""

from datetime import datetime
from typing import Callable

from app.application.health.check_health import utc_now
from app.domain.health.entities import LivenessSnapshot


class CheckLivenessUseCase:
    """Answers "is the process alive" in constant time."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def execute(self) -> LivenessSnapshot:
        return LivenessSnapshot(timestamp=self._clock())
