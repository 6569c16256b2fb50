"""
Domain entities for the storage bounded context.

They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ConnectionState(Enum):
    """Lifecycle state of the primary data store connection.

    Transitions:
        DISCONNECTED -> CONNECTING   on start
        CONNECTING   -> CONNECTED    on success
        CONNECTING   -> FAILED       on unrecoverable connect error
        CONNECTED    -> DISCONNECTED on stop
    """

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class BootstrapStep(Enum):
    """Schema bootstrap steps, in the order they must run."""

    EXTENSION_ENABLE = "extension-enable"
    HYPERTABLE_CREATE = "hypertable-create"


class BootstrapOutcome(Enum):
    """Result of a single bootstrap step."""

    APPLIED = "applied"
    ALREADY_PRESENT = "already-present"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class BootstrapStepResult:
    """Outcome of one bootstrap step plus the reason it was skipped, if any."""

    step: BootstrapStep
    outcome: BootstrapOutcome
    detail: Optional[str] = None


@dataclass(frozen=True)
class BootstrapReport:
    """Ordered outcomes of a full bootstrap run."""

    steps: list[BootstrapStepResult] = field(default_factory=list)

    def outcome_of(self, step: BootstrapStep) -> Optional[BootstrapOutcome]:
        """Return the outcome recorded for a step, or None if it never ran."""
        for result in self.steps:
            if result.step is step:
                return result.outcome
        return None

    @property
    def timescale_available(self) -> bool:
        """True when the time-series extension is enabled on the backend."""
        return self.outcome_of(BootstrapStep.EXTENSION_ENABLE) in (
            BootstrapOutcome.APPLIED,
            BootstrapOutcome.ALREADY_PRESENT,
        )


@dataclass(frozen=True)
class DatabaseInfo:
    """Backend version and, when installed, the TimescaleDB version."""

    version: str
    timescale_version: Optional[str] = None
