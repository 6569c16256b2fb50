"""
Domain-specific errors for the health bounded context.

Probe failures are data, not errors. These cover misuse of the probe
registry only, which is a programming error caught at wiring time.
"""


class HealthDomainError(Exception):
    """Base error for all health domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class DuplicateProbeError(HealthDomainError):
    """Raised when two probes are registered under the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"A probe named '{name}' is already registered")
        self.name = name
