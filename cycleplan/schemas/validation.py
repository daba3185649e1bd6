from dataclasses import dataclass, field


@dataclass(frozen=True)
class CycleValidationResult:
    """Outcome of validating a cycle.

    Attributes:
        valid: True when there are no blocking errors
        errors: Blocking problems; the schedule must not be generated
        warnings: Informational problems; generation may proceed
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
