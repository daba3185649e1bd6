from cycleplan.schemas.exercise import Exercise, MaxRecord, latest_max_records
from cycleplan.schemas.cycle import (
    ConditioningProgression,
    Cycle,
    ExerciseAssignment,
    Group,
    SimpleProgression,
)
from cycleplan.schemas.workout import ScheduledSet, ScheduledWorkout
from cycleplan.schemas.validation import CycleValidationResult

__all__ = [
    "ConditioningProgression",
    "Cycle",
    "CycleValidationResult",
    "Exercise",
    "ExerciseAssignment",
    "Group",
    "MaxRecord",
    "ScheduledSet",
    "ScheduledWorkout",
    "SimpleProgression",
    "latest_max_records",
]
