"""Pydantic schemas for generated workouts and their sets."""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from cycleplan.models.enums import (
    ExerciseProgressionMode,
    ExerciseType,
    MeasurementType,
    ProgressionMode,
    WorkoutStatus,
)
from cycleplan.schemas.cycle import ConditioningProgression, SimpleProgression


class ScheduledSet(BaseModel):
    """One set instance.

    Carries copies of the progression parameters it needs so targets can be
    computed without reading the cycle back.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    exercise_id: str
    exercise_type: ExerciseType
    is_conditioning: bool = False
    measurement_type: MeasurementType = MeasurementType.REPS
    set_number: int = Field(ge=1)
    is_warmup: bool = False
    warmup_percentage: int | None = None
    is_max_test: bool = False
    # Snapshot of the max at the time a max-testing set was created
    previous_max_reps: int | None = None
    previous_max_time: int | None = None
    progression_mode: ExerciseProgressionMode | None = None
    simple: SimpleProgression | None = None
    conditioning: ConditioningProgression | None = None

    @property
    def is_time_based(self) -> bool:
        return self.measurement_type == MeasurementType.TIME


class ScheduledWorkout(BaseModel):
    """One generated session."""

    id: str
    cycle_id: str | None = None
    sequence_number: int = Field(ge=1)
    week_number: int = Field(ge=1)
    day_in_week: int = Field(ge=1)
    group_id: str
    rfem: int = 0
    scheduled_sets: list[ScheduledSet] = Field(default_factory=list)
    status: WorkoutStatus = WorkoutStatus.PENDING
    scheduled_date: date | None = None


def get_set_progression_mode(
    cycle_mode: ProgressionMode | None,
    scheduled_set: ScheduledSet,
) -> ExerciseProgressionMode:
    """Effective progression mode for a stored set.

    A pure rfem/simple cycle imposes its mode; in mixed cycles, or when no
    cycle is known, the mode stamped on the set is used (default rfem).
    """
    if cycle_mode == ProgressionMode.SIMPLE:
        return ExerciseProgressionMode.SIMPLE
    if cycle_mode == ProgressionMode.RFEM:
        return ExerciseProgressionMode.RFEM
    return scheduled_set.progression_mode or ExerciseProgressionMode.RFEM
