"""Pydantic schemas for training cycles, groups and exercise assignments."""
from datetime import date
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from cycleplan.models.enums import (
    CycleStatus,
    CycleType,
    ExerciseProgressionMode,
    ExerciseType,
    ProgressionInterval,
    ProgressionMode,
    SchedulingMode,
)

# 0 = Sunday ... 6 = Saturday
DayOfWeek = Annotated[int, Field(ge=0, le=6)]


class SimpleProgression(BaseModel):
    """Linear progression parameters: base value plus periodic increments."""

    model_config = ConfigDict(frozen=True)

    base_reps: float | None = None
    base_time: float | None = None
    base_weight: float | None = None
    rep_interval: ProgressionInterval = ProgressionInterval.CONSTANT
    rep_increment: float = 0
    time_interval: ProgressionInterval = ProgressionInterval.CONSTANT
    time_increment: float = 0
    weight_interval: ProgressionInterval = ProgressionInterval.CONSTANT
    weight_increment: float = 0

    @property
    def weight_progresses(self) -> bool:
        return self.weight_interval != ProgressionInterval.CONSTANT and bool(self.weight_increment)


class ConditioningProgression(BaseModel):
    """Weekly volume progression for conditioning exercises.

    Increments left as None fall back to the cycle-level defaults.
    """

    model_config = ConfigDict(frozen=True)

    base_reps: int | None = None
    base_time: int | None = None  # seconds
    rep_increment: int | None = None
    time_increment: int | None = None


class ExerciseAssignment(BaseModel):
    """Binds a catalog exercise to a group with its progression parameters."""

    exercise_id: str
    # Only honoured in mixed cycles; None means rfem there.
    progression_mode: ExerciseProgressionMode | None = None
    simple: SimpleProgression = Field(default_factory=SimpleProgression)
    conditioning: ConditioningProgression = Field(default_factory=ConditioningProgression)


class Group(BaseModel):
    """A named bundle of exercises assigned to day slots via rotation."""

    id: str
    name: str
    exercise_assignments: list[ExerciseAssignment] = Field(default_factory=list)


class Cycle(BaseModel):
    """A multi-week training plan as authored by the user.

    Structural limits (weeks, days per week, rotations) are checked by the
    cycle validator rather than here, so invalid candidates can be reported on.
    """

    id: str | None = None
    name: str = ""
    cycle_type: CycleType = CycleType.TRAINING
    progression_mode: ProgressionMode | None = None
    previous_cycle_id: str | None = None
    start_date: date | None = None
    number_of_weeks: int = 1
    workout_days_per_week: int = 1
    weekly_set_goals: dict[ExerciseType, Annotated[int, Field(ge=0)]] = Field(default_factory=dict)
    groups: list[Group] = Field(default_factory=list)
    group_rotation: list[str] = Field(default_factory=list)
    rfem_rotation: list[int] = Field(default_factory=list)
    conditioning_weekly_rep_increment: int | None = None
    conditioning_weekly_time_increment: int | None = None
    scheduling_mode: SchedulingMode = SchedulingMode.SEQUENCE
    selected_weekdays: list[DayOfWeek] = Field(default_factory=list)
    status: CycleStatus = CycleStatus.PLANNING

    def get_group(self, group_id: str) -> Group | None:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    @property
    def is_date_based(self) -> bool:
        return self.scheduling_mode == SchedulingMode.DATE and bool(self.selected_weekdays)


def get_progression_mode(cycle: Cycle) -> ProgressionMode:
    """Effective progression mode of a cycle; rfem when unset."""
    return cycle.progression_mode or ProgressionMode.RFEM


def get_exercise_progression_mode(
    cycle_mode: ProgressionMode,
    assignment: ExerciseAssignment,
) -> ExerciseProgressionMode:
    """Effective progression mode of one assignment within a cycle.

    Mixed cycles honour the assignment override (default rfem); other cycles
    impose their own mode.
    """
    if cycle_mode == ProgressionMode.MIXED:
        return assignment.progression_mode or ExerciseProgressionMode.RFEM
    if cycle_mode == ProgressionMode.SIMPLE:
        return ExerciseProgressionMode.SIMPLE
    return ExerciseProgressionMode.RFEM
