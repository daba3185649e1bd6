"""
ScheduleGenerator - Turns a cycle configuration into concrete workouts.

Per week:
- each day takes its group and RFEM value from the rotations, keyed by the
  day's position in the week (rotations restart every week)
- each exercise type's weekly set goal is split across the days whose group
  can host it; remainder sets go to the highest-RFEM days
- each day's sets are dealt round-robin over the group's exercises of that
  type, with two warm-up sets in front of every non-conditioning exercise

Targets are not computed here; see ProgressionCalculator.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Mapping
from uuid import uuid4

from cycleplan.config.training_config_loader import TrainingConfig, get_training_config
from cycleplan.models.enums import (
    EXERCISE_TYPE_ORDER,
    ExerciseProgressionMode,
    ExerciseType,
    ProgressionMode,
    SchedulingMode,
)
from cycleplan.schemas.cycle import (
    ConditioningProgression,
    Cycle,
    ExerciseAssignment,
    Group,
    get_exercise_progression_mode,
    get_progression_mode,
)
from cycleplan.schemas.exercise import Exercise, MaxRecord
from cycleplan.schemas.workout import ScheduledSet, ScheduledWorkout
from cycleplan.services.calendar import calculate_workout_dates

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], str]
WarningSink = Callable[[str], None]


def default_id_generator() -> str:
    return uuid4().hex


def log_warning(message: str) -> None:
    """Default warning sink."""
    logger.warning(message)


@dataclass
class DayAllocation:
    """One training day of a week while it is being planned."""

    week_number: int
    day_in_week: int
    group: Group
    rfem: int
    sets_by_type: dict[ExerciseType, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ExerciseSlot:
    """An assignment resolved against the catalog."""

    exercise: Exercise
    assignment: ExerciseAssignment


class ScheduleGenerator:
    """
    Generates the scheduled workouts of a training cycle.

    Pure with respect to its inputs: the cycle, catalog and max records are
    never mutated. Ids come from the injected id generator and warnings go to
    the injected sink; neither affects the shape of the schedule.
    """

    def __init__(
        self,
        training_config: TrainingConfig | None = None,
        id_generator: IdGenerator | None = None,
        warning_sink: WarningSink | None = None,
    ):
        self._config = training_config or get_training_config()
        self._new_id = id_generator or default_id_generator
        self._warn = warning_sink or log_warning

    def generate(
        self,
        cycle: Cycle,
        exercises: Mapping[str, Exercise],
        max_records: Mapping[str, MaxRecord] | None = None,
        start_from_workout: int = 1,
    ) -> list[ScheduledWorkout]:
        """
        Generate all scheduled workouts for a cycle.

        Args:
            cycle: Cycle to schedule (expected to have passed validation)
            exercises: Exercise catalog keyed by exercise id
            max_records: Latest max record per exercise id. Not consulted;
                targets are derived at read time.
            start_from_workout: Only return workouts with sequence_number >= this.
                Numbering is global, so the returned tail keeps its original numbers.

        Returns:
            Workouts ordered by sequence_number
        """
        if not cycle.group_rotation:
            self._warn("Cycle has no group rotation, no workouts generated")
            return []

        dates = self._workout_dates(cycle)
        workouts: list[ScheduledWorkout] = []
        sequence_number = 0

        for week_number in range(1, cycle.number_of_weeks + 1):
            days = self._allocate_week(cycle, week_number)
            self._distribute_sets(days, cycle.weekly_set_goals, exercises)

            for day in days:
                sequence_number += 1
                if sequence_number < start_from_workout:
                    continue
                scheduled_date = dates[sequence_number - 1] if sequence_number <= len(dates) else None
                workouts.append(
                    self._build_workout(day, sequence_number, cycle, exercises, scheduled_date)
                )

        logger.info(
            f"Generated {len(workouts)} workouts for cycle {cycle.id} "
            f"({cycle.number_of_weeks} weeks x {cycle.workout_days_per_week} days, "
            f"start_from_workout={start_from_workout})"
        )
        return workouts

    def _workout_dates(self, cycle: Cycle) -> list[date]:
        if cycle.scheduling_mode != SchedulingMode.DATE:
            return []
        if cycle.start_date is None or not cycle.selected_weekdays:
            self._warn("Date-based cycle has no start date or weekdays, workouts are not dated")
            return []
        return calculate_workout_dates(cycle.start_date, cycle.number_of_weeks, cycle.selected_weekdays)

    def _allocate_week(self, cycle: Cycle, week_number: int) -> list[DayAllocation]:
        """Assign group and RFEM to each day of one week."""
        days: list[DayAllocation] = []

        for day_in_week in range(1, cycle.workout_days_per_week + 1):
            group_id = cycle.group_rotation[(day_in_week - 1) % len(cycle.group_rotation)]
            group = cycle.get_group(group_id)
            if group is None:
                self._warn(f"Group {group_id} not found in cycle")
                continue

            rfem = 0
            if cycle.rfem_rotation:
                rfem = cycle.rfem_rotation[(day_in_week - 1) % len(cycle.rfem_rotation)]

            days.append(
                DayAllocation(
                    week_number=week_number,
                    day_in_week=day_in_week,
                    group=group,
                    rfem=rfem,
                )
            )

        return days

    def _distribute_sets(
        self,
        days: list[DayAllocation],
        weekly_set_goals: Mapping[ExerciseType, int],
        exercises: Mapping[str, Exercise],
    ) -> None:
        """Split each type's weekly goal across the days that can host it."""
        for exercise_type in EXERCISE_TYPE_ORDER:
            total_sets = weekly_set_goals.get(exercise_type, 0)
            if not total_sets:
                continue

            eligible_days = [
                day for day in days
                if self._group_has_type(day.group, exercise_type, exercises)
            ]
            if not eligible_days:
                self._warn(
                    f"No days have exercises of type {exercise_type.value}, "
                    f"but goal is {total_sets} sets"
                )
                continue

            base_sets, remainder = divmod(total_sets, len(eligible_days))

            # Highest RFEM first; sorted() is stable so ties keep day order
            by_rfem = sorted(eligible_days, key=lambda day: -day.rfem)
            for index, day in enumerate(by_rfem):
                day.sets_by_type[exercise_type] = base_sets + (1 if index < remainder else 0)

    @staticmethod
    def _group_has_type(
        group: Group,
        exercise_type: ExerciseType,
        exercises: Mapping[str, Exercise],
    ) -> bool:
        for assignment in group.exercise_assignments:
            exercise = exercises.get(assignment.exercise_id)
            if exercise is not None and exercise.type == exercise_type:
                return True
        return False

    @staticmethod
    def _slots_by_type(
        group: Group,
        exercises: Mapping[str, Exercise],
    ) -> dict[ExerciseType, list[ExerciseSlot]]:
        slots: dict[ExerciseType, list[ExerciseSlot]] = {}
        seen: set[str] = set()
        for assignment in group.exercise_assignments:
            exercise = exercises.get(assignment.exercise_id)
            # A repeated exercise keeps its first assignment
            if exercise is None or assignment.exercise_id in seen:
                continue
            seen.add(assignment.exercise_id)
            slots.setdefault(exercise.type, []).append(ExerciseSlot(exercise, assignment))
        return slots

    def _build_workout(
        self,
        day: DayAllocation,
        sequence_number: int,
        cycle: Cycle,
        exercises: Mapping[str, Exercise],
        scheduled_date: date | None,
    ) -> ScheduledWorkout:
        cycle_mode = get_progression_mode(cycle)
        slots_by_type = self._slots_by_type(day.group, exercises)

        # Round-robin: each full pass over the type's exercises is one set number
        working: list[tuple[ExerciseSlot, int]] = []
        for exercise_type in EXERCISE_TYPE_ORDER:
            sets_needed = day.sets_by_type.get(exercise_type, 0)
            slots = slots_by_type.get(exercise_type, [])
            if not sets_needed or not slots:
                continue
            for set_index in range(sets_needed):
                slot = slots[set_index % len(slots)]
                working.append((slot, set_index // len(slots) + 1))

        in_workout: dict[str, ExerciseSlot] = {}
        for slot, _ in working:
            in_workout.setdefault(slot.exercise.id, slot)

        scheduled_sets: list[ScheduledSet] = []
        for slot in in_workout.values():
            if not slot.exercise.is_conditioning:
                scheduled_sets.extend(self._warmup_sets(slot, cycle_mode))

        warmup_offset = self._config.warmup.set_count
        for slot, set_number in working:
            offset = 0 if slot.exercise.is_conditioning else warmup_offset
            scheduled_sets.append(
                ScheduledSet(
                    id=self._new_id(),
                    exercise_id=slot.exercise.id,
                    exercise_type=slot.exercise.type,
                    is_conditioning=slot.exercise.is_conditioning,
                    measurement_type=slot.exercise.measurement_type,
                    set_number=set_number + offset,
                    **self._progression_fields(slot, cycle_mode),
                )
            )

        return ScheduledWorkout(
            id=self._new_id(),
            cycle_id=cycle.id,
            sequence_number=sequence_number,
            week_number=day.week_number,
            day_in_week=day.day_in_week,
            group_id=day.group.id,
            rfem=day.rfem,
            scheduled_sets=scheduled_sets,
            scheduled_date=scheduled_date,
        )

    def _warmup_sets(self, slot: ExerciseSlot, cycle_mode: ProgressionMode) -> list[ScheduledSet]:
        """Warm-up sets numbered from 1, one per configured percentage."""
        fields = self._progression_fields(slot, cycle_mode)
        return [
            ScheduledSet(
                id=self._new_id(),
                exercise_id=slot.exercise.id,
                exercise_type=slot.exercise.type,
                is_conditioning=False,
                measurement_type=slot.exercise.measurement_type,
                set_number=index + 1,
                is_warmup=True,
                warmup_percentage=percentage,
                **fields,
            )
            for index, percentage in enumerate(self._config.warmup.percentages)
        ]

    def _progression_fields(self, slot: ExerciseSlot, cycle_mode: ProgressionMode) -> dict[str, Any]:
        """Progression parameters copied onto every set of an exercise."""
        mode = get_exercise_progression_mode(cycle_mode, slot.assignment)
        fields: dict[str, Any] = {"progression_mode": mode}

        if slot.exercise.is_conditioning:
            fields["conditioning"] = self._conditioning_params(slot, cycle_mode)
        elif mode == ExerciseProgressionMode.SIMPLE:
            fields["simple"] = slot.assignment.simple

        return fields

    def _conditioning_params(
        self,
        slot: ExerciseSlot,
        cycle_mode: ProgressionMode,
    ) -> ConditioningProgression:
        defaults = self._config.conditioning
        source = slot.assignment.conditioning
        is_time_based = slot.exercise.is_time_based

        # Per-exercise increments only apply in mixed cycles; otherwise the
        # cycle-level increments are used at read time.
        is_mixed = cycle_mode == ProgressionMode.MIXED

        return ConditioningProgression(
            base_reps=None if is_time_based else (source.base_reps or defaults.default_base_reps),
            base_time=(source.base_time or defaults.default_base_time) if is_time_based else None,
            rep_increment=source.rep_increment if is_mixed else None,
            time_increment=source.time_increment if is_mixed else None,
        )


def generate_schedule(
    cycle: Cycle,
    exercises: Mapping[str, Exercise],
    max_records: Mapping[str, MaxRecord] | None = None,
    start_from_workout: int = 1,
    **generator_kwargs: Any,
) -> list[ScheduledWorkout]:
    """Generate a schedule with a one-off ScheduleGenerator."""
    generator = ScheduleGenerator(**generator_kwargs)
    return generator.generate(cycle, exercises, max_records, start_from_workout)
