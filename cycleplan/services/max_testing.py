"""
Max-testing cycles.

A max-testing cycle is a single week with one workout per group. Every
standard exercise gets a max-test set, preceded by a light warm-up when a
previous max is known. Conditioning exercises are not max-tested.
"""

import logging
from datetime import date
from typing import Mapping, Sequence

from cycleplan.models.enums import (
    CycleType,
    ExerciseProgressionMode,
    ProgressionMode,
    SchedulingMode,
)
from cycleplan.schemas.cycle import Cycle, Group
from cycleplan.schemas.exercise import Exercise, MaxRecord
from cycleplan.schemas.workout import ScheduledSet, ScheduledWorkout
from cycleplan.services.calendar import calculate_workout_dates
from cycleplan.services.scheduler import IdGenerator, default_id_generator

logger = logging.getLogger(__name__)


def build_max_testing_cycle(
    groups: Sequence[Group],
    start_date: date | None = None,
    previous_cycle_id: str | None = None,
    name: str = "Max Testing Cycle",
    selected_weekdays: Sequence[int] | None = None,
) -> Cycle:
    """
    Build a one-week max-testing cycle with one day per group.

    Passing selected_weekdays (with a start_date) pins the days to the calendar.
    """
    return Cycle(
        name=name,
        cycle_type=CycleType.MAX_TESTING,
        progression_mode=ProgressionMode.RFEM,
        previous_cycle_id=previous_cycle_id,
        start_date=start_date,
        number_of_weeks=1,
        workout_days_per_week=len(groups),
        weekly_set_goals={},
        groups=list(groups),
        group_rotation=[group.id for group in groups],
        rfem_rotation=[0],
        scheduling_mode=SchedulingMode.DATE if selected_weekdays else SchedulingMode.SEQUENCE,
        selected_weekdays=list(selected_weekdays or []),
    )


class MaxTestingScheduleBuilder:
    """Builds the workouts of a max-testing cycle."""

    def __init__(self, id_generator: IdGenerator | None = None):
        self._new_id = id_generator or default_id_generator

    def build(
        self,
        cycle: Cycle,
        exercises: Mapping[str, Exercise],
        max_records: Mapping[str, MaxRecord] | None = None,
    ) -> list[ScheduledWorkout]:
        """
        Build one workout per group in rotation order.

        Args:
            cycle: Max-testing cycle, usually from build_max_testing_cycle
            exercises: Exercise catalog keyed by exercise id
            max_records: Latest max record per exercise id; snapshotted onto the sets

        Returns:
            Workouts numbered 1..n, all in week 1 with rfem 0
        """
        max_records = max_records or {}
        dates: list[date] = []
        if cycle.is_date_based and cycle.start_date is not None:
            dates = calculate_workout_dates(cycle.start_date, 1, cycle.selected_weekdays)

        workouts: list[ScheduledWorkout] = []
        for group_id in cycle.group_rotation:
            group = cycle.get_group(group_id)
            if group is None:
                logger.warning(f"Group {group_id} not found in max-testing cycle")
                continue

            sequence_number = len(workouts) + 1
            workouts.append(
                ScheduledWorkout(
                    id=self._new_id(),
                    cycle_id=cycle.id,
                    sequence_number=sequence_number,
                    week_number=1,
                    day_in_week=sequence_number,
                    group_id=group.id,
                    rfem=0,
                    scheduled_sets=self._group_sets(group, exercises, max_records),
                    scheduled_date=dates[sequence_number - 1] if sequence_number <= len(dates) else None,
                )
            )

        logger.info(f"Built {len(workouts)} max-testing workouts for cycle {cycle.id}")
        return workouts

    def _group_sets(
        self,
        group: Group,
        exercises: Mapping[str, Exercise],
        max_records: Mapping[str, MaxRecord],
    ) -> list[ScheduledSet]:
        sets: list[ScheduledSet] = []

        for assignment in group.exercise_assignments:
            exercise = exercises.get(assignment.exercise_id)
            if exercise is None or exercise.is_conditioning:
                continue

            record = max_records.get(exercise.id)
            snapshot = {"previous_max_reps": None, "previous_max_time": None}
            if record is not None:
                if exercise.is_time_based:
                    snapshot["previous_max_time"] = record.max_time
                else:
                    snapshot["previous_max_reps"] = record.max_reps
            has_previous_max = any(value for value in snapshot.values())

            common = dict(
                exercise_id=exercise.id,
                exercise_type=exercise.type,
                measurement_type=exercise.measurement_type,
                progression_mode=ExerciseProgressionMode.RFEM,
                **snapshot,
            )

            set_number = 1
            if has_previous_max:
                sets.append(
                    ScheduledSet(id=self._new_id(), set_number=set_number, is_warmup=True, **common)
                )
                set_number += 1
            sets.append(
                ScheduledSet(id=self._new_id(), set_number=set_number, is_max_test=True, **common)
            )

        return sets
