"""
Progression Calculator

Computes the number a user should attempt for a scheduled set:
- Simple progression: base value plus increments per workout or per week
- Max test: no target (MAX_TEST_TARGET)
- Warm-ups: a percentage of the working target, or of the previous max when
  warming up for a max test
- Conditioning: base value plus a weekly increment
- Standard RFEM (progressive underload): max minus the day's effort margin

Everything is derived from the stored set, its workout and the latest max
record, so targets follow max records as they change after generation.
"""

from __future__ import annotations

import math
from typing import Mapping

from cycleplan.config.training_config_loader import TrainingConfig, get_training_config
from cycleplan.models.enums import ExerciseProgressionMode, ProgressionInterval
from cycleplan.schemas.cycle import (
    ConditioningProgression,
    Cycle,
    SimpleProgression,
    get_progression_mode,
)
from cycleplan.schemas.exercise import MaxRecord
from cycleplan.schemas.workout import ScheduledSet, ScheduledWorkout, get_set_progression_mode

# Reserved: "go to max", not a literal zero-rep target.
MAX_TEST_TARGET = 0

Number = int | float


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return math.floor(value + 0.5)


def round_to_increment(weight: float, increment: float) -> float:
    """Round a weight to the nearest multiple of ``increment``."""
    if increment <= 0:
        return round_half_up(weight)
    return _normalize(round_half_up(weight / increment) * increment)


def _normalize(value: Number) -> Number:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def progressed_value(
    base: Number,
    interval: ProgressionInterval,
    increment: Number,
    workout: ScheduledWorkout,
) -> Number:
    """Base value with the increment applied once per elapsed workout or week."""
    if interval == ProgressionInterval.CONSTANT or not increment:
        return _normalize(base)
    if interval == ProgressionInterval.PER_WORKOUT:
        return _normalize(base + increment * (workout.sequence_number - 1))
    if interval == ProgressionInterval.PER_WEEK:
        return _normalize(base + increment * (workout.week_number - 1))
    return _normalize(base)


class ProgressionCalculator:
    """Maps a scheduled set plus live max records to a target number."""

    def __init__(self, training_config: TrainingConfig | None = None):
        self._config = training_config or get_training_config()

    def target_for(
        self,
        scheduled_set: ScheduledSet,
        workout: ScheduledWorkout,
        max_record: MaxRecord | None = None,
        cycle: Cycle | None = None,
        default_max: int | None = None,
    ) -> Number:
        """
        Target reps (or seconds) for a set.

        Args:
            scheduled_set: The stored set
            workout: Workout holding the set (week, sequence and RFEM context)
            max_record: Latest max record for the set's exercise, if any
            cycle: Owning cycle; supplies the progression mode and the
                cycle-level conditioning increments
            default_max: Rep max to assume when no record exists

        Returns:
            Target reps for rep-based sets, seconds for time-based sets,
            or MAX_TEST_TARGET for max-test sets
        """
        cycle_mode = get_progression_mode(cycle) if cycle is not None else None
        mode = get_set_progression_mode(cycle_mode, scheduled_set)

        if not scheduled_set.is_conditioning and mode == ExerciseProgressionMode.SIMPLE:
            return self.simple_target(scheduled_set, workout)

        if scheduled_set.is_max_test:
            return MAX_TEST_TARGET

        if scheduled_set.is_warmup:
            if scheduled_set.warmup_percentage is None:
                return self._max_test_warmup_target(scheduled_set, max_record, default_max)

            working_set = scheduled_set.model_copy(
                update={"is_warmup": False, "warmup_percentage": None}
            )
            working_target = self.target_for(working_set, workout, max_record, cycle, default_max)
            return math.ceil(working_target * scheduled_set.warmup_percentage / 100)

        if scheduled_set.is_conditioning:
            return self._conditioning_target(scheduled_set, workout, cycle, default_max)

        return self._rfem_target(scheduled_set, workout, max_record, default_max)

    def simple_target(self, scheduled_set: ScheduledSet, workout: ScheduledWorkout) -> Number:
        """Simple-progression target; warm-ups take their percentage of it."""
        params = scheduled_set.simple or SimpleProgression()
        rfem = self._config.rfem

        if scheduled_set.is_time_based:
            base = params.base_time if params.base_time is not None else rfem.default_time_max
            working = progressed_value(base, params.time_interval, params.time_increment, workout)
            minimum = self._config.warmup.min_time_seconds
        else:
            base = params.base_reps if params.base_reps is not None else rfem.default_max
            working = progressed_value(base, params.rep_interval, params.rep_increment, workout)
            minimum = self._config.warmup.min_reps

        if scheduled_set.is_warmup and scheduled_set.warmup_percentage is not None:
            return max(minimum, math.ceil(working * scheduled_set.warmup_percentage / 100))
        return working

    def simple_target_weight(
        self,
        scheduled_set: ScheduledSet,
        workout: ScheduledWorkout,
    ) -> Number | None:
        """Working weight under simple progression; None when no base weight is set."""
        params = scheduled_set.simple
        if params is None or params.base_weight is None:
            return None
        return progressed_value(params.base_weight, params.weight_interval, params.weight_increment, workout)

    def target_weight_for(
        self,
        scheduled_set: ScheduledSet,
        workout: ScheduledWorkout,
        cycle: Cycle | None = None,
    ) -> Number | None:
        """
        Target weight for a set, or None when the set carries no weight target.

        Warm-ups use their percentage of the working weight when weight is the
        progressing dimension, and the reduced-intensity factor otherwise.
        """
        cycle_mode = get_progression_mode(cycle) if cycle is not None else None
        mode = get_set_progression_mode(cycle_mode, scheduled_set)
        if scheduled_set.is_conditioning or mode != ExerciseProgressionMode.SIMPLE:
            return None

        working = self.simple_target_weight(scheduled_set, workout)
        if working is None:
            return None
        if not scheduled_set.is_warmup or scheduled_set.warmup_percentage is None:
            return working

        params = scheduled_set.simple
        default_increment = self._config.weight.default_increment
        if params.weight_progresses:
            return round_to_increment(
                working * scheduled_set.warmup_percentage / 100,
                params.weight_increment or default_increment,
            )
        return round_to_increment(
            working * self._config.warmup.reduced_intensity_factor,
            default_increment,
        )

    def workout_targets(
        self,
        workout: ScheduledWorkout,
        max_records: Mapping[str, MaxRecord],
        cycle: Cycle | None = None,
    ) -> dict[str, Number]:
        """Targets for every set of a workout, keyed by set id."""
        return {
            scheduled_set.id: self.target_for(
                scheduled_set,
                workout,
                max_records.get(scheduled_set.exercise_id),
                cycle,
            )
            for scheduled_set in workout.scheduled_sets
        }

    def _max_test_warmup_target(
        self,
        scheduled_set: ScheduledSet,
        max_record: MaxRecord | None,
        default_max: int | None,
    ) -> int:
        """Warm-up before a max test: a fraction of the previous max."""
        warmup = self._config.warmup
        rfem = self._config.rfem

        if scheduled_set.is_time_based:
            previous_max = (
                scheduled_set.previous_max_time
                or (max_record.max_time if max_record else None)
                or rfem.default_time_max
            )
            return max(warmup.min_time_seconds, round_half_up(previous_max * warmup.max_test_intensity))

        previous_max = (
            scheduled_set.previous_max_reps
            or (max_record.max_reps if max_record else None)
            or default_max
            or rfem.default_max
        )
        return max(warmup.min_reps, round_half_up(previous_max * warmup.max_test_intensity))

    def _conditioning_target(
        self,
        scheduled_set: ScheduledSet,
        workout: ScheduledWorkout,
        cycle: Cycle | None,
        default_max: int | None,
    ) -> int:
        """Base value plus one increment per completed week."""
        params = scheduled_set.conditioning or ConditioningProgression()
        elapsed_weeks = workout.week_number - 1

        if scheduled_set.is_time_based:
            base = params.base_time or self._config.rfem.default_time_max
            increment = params.time_increment
            if increment is None:
                increment = self._cycle_time_increment(cycle)
            return base + elapsed_weeks * increment

        base = params.base_reps or default_max or self._config.rfem.default_max
        increment = params.rep_increment
        if increment is None:
            increment = self._cycle_rep_increment(cycle)
        return base + elapsed_weeks * increment

    def _cycle_rep_increment(self, cycle: Cycle | None) -> int:
        if cycle is not None and cycle.conditioning_weekly_rep_increment is not None:
            return cycle.conditioning_weekly_rep_increment
        return self._config.conditioning.default_rep_increment

    def _cycle_time_increment(self, cycle: Cycle | None) -> int:
        if cycle is not None and cycle.conditioning_weekly_time_increment is not None:
            return cycle.conditioning_weekly_time_increment
        return self._config.conditioning.default_time_increment

    def _rfem_target(
        self,
        scheduled_set: ScheduledSet,
        workout: ScheduledWorkout,
        max_record: MaxRecord | None,
        default_max: int | None,
    ) -> int:
        """Progressive underload: reps drop by the RFEM, time by a tenth of the max per point."""
        rfem = self._config.rfem

        if scheduled_set.is_time_based:
            max_time = (max_record.max_time if max_record else None) or rfem.default_time_max
            scaled = max_time * (1 - workout.rfem * rfem.time_rfem_percentage)
            return max(rfem.min_target_time_seconds, round_half_up(scaled))

        max_reps = (max_record.max_reps if max_record else None) or default_max or rfem.default_max
        return max(rfem.min_target_reps, max_reps - workout.rfem)


def get_progression_calculator(training_config: TrainingConfig | None = None) -> ProgressionCalculator:
    """Get a ProgressionCalculator; the configured training constants when none are given."""
    return ProgressionCalculator(training_config=training_config)
