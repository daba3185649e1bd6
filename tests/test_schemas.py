"""Tests for schema helpers, exceptions and logging setup."""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from cycleplan.core.exceptions import CycleValidationError
from cycleplan.core.logging import add_log_context, clear_log_context, configure_logging, get_logger
from cycleplan.models.enums import ExerciseProgressionMode, ExerciseType, ProgressionMode
from cycleplan.schemas.cycle import Cycle, ExerciseAssignment, get_exercise_progression_mode, get_progression_mode
from cycleplan.schemas.exercise import MaxRecord, latest_max_records
from cycleplan.schemas.workout import ScheduledSet, get_set_progression_mode


class TestLatestMaxRecords:
    def test_keeps_most_recent_per_exercise(self):
        records = [
            MaxRecord(exercise_id="pushup", max_reps=15, recorded_at=datetime(2025, 1, 1)),
            MaxRecord(exercise_id="pushup", max_reps=18, recorded_at=datetime(2025, 2, 1)),
            MaxRecord(exercise_id="pushup", max_reps=12, recorded_at=datetime(2024, 12, 1)),
            MaxRecord(exercise_id="plank", max_time=60),
        ]

        latest = latest_max_records(records)

        assert latest["pushup"].max_reps == 18
        assert latest["plank"].max_time == 60

    def test_dated_beats_undated(self):
        records = [
            MaxRecord(exercise_id="pushup", max_reps=15, recorded_at=datetime(2025, 1, 1, tzinfo=timezone.utc)),
            MaxRecord(exercise_id="pushup", max_reps=30),
        ]

        assert latest_max_records(records)["pushup"].max_reps == 15

    def test_aware_times_compare_across_offsets(self):
        """09:00 at UTC-5 is 14:00 UTC, so it is later than 10:00 UTC."""
        records = [
            MaxRecord(exercise_id="pushup", max_reps=10, recorded_at=datetime(2025, 3, 1, 10, tzinfo=timezone.utc)),
            MaxRecord(
                exercise_id="pushup",
                max_reps=20,
                recorded_at=datetime(2025, 3, 1, 9, tzinfo=timezone(timedelta(hours=-5))),
            ),
        ]

        assert latest_max_records(records)["pushup"].max_reps == 20
        assert latest_max_records(reversed(records))["pushup"].max_reps == 20

    def test_later_input_wins_ties(self):
        records = [
            MaxRecord(exercise_id="pushup", max_reps=15),
            MaxRecord(exercise_id="pushup", max_reps=16),
        ]

        assert latest_max_records(records)["pushup"].max_reps == 16


class TestModeHelpers:
    def test_cycle_mode_defaults_to_rfem(self):
        assert get_progression_mode(Cycle(name="c")) == ProgressionMode.RFEM

    @pytest.mark.parametrize(
        "cycle_mode, override, expected",
        [
            (ProgressionMode.RFEM, ExerciseProgressionMode.SIMPLE, ExerciseProgressionMode.RFEM),
            (ProgressionMode.SIMPLE, None, ExerciseProgressionMode.SIMPLE),
            (ProgressionMode.MIXED, None, ExerciseProgressionMode.RFEM),
            (ProgressionMode.MIXED, ExerciseProgressionMode.SIMPLE, ExerciseProgressionMode.SIMPLE),
        ],
    )
    def test_exercise_mode(self, cycle_mode, override, expected):
        assignment = ExerciseAssignment(exercise_id="pushup", progression_mode=override)

        assert get_exercise_progression_mode(cycle_mode, assignment) == expected

    def test_set_mode_without_cycle(self):
        scheduled_set = ScheduledSet(
            id="s", exercise_id="pushup", exercise_type=ExerciseType.PUSH, set_number=1,
        )

        assert get_set_progression_mode(None, scheduled_set) == ExerciseProgressionMode.RFEM


class TestModelConstraints:
    def test_weekday_range(self):
        with pytest.raises(PydanticValidationError):
            Cycle(name="c", selected_weekdays=[7])

    def test_negative_goal(self):
        with pytest.raises(PydanticValidationError):
            Cycle(name="c", weekly_set_goals={ExerciseType.PUSH: -1})

    def test_structural_fields_left_to_validator(self):
        """Invalid structure can be constructed so it can be reported on."""
        cycle = Cycle(name="", number_of_weeks=0, workout_days_per_week=9)

        assert cycle.number_of_weeks == 0

    def test_sets_are_immutable(self):
        scheduled_set = ScheduledSet(
            id="s", exercise_id="pushup", exercise_type=ExerciseType.PUSH, set_number=1,
        )

        with pytest.raises(PydanticValidationError):
            scheduled_set.set_number = 2


class TestCycleValidationError:
    def test_message_joins_errors(self):
        error = CycleValidationError(["a", "b"], ["w"])

        assert error.message == "Validation failed for cycle: a; b"
        assert error.details == {"errors": ["a", "b"], "warnings": ["w"]}


class TestLogging:
    def test_configure_and_log(self, capsys):
        configure_logging()
        logger = get_logger("cycleplan.test")

        add_log_context(cycle_id="cycle-1")
        logger.info("cycle_planned", workout_count=6)
        clear_log_context()

        output = capsys.readouterr().out
        assert "cycle_planned" in output
        assert "cycle-1" in output
