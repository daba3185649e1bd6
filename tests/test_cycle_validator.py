"""Tests for cycle validation."""
import pytest

from cycleplan.models.enums import ExerciseProgressionMode, ExerciseType, ProgressionMode
from cycleplan.schemas.cycle import ExerciseAssignment, Group, SimpleProgression
from cycleplan.services.cycle_validator import CycleValidator, validate_cycle


@pytest.fixture
def validator():
    return CycleValidator()


class TestValidCycles:
    def test_default_cycle_is_valid(self, validator, make_cycle, catalog):
        """A complete rfem cycle has no errors and no warnings."""
        result = validator.validate(make_cycle(), catalog)

        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_goal_for_type_absent_from_groups_is_not_reported(self, validator, make_cycle, catalog):
        """Quotas for types no group hosts are a silent no-op."""
        cycle = make_cycle(weekly_set_goals={ExerciseType.BALANCE: 6, ExerciseType.MOBILITY: 2})

        result = validator.validate(cycle, catalog)

        assert result.valid is True
        assert result.warnings == []

    def test_module_function(self, make_cycle, catalog):
        """validate_cycle uses a default validator."""
        assert validate_cycle(make_cycle(), catalog).valid is True


class TestErrors:
    @pytest.mark.parametrize("name", ["", "   "])
    def test_name_required(self, validator, make_cycle, catalog, name):
        """A blank name is an error."""
        result = validator.validate(make_cycle(name=name), catalog)

        assert result.valid is False
        assert "Cycle name is required" in result.errors

    def test_at_least_one_week(self, validator, make_cycle, catalog):
        """Zero weeks is an error."""
        result = validator.validate(make_cycle(number_of_weeks=0), catalog)

        assert "Cycle must be at least 1 week" in result.errors

    @pytest.mark.parametrize("days", [0, 8])
    def test_days_per_week_range(self, validator, make_cycle, catalog, days):
        """Days per week must be within 1..7."""
        result = validator.validate(make_cycle(workout_days_per_week=days), catalog)

        assert "Workout days per week must be between 1 and 7" in result.errors

    @pytest.mark.parametrize("days", [1, 7])
    def test_days_per_week_bounds_are_inclusive(self, validator, make_cycle, catalog, days):
        """1 and 7 are both allowed."""
        result = validator.validate(make_cycle(workout_days_per_week=days), catalog)

        assert result.valid is True

    def test_groups_required(self, validator, make_cycle, catalog):
        """A cycle without groups is an error (and its rotation dangles)."""
        result = validator.validate(make_cycle(groups=[]), catalog)

        assert "At least one group is required" in result.errors
        assert "Group upper in rotation not found" in result.errors

    def test_group_rotation_required(self, validator, make_cycle, catalog):
        """An empty group rotation is an error."""
        result = validator.validate(make_cycle(group_rotation=[]), catalog)

        assert result.errors == ["Group rotation is required"]

    def test_unknown_group_in_rotation(self, validator, make_cycle, catalog):
        """Every rotation entry must name a defined group."""
        cycle = make_cycle(group_rotation=["upper", "ghost", "phantom"])

        result = validator.validate(cycle, catalog)

        assert result.errors == [
            "Group ghost in rotation not found",
            "Group phantom in rotation not found",
        ]

    def test_multiple_errors_are_collected(self, validator, make_cycle, catalog):
        """Validation reports every error, not just the first."""
        cycle = make_cycle(name="", number_of_weeks=0, workout_days_per_week=9)

        result = validator.validate(cycle, catalog)

        assert len(result.errors) == 3


class TestRFEMRotation:
    def test_required_in_rfem_mode(self, validator, make_cycle, catalog):
        """An rfem cycle without RFEM rotation is invalid."""
        cycle = make_cycle(rfem_rotation=[], progression_mode=ProgressionMode.RFEM)

        result = validator.validate(cycle, catalog)

        assert result.valid is False
        assert result.errors == ["RFEM rotation is required"]

    def test_required_when_mode_absent(self, validator, make_cycle, catalog):
        """A cycle without a progression mode is treated as rfem."""
        result = validator.validate(make_cycle(rfem_rotation=[]), catalog)

        assert "RFEM rotation is required" in result.errors

    def test_required_in_mixed_mode(self, validator, make_cycle, catalog):
        """Mixed cycles still schedule rfem exercises."""
        cycle = make_cycle(rfem_rotation=[], progression_mode=ProgressionMode.MIXED)

        result = validator.validate(cycle, catalog)

        assert "RFEM rotation is required" in result.errors

    def test_optional_in_simple_mode(self, validator, make_cycle, catalog):
        """The same cycle in simple mode is valid."""
        cycle = make_cycle(rfem_rotation=[], progression_mode=ProgressionMode.SIMPLE)

        result = validator.validate(cycle, catalog)

        assert result.valid is True
        assert result.errors == []


class TestWarnings:
    def test_group_without_exercises(self, validator, make_cycle, catalog):
        """An empty group only warns."""
        cycle = make_cycle(groups=make_cycle().groups + [Group(id="rest", name="Rest")])

        result = validator.validate(cycle, catalog)

        assert result.valid is True
        assert result.warnings == ['Group "Rest" has no exercises']

    def test_simple_mode_missing_bases(self, validator, make_cycle, catalog):
        """Simple cycles warn per exercise and group about missing bases."""
        cycle = make_cycle(progression_mode=ProgressionMode.SIMPLE)

        result = validator.validate(cycle, catalog)

        assert result.valid is True
        assert result.warnings == [
            '"Push-up" in group "Upper" has no base reps set',
            '"Dips" in group "Upper" has no base reps set',
            '"Pull-up" in group "Upper" has no base reps set',
            '"Squat" in group "Lower" has no base reps set',
            '"Plank" in group "Lower" has no base time set',
        ]

    def test_simple_mode_with_bases_set(self, validator, make_cycle, catalog):
        """Assignments with the right base value do not warn."""
        cycle = make_cycle(
            progression_mode=ProgressionMode.SIMPLE,
            groups=[
                Group(
                    id="upper",
                    name="Upper",
                    exercise_assignments=[
                        ExerciseAssignment(exercise_id="pushup", simple=SimpleProgression(base_reps=8)),
                        ExerciseAssignment(exercise_id="plank", simple=SimpleProgression(base_time=30)),
                    ],
                ),
            ],
            group_rotation=["upper"],
        )

        result = validator.validate(cycle, catalog)

        assert result.warnings == []

    def test_time_exercise_needs_base_time_not_reps(self, validator, make_cycle, catalog):
        """A time-based exercise with only base reps still warns about base time."""
        cycle = make_cycle(
            progression_mode=ProgressionMode.SIMPLE,
            groups=[
                Group(
                    id="core",
                    name="Core",
                    exercise_assignments=[
                        ExerciseAssignment(exercise_id="plank", simple=SimpleProgression(base_reps=8)),
                    ],
                ),
            ],
            group_rotation=["core"],
        )

        result = validator.validate(cycle, catalog)

        assert result.warnings == ['"Plank" in group "Core" has no base time set']

    def test_mixed_mode_only_checks_simple_assignments(self, validator, make_cycle, catalog):
        """In mixed cycles only assignments overridden to simple are checked."""
        cycle = make_cycle(
            progression_mode=ProgressionMode.MIXED,
            groups=[
                Group(
                    id="upper",
                    name="Upper",
                    exercise_assignments=[
                        ExerciseAssignment(
                            exercise_id="pushup",
                            progression_mode=ExerciseProgressionMode.SIMPLE,
                        ),
                        ExerciseAssignment(exercise_id="dips"),
                    ],
                ),
            ],
            group_rotation=["upper"],
        )

        result = validator.validate(cycle, catalog)

        assert result.warnings == ['"Push-up" in group "Upper" has no base reps set']

    def test_conditioning_exercises_are_not_checked(self, validator, make_cycle, catalog):
        """Conditioning exercises do not use simple bases."""
        cycle = make_cycle(
            progression_mode=ProgressionMode.SIMPLE,
            groups=[
                Group(
                    id="cardio",
                    name="Cardio",
                    exercise_assignments=[
                        ExerciseAssignment(exercise_id="burpee"),
                        ExerciseAssignment(exercise_id="jumprope"),
                    ],
                ),
            ],
            group_rotation=["cardio"],
        )

        result = validator.validate(cycle, catalog)

        assert result.warnings == []

    def test_warnings_do_not_block(self, validator, make_cycle, catalog):
        """Errors and warnings are reported independently."""
        cycle = make_cycle(name="", progression_mode=ProgressionMode.SIMPLE)

        result = validator.validate(cycle, catalog)

        assert result.errors == ["Cycle name is required"]
        assert len(result.warnings) == 5
