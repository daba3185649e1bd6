"""Shared fixtures for the cycle planning tests."""
import itertools

import pytest

from cycleplan.config.training_config_loader import TrainingConfig
from cycleplan.models.enums import ExerciseType, MeasurementType, TrainingMode
from cycleplan.schemas.cycle import Cycle, ExerciseAssignment, Group
from cycleplan.schemas.exercise import Exercise
from cycleplan.services.scheduler import ScheduleGenerator


@pytest.fixture
def training_config():
    """Packaged defaults, without reading settings or the environment."""
    return TrainingConfig()


@pytest.fixture
def id_generator():
    """Deterministic id factory: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def warnings():
    """Collects warning strings emitted by the engine."""
    return []


@pytest.fixture
def generator(training_config, id_generator, warnings):
    return ScheduleGenerator(
        training_config=training_config,
        id_generator=id_generator,
        warning_sink=warnings.append,
    )


@pytest.fixture
def catalog():
    """Exercise catalog keyed by id."""
    exercises = [
        Exercise(id="pushup", name="Push-up", type=ExerciseType.PUSH),
        Exercise(id="dips", name="Dips", type=ExerciseType.PUSH),
        Exercise(id="pullup", name="Pull-up", type=ExerciseType.PULL),
        Exercise(id="squat", name="Squat", type=ExerciseType.LEGS),
        Exercise(
            id="plank",
            name="Plank",
            type=ExerciseType.CORE,
            measurement_type=MeasurementType.TIME,
        ),
        Exercise(
            id="burpee",
            name="Burpee",
            type=ExerciseType.OTHER,
            mode=TrainingMode.CONDITIONING,
        ),
        Exercise(
            id="jumprope",
            name="Jump Rope",
            type=ExerciseType.OTHER,
            mode=TrainingMode.CONDITIONING,
            measurement_type=MeasurementType.TIME,
        ),
    ]
    return {exercise.id: exercise for exercise in exercises}


@pytest.fixture
def make_cycle():
    """
    Factory for a valid two-week cycle.

    Upper (push-up, dips, pull-up) / Lower (squat, plank, burpee, jump rope)
    over three days per week with rotation Upper, Lower, Upper and RFEM 3, 4, 5.
    Any field can be overridden by keyword.
    """

    def _make_cycle(**overrides) -> Cycle:
        fields = dict(
            id="cycle-1",
            name="Test Cycle",
            number_of_weeks=2,
            workout_days_per_week=3,
            weekly_set_goals={
                ExerciseType.PUSH: 7,
                ExerciseType.PULL: 4,
                ExerciseType.LEGS: 3,
                ExerciseType.CORE: 2,
                ExerciseType.OTHER: 2,
            },
            groups=[
                Group(
                    id="upper",
                    name="Upper",
                    exercise_assignments=[
                        ExerciseAssignment(exercise_id="pushup"),
                        ExerciseAssignment(exercise_id="dips"),
                        ExerciseAssignment(exercise_id="pullup"),
                    ],
                ),
                Group(
                    id="lower",
                    name="Lower",
                    exercise_assignments=[
                        ExerciseAssignment(exercise_id="squat"),
                        ExerciseAssignment(exercise_id="plank"),
                        ExerciseAssignment(exercise_id="burpee"),
                        ExerciseAssignment(exercise_id="jumprope"),
                    ],
                ),
            ],
            group_rotation=["upper", "lower", "upper"],
            rfem_rotation=[3, 4, 5],
        )
        fields.update(overrides)
        return Cycle(**fields)

    return _make_cycle
