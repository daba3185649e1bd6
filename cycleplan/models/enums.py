"""Enumerations shared by the cycle, exercise and workout schemas."""
from enum import Enum


class ExerciseType(str, Enum):
    """Category of exercise used for grouping and weekly set distribution."""
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    CORE = "core"
    BALANCE = "balance"
    MOBILITY = "mobility"
    OTHER = "other"


class TrainingMode(str, Enum):
    """How an exercise progresses.

    STANDARD exercises work below a recorded max; CONDITIONING exercises add
    volume every week from a base value.
    """
    STANDARD = "standard"
    CONDITIONING = "conditioning"


class MeasurementType(str, Enum):
    REPS = "reps"
    TIME = "time"  # seconds


class ProgressionMode(str, Enum):
    """Cycle-level progression mode."""
    RFEM = "rfem"
    SIMPLE = "simple"
    MIXED = "mixed"  # per-exercise selection


class ExerciseProgressionMode(str, Enum):
    """Per-exercise progression mode (mixed cycles)."""
    RFEM = "rfem"
    SIMPLE = "simple"


class ProgressionInterval(str, Enum):
    CONSTANT = "constant"
    PER_WORKOUT = "per_workout"
    PER_WEEK = "per_week"


class SchedulingMode(str, Enum):
    SEQUENCE = "sequence"  # completed in order at the user's pace
    DATE = "date"  # pinned to weekdays


class CycleType(str, Enum):
    TRAINING = "training"
    MAX_TESTING = "max_testing"


class CycleStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    COMPLETED = "completed"


class WorkoutStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    COMPLETED = "completed"
    SKIPPED = "skipped"


# Order in which weekly set goals are distributed and working sets emitted.
EXERCISE_TYPE_ORDER: tuple[ExerciseType, ...] = (
    ExerciseType.PUSH,
    ExerciseType.PULL,
    ExerciseType.LEGS,
    ExerciseType.CORE,
    ExerciseType.BALANCE,
    ExerciseType.MOBILITY,
    ExerciseType.OTHER,
)
