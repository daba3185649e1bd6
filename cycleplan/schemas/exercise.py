"""Pydantic schemas for catalog exercises and personal records."""
from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from cycleplan.models.enums import ExerciseType, MeasurementType, TrainingMode


class Exercise(BaseModel):
    """Catalog entry. Owned by the exercise catalog; read-only here."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ExerciseType
    mode: TrainingMode = TrainingMode.STANDARD
    measurement_type: MeasurementType = MeasurementType.REPS
    weight_enabled: bool = False
    default_weight: float | None = None

    @property
    def is_conditioning(self) -> bool:
        return self.mode == TrainingMode.CONDITIONING

    @property
    def is_time_based(self) -> bool:
        return self.measurement_type == MeasurementType.TIME


class MaxRecord(BaseModel):
    """Personal best for one exercise."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str
    max_reps: int | None = Field(default=None, ge=0)
    max_time: int | None = Field(default=None, ge=0)  # seconds
    weight: float | None = None
    recorded_at: datetime | None = None


def latest_max_records(records: Iterable[MaxRecord]) -> dict[str, MaxRecord]:
    """Reduce a max-record history to the most recent record per exercise.

    Records without ``recorded_at`` sort before dated ones; among equals the
    later record in the input wins.
    """
    latest: dict[str, MaxRecord] = {}
    for record in records:
        current = latest.get(record.exercise_id)
        if current is None or _recorded_key(record) >= _recorded_key(current):
            latest[record.exercise_id] = record
    return latest


def _recorded_key(record: MaxRecord) -> tuple[int, datetime]:
    if record.recorded_at is None:
        return (0, datetime.min)
    recorded_at = record.recorded_at
    # Aware times compare in UTC; naive times are taken to be UTC already
    if recorded_at.tzinfo is not None:
        recorded_at = recorded_at.astimezone(timezone.utc).replace(tzinfo=None)
    return (1, recorded_at)
