"""Service that validates, schedules and previews training cycles."""
from typing import Mapping

from cycleplan.config.training_config_loader import TrainingConfig, get_training_config
from cycleplan.core.exceptions import CycleValidationError, ValidationError
from cycleplan.core.logging import get_logger
from cycleplan.schemas.cycle import Cycle
from cycleplan.schemas.exercise import Exercise, MaxRecord
from cycleplan.schemas.validation import CycleValidationResult
from cycleplan.schemas.workout import ScheduledWorkout
from cycleplan.services.cycle_validator import CycleValidator
from cycleplan.services.progression import Number, get_progression_calculator
from cycleplan.services.scheduler import IdGenerator, ScheduleGenerator, WarningSink


logger = get_logger(__name__)


def _log_cycle_warning(message: str) -> None:
    logger.warning("cycle_warning", message=message)


class CyclePlannerService:
    """Entry point for turning an authored cycle into its schedule.

    Wires the validator, the schedule generator and the progression
    calculator together so callers never generate from an invalid cycle.
    """

    def __init__(
        self,
        training_config: TrainingConfig | None = None,
        id_generator: IdGenerator | None = None,
        warning_sink: WarningSink | None = None,
    ):
        """Initialize the planner.

        Args:
            training_config: Training constants; the packaged defaults when omitted
            id_generator: Id factory for workouts and sets
            warning_sink: Receives validation and generation warnings
        """
        config = training_config or get_training_config()
        self._warn = warning_sink or _log_cycle_warning
        self._validator = CycleValidator()
        self._generator = ScheduleGenerator(
            training_config=config,
            id_generator=id_generator,
            warning_sink=self._warn,
        )
        self._calculator = get_progression_calculator(config)

    def validate(self, cycle: Cycle, exercises: Mapping[str, Exercise]) -> CycleValidationResult:
        """Validate a cycle without generating anything."""
        result = self._validator.validate(cycle, exercises)
        logger.info(
            "cycle_validated",
            cycle_id=cycle.id,
            cycle_name=cycle.name,
            valid=result.valid,
            error_count=len(result.errors),
            warning_count=len(result.warnings),
        )
        return result

    def plan(
        self,
        cycle: Cycle,
        exercises: Mapping[str, Exercise],
        max_records: Mapping[str, MaxRecord] | None = None,
    ) -> list[ScheduledWorkout]:
        """Validate a cycle and generate its full schedule.

        Raises:
            CycleValidationError: If the cycle has blocking errors
        """
        self._ensure_valid(cycle, exercises)
        workouts = self._generator.generate(cycle, exercises, max_records)
        logger.info("cycle_planned", cycle_id=cycle.id, workout_count=len(workouts))
        return workouts

    def regenerate_from(
        self,
        cycle: Cycle,
        exercises: Mapping[str, Exercise],
        start_from_workout: int,
        max_records: Mapping[str, MaxRecord] | None = None,
    ) -> list[ScheduledWorkout]:
        """Regenerate the remaining workouts of an edited cycle.

        Workouts before ``start_from_workout`` are left to the caller; the
        returned tail keeps its global sequence numbers.

        Raises:
            ValidationError: If start_from_workout is below 1
            CycleValidationError: If the edited cycle has blocking errors
        """
        if start_from_workout < 1:
            raise ValidationError(
                "start_from_workout",
                f"must be >= 1, got {start_from_workout}",
            )

        self._ensure_valid(cycle, exercises)
        workouts = self._generator.generate(cycle, exercises, max_records, start_from_workout)
        logger.info(
            "cycle_regenerated",
            cycle_id=cycle.id,
            start_from_workout=start_from_workout,
            workout_count=len(workouts),
        )
        return workouts

    def preview_targets(
        self,
        workout: ScheduledWorkout,
        max_records: Mapping[str, MaxRecord],
        cycle: Cycle | None = None,
    ) -> dict[str, Number]:
        """Targets for each set of a workout against the current max records."""
        return self._calculator.workout_targets(workout, max_records, cycle)

    def _ensure_valid(self, cycle: Cycle, exercises: Mapping[str, Exercise]) -> None:
        result = self.validate(cycle, exercises)
        for warning in result.warnings:
            self._warn(warning)
        if not result.valid:
            raise CycleValidationError(result.errors, result.warnings)
