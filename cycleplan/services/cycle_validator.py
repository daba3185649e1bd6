"""
Cycle validation.

Checks a candidate cycle before a schedule is generated. Errors block
generation; warnings are informational and never stop it.

Weekly set goals for exercise types that no group contains are not reported:
the generator simply never schedules that quota.
"""

import logging
from typing import Mapping

from cycleplan.models.enums import ExerciseProgressionMode, ProgressionMode
from cycleplan.schemas.cycle import Cycle, get_exercise_progression_mode, get_progression_mode
from cycleplan.schemas.exercise import Exercise
from cycleplan.schemas.validation import CycleValidationResult

logger = logging.getLogger(__name__)


class CycleValidator:
    """Structural and semantic checks for cycle configurations."""

    def validate(self, cycle: Cycle, exercises: Mapping[str, Exercise]) -> CycleValidationResult:
        """
        Validate a cycle configuration.

        Args:
            cycle: Candidate cycle (may not have an id yet)
            exercises: Exercise catalog keyed by exercise id

        Returns:
            CycleValidationResult with blocking errors and informational warnings
        """
        cycle_mode = get_progression_mode(cycle)
        errors = self._check_structure(cycle, cycle_mode)
        warnings = self._check_groups(cycle, cycle_mode, exercises)

        if errors:
            logger.debug(f"Cycle {cycle.name!r} failed validation: {errors}")

        return CycleValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def _check_structure(self, cycle: Cycle, cycle_mode: ProgressionMode) -> list[str]:
        errors: list[str] = []

        if not cycle.name.strip():
            errors.append("Cycle name is required")
        if cycle.number_of_weeks < 1:
            errors.append("Cycle must be at least 1 week")
        if cycle.workout_days_per_week < 1 or cycle.workout_days_per_week > 7:
            errors.append("Workout days per week must be between 1 and 7")
        if not cycle.groups:
            errors.append("At least one group is required")
        if not cycle.group_rotation:
            errors.append("Group rotation is required")

        # RFEM and mixed cycles both need it for their rfem exercises
        if cycle_mode != ProgressionMode.SIMPLE and not cycle.rfem_rotation:
            errors.append("RFEM rotation is required")

        group_ids = {group.id for group in cycle.groups}
        for group_id in cycle.group_rotation:
            if group_id not in group_ids:
                errors.append(f"Group {group_id} in rotation not found")

        return errors

    def _check_groups(
        self,
        cycle: Cycle,
        cycle_mode: ProgressionMode,
        exercises: Mapping[str, Exercise],
    ) -> list[str]:
        warnings: list[str] = []

        for group in cycle.groups:
            if not group.exercise_assignments:
                warnings.append(f'Group "{group.name}" has no exercises')

            for assignment in group.exercise_assignments:
                exercise = exercises.get(assignment.exercise_id)
                if exercise is None or exercise.is_conditioning:
                    continue

                mode = get_exercise_progression_mode(cycle_mode, assignment)
                if mode != ExerciseProgressionMode.SIMPLE:
                    continue

                if exercise.is_time_based and assignment.simple.base_time is None:
                    warnings.append(f'"{exercise.name}" in group "{group.name}" has no base time set')
                elif not exercise.is_time_based and assignment.simple.base_reps is None:
                    warnings.append(f'"{exercise.name}" in group "{group.name}" has no base reps set')

        return warnings


def validate_cycle(cycle: Cycle, exercises: Mapping[str, Exercise]) -> CycleValidationResult:
    """Validate a cycle with a default CycleValidator."""
    return CycleValidator().validate(cycle, exercises)
