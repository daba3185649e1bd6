"""
Training Configuration Loader

Loads the training constants (warm-up percentages, RFEM defaults, conditioning
defaults, weight rounding) from training.yaml into frozen dataclasses.

Each section validates itself on construction, so an invalid file fails at load
time instead of producing odd targets later.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from threading import RLock
from typing import Any

import yaml


DEFAULT_TRAINING_CONFIG_PATH = Path(__file__).parent / "training.yaml"


class TrainingConfigLoadError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}


class TrainingConfigValidationError(TrainingConfigLoadError):
    """Raised when configuration fails validation."""


@dataclass(frozen=True)
class WarmupConfig:
    """Warm-up set configuration."""

    percentages: tuple[int, ...] = (20, 40)
    min_reps: int = 1
    min_time_seconds: int = 5
    max_test_intensity: float = 0.2
    reduced_intensity_factor: float = 0.6

    def __post_init__(self):
        for pct in self.percentages:
            if not 0 < pct <= 100:
                raise TrainingConfigValidationError(
                    f"warm-up percentage ({pct}) must be between 1 and 100"
                )
        if self.min_reps < 0 or self.min_time_seconds < 0:
            raise TrainingConfigValidationError("warm-up minimums must be >= 0")
        if not 0 < self.max_test_intensity <= 1:
            raise TrainingConfigValidationError(
                f"max_test_intensity ({self.max_test_intensity}) must be between 0 and 1"
            )
        if not 0 < self.reduced_intensity_factor <= 1:
            raise TrainingConfigValidationError(
                f"reduced_intensity_factor ({self.reduced_intensity_factor}) must be between 0 and 1"
            )

    @property
    def set_count(self) -> int:
        return len(self.percentages)


@dataclass(frozen=True)
class RFEMConfig:
    """RFEM (reps from established max) configuration."""

    time_rfem_percentage: float = 0.1
    min_target_reps: int = 1
    min_target_time_seconds: int = 5
    default_max: int = 10
    default_time_max: int = 30

    def __post_init__(self):
        if not 0 < self.time_rfem_percentage <= 1:
            raise TrainingConfigValidationError(
                f"time_rfem_percentage ({self.time_rfem_percentage}) must be between 0 and 1"
            )
        if self.default_max < 1 or self.default_time_max < 1:
            raise TrainingConfigValidationError(
                "default_max and default_time_max must be >= 1"
            )


@dataclass(frozen=True)
class ConditioningConfig:
    """Conditioning exercise defaults."""

    default_rep_increment: int = 2
    default_time_increment: int = 5
    default_base_reps: int = 10
    default_base_time: int = 30

    def __post_init__(self):
        if self.default_rep_increment < 0 or self.default_time_increment < 0:
            raise TrainingConfigValidationError(
                "conditioning increments must be >= 0"
            )


@dataclass(frozen=True)
class WeightConfig:
    """Weight rounding configuration."""

    default_increment: float = 5

    def __post_init__(self):
        if self.default_increment < 0:
            raise TrainingConfigValidationError(
                f"default_increment ({self.default_increment}) must be >= 0"
            )


@dataclass(frozen=True)
class TrainingConfig:
    """Complete training configuration."""

    version: str = "1.0.0"
    warmup: WarmupConfig = field(default_factory=WarmupConfig)
    rfem: RFEMConfig = field(default_factory=RFEMConfig)
    conditioning: ConditioningConfig = field(default_factory=ConditioningConfig)
    weight: WeightConfig = field(default_factory=WeightConfig)


class TrainingConfigLoader:
    """Loader for the training constants file."""

    def __init__(self, config_path: Path | str | None = None):
        self._lock = RLock()
        self._config: TrainingConfig | None = None
        self._config_path = Path(config_path) if config_path else DEFAULT_TRAINING_CONFIG_PATH
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            with open(self._config_path, "r") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise TrainingConfigLoadError(
                f"Configuration file not found: {self._config_path}"
            )
        except yaml.YAMLError as e:
            raise TrainingConfigLoadError(
                f"Failed to parse YAML configuration: {e}",
                details={"file_path": str(self._config_path)},
            )

        try:
            self._config = self._parse_config(data or {})
        except TrainingConfigValidationError:
            raise
        except (TypeError, ValueError, AttributeError) as e:
            raise TrainingConfigLoadError(
                f"Failed to parse configuration: {e}",
                details={"file_path": str(self._config_path)},
            )

    def _parse_config(self, data: dict[str, Any]) -> TrainingConfig:
        """Parse raw YAML data into TrainingConfig.

        Raises:
            TrainingConfigValidationError: If a section fails validation.
        """
        warmup_data = dict(data.get("warmup") or {})
        if "percentages" in warmup_data:
            warmup_data["percentages"] = tuple(warmup_data["percentages"])

        return TrainingConfig(
            version=str(data.get("version", "1.0.0")),
            warmup=WarmupConfig(**warmup_data),
            rfem=RFEMConfig(**(data.get("rfem") or {})),
            conditioning=ConditioningConfig(**(data.get("conditioning") or {})),
            weight=WeightConfig(**(data.get("weight") or {})),
        )

    @property
    def config(self) -> TrainingConfig:
        """Get current configuration."""
        with self._lock:
            if self._config is None:
                self._load_config()
            return self._config

    @property
    def config_path(self) -> Path:
        return self._config_path

    def reload(self) -> None:
        """Force reload configuration from file."""
        with self._lock:
            self._load_config()


@lru_cache
def get_training_config() -> TrainingConfig:
    """Get the cached training configuration.

    Example:
        >>> from cycleplan.config.training_config_loader import get_training_config
        >>> get_training_config().warmup.percentages
        (20, 40)
    """
    from cycleplan.config.settings import get_settings

    return TrainingConfigLoader(get_settings().training_config_path).config
