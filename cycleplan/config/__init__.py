"""Engine configuration.

- **settings.py**: Environment-based settings (Pydantic BaseSettings)
  - Debug flag, log rendering, path override for the training constants
  - Loaded from .env file via pydantic-settings

- **training.yaml**: Training constants
  - Warm-up percentages and minimums, RFEM defaults, conditioning defaults,
    weight rounding increment
  - Loaded and validated by training_config_loader.py
"""
from cycleplan.config.settings import Settings, get_settings

# Training config loader is imported lazily by the services
# Use: from cycleplan.config.training_config_loader import get_training_config

__all__ = ["Settings", "get_settings"]
