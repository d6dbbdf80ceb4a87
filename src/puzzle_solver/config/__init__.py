"""Configuration management for puzzle-solver.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import ConfigManager, load_config, initial_state_from_config
from .validators import validate_config, check_config_consistency, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'initial_state_from_config',
    'validate_config',
    'check_config_consistency',
    'ConfigValidationError'
]
