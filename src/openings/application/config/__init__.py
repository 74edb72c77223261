"""Configuration schema and loading system for placement runs.

Public API:
    - SceneConfiguration: Root scene model
    - PlacementSettingsConfig: Run settings model
    - MaterializationPolicy: Reaction to opening creation failures
    - load_config / load_config_from_dict / load_settings: Loaders
    - ConfigError: Exception for configuration errors
    - merge_settings: Apply CLI/API overrides
    - validate_config: Precondition and advisory checks
    - config_to_host: Build the in-memory reference host from a scene

Example:
    >>> from pathlib import Path
    >>> from openings.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     scene = load_config(Path("tower-b.json"))
    ...     print(f"{len(scene.walls)} walls")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from openings.application.config.adapter import config_to_host
from openings.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
    load_settings,
)
from openings.application.config.merger import merge_settings
from openings.application.config.schema import (
    SUPPORTED_VERSIONS,
    ConduitConfig,
    ConduitGeometryConfig,
    LevelConfig,
    LinkedModelConfig,
    MaterializationPolicy,
    OpeningFamilyConfig,
    PlacementSettingsConfig,
    SceneConfiguration,
    ViewConfig,
    WallConfig,
)
from openings.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConduitConfig",
    "ConduitGeometryConfig",
    "ConfigError",
    "LevelConfig",
    "LinkedModelConfig",
    "MaterializationPolicy",
    "OpeningFamilyConfig",
    "PlacementSettingsConfig",
    "SceneConfiguration",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "ViewConfig",
    "WallConfig",
    "config_to_host",
    "load_config",
    "load_config_from_dict",
    "load_settings",
    "merge_settings",
    "validate_config",
]
