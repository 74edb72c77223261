"""Merge CLI and API overrides into placement settings.

Precedence: explicit override > settings file > scene settings > defaults.
Only non-None overrides are applied.
"""

from openings.application.config.schema import (
    MaterializationPolicy,
    PlacementSettingsConfig,
    SceneConfiguration,
)
from openings.domain.value_objects import TieBreak


def merge_settings(
    scene: SceneConfiguration,
    settings: PlacementSettingsConfig | None = None,
    *,
    materialization_policy: MaterializationPolicy | str | None = None,
    tie_break: TieBreak | str | None = None,
) -> SceneConfiguration:
    """Return a copy of the scene with merged placement settings.

    Args:
        scene: The validated scene.
        settings: Settings loaded from a separate file; replaces the
            scene's embedded settings when given.
        materialization_policy: Override for settings.materialization_policy.
        tie_break: Override for settings.tie_break.

    Example:
        >>> merged = merge_settings(scene, tie_break="nearest")
        >>> merged.settings.tie_break
        <TieBreak.NEAREST: 'nearest'>
    """
    data = (settings or scene.settings).model_dump()
    if materialization_policy is not None:
        data["materialization_policy"] = materialization_policy
    if tie_break is not None:
        data["tie_break"] = tie_break

    return scene.model_copy(
        update={"settings": PlacementSettingsConfig.model_validate(data)}
    )
