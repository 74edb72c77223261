"""Convert a validated scene configuration into an in-memory host model."""

from openings.application.config.schema import (
    ConduitConfig,
    SceneConfiguration,
)
from openings.domain.value_objects import (
    ConduitCategory,
    ConduitElement,
    CurveKind,
    Level,
    Point3D,
)
from openings.infrastructure.memory_host import (
    HostView,
    InMemoryHostModel,
    OpeningFamily,
    WallBox,
)


def config_to_levels(config: SceneConfiguration) -> dict[str, Level]:
    """Map level ids to domain levels."""
    return {
        level.id: Level(level_id=level.id, name=level.name, elevation=level.elevation)
        for level in config.levels
    }


def config_to_walls(config: SceneConfiguration) -> list[WallBox]:
    """Convert wall configs to wall boxes, placing each base on its level."""
    levels = config_to_levels(config)
    walls = []
    for wall in config.walls:
        level = levels.get(wall.level) if wall.level is not None else None
        level_elevation = level.elevation if level is not None else 0.0
        walls.append(
            WallBox(
                wall_id=wall.id,
                start=Point3D(*wall.start),
                end=Point3D(*wall.end),
                thickness=wall.thickness,
                height=wall.height,
                base_elevation=level_elevation + wall.base_offset,
                level=level,
                linked_context_id=wall.linked_context,
            )
        )
    return walls


def config_to_conduit(
    conduit: ConduitConfig, category: ConduitCategory
) -> ConduitElement:
    return ConduitElement(
        conduit_id=conduit.id,
        category=category,
        diameter=conduit.diameter,
        curve_kind=CurveKind(conduit.geometry.kind),
        start=Point3D(*conduit.geometry.start),
        end=Point3D(*conduit.geometry.end),
    )


def config_to_host(config: SceneConfiguration) -> InMemoryHostModel:
    """Build an in-memory host model from a scene.

    The scene's placement settings decide which linked model provides
    conduits, which family is the opening template and which template
    parameters receive the opening size.
    """
    settings = config.settings
    conduit_models = {
        model.title: {
            category: [config_to_conduit(c, category) for c in model.conduits(category)]
            for category in ConduitCategory
        }
        for model in config.linked_models
    }
    return InMemoryHostModel(
        walls=config_to_walls(config),
        views=[HostView(name=v.name, is_template=v.is_template) for v in config.views],
        opening_families=[
            OpeningFamily(
                family_name=f.family_name,
                type_name=f.type_name,
                parameters=tuple(f.parameters),
                active=f.active,
            )
            for f in config.opening_families
        ],
        conduit_models=conduit_models,
        conduit_model_pattern=settings.conduit_model_pattern,
        opening_family=settings.opening_family,
        width_parameter=settings.width_parameter,
        height_parameter=settings.height_parameter,
    )
