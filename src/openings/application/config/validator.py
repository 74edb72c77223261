"""Validation structures and placement advisory checks for scenes.

Schema validation is handled by Pydantic when a scene is loaded. The
checks here look for conditions that would make a run fail its
preconditions (errors) or silently skip work (warnings).
"""

from dataclasses import dataclass, field
from typing import Any

from openings.application.config.schema import SceneConfiguration
from openings.domain.value_objects import ConduitCategory


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the offending field (e.g., "linked_models[0].ducts[2]")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_preconditions(config: SceneConfiguration) -> ValidationResult:
    """Report conditions that would abort a run before any placement."""
    result = ValidationResult()
    settings = config.settings

    if not any(not view.is_template for view in config.views):
        result.add_error(
            path="views",
            message="No non-template 3D view; intersections cannot be computed",
        )

    if not any(f.family_name == settings.opening_family for f in config.opening_families):
        result.add_error(
            path="opening_families",
            message=f'Opening family "{settings.opening_family}" is not loaded',
            value=settings.opening_family,
        )
    else:
        for i, family in enumerate(config.opening_families):
            if family.family_name != settings.opening_family:
                continue
            missing = [
                name
                for name in (settings.width_parameter, settings.height_parameter)
                if name not in family.parameters
            ]
            if missing:
                result.add_error(
                    path=f"opening_families[{i}].parameters",
                    message=f"Opening family lacks parameter(s): {', '.join(missing)}",
                    value=family.parameters,
                )
            break

    if not any(settings.conduit_model_pattern in m.title for m in config.linked_models):
        result.add_error(
            path="linked_models",
            message=(
                f'No linked model title contains "{settings.conduit_model_pattern}"'
            ),
        )

    return result


def check_conduit_advisories(config: SceneConfiguration) -> ValidationResult:
    """Warn about conduits and walls that will not produce openings."""
    result = ValidationResult()
    settings = config.settings

    matching = [
        (m_idx, model)
        for m_idx, model in enumerate(config.linked_models)
        if settings.conduit_model_pattern in model.title
    ]
    # Runs read conduits from the first matching model only
    for m_idx, model in matching[1:]:
        result.add_warning(
            path=f"linked_models[{m_idx}]",
            message=(
                f'Linked model "{model.title}" also matches '
                f'"{settings.conduit_model_pattern}" and will be ignored'
            ),
            suggestion="Use a conduit_model_pattern that matches a single title",
        )

    for m_idx, model in matching[:1]:
        for category in ConduitCategory:
            conduits = model.conduits(category)
            if conduits and category not in settings.categories:
                result.add_warning(
                    path=f"linked_models[{m_idx}].{category.plural}",
                    message=f"{len(conduits)} {category.plural} are not processed",
                    suggestion=f'Add "{category.value}" to settings.categories',
                )
            for c_idx, conduit in enumerate(conduits):
                path = f"linked_models[{m_idx}].{category.plural}[{c_idx}]"
                geometry = conduit.geometry
                if geometry.kind != "line":
                    result.add_warning(
                        path=path,
                        message=(
                            f"Conduit {conduit.id} has {geometry.kind} geometry "
                            "and will be skipped"
                        ),
                        suggestion="Split curved runs into straight segments",
                    )
                elif geometry.start == geometry.end:
                    result.add_warning(
                        path=path,
                        message=f"Conduit {conduit.id} has zero length and will be skipped",
                    )

    if not config.walls:
        result.add_warning(
            path="walls",
            message="Scene has no walls; no openings will be placed",
        )

    return result


def validate_config(config: SceneConfiguration) -> ValidationResult:
    """Perform full validation of a scene configuration."""
    result = ValidationResult()
    result.merge(check_preconditions(config))
    result.merge(check_conduit_advisories(config))
    return result
