"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openings.application.commands import PlaceOpeningsCommand
    from openings.application.config.schema import (
        PlacementSettingsConfig,
        SceneConfiguration,
    )
    from openings.contracts.protocols import HostModelProtocol
    from openings.infrastructure.exporters import ExportManager
    from openings.infrastructure.formatters import PlacementReportFormatter
    from openings.infrastructure.memory_host import InMemoryHostModel


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Centralizes construction of hosts, commands, formatters and export
    managers so tests can substitute any of them.
    """

    _report_formatter: PlacementReportFormatter | None = field(
        default=None, init=False, repr=False
    )

    def create_host(self, scene: SceneConfiguration) -> InMemoryHostModel:
        """Build the in-memory reference host for a scene."""
        from openings.application.config.adapter import config_to_host

        return config_to_host(scene)

    def create_place_command(
        self,
        host: HostModelProtocol,
        settings: PlacementSettingsConfig | None = None,
    ) -> PlaceOpeningsCommand:
        from openings.application.commands import PlaceOpeningsCommand

        return PlaceOpeningsCommand(host=host, settings=settings)

    def get_report_formatter(self) -> PlacementReportFormatter:
        """Get the report formatter (cached)."""
        if self._report_formatter is None:
            from openings.infrastructure.formatters import PlacementReportFormatter

            self._report_formatter = PlacementReportFormatter()
        return self._report_formatter

    def create_export_manager(self, output_dir: Path) -> ExportManager:
        from openings.infrastructure.exporters import ExportManager

        return ExportManager(output_dir)


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the shared default factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Replace the shared factory; pass None to reset it."""
    global _default_factory
    _default_factory = factory
