"""Contracts module - protocols for the modelling host collaborator.

By depending on protocols rather than a concrete host, the engine stays
testable with mock oracles and mock opening services.

Example:
    ```python
    from openings.contracts import HostModelProtocol

    def count_ducts(host: HostModelProtocol) -> int:
        return len(host.list_linear_conduits(ConduitCategory.DUCT))
    ```
"""

from .protocols import (
    ElevationResolverProtocol as ElevationResolverProtocol,
    HostModelProtocol as HostModelProtocol,
    ObstacleQueryProtocol as ObstacleQueryProtocol,
    OpeningServiceProtocol as OpeningServiceProtocol,
    OpeningTemplateProtocol as OpeningTemplateProtocol,
)
