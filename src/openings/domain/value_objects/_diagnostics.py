"""Non-fatal run diagnostics."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(str, Enum):
    """What was skipped during a run."""

    UNSUPPORTED_SHAPE = "unsupported_shape"
    UNRESOLVED_LEVEL = "unresolved_level"
    MATERIALIZATION_FAILED = "materialization_failed"


@dataclass(frozen=True)
class Diagnostic:
    """A skip-and-continue event recorded during planning or placement.

    Attributes:
        kind: Category of the skipped work.
        message: Human-readable explanation.
        conduit_id: Conduit involved, if any.
        obstacle_id: Obstacle involved, if any.
    """

    kind: DiagnosticKind
    message: str
    conduit_id: Hashable | None = None
    obstacle_id: Hashable | None = None
