"""Unit tests for the intersection oracle adapter and PlacementPlanner."""

import pytest

from openings.domain import (
    ConduitCategory,
    ConduitElement,
    ConduitSegment,
    CurveKind,
    DiagnosticKind,
    IntersectionOracleAdapter,
    IntersectionQueryError,
    Level,
    PlacementPlanner,
    Point3D,
    UnsupportedConduitShapeError,
)
from openings.domain.services import segment_from_element

X_AXIS = Point3D(1.0, 0.0, 0.0)


def _segment(conduit_id, start=(0.0, 0.0, 0.0), length=5.0, diameter=0.3):
    return ConduitSegment(
        conduit_id=conduit_id,
        start=Point3D(*start),
        direction=X_AXIS,
        length=length,
        diameter=diameter,
    )


def _planner(host, **kwargs) -> PlacementPlanner:
    return PlacementPlanner(
        oracle=IntersectionOracleAdapter(host, context="3D"),
        elevation_resolver=host,
        **kwargs,
    )


class TestIntersectionOracleAdapter:
    """Tests for IntersectionOracleAdapter."""

    def test_passes_context_and_keeps_host_order(self, scripted_host, make_hit) -> None:
        hits = [make_hit(3.0, "B"), make_hit(1.0, "A")]
        host = scripted_host(hits={(0.0, 0.0, 0.0): hits})
        adapter = IntersectionOracleAdapter(host, context="view-1")

        result = adapter.query(Point3D.origin(), X_AXIS)

        assert result == hits
        assert host.queries == [(Point3D.origin(), X_AXIS, "view-1")]

    def test_hits_beyond_any_length_are_returned(self, scripted_host, make_hit) -> None:
        host = scripted_host(hits={(0.0, 0.0, 0.0): [make_hit(1000.0, "far")]})
        assert len(IntersectionOracleAdapter(host, None).query(Point3D.origin(), X_AXIS)) == 1

    def test_non_hit_result_rejected(self) -> None:
        class BrokenHost:
            def find_obstacle_crossings(self, origin, direction, context):
                return [("W1", 2.0)]

        with pytest.raises(IntersectionQueryError, match="expected RawHit"):
            IntersectionOracleAdapter(BrokenHost(), None).query(Point3D.origin(), X_AXIS)

    def test_hit_without_identity_rejected(self, make_hit) -> None:
        class AnonymousHost:
            def find_obstacle_crossings(self, origin, direction, context):
                return [make_hit(2.0, None)]

        with pytest.raises(IntersectionQueryError, match="no obstacle identity"):
            IntersectionOracleAdapter(AnonymousHost(), None).query(Point3D.origin(), X_AXIS)


class TestPlanSegment:
    """Tests for planning a single segment."""

    def test_duplicates_and_out_of_range_hits_removed(self, scripted_host, make_hit) -> None:
        hits = [make_hit(2.0, "W1"), make_hit(2.0, "W1"), make_hit(6.0, "W2")]
        host = scripted_host(hits={(0.0, 0.0, 0.0): hits})

        result = _planner(host).plan_segment(_segment("C1"))

        assert len(result.placements) == 1
        placement = result.placements[0]
        assert placement.conduit_id == "C1"
        assert placement.obstacle_id == "W1"
        assert placement.point == Point3D(2.0, 0.0, 0.0)
        assert placement.width == 0.3
        assert placement.height == 0.3

    def test_two_segments_through_same_wall(self, scripted_host, make_hit) -> None:
        host = scripted_host(
            hits={
                (0.0, 0.0, 0.0): [make_hit(2.0, "W3")],
                (0.0, 1.0, 0.0): [make_hit(2.5, "W3")],
            }
        )
        result = _planner(host).plan_placements(
            [_segment("C1"), _segment("C2", start=(0.0, 1.0, 0.0))]
        )

        assert [(p.conduit_id, p.obstacle_id) for p in result.placements] == [
            ("C1", "W3"),
            ("C2", "W3"),
        ]
        assert result.placements[1].point == Point3D(2.5, 1.0, 0.0)

    def test_point_recomputed_from_ray(self, scripted_host) -> None:
        """The reported hit point is ignored in favour of origin + direction * distance."""
        from openings.domain import RawHit

        skewed = RawHit(distance=2.0, obstacle_id="W1", point=Point3D(9.0, 9.0, 9.0))
        host = scripted_host(hits={(1.0, 0.0, 0.5): [skewed]})

        result = _planner(host).plan_segment(_segment("C1", start=(1.0, 0.0, 0.5)))

        assert result.placements[0].point == Point3D(3.0, 0.0, 0.5)

    def test_no_hits_gives_no_placements(self, scripted_host) -> None:
        result = _planner(scripted_host()).plan_segment(_segment("C1"))
        assert result.placements == []
        assert result.diagnostics == []

    def test_level_attached_from_resolver(self, scripted_host, make_hit) -> None:
        upper = Level(level_id="L2", name="Level 2", elevation=4.0)
        host = scripted_host(
            hits={(0.0, 0.0, 0.0): [make_hit(1.0, "W1")]},
            levels={"W1": upper},
        )
        result = _planner(host).plan_segment(_segment("C1"))
        assert result.placements[0].level == upper

    def test_unresolved_level_skips_only_that_crossing(self, scripted_host, make_hit) -> None:
        host = scripted_host(
            hits={(0.0, 0.0, 0.0): [make_hit(1.0, "W1"), make_hit(3.0, "W2")]},
            levels={"W1": None},
        )

        result = _planner(host).plan_segment(_segment("C1"))

        assert [p.obstacle_id for p in result.placements] == ["W2"]
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind == DiagnosticKind.UNRESOLVED_LEVEL
        assert diagnostic.conduit_id == "C1"
        assert diagnostic.obstacle_id == "W1"

    def test_unresolved_level_logged(self, scripted_host, make_hit, caplog) -> None:
        host = scripted_host(
            hits={(0.0, 0.0, 0.0): [make_hit(1.0, "W1")]},
            levels={"W1": None},
        )
        with caplog.at_level("WARNING"):
            _planner(host).plan_segment(_segment("C1"))
        assert "could not be resolved" in caplog.text

    def test_segment_recorded(self, scripted_host) -> None:
        segment = _segment("C1")
        result = _planner(scripted_host()).plan_segment(segment)
        assert result.segments == [segment]


class TestPlanElements:
    """Tests for planning host conduits of mixed shape."""

    def _element(self, conduit_id, kind=CurveKind.LINE, end=(5.0, 0.0, 0.0)):
        return ConduitElement(
            conduit_id=conduit_id,
            category=ConduitCategory.PIPE,
            diameter=0.1,
            curve_kind=kind,
            start=Point3D.origin(),
            end=Point3D(*end),
        )

    def test_arc_skipped_with_diagnostic(self, scripted_host, make_hit) -> None:
        host = scripted_host(hits={(0.0, 0.0, 0.0): [make_hit(2.0, "W1")]})

        result = _planner(host).plan_elements(
            [self._element("arc", kind=CurveKind.ARC), self._element("line")]
        )

        assert [p.conduit_id for p in result.placements] == ["line"]
        assert result.diagnostics[0].kind == DiagnosticKind.UNSUPPORTED_SHAPE
        assert result.diagnostics[0].conduit_id == "arc"
        assert len(host.queries) == 1

    def test_zero_length_line_skipped(self, scripted_host) -> None:
        result = _planner(scripted_host()).plan_elements(
            [self._element("dot", end=(0.0, 0.0, 0.0))]
        )
        assert result.segments == []
        assert result.diagnostics[0].kind == DiagnosticKind.UNSUPPORTED_SHAPE

    def test_segment_from_element_rejects_arc(self) -> None:
        with pytest.raises(UnsupportedConduitShapeError) as exc_info:
            segment_from_element(self._element(9, kind=CurveKind.ARC))
        assert exc_info.value.conduit_id == 9
        assert exc_info.value.shape == "arc"

    def test_segment_from_element_keeps_category(self) -> None:
        segment = segment_from_element(self._element(9))
        assert segment.category == ConduitCategory.PIPE
        assert segment.length == pytest.approx(5.0)
