"""Unit tests for the in-memory reference host."""

import pytest

from openings.application import PlaceOpeningsCommand
from openings.domain import (
    ConduitCategory,
    ConduitElement,
    CurveKind,
    Level,
    MaterializationError,
    MissingConduitModelError,
    Point3D,
)
from openings.infrastructure import (
    HostView,
    InMemoryHostModel,
    OpeningFamily,
    WallBox,
)

GROUND = Level(level_id="L1", name="Level 1", elevation=0.0)
X_AXIS = Point3D(1.0, 0.0, 0.0)


def _wall(wall_id="W1", x=2.0, level=GROUND, **kwargs) -> WallBox:
    return WallBox(
        wall_id=wall_id,
        start=Point3D(x, -5.0, 0.0),
        end=Point3D(x, 5.0, 0.0),
        thickness=0.2,
        height=3.0,
        level=level,
        **kwargs,
    )


def _host(**kwargs) -> InMemoryHostModel:
    defaults = dict(
        walls=[_wall()],
        views=[HostView("{3D}")],
        opening_families=[OpeningFamily("Opening", active=True)],
    )
    defaults.update(kwargs)
    return InMemoryHostModel(**defaults)


class TestWallBox:
    """Slab-method ray tests against wall boxes."""

    def test_ray_through_wall_hits_both_faces(self) -> None:
        distances = _wall().ray_distances(Point3D(0.0, 0.0, 1.0), X_AXIS)
        assert distances == pytest.approx([1.9, 2.1])

    def test_ray_pointing_away_misses(self) -> None:
        assert _wall().ray_distances(Point3D(0.0, 0.0, 1.0), Point3D(-1.0, 0.0, 0.0)) == []

    def test_ray_above_wall_misses(self) -> None:
        assert _wall().ray_distances(Point3D(0.0, 0.0, 3.5), X_AXIS) == []

    def test_ray_beside_wall_end_misses(self) -> None:
        assert _wall().ray_distances(Point3D(0.0, 6.0, 1.0), X_AXIS) == []

    def test_ray_parallel_to_wall_misses(self) -> None:
        assert _wall().ray_distances(Point3D(0.0, -6.0, 1.0), Point3D(0.0, 1.0, 0.0)) == []

    def test_ray_starting_inside_wall_reports_exit_only(self) -> None:
        distances = _wall().ray_distances(Point3D(2.0, 0.0, 1.0), X_AXIS)
        assert distances == pytest.approx([0.1])

    def test_base_elevation_shifts_box(self) -> None:
        wall = _wall(base_elevation=4.0)
        assert wall.ray_distances(Point3D(0.0, 0.0, 1.0), X_AXIS) == []
        assert len(wall.ray_distances(Point3D(0.0, 0.0, 5.0), X_AXIS)) == 2

    def test_diagonal_wall(self) -> None:
        wall = WallBox(
            wall_id="D",
            start=Point3D(0.0, 4.0, 0.0),
            end=Point3D(6.0, -2.0, 0.0),
            thickness=0.2,
            height=3.0,
        )
        entry, exit_ = wall.ray_distances(Point3D(0.0, 0.0, 1.0), X_AXIS)
        assert entry < 4.0 < exit_

    def test_zero_length_wall_rejected(self) -> None:
        with pytest.raises(ValueError, match="differ in plan"):
            WallBox("W", Point3D(1.0, 1.0, 0.0), Point3D(1.0, 1.0, 2.0), 0.2, 3.0)


class TestQueries:
    """Host queries."""

    def test_hits_reported_per_wall_in_scene_order(self) -> None:
        host = _host(walls=[_wall("W2", x=6.0), _wall("W1", x=2.0)])
        hits = list(host.find_obstacle_crossings(Point3D(0.0, 0.0, 1.0), X_AXIS, None))

        assert [h.obstacle_id for h in hits] == ["W2", "W2", "W1", "W1"]
        assert hits[0].point.x == pytest.approx(5.9)

    def test_hits_carry_linked_context(self) -> None:
        host = _host(walls=[_wall(linked_context_id="arch-link")])
        hits = list(host.find_obstacle_crossings(Point3D(0.0, 0.0, 1.0), X_AXIS, None))
        assert {h.linked_context_id for h in hits} == {"arch-link"}

    def test_resolve_level(self) -> None:
        host = _host(walls=[_wall("W1"), _wall("W2", x=4.0, level=None)])
        assert host.resolve_hosting_elevation("W1") == GROUND
        assert host.resolve_hosting_elevation("W2") is None
        assert host.resolve_hosting_elevation("missing") is None

    def test_reference_context_skips_templates(self) -> None:
        host = _host(views=[HostView("tpl", is_template=True), HostView("{3D}")])
        assert host.get_active_spatial_reference_context().name == "{3D}"

    def test_no_reference_context(self) -> None:
        host = _host(views=[HostView("tpl", is_template=True)])
        assert host.get_active_spatial_reference_context() is None

    def test_conduit_model_found_by_title_substring(self) -> None:
        host = _host(conduit_models={"Tower-MEP.rvt": {}})
        assert host.has_conduit_model()
        assert host.list_linear_conduits(ConduitCategory.PIPE) == []

    def test_missing_conduit_model(self) -> None:
        host = _host(conduit_models={"Architecture.rvt": {}})
        assert not host.has_conduit_model()
        with pytest.raises(MissingConduitModelError):
            host.list_linear_conduits(ConduitCategory.DUCT)


class TestUnitOfWork:
    """Transactions and opening creation."""

    def _create(self, host: InMemoryHostModel, wall_id="W1"):
        return host.materialize_opening(Point3D(2.0, 0.0, 1.0), wall_id, GROUND, 0.3, 0.3)

    def test_commit_on_success(self) -> None:
        host = _host()
        with host.unit_of_work("Place openings for ducts"):
            opening = self._create(host)

        assert host.openings == [opening]
        assert opening.parameters == {"Width": 0.3, "Height": 0.3}
        assert host.journal == [("Place openings for ducts", "committed")]

    def test_rollback_on_exception(self) -> None:
        host = _host()
        with pytest.raises(RuntimeError):
            with host.unit_of_work("Place openings for pipes"):
                self._create(host)
                raise RuntimeError("boom")

        assert host.openings == []
        assert host.journal == [("Place openings for pipes", "rolled_back")]

    def test_nested_unit_of_work_rejected(self) -> None:
        host = _host()
        with host.unit_of_work("outer"):
            with pytest.raises(RuntimeError, match="already open"):
                with host.unit_of_work("inner"):
                    pass

    def test_create_outside_unit_of_work_fails(self) -> None:
        with pytest.raises(MaterializationError, match="unit of work"):
            self._create(_host())

    def test_inactive_template_fails(self) -> None:
        host = _host(opening_families=[OpeningFamily("Opening", active=False)])
        with host.unit_of_work("t"):
            with pytest.raises(MaterializationError, match="not active"):
                self._create(host)

    def test_activate_template(self) -> None:
        host = _host(opening_families=[OpeningFamily("Opening", active=False)])
        template = host.get_opening_template()
        host.activate_template(template)
        assert template.is_active

    def test_missing_parameter_fails(self) -> None:
        host = _host(
            opening_families=[OpeningFamily("Opening", parameters=("Width",), active=True)]
        )
        with host.unit_of_work("t"):
            with pytest.raises(MaterializationError, match='"Height"'):
                self._create(host)

    def test_unknown_wall_fails(self) -> None:
        host = _host()
        with host.unit_of_work("t"):
            with pytest.raises(MaterializationError) as exc_info:
                self._create(host, wall_id="W9")
        assert exc_info.value.obstacle_id == "W9"

    def test_custom_parameter_names(self) -> None:
        host = _host(
            opening_families=[
                OpeningFamily("Void", parameters=("b", "h"), active=True)
            ],
            opening_family="Void",
            width_parameter="b",
            height_parameter="h",
        )
        with host.unit_of_work("t"):
            opening = self._create(host)
        assert opening.parameters == {"b": 0.3, "h": 0.3}
        assert opening.family_name == "Void"


class TestProtocolConformance:
    def test_host_satisfies_host_protocol(self) -> None:
        from openings.contracts import HostModelProtocol, OpeningTemplateProtocol

        host = _host()
        assert isinstance(host, HostModelProtocol)
        assert isinstance(host.get_opening_template(), OpeningTemplateProtocol)


class TestLinkedContexts:
    """Walls sharing an id across linked models stay distinct."""

    UPPER = Level(level_id="L2", name="Level 2", elevation=4.0)

    def _shared_id_host(self) -> InMemoryHostModel:
        return _host(
            walls=[
                _wall(7, x=2.0, level=GROUND, linked_context_id="A"),
                _wall(7, x=4.0, level=self.UPPER, linked_context_id="B"),
            ]
        )

    def test_level_resolved_per_linked_context(self) -> None:
        host = self._shared_id_host()
        assert host.resolve_hosting_elevation(7, "A") == GROUND
        assert host.resolve_hosting_elevation(7, "B") == self.UPPER
        assert host.resolve_hosting_elevation(7) is None

    def test_opening_cut_in_wall_of_its_context(self) -> None:
        host = self._shared_id_host()
        with host.unit_of_work("t"):
            opening = host.materialize_opening(
                Point3D(4.0, 0.0, 1.0), 7, self.UPPER, 0.3, 0.3, linked_context_id="B"
            )
        assert opening.linked_context_id == "B"

    def test_unknown_context_fails(self) -> None:
        host = self._shared_id_host()
        with host.unit_of_work("t"):
            with pytest.raises(MaterializationError, match="linked context 'C'"):
                host.materialize_opening(
                    Point3D(4.0, 0.0, 1.0), 7, GROUND, 0.3, 0.3, linked_context_id="C"
                )

    def test_run_places_each_crossing_on_its_own_level(self) -> None:
        duct = ConduitElement(
            conduit_id=1,
            category=ConduitCategory.DUCT,
            diameter=0.3,
            curve_kind=CurveKind.LINE,
            start=Point3D(0.0, 0.0, 1.0),
            end=Point3D(6.0, 0.0, 1.0),
        )
        host = self._shared_id_host()
        host.conduit_models = {"MEP": {ConduitCategory.DUCT: [duct]}}

        output = PlaceOpeningsCommand(host).execute()

        placements = output.report_for(ConduitCategory.DUCT).placements
        assert [(p.linked_context_id, p.level.name) for p in placements] == [
            ("A", "Level 1"),
            ("B", "Level 2"),
        ]
        assert [(o.linked_context_id, o.level) for o in host.openings] == [
            ("A", GROUND),
            ("B", self.UPPER),
        ]
