"""Placement run endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from openings.application import RunOutput
from openings.application.config import load_config_from_dict, merge_settings
from openings.infrastructure.exporters import ExporterRegistry, JsonScheduleExporter
from openings.web.dependencies import ServiceFactoryDep
from openings.web.exceptions import UnsupportedFormatError
from openings.web.schemas import (
    ExportFormatsSchema,
    PlacementRequest,
    PlacementRunSchema,
)

router = APIRouter(prefix="/placements", tags=["placements"])

MEDIA_TYPES = {
    "json": "application/json",
    "dxf": "application/dxf",
}


def _run(request: PlacementRequest, factory: ServiceFactoryDep) -> RunOutput:
    scene = merge_settings(
        load_config_from_dict(request.scene),
        materialization_policy=request.materialization_policy,
        tie_break=request.tie_break,
    )
    host = factory.create_host(scene)
    return factory.create_place_command(host, scene.settings).execute()


@router.post("", response_model=PlacementRunSchema)
def run_placement(
    request: PlacementRequest,
    factory: ServiceFactoryDep,
) -> PlacementRunSchema:
    """Run a placement over a scene and return the per-category report.

    Precondition failures and invalid scenes are answered with 422.
    """
    output = _run(request, factory)
    return PlacementRunSchema.model_validate(JsonScheduleExporter().build(output))


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/export/{format_name}")
def export_placement(
    format_name: str,
    request: PlacementRequest,
    factory: ServiceFactoryDep,
) -> Response:
    """Run a placement and return the result in an export format."""
    available = ExporterRegistry.available_formats()
    if format_name not in available:
        raise UnsupportedFormatError(format_name, available)

    output = _run(request, factory)
    exporter = ExporterRegistry.get(format_name)()
    return Response(
        content=exporter.export_string(output),
        media_type=MEDIA_TYPES.get(format_name, "text/plain"),
        headers={
            "Content-Disposition": (
                f'attachment; filename="openings.{exporter.file_extension}"'
            )
        },
    )
