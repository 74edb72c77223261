"""Scene validation endpoints."""

from fastapi import APIRouter

from openings.application.config import load_config_from_dict, validate_config
from openings.web.schemas import SceneValidateRequest, ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_scene(request: SceneValidateRequest) -> ValidationResultSchema:
    """Validate a scene without running a placement.

    Scenes that fail schema validation are answered with 422.
    """
    scene = load_config_from_dict(request.scene)
    result = validate_config(scene)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )
