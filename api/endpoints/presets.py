from fastapi import APIRouter
from typing import List

from api.models.design_models import PresetModel
from api.utils.errors import ResourceNotFoundError
from src.curtain_wall.grid.presets import get_preset, list_presets

router = APIRouter()


@router.get("", response_model=List[PresetModel])
async def get_presets():
    """List the built-in grid layouts."""
    return [preset.to_dict() for preset in list_presets()]


@router.get("/{name}", response_model=PresetModel)
async def get_preset_by_name(name: str):
    try:
        return get_preset(name).to_dict()
    except KeyError:
        raise ResourceNotFoundError("preset", name).to_http_exception()
