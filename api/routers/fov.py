"""
FOV router - pole widzenia dla przesłanej mapy.
"""

from fastapi import APIRouter
from pydantic import Field
from typing import List, Dict, Any, Optional
from pathlib import Path

from tilegrid.core.config_loader import ConfigLoader
from tilegrid.fov import hex_fov, opacity_lookup

from api.grid_request import GridRequest, to_coord


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


class FovRequest(GridRequest):
    """Request do FOV."""
    origin: List[int]  # [q, r]
    radius: Optional[int] = Field(None, ge=0)


@router.post("/fov")
async def compute_fov(request: FovRequest) -> Dict[str, Any]:
    """
    Liczy pola widoczne z origin.

    Returns:
        Dict z listą widocznych pól w kolejności pierścieni
    """
    grid = request.build_grid()
    origin = to_coord(grid, request.origin, "origin")
    radius = request.radius
    if radius is None:
        radius = _loader.get_fov_config().get("default_radius")

    lookup = opacity_lookup(grid.get, request.is_wall)
    visible = [
        {"pos": [pos.q, pos.r], "token": cell.payload, "distance": origin.distance(pos)}
        for pos, cell in hex_fov(origin, lookup, radius)
    ]

    return {
        "origin": [origin.q, origin.r],
        "radius": radius,
        "visible": visible,
        "count": len(visible),
    }
