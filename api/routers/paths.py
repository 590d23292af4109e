"""
Paths router - A* i mapy odległości dla przesłanej mapy.
"""

from fastapi import APIRouter
from pydantic import Field
from typing import List, Dict, Any, Optional
from pathlib import Path

from tilegrid.core.config_loader import ConfigLoader
from tilegrid.search import astar_path, dijkstra_map, grid_neighbors

from api.grid_request import GridRequest, to_coord


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class PathRequest(GridRequest):
    """Request do A*."""
    start: List[int]  # [q, r]
    goal: List[int]   # [q, r]
    max_iterations: Optional[int] = Field(None, gt=0)


class DistanceMapRequest(GridRequest):
    """Request do mapy odległości."""
    goals: List[List[int]] = Field(..., min_length=1)
    max_range: Optional[float] = Field(None, ge=0)


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/path")
async def compute_path(request: PathRequest) -> Dict[str, Any]:
    """
    Szuka najkrótszej ścieżki (A*, heurystyka hex distance).

    Returns:
        Dict ze ścieżką [[q, r], ...] albo path=None gdy cel nieosiągalny
    """
    grid = request.build_grid()
    start = to_coord(grid, request.start, "start")
    goal = to_coord(grid, request.goal, "goal")

    max_iterations = request.max_iterations
    if max_iterations is None:
        max_iterations = _loader.get_search_config().get("max_iterations")

    path = astar_path(
        start,
        goal,
        heuristic=lambda pos: pos.distance(goal),
        neighbors=grid_neighbors(grid, request.is_passable),
        max_iterations=max_iterations,
    )

    if path is None:
        return {"path": None, "cost": None, "length": 0}

    return {
        "path": [[pos.q, pos.r] for pos in path],
        "cost": path.cost,
        "length": len(path),
    }


@router.post("/distance-map")
async def compute_distance_map(request: DistanceMapRequest) -> Dict[str, Any]:
    """
    Liczy mapę odległości (Dijkstra) od wszystkich celów.

    Returns:
        Dict z listą {pos, distance}, posortowaną po odległości
    """
    grid = request.build_grid()
    goals = [to_coord(grid, pair, "goal") for pair in request.goals]

    max_range = request.max_range
    if max_range is None:
        max_range = _loader.get_search_config().get("max_range")

    dmap = dijkstra_map(goals, max_range, neighbors=grid_neighbors(grid, request.is_passable))
    distances = [
        {"pos": [pos.q, pos.r], "distance": distance}
        for pos, distance in dmap.items()
    ]

    return {
        "goals": [[g.q, g.r] for g in goals],
        "max_range": max_range,
        "distances": distances,
        "count": len(distances),
    }
