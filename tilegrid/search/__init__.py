"""
Search module - wyszukiwanie w grafach.

Zawiera:
- GraphNode: Kontrakt węzła grafu (Protocol)
- Path: Wynik A*
- dijkstra_map / DistanceMap: Mapy odległości z wielu źródeł
- astar_path: A* z dowolną heurystyką
- find_path: A* na HexGrid z heurystyką hex distance
"""

from .graph import GraphNode, Path
from .dijkstra import DistanceMap, dijkstra_map
from .astar import astar_path
from .pathfinding import (
    grid_neighbors,
    find_path,
    find_path_next_step,
    get_hexes_in_range,
)

__all__ = [
    "GraphNode", "Path", "DistanceMap", "dijkstra_map", "astar_path",
    "grid_neighbors", "find_path", "find_path_next_step", "get_hexes_in_range",
]
