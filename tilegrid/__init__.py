"""
tilegrid - algorytmy siatki dla gier na hexach.

Pakiety:
- core: geometria hex, kierunki, HexGrid, RNG, konfiguracja
- search: Dijkstra maps, A*, pathfinding na HexGrid
- fov: pole widzenia (shadow-casting)
- prefab: mapy z tekstu (legenda + parser)

Biblioteka nie renderuje, nie czyta wejścia i (poza ConfigLoader)
nie dotyka plików.
"""

from .core import HexCoord, Dir6, Dir12, HexGrid
from .search import dijkstra_map, astar_path, DistanceMap, Path, GraphNode
from .fov import hex_fov, FovCell, FovValue
from .prefab import Legend, LegendBuilder, Prefab, MergePolicy
from .errors import LegendConflict, ParseError, PrefabConflict

__version__ = "1.0.0"

__all__ = [
    "HexCoord", "Dir6", "Dir12", "HexGrid",
    "dijkstra_map", "astar_path", "DistanceMap", "Path", "GraphNode",
    "hex_fov", "FovCell", "FovValue",
    "Legend", "LegendBuilder", "Prefab", "MergePolicy",
    "LegendConflict", "ParseError", "PrefabConflict",
]
