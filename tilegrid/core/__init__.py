"""
Core module - podstawowe komponenty siatki.

Zawiera:
- HexCoord: System współrzędnych hexagonalnych
- Dir6 / Dir12: Kierunki i ich algebra
- HexGrid: Ograniczona siatka hexagonalna z wartościami pól
- GridRNG: Deterministyczny generator losowości
- ConfigLoader: Wczytywanie konfiguracji YAML z defaults
"""

from .hex_coord import HexCoord, ORIGIN, hex_from_cube, offset_to_axial, axial_to_offset
from .directions import Dir6, Dir12
from .hex_grid import HexGrid
from .rng import GridRNG
from .config_loader import ConfigLoader

__all__ = [
    "HexCoord", "ORIGIN", "hex_from_cube", "offset_to_axial", "axial_to_offset",
    "Dir6", "Dir12", "HexGrid", "GridRNG", "ConfigLoader",
]
