"""
Wspólne modele requestów: mapa przesłana jako wiersze tekstu.

Każdy znak różny od `empty` jest polem mapy. Znaki z `walls`
zasłaniają widok i blokują ruch. Wiersze są w układzie odd-r,
tak samo jak prefaby.
"""

from typing import List, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

from tilegrid.core.hex_coord import HexCoord
from tilegrid.core.hex_grid import HexGrid
from tilegrid.prefab import LegendBuilder, Prefab


class GridRequest(BaseModel):
    """Mapa do przeliczenia."""
    rows: List[str] = Field(..., min_length=1)
    walls: str = "#"
    empty: str = Field(" ", min_length=1, max_length=1)

    def build_grid(self) -> HexGrid[str]:
        """
        Buduje HexGrid, w którym payload pola to jego znak.

        Legenda powstaje z samych wierszy - każdy użyty znak mapuje
        na siebie, więc parsowanie nie może się nie udać.
        """
        builder: LegendBuilder[str] = LegendBuilder()
        for line in self.rows:
            for char in line:
                if char != self.empty:
                    builder.add(char, char)
        prefab = Prefab.parse(self.rows, builder.build(), empty=self.empty)
        return HexGrid.from_prefab(prefab)

    def is_wall(self, value: Optional[str]) -> bool:
        return value is not None and value in self.walls

    def is_passable(self, value: Optional[str]) -> bool:
        return value is not None and value not in self.walls


def to_coord(grid: HexGrid, pair: List[int], name: str) -> HexCoord:
    """
    Zamienia [q, r] z requestu na HexCoord leżący na mapie.

    Raises:
        HTTPException(422): Zły format albo pole poza mapą
    """
    if len(pair) != 2:
        raise HTTPException(status_code=422, detail=f"{name} must be [q, r]")
    pos = HexCoord(pair[0], pair[1])
    if grid.get(pos) is None:
        raise HTTPException(status_code=422, detail=f"{name} {list(pair)} is not a map cell")
    return pos
