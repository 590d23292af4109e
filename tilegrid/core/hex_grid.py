"""
HexGrid: prostokątna mapa hexów z wartością w każdym polu.

Kontener dla gry i narzędzi, którym wystarcza skończona plansza:
- rozmiar to width kolumn na height wierszy
- pole trzyma dowolny payload (znak z prefaba, obiekt terenu, ...)
- poza prostokątem nic nie istnieje
- daje sąsiadów dla wyszukiwania i lookup dla FOV

Znaczenie wartości (ściana, podłoga, woda) zna tylko gra -
biblioteka dostaje je przez przekazane funkcje.

Kształt planszy (odd-r):
    Wiersz y i kolumna x odpowiadają HexCoord(x - y // 2, y),
    nieparzyste wiersze są rysowane pół hexa w prawo:

    y=0:  x0 x1 x2 x3
    y=1:    x0 x1 x2 x3
    y=2:  x0 x1 x2 x3

    Parser prefabów przesuwa wiersze tak samo, więc prefab wczytany
    od (0, 0) leży pole w pole na planszy.

Przykład użycia:
    >>> grid = HexGrid(width=7, height=8, default=".")
    >>> HexCoord(6, 0) in grid
    True
    >>> grid.set(HexCoord(2, 3), "#")
    >>> grid.get(HexCoord(2, 3))
    '#'
"""

from __future__ import annotations
from typing import (
    Callable, Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar,
    TYPE_CHECKING,
)
from dataclasses import dataclass, field

from .hex_coord import HexCoord, axial_to_offset, offset_to_axial

if TYPE_CHECKING:
    from ..prefab.prefab import Prefab

T = TypeVar("T")


@dataclass
class HexGrid(Generic[T]):
    """
    Skończona plansza hexów z payloadem per pole.

    Attributes:
        width (int): Liczba kolumn
        height (int): Liczba wierszy
        default (Optional[T]): Wartość pól, których nikt nie ustawił
        _cells (Dict[HexCoord, T]): Pola ustawione jawnie

    Note:
        Pozycje podaje się w axial. Granice sprawdzane są po przeliczeniu
        na (kolumna, wiersz). get() poza planszą daje None, co FOV
        rozumie jako brak pola.
    """
    width: int
    height: int
    default: Optional[T] = None
    _cells: Dict[HexCoord, T] = field(default_factory=dict, repr=False)

    # ─────────────────────────────────────────────────────────────────────────
    # GRANICE
    # ─────────────────────────────────────────────────────────────────────────

    def is_valid(self, pos: HexCoord) -> bool:
        """True gdy pozycja leży na planszy (np. HexCoord(-1, 0) nie leży)."""
        col, row = axial_to_offset(pos)
        return 0 <= row < self.height and 0 <= col < self.width

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, HexCoord) and self.is_valid(pos)

    # ─────────────────────────────────────────────────────────────────────────
    # WARTOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    def get(self, pos: HexCoord) -> Optional[T]:
        """
        Wartość pola.

        Returns:
            Optional[T]: Ustawiona wartość, `default` gdy pole nie było
                         ustawiane, None poza planszą
        """
        if pos not in self:
            return None
        return self._cells.get(pos, self.default)

    def set(self, pos: HexCoord, value: T) -> None:
        """
        Raises:
            ValueError: Dla pozycji poza planszą
        """
        if pos not in self:
            raise ValueError(f"Position {pos} is outside grid bounds")
        self._cells[pos] = value

    def clear(self, pos: HexCoord) -> bool:
        """Przywraca wartość domyślną. Zwraca True jeśli pole było ustawione."""
        if pos not in self._cells:
            return False
        del self._cells[pos]
        return True

    def items(self) -> Iterator[Tuple[HexCoord, Optional[T]]]:
        """Pary (pozycja, wartość) dla całej planszy, wiersz po wierszu."""
        for pos in self.get_all_valid_positions():
            yield pos, self.get(pos)

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def get_neighbors(self, pos: HexCoord) -> List[HexCoord]:
        """Sąsiedzi pozycji leżący w granicach siatki (kolejność Dir6)."""
        return [n for n in pos.neighbors() if self.is_valid(n)]

    def get_all_valid_positions(self) -> List[HexCoord]:
        """Każda pozycja planszy: wiersze od góry, w wierszu od lewej."""
        return [
            offset_to_axial(col, row)
            for row in range(self.height)
            for col in range(self.width)
        ]

    def find(self, predicate: Callable[[Optional[T]], bool]) -> List[HexCoord]:
        """Pozycje, których wartość spełnia predykat."""
        return [pos for pos, value in self.items() if predicate(value)]

    # ─────────────────────────────────────────────────────────────────────────
    # TWORZENIE Z PREFABA
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_prefab(
        cls,
        prefab: "Prefab",
        default: Optional[T] = None,
    ) -> "HexGrid[T]":
        """
        Tworzy siatkę dopasowaną do prefaba.

        Wymiary to najmniejszy prostokąt offset zawierający wszystkie
        wpisy prefaba, zaczynając od (0, 0).

        Raises:
            ValueError: Jeśli prefab ma pozycje o ujemnych współrzędnych offset
        """
        offsets = [axial_to_offset(pos) for pos, _ in prefab]
        if any(x < 0 or y < 0 for x, y in offsets):
            raise ValueError("Prefab has positions left of or above the grid origin")

        width = max((x for x, _ in offsets), default=-1) + 1
        height = max((y for _, y in offsets), default=-1) + 1
        grid: HexGrid[T] = cls(width=width, height=height, default=default)
        grid.update(prefab)
        return grid

    def update(self, entries: Iterable[Tuple[HexCoord, T]]) -> None:
        """Ustawia wiele pól naraz (np. z prefaba)."""
        for pos, value in entries:
            self.set(pos, value)

    # ─────────────────────────────────────────────────────────────────────────
    # PODGLĄD TEKSTOWY
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(
        self,
        render: Optional[Callable[[Optional[T]], str]] = None,
        marks: Optional[Dict[HexCoord, str]] = None,
    ) -> str:
        """
        Plansza jako tekst, jeden znak na pole.

        Nieparzyste wiersze są wcięte o jedną spację (odd-r).

        Args:
            render: Wartość -> znak (domyślnie str(value)[0], '.' dla None)
            marks: Znaki nadpisujące konkretne pozycje (np. ścieżka, FOV)
        """
        marks = marks or {}
        if render is None:
            render = lambda value: "." if value is None else str(value)[:1] or "."

        def glyph(pos: HexCoord) -> str:
            return marks[pos] if pos in marks else render(self.get(pos))

        return "\n".join(
            (" " if row % 2 else "")
            + " ".join(glyph(offset_to_axial(col, row)) for col in range(self.width))
            for row in range(self.height)
        )
