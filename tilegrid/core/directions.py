"""
Kierunki na siatce hexagonalnej: Dir6 (krawędzie) i Dir12 (krawędzie + wierzchołki).

Konwencja (ustalona raz, wszystkie testy z niej wynikają):
    - hexy pointy-top, oś r rośnie w dół ekranu
    - kolejność ZGODNA Z ZEGAREM, start od wschodu (E)

Dir6 - sześć kierunków do sąsiadów:

    wartość  nazwa  offset (dq, dr)  kąt
    ───────────────────────────────────────
      0      E      (+1,  0)          0°
      1      SE     ( 0, +1)         60°
      2      SW     (-1, +1)        120°
      3      W      (-1,  0)        180°
      4      NW     ( 0, -1)        240°
      5      NE     (+1, -1)        300°

Dir12 - dwanaście kierunków co 30°. Parzyste wartości to kierunki
krawędzi (Dir6(d) <-> Dir12(2d)), nieparzyste to kierunki wierzchołków
leżące dokładnie pomiędzy dwoma sąsiednimi Dir6:

    E, ESE, SE, S, SW, WSW, W, WNW, NW, N, NE, ENE

Sektory FOV:
    Sektor należący do Dir6(d) to trójkąt pomiędzy promieniami Dir6(d)
    i Dir6(d + 1), czyli ograniczony przez Dir12(2d) i Dir12(2d + 2)
    (dwa kierunki Dir12 przyległe do wierzchołka Dir12(2d + 1), który
    dzieli sektor na pół).

Przykład użycia:
    >>> Dir6.E.rotate(2)
    <Dir6.SW: 2>
    >>> Dir6.NW.opposite()
    <Dir6.SE: 1>
    >>> Dir6.SE.to_dir12()
    <Dir12.SE: 2>
"""

from __future__ import annotations
from enum import IntEnum
from typing import Optional, Tuple
import math

from .hex_coord import HexCoord, HEX_DIRECTIONS


def _vector_angle(vec: HexCoord) -> float:
    """
    Kąt wektora axial w stopniach, [0, 360), zgodnie z zegarem od E.

    Rzutuje na płaszczyznę pointy-top (x = q + r/2, y = r * sqrt(3)/2),
    co jest wyłącznie pomocnicze - biblioteka nie renderuje.
    """
    x = vec.q + vec.r / 2
    y = vec.r * math.sqrt(3) / 2
    return math.degrees(math.atan2(y, x)) % 360.0


class Dir6(IntEnum):
    """Jeden z sześciu kierunków krawędzi hexa (zgodnie z zegarem od E)."""

    E = 0
    SE = 1
    SW = 2
    W = 3
    NW = 4
    NE = 5

    @property
    def offset(self) -> HexCoord:
        """Jednostkowy wektor kierunku jako HexCoord."""
        dq, dr = HEX_DIRECTIONS[self.value]
        return HexCoord(dq, dr)

    def rotate(self, steps: int) -> Dir6:
        """
        Obrót o `steps` kroków po 60° (dodatnie = zgodnie z zegarem).

        Args:
            steps: Liczba kroków (dowolna liczba całkowita, liczona mod 6)
        """
        return Dir6((self.value + steps) % 6)

    def opposite(self) -> Dir6:
        """Kierunek antypodalny (obrót o 3)."""
        return self.rotate(3)

    def to_dir12(self) -> Dir12:
        """Odpowiadający kierunek krawędzi w systemie Dir12."""
        return Dir12(self.value * 2)

    def sector_bounds(self) -> Tuple[Dir12, Dir12]:
        """
        Granice sektora FOV należącego do tego kierunku.

        Returns:
            (początek, koniec) - Dir12(2d) i Dir12(2d + 2)
        """
        start = self.to_dir12()
        return (start, start.rotate(2))

    @classmethod
    def from_offset(cls, vec: HexCoord) -> Dir6:
        """
        Zamienia jednostkowy wektor na kierunek.

        Raises:
            ValueError: Jeśli vec nie jest jednym z 6 wektorów jednostkowych
        """
        try:
            return cls(HEX_DIRECTIONS.index(vec.axial))
        except ValueError:
            raise ValueError(f"{vec!r} is not a unit hex direction") from None

    @classmethod
    def from_vector(cls, vec: HexCoord) -> Dir6:
        """
        Kierunek najbliższy dowolnemu niezerowemu wektorowi.

        Remisy (wektor dokładnie pomiędzy dwoma kierunkami) są
        rozstrzygane na korzyść kierunku następnego zgodnie z zegarem.

        Raises:
            ValueError: Dla wektora zerowego
        """
        if vec.q == 0 and vec.r == 0:
            raise ValueError("Zero vector has no direction")
        return cls(math.floor(_vector_angle(vec) / 60.0 + 0.5) % 6)


class Dir12(IntEnum):
    """Jeden z dwunastu kierunków co 30° (zgodnie z zegarem od E)."""

    E = 0
    ESE = 1
    SE = 2
    S = 3
    SW = 4
    WSW = 5
    W = 6
    WNW = 7
    NW = 8
    N = 9
    NE = 10
    ENE = 11

    @property
    def is_edge(self) -> bool:
        """True dla kierunków krawędzi (odpowiadających Dir6)."""
        return self.value % 2 == 0

    @property
    def offset(self) -> HexCoord:
        """
        Wektor kierunku.

        Dla krawędzi - krok do sąsiada. Dla wierzchołka - suma dwóch
        przyległych kroków, czyli najbliższy hex leżący dokładnie
        na promieniu wierzchołka (odległość 2).
        """
        left = Dir6(self.value // 2)
        if self.is_edge:
            return left.offset
        return left.offset + left.rotate(1).offset

    def rotate(self, steps: int) -> Dir12:
        """Obrót o `steps` kroków po 30° (mod 12)."""
        return Dir12((self.value + steps) % 12)

    def opposite(self) -> Dir12:
        """Kierunek antypodalny (obrót o 6)."""
        return self.rotate(6)

    def to_dir6(self) -> Optional[Dir6]:
        """Odpowiadający Dir6 albo None dla kierunku wierzchołka."""
        if not self.is_edge:
            return None
        return Dir6(self.value // 2)

    @classmethod
    def from_vector(cls, vec: HexCoord) -> Dir12:
        """
        Kierunek Dir12 najbliższy dowolnemu niezerowemu wektorowi.

        Raises:
            ValueError: Dla wektora zerowego
        """
        if vec.q == 0 and vec.r == 0:
            raise ValueError("Zero vector has no direction")
        return cls(math.floor(_vector_angle(vec) / 30.0 + 0.5) % 12)
