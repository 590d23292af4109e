"""
Pozycja na siatce hexagonalnej (współrzędne axial).

Pozycja to para (q, r):
- q rośnie w prawo
- r rośnie w dół ekranu, po skosie (hexy pointy-top)

Trzecia oś cube jest wyliczana:  s = -q - r,  więc q + r + s == 0.

Sześć kroków jednostkowych, zgodnie z zegarem od wschodu
(ta sama kolejność co Dir6 w core/directions.py):

    indeks  kierunek   krok (dq, dr)
    ──────────────────────────────────
      0     E          (+1,  0)
      1     SE         ( 0, +1)
      2     SW         (-1, +1)
      3     W          (-1,  0)
      4     NW         ( 0, -1)
      5     NE         (+1, -1)

Metryka:
    |p| = max(|q|, |r|, |q + r|)          (długość wektora)
    distance(a, b) = |a - b|

    Symetryczna, zero tylko dla a == b, spełnia nierówność trójkąta.

Tekst i prostokątne siatki (odd-r):
    Wiersz y, kolumna x  <->  HexCoord(x - y // 2, y)

    y=0:  (0,0) (1,0) (2,0)
    y=1:    (0,1) (1,1) (2,1)          <- nieparzyste wiersze rysowane
    y=2: (-1,2) (0,2) (1,2)               pół hexa w prawo

Przykład użycia:
    >>> p = HexCoord(2, -1)
    >>> p + Dir6.SE.offset
    HexCoord(q=2, r=0)
    >>> p.distance(ORIGIN)
    2
    >>> [str(c) for c in ORIGIN.ring(1)][:2]
    ['(1, 0)', '(0, 1)']
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Tuple


# Kroki jednostkowe (dq, dr), zgodnie z zegarem od E
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (1, 0),    # E
    (0, 1),    # SE
    (-1, 1),   # SW
    (-1, 0),   # W
    (0, -1),   # NW
    (1, -1),   # NE
]

# Przesunięcie przy zaokrąglaniu linii - punkty dokładnie na krawędzi
# dwóch hexów zawsze trafiają w ten sam hex
_LINE_NUDGE = 1e-6


@dataclass(frozen=True)
class HexCoord:
    """
    Pozycja hexa (q, r). Niemutowalna i hashowalna.

    Działa jak wektor: pozycje można dodawać, odejmować i mnożyć
    przez liczbę całkowitą. Kierunek (Dir6.offset) to też HexCoord.

    Attributes:
        q (int): Oś pozioma
        r (int): Oś ukośna (w dół)
    """
    q: int
    r: int

    # ─────────────────────────────────────────────────────────────────────────
    # OSIE
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """Oś cube wyliczana z pozostałych dwóch."""
        return -self.q - self.r

    @property
    def cube(self) -> Tuple[int, int, int]:
        return (self.q, self.r, self.s)

    @property
    def axial(self) -> Tuple[int, int]:
        return (self.q, self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # METRYKA
    # ─────────────────────────────────────────────────────────────────────────

    def length(self) -> int:
        """Liczba kroków od (0, 0) do tej pozycji."""
        return max(abs(self.q), abs(self.r), abs(self.q + self.r))

    def distance(self, other: HexCoord) -> int:
        """
        Liczba kroków między dwiema pozycjami.

        Example:
            >>> HexCoord(0, 0).distance(HexCoord(2, 1))
            3
        """
        return (self - other).length()

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZTWO
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self) -> List[HexCoord]:
        """Sześciu sąsiadów w kolejności Dir6 (E, SE, SW, W, NW, NE)."""
        return [HexCoord(self.q + dq, self.r + dr) for dq, dr in HEX_DIRECTIONS]

    def neighbor(self, direction: int) -> HexCoord:
        """
        Sąsiad w kierunku `direction` (Dir6 albo int 0-5).

        Raises:
            IndexError: Dla indeksu spoza 0-5
        """
        dq, dr = HEX_DIRECTIONS[direction]
        return HexCoord(self.q + dq, self.r + dr)

    def ring(self, radius: int) -> List[HexCoord]:
        """
        Pozycje dokładnie w odległości `radius`.

        Obchodzi pierścień zgodnie z zegarem, zaczynając od narożnika
        na wschodzie (self + radius * E). Pierwsze `radius` pozycji to
        bok od narożnika E w stronę narożnika SE, i tak dalej - ten sam
        podział na boki co sektory FOV.

        Returns:
            List[HexCoord]: [self] dla radius == 0, inaczej 6 * radius pozycji
        """
        if radius == 0:
            return [self]

        dq, dr = HEX_DIRECTIONS[0]
        current = HexCoord(self.q + dq * radius, self.r + dr * radius)
        cells: List[HexCoord] = []
        for side in range(6):
            walk = (side + 2) % 6
            for _ in range(radius):
                cells.append(current)
                current = current.neighbor(walk)
        return cells

    def spiral(self, radius: int) -> Iterator[HexCoord]:
        """Pozycje w odległości <= radius: najpierw self, potem kolejne pierścienie."""
        for n in range(radius + 1):
            yield from self.ring(n)

    def line_to(self, other: HexCoord) -> List[HexCoord]:
        """
        Najbliższa prosta z self do other, jako ciąg sąsiadów.

        Punkty interpolowane w przestrzeni cube są zaokrąglane do hexów.
        Obie końcówki są lekko przesunięte (_LINE_NUDGE), żeby remisy
        na krawędziach rozstrzygały się zawsze w tę samą stronę.

        Returns:
            List[HexCoord]: distance + 1 pozycji, od self do other włącznie
        """
        steps = self.distance(other)
        if steps == 0:
            return [self]

        aq, ar, as_ = self.q + _LINE_NUDGE, self.r + _LINE_NUDGE, self.s - 2 * _LINE_NUDGE
        bq, br, bs = other.q + _LINE_NUDGE, other.r + _LINE_NUDGE, other.s - 2 * _LINE_NUDGE
        line = []
        for i in range(steps + 1):
            t = i / steps
            line.append(_cube_round(aq + (bq - aq) * t, ar + (br - ar) * t, as_ + (bs - as_) * t))
        return line

    # ─────────────────────────────────────────────────────────────────────────
    # ARYTMETYKA WEKTOROWA
    # ─────────────────────────────────────────────────────────────────────────

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def __mul__(self, factor: int) -> HexCoord:
        return HexCoord(self.q * factor, self.r * factor)

    __rmul__ = __mul__

    def __neg__(self) -> HexCoord:
        return HexCoord(-self.q, -self.r)

    def __repr__(self) -> str:
        return f"HexCoord(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


ORIGIN = HexCoord(0, 0)


# ─────────────────────────────────────────────────────────────────────────────
# KONWERSJE
# ─────────────────────────────────────────────────────────────────────────────

def _cube_round(q: float, r: float, s: float) -> HexCoord:
    """Najbliższy hex dla punktu cube (oś z największym błędem jest wyliczana z pozostałych)."""
    rq, rr, rs = round(q), round(r), round(s)
    err_q, err_r, err_s = abs(rq - q), abs(rr - r), abs(rs - s)

    if err_q > err_r and err_q > err_s:
        rq = -rr - rs
    elif err_r > err_s:
        rr = -rq - rs
    return HexCoord(int(rq), int(rr))


def hex_from_cube(q: int, r: int, s: int) -> HexCoord:
    """
    HexCoord z trzech osi cube.

    Raises:
        ValueError: Jeśli q + r + s != 0
    """
    if q + r + s != 0:
        raise ValueError(f"Cube coordinates must sum to zero, got ({q}, {r}, {s})")
    return HexCoord(q, r)


def offset_to_axial(x: int, y: int) -> HexCoord:
    """Kolumna x, wiersz y (odd-r) -> HexCoord."""
    return HexCoord(x - (y // 2), y)


def axial_to_offset(pos: HexCoord) -> Tuple[int, int]:
    """HexCoord -> (kolumna, wiersz) w układzie odd-r."""
    return (pos.q + (pos.r // 2), pos.r)
