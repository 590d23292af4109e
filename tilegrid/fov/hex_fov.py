r"""
Pole widzenia (FOV) na siatce hexagonalnej - shadow-casting.

Płaszczyzna wokół obserwatora jest dzielona na 6 trójkątnych sektorów,
po jednym na każdy Dir6. Sektor d leży pomiędzy promieniami Dir6(d)
i Dir6(d + 1) (granice Dir12(2d) .. Dir12(2d + 2)):

              NW ____ NE
                /\  /\
               /  \/  \       sektor 0 (E): od promienia E do SE
           W  ----@---- E     sektor 1 (SE): od SE do SW
               \  /\  /       ...
                \/__\/
              SW      SE

Pierścienie w sektorze:
    Pierścień n (odległość hex = n) ma w sektorze d dokładnie n pól:

        pole(i) = origin + n * Dir6(d) + i * Dir6(d + 2),   i = 0 .. n-1

    Pole i = 0 leży na promieniu Dir6(d) i należy do sektora d;
    pole na promieniu Dir6(d + 1) (i = n) należy już do sektora d + 1.
    Sektor d tylko je odczytuje: ściana w narożniku rzuca cień także
    na koniec jego przedziału, więc zamknięty pierścień ścian jest szczelny.

Współrzędna kątowa:
    t = i / n  w przedziale [0, 1)   (0 = promień Dir6(d), 1 = Dir6(d + 1))

    Boki pierścieni są prostymi odcinkami skalowanymi przez n, więc to
    samo t w różnych pierścieniach to ten sam promień. Pole i zajmuje
    [t - 1/2n, t + 1/2n]. Wszystkie wartości są dokładnymi ułamkami
    (fractions.Fraction) - bez błędów zaokrągleń na granicach cienia.

Reguły:
    - przezroczyste pole jest WIDOCZNE, jeśli jego środek t leży
      w domkniętym przedziale [begin, end]
    - nieprzezroczyste pole (ściana), którego zakres nachodzi na
      przedział, wycina swój zakres z przedziałów przekazanych do
      pierścienia n + 1; pola dalej, których środek leży ŚCIŚLE
      w cieniu, nie są widoczne
    - ściana jest widoczna, gdy jej zakres nachodzi na wnętrze przedziału,
      także wtedy, gdy środek leży już w cieniu (prosta ściana korytarza
      wzdłuż obserwatora jest widoczna na całej długości)
    - lookup zwracający None = pole nie istnieje: blokuje jak ściana
      i nie jest zwracane

Kolejka pracy:
    Zamiast rekurencji używamy kolejki ramek (sektor, pierścień, begin, end).
    Kolejka FIFO daje wynik pierścień po pierścieniu (najbliższe pola
    najpierw), a generator pozwala przerwać w dowolnym momencie -
    konsument, który weźmie K pól, nie płaci za resztę.

ZNANE OGRANICZENIE (nie naprawiamy):
    Sektory są liczone niezależnie. Ściana leżąca tuż przy granicy
    sektora nie rzuca cienia na sąsiedni sektor, więc widoczność na
    granicach sektorów nie zawsze jest symetryczna (A widzi B nie
    gwarantuje, że B widzi A).

Przykład użycia:
    >>> lookup = opacity_lookup(grid.get, lambda v: v == "#")
    >>> for pos, cell in hex_fov(HexCoord(3, 3), lookup, radius=5):
    ...     print(pos, cell.payload)
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from fractions import Fraction
from typing import (
    Any, Callable, Deque, Generic, Iterator, Optional, Protocol, Set, Tuple, TypeVar,
    runtime_checkable,
)
import logging
import math

from ..core.hex_coord import HexCoord
from ..core.directions import Dir6

logger = logging.getLogger(__name__)

P = TypeVar("P")


@runtime_checkable
class FovValue(Protocol):
    """Wartość pola dla FOV - wystarczy atrybut `blocks_sight`."""

    @property
    def blocks_sight(self) -> bool: ...


V = TypeVar("V", bound=FovValue)

Lookup = Callable[[HexCoord], Optional[V]]


@dataclass(frozen=True)
class FovCell(Generic[P]):
    """
    Gotowa implementacja FovValue: dowolny payload + flaga nieprzezroczystości.

    Attributes:
        payload (P): Wartość pola z gry (np. znak terenu, obiekt)
        blocks_sight (bool): Czy pole zasłania widok
    """
    payload: P
    blocks_sight: bool = False


def opacity_lookup(
    getter: Callable[[HexCoord], Optional[P]],
    is_opaque: Callable[[P], bool],
) -> Callable[[HexCoord], Optional[FovCell[P]]]:
    """
    Adaptuje dowolne źródło wartości na lookup dla hex_fov.

    Args:
        getter: Pozycja -> wartość albo None (pole nie istnieje),
                np. HexGrid.get
        is_opaque: Wartość -> czy zasłania widok

    Returns:
        Funkcja pozycja -> FovCell (albo None)
    """
    def lookup(pos: HexCoord) -> Optional[FovCell[P]]:
        value = getter(pos)
        if value is None:
            return None
        return FovCell(value, bool(is_opaque(value)))

    return lookup


@dataclass(frozen=True)
class _Frame:
    """Ramka pracy: otwarty przedział [begin, end] sektora na pierścieniu."""
    sector: Dir6
    ring: int
    begin: Fraction
    end: Fraction


def hex_fov(
    origin: HexCoord,
    lookup: Lookup,
    radius: Optional[int] = None,
) -> Iterator[Tuple[HexCoord, Any]]:
    """
    Leniwie wylicza pola widoczne z `origin`.

    Args:
        origin: Pozycja obserwatora
        lookup: Pozycja -> FovValue, albo None dla pól nieistniejących
        radius: Maksymalna odległość hex (włącznie). None = bez limitu;
                wtedy mapa musi być skończona (lookup zwraca kiedyś None),
                inaczej generator jest nieskończony.

    Yields:
        (pozycja, wartość) - najpierw origin, potem pierścień po pierścieniu.
        Każda pozycja co najwyżej raz.

    Note:
        Jeśli lookup(origin) zwraca None, nic nie jest widoczne.
        Obserwator stojący w ścianie nadal widzi dookoła.
    """
    origin_value = lookup(origin)
    if origin_value is None:
        return
    yield origin, origin_value

    if radius is not None and radius <= 0:
        return

    queue: Deque[_Frame] = deque(
        _Frame(sector, 1, Fraction(0), Fraction(1)) for sector in Dir6
    )
    visible = 1
    # Ściana częściowo w dwóch przedziałach jednego pierścienia - zwróć raz
    seen_walls: Set[HexCoord] = set()

    while queue:
        frame = queue.popleft()
        if radius is not None and frame.ring > radius:
            # FIFO: wszystkie kolejne ramki są jeszcze dalej
            break

        n = frame.ring
        corner = frame.sector.offset * n
        step = frame.sector.rotate(2).offset
        half = Fraction(1, 2 * n)

        # Pola, których zakres [i/n - 1/2n, i/n + 1/2n] nachodzi na przedział.
        # i = n to narożnik następnego sektora: tylko rzuca cień, nie jest zwracany.
        first = max(0, math.floor(frame.begin * n - Fraction(1, 2)) + 1)
        last = min(n, math.ceil(frame.end * n + Fraction(1, 2)) - 1)

        start = frame.begin
        for i in range(first, last + 1):
            pos = origin + corner + step * i
            value = lookup(pos)
            center = Fraction(i, n)

            if value is not None and i < n:
                if value.blocks_sight:
                    # Każde pole z zakresu pętli nachodzi na przedział
                    if pos not in seen_walls:
                        seen_walls.add(pos)
                        visible += 1
                        yield pos, value
                elif frame.begin <= center <= frame.end:
                    visible += 1
                    yield pos, value

            if value is None or value.blocks_sight:
                shadow_begin = center - half
                if shadow_begin > start:
                    queue.append(_Frame(frame.sector, n + 1, start, min(shadow_begin, frame.end)))
                start = max(start, center + half)

        if start < frame.end:
            queue.append(_Frame(frame.sector, n + 1, start, frame.end))

    logger.debug("hex_fov from %s (radius=%s): %d cell(s) visible", origin, radius, visible)


def visible_positions(
    origin: HexCoord,
    lookup: Lookup,
    radius: Optional[int] = None,
) -> Set[HexCoord]:
    """Zbiór pozycji widocznych z origin (wylicza cały FOV)."""
    return {pos for pos, _ in hex_fov(origin, lookup, radius)}


def has_line_of_sight(origin: HexCoord, target: HexCoord, lookup: Lookup) -> bool:
    """
    Czy prosta linia od origin do target nie przechodzi przez ścianę.

    Sprawdza pola pośrednie z HexCoord.line_to (bez końców). Ściana
    na samym celu nie zasłania celu. Pole nieistniejące po drodze
    zasłania.

    Note:
        To szybki test dla pojedynczej pary. Nie zawsze zgadza się
        z hex_fov, który liczy cienie całymi przedziałami.
    """
    for pos in origin.line_to(target)[1:-1]:
        value = lookup(pos)
        if value is None or value.blocks_sight:
            return False
    return True
