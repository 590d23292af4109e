"""
Ścieżki po HexGrid: astar.py i dijkstra.py podpięte pod planszę.

Ogólne algorytmy operują na dowolnych węzłach. Tu węzłem jest
HexCoord, a sąsiadów i koszty wyznacza zawartość pól:
- grid_neighbors: sąsiedztwo dla astar_path / dijkstra_map
- find_path: najkrótsza ścieżka jako lista pozycji
- find_path_next_step: pierwszy krok tej ścieżki
- get_hexes_in_range: pozycje w promieniu

Szacunek A*:
    distance(pos, goal) * min_step_cost. Nie przeszacowuje, o ile
    min_step_cost nie przekracza najtańszego wejścia na pole.

Koszty:
    Bez `cost` każde wejście na sąsiednie pole kosztuje 1, z `cost`
    koszt liczy się z wartości pola docelowego.

Przykład użycia:
    >>> grid = HexGrid(7, 8, default=".")
    >>> grid.set(HexCoord(1, 1), "#")
    >>> path = find_path(grid, HexCoord(0, 0), HexCoord(2, 2),
    ...                  passable=lambda v: v != "#")
    >>> path[0], path[-1]
    (HexCoord(q=0, r=0), HexCoord(q=2, r=2))

find_path zawsze zwraca listę: [start] gdy start == goal, [] gdy
celu nie da się osiągnąć albo któryś koniec leży poza planszą.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Tuple, TypeVar

from ..core.hex_coord import HexCoord
from ..core.hex_grid import HexGrid
from .astar import astar_path

T = TypeVar("T")

Passable = Callable[[Optional[T]], bool]
StepCost = Callable[[Optional[T]], float]


def grid_neighbors(
    grid: HexGrid[T],
    passable: Optional[Passable] = None,
    cost: Optional[StepCost] = None,
    reverse: bool = False,
) -> Callable[[HexCoord], List[Tuple[HexCoord, float]]]:
    """
    Tworzy funkcję sąsiedztwa dla pozycji na siatce.

    Krawędź pos -> n istnieje, gdy n jest przechodnie, i kosztuje
    cost(n). Z własnym `cost` graf nie jest symetryczny.

    Args:
        grid: Siatka z wartościami pól
        passable: Wartość pola -> czy można na nie wejść
                  (domyślnie każde pole w granicach)
        cost: Wartość pola -> koszt wejścia (domyślnie 1)
        reverse: Te same krawędzie w przeciwną stronę: z pos do
                 każdego sąsiada, po koszcie wejścia na pos. Dla
                 dijkstra_map liczącej koszt dojścia DO celów.

    Returns:
        Funkcja HexCoord -> [(sąsiad, koszt)], gotowa dla astar_path
        i dijkstra_map. Kolejność sąsiadów: Dir6 (E, SE, SW, W, NW, NE).
    """
    def neighbors(pos: HexCoord) -> List[Tuple[HexCoord, float]]:
        result = []
        for neighbor in grid.get_neighbors(pos):
            value = grid.get(neighbor)
            if passable is not None and not passable(value):
                continue
            result.append((neighbor, cost(value) if cost is not None else 1))
        return result

    def incoming(pos: HexCoord) -> List[Tuple[HexCoord, float]]:
        value = grid.get(pos)
        if passable is not None and not passable(value):
            return []
        step = cost(value) if cost is not None else 1
        return [(neighbor, step) for neighbor in grid.get_neighbors(pos)]

    return incoming if reverse else neighbors


def find_path(
    grid: HexGrid[T],
    start: HexCoord,
    goal: HexCoord,
    passable: Optional[Passable] = None,
    cost: Optional[StepCost] = None,
    min_step_cost: float = 1.0,
    approach_blocked_goal: bool = False,
    max_iterations: int = 1000,
) -> List[HexCoord]:
    """
    Najtańsza ścieżka start -> goal po polach planszy (A*).

    Args:
        grid: Plansza
        start: Skąd
        goal: Dokąd
        passable: Wartość pola -> czy można na nie wejść
        cost: Wartość pola -> koszt wejścia (domyślnie 1)
        min_step_cost: Najtańszy możliwy krok - skala heurystyki.
                       Większa wartość niż prawdziwy najtańszy krok
                       psuje optymalność.
        approach_blocked_goal: Gdy na cel nie da się wejść, kończy na
                               najbliższym wolnym sąsiedzie celu
        max_iterations: Limit zdjęć z kolejki A*

    Returns:
        List[HexCoord]: Pozycje od start do końca ścieżki, oba końce
                        włącznie; [] gdy ścieżki nie ma
    """
    if goal not in grid or start not in grid:
        return []
    if start == goal:
        return [start]

    neighbors = grid_neighbors(grid, passable, cost)

    if passable is None or passable(grid.get(goal)):
        path = astar_path(
            start,
            goal,
            heuristic=lambda pos: pos.distance(goal) * min_step_cost,
            neighbors=neighbors,
            max_iterations=max_iterations,
        )
    elif approach_blocked_goal:
        # Cel zajęty - wystarczy dojść do któregoś wolnego sąsiada
        targets = {n for n, _ in neighbors(goal)}
        if not targets:
            return []
        path = astar_path(
            start,
            is_goal=lambda pos: pos in targets,
            heuristic=lambda pos: max(pos.distance(goal) - 1, 0) * min_step_cost,
            neighbors=neighbors,
            max_iterations=max_iterations,
        )
    else:
        return []

    return list(path) if path is not None else []


def find_path_next_step(
    grid: HexGrid[T],
    start: HexCoord,
    goal: HexCoord,
    passable: Optional[Passable] = None,
    cost: Optional[StepCost] = None,
) -> Optional[HexCoord]:
    """
    Pierwszy krok w stronę celu (z podejściem do zajętego celu).

    Dla ruchu pole po polu, gdy reszta ścieżki i tak się zmieni.
    None gdy stoimy już u celu albo drogi nie ma.
    """
    path = find_path(grid, start, goal, passable, cost, approach_blocked_goal=True)
    return path[1] if len(path) > 1 else None


def get_hexes_in_range(
    center: HexCoord,
    range_: int,
    grid: Optional[HexGrid] = None
) -> List[HexCoord]:
    """
    Pozycje w odległości <= range_ od center, pierścień po pierścieniu.

    Bez grid jest ich 1 + 3 * range_ * (range_ + 1). Z grid zostają
    tylko te na planszy.
    """
    return [pos for pos in center.spiral(range_) if grid is None or pos in grid]
