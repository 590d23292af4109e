"""
Algorytm A* (A-star) dla dowolnego grafu.

A* znajduje najtańszą ścieżkę od startu do celu.

Kolejność rozwijania:
    Kolejka priorytetowa trzyma węzły ważone przez f = g + h, gdzie
    g to koszt dojścia od startu, a h to szacunek reszty drogi.
    Węzeł zdjęty z kolejki jest sfinalizowany (zbiór closed). Remis f
    rozstrzyga mniejsze h, potem wcześniejsze odkrycie. Zdjęcie celu
    kończy szukanie, ścieżkę odtwarzają wskaźniki na rodziców.

Heurystyka:
    - dopuszczalna (admissible - nigdy nie przeszacowuje) => wynik optymalny
    - spójna (consistent - nierówność trójkąta na krawędziach) => żaden
      węzeł nie wymaga ponownego rozwinięcia
    - heurystyka zerowa (domyślna) => A* to zwykła Dijkstra

Przykład użycia:
    >>> path = astar_path(start, goal, heuristic=lambda n: n.distance(goal),
    ...                   neighbors=grid_neighbors(grid))
    >>> path.cost, len(path)
    (4, 5)

Edge cases:
    - Start == Goal: ścieżka jednoelementowa, koszt 0
    - Brak ścieżki: None
    - Przekroczony max_iterations: None
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Set
from dataclasses import dataclass, field
import heapq
import itertools
import logging

from .graph import N, NeighborFn, Path, resolve_neighbors

logger = logging.getLogger(__name__)

Heuristic = Callable[[N], float]


@dataclass(order=True)
class _PathNode:
    """
    Węzeł w kolejce A*.

    Sortowanie: f_cost, potem h_cost (bliżej celu wygrywa),
    potem numer odkrycia (stabilny remis).

    Attributes:
        f_cost: g + h
        h_cost: Heurystyka
        seq: Kolejność odkrycia
        g_cost: Koszt od startu (nie używany w sortowaniu)
        node: Węzeł grafu (nie używany w sortowaniu)
    """
    f_cost: float
    h_cost: float
    seq: int
    g_cost: float = field(compare=False)
    node: object = field(compare=False)


def _zero_heuristic(node: object) -> float:
    return 0


def astar_path(
    start: N,
    goal: Optional[N] = None,
    heuristic: Optional[Heuristic] = None,
    *,
    is_goal: Optional[Callable[[N], bool]] = None,
    neighbors: Optional[NeighborFn] = None,
    max_iterations: Optional[int] = None,
) -> Optional[Path[N]]:
    """
    Znajduje najtańszą ścieżkę od startu do celu.

    Args:
        start: Węzeł startowy
        goal: Węzeł docelowy (albo użyj is_goal)
        heuristic: Węzeł -> szacowany pozostały koszt (domyślnie 0)
        is_goal: Predykat celu - alternatywa dla `goal`
        neighbors: Funkcja węzeł -> [(sąsiad, koszt)]
                   (domyślnie node.neighbors())
        max_iterations: Limit zdjęć z kolejki (zabezpieczenie);
                        None = bez limitu

    Returns:
        Optional[Path]: Ścieżka od start do celu (włącznie z oboma)
                        albo None jeśli cel jest nieosiągalny.

    Raises:
        ValueError: Jeśli nie podano ani goal, ani is_goal (albo oba)
    """
    if (goal is None) == (is_goal is None):
        raise ValueError("Pass exactly one of goal or is_goal")
    if is_goal is None:
        target = goal
        is_goal = lambda node: node == target

    neighbors_fn = resolve_neighbors(neighbors)
    h = heuristic or _zero_heuristic
    counter = itertools.count()

    # Kolejka i stan przeszukiwania
    open_set: List[_PathNode] = []
    g_costs: Dict[N, float] = {start: 0}
    closed_set: Set[N] = set()
    parents: Dict[N, N] = {}

    start_h = h(start)
    heapq.heappush(open_set, _PathNode(start_h, start_h, next(counter), 0, start))

    iterations = 0

    while open_set:
        if max_iterations is not None and iterations >= max_iterations:
            logger.debug("astar_path: gave up after %d iterations", iterations)
            return None
        iterations += 1

        current = heapq.heappop(open_set)
        node = current.node

        # Stary wpis węzła, który już sfinalizowano
        if node in closed_set:
            continue
        closed_set.add(node)

        # Cel
        if is_goal(node):
            logger.debug(
                "astar_path: reached goal in %d iterations, cost %s",
                iterations, current.g_cost,
            )
            return Path(tuple(_reconstruct_path(parents, node)), current.g_cost)

        for neighbor, step in neighbors_fn(node):
            assert step >= 0, f"Negative edge cost {step} from {node!r} to {neighbor!r}"
            if neighbor in closed_set:
                continue

            tentative_g = current.g_cost + step

            if neighbor not in g_costs or tentative_g < g_costs[neighbor]:
                g_costs[neighbor] = tentative_g
                parents[neighbor] = node

                h_cost = h(neighbor)
                heapq.heappush(
                    open_set,
                    _PathNode(tentative_g + h_cost, h_cost, next(counter), tentative_g, neighbor),
                )

    # Kolejka pusta - celu nie da się osiągnąć
    logger.debug("astar_path: frontier exhausted after %d iterations", iterations)
    return None


def _reconstruct_path(parents: Dict[N, N], goal: N) -> List[N]:
    """
    Odtwarza ścieżkę od goal do startu używając mapy rodziców.

    Start to jedyny węzeł bez rodzica.
    """
    path = [goal]
    current = goal

    while current in parents:
        current = parents[current]
        path.append(current)

    path.reverse()
    return path
