"""
Mapy odległości (Dijkstra maps) z wielu źródeł.

Dijkstra map przypisuje każdemu osiągalnemu węzłowi minimalny
łączny koszt dojścia do NAJBLIŻSZEGO z zadanych celów. AI gry
"stacza się w dół" takiej mapy, żeby iść do celu (zapach, pragnienie):

    goals=[jedzenie1, jedzenie2]
    mapa:   2 1 0 1 2 3
            3 2 1 2 3 2 ...
    potwór z pola o wartości 3 idzie zawsze na sąsiada o mniejszej wartości.

Jak działa:
    1. Wszystkie cele trafiają do kolejki priorytetowej z kosztem 0
    2. Zdejmij węzeł o najmniejszym koszcie
       - jeśli już sfinalizowany - pomiń
       - jeśli koszt > max_range - STOP (reszta kolejki jest jeszcze dalej)
    3. Sfinalizuj go i dodaj sąsiadów z kosztem (koszt + krawędź)
    4. Powtarzaj aż kolejka pusta

Każdy węzeł jest finalizowany dokładnie raz, z minimalnym kosztem
(koszty krawędzi muszą być nieujemne).

Koszt liczony jest wzdłuż krawędzi wychodzących z celów. Dla grafów
symetrycznych (siatki o stałym koszcie kroku) to ta sama wartość co
koszt dojścia DO celu. Dla grafów skierowanych (np. koszt wejścia na
teren) mapę buduje się na krawędziach odwróconych, a chodzi po
zwykłych: neighbors=grid_neighbors(..., reverse=True),
walk_neighbors=grid_neighbors(...).

Remisy:
    Kolejność finalizacji węzłów o równym koszcie wynika z kolejności
    ich odkrycia, więc jest deterministyczna przy ustalonej kolejności
    zwracanej przez neighbors().

Przykład użycia:
    >>> dmap = dijkstra_map([HexCoord(0, 0)], max_range=3,
    ...                     neighbors=grid_neighbors(grid))
    >>> dmap[HexCoord(2, 0)]
    2
    >>> dmap.downhill(HexCoord(2, 0))
    HexCoord(q=1, r=0)
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Dict, FrozenSet, Generic, Iterable, Iterator, List, Optional, Tuple
import heapq
import itertools
import logging

from .graph import N, NeighborFn, resolve_neighbors

logger = logging.getLogger(__name__)


class DistanceMap(Mapping, Generic[N]):
    """
    Niemutowalny wynik jednego przebiegu Dijkstry.

    Zachowuje się jak słownik węzeł -> koszt. Brak węzła oznacza
    "nieosiągalny" albo "dalej niż max_range".

    Attributes:
        goals (FrozenSet[N]): Węzły źródłowe (koszt 0)
        max_range (Optional[float]): Zasięg użyty przy budowie
    """

    def __init__(
        self,
        weights: Dict[N, float],
        goals: Iterable[N],
        max_range: Optional[float],
        neighbors: NeighborFn,
        hops: Optional[Dict[N, int]] = None,
    ):
        self._weights = dict(weights)
        self._neighbors = neighbors
        # Liczba krawędzi od celu w drzewie Dijkstry - postęp na płaskich
        # odcinkach (krawędzie o koszcie 0)
        self._hops = dict(hops) if hops is not None else {}
        self.goals: FrozenSet[N] = frozenset(goals)
        self.max_range = max_range

    # ─────────────────────────────────────────────────────────────────────────
    # MAPPING
    # ─────────────────────────────────────────────────────────────────────────

    def __getitem__(self, node: N) -> float:
        return self._weights[node]

    def __iter__(self) -> Iterator[N]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"DistanceMap(goals={len(self.goals)}, nodes={len(self._weights)})"

    # ─────────────────────────────────────────────────────────────────────────
    # RUCH PO MAPIE
    # ─────────────────────────────────────────────────────────────────────────

    def sorted_neighbors(self, node: N) -> List[N]:
        """
        Sąsiedzi węzła obecni w mapie, posortowani rosnąco po koszcie.

        Sortowanie jest stabilne - przy remisie decyduje kolejność
        z funkcji sąsiedztwa.
        """
        present = [n for n, _ in self._neighbors(node) if n in self._weights]
        return sorted(present, key=lambda n: self._weights[n])

    def downhill(self, node: N) -> Optional[N]:
        """
        Następny krok w stronę najbliższego celu.

        Krok node -> m jest brany tylko po krawędzi "ciasnej":
        weight[m] + koszt(node -> m) == weight[node], i tylko gdy m leży
        bliżej celu w drzewie Dijkstry. Suma kosztów kroków aż do celu
        równa się więc dokładnie weight[node].

        Returns:
            Optional[N]: Najtańszy taki sąsiad, albo None jeśli węzeł
                         jest celem, nie ma go w mapie albo żadna
                         krawędź nie prowadzi w dół (graf skierowany)
        """
        if node not in self._weights or node in self.goals:
            return None

        weight = self._weights[node]
        hops = self._hops.get(node, 0)
        best: Optional[N] = None
        for neighbor, step in self._neighbors(node):
            if neighbor not in self._weights or self._hops.get(neighbor, 0) >= hops:
                continue
            if self._weights[neighbor] + step != weight:
                continue
            if best is None or self._weights[neighbor] < self._weights[best]:
                best = neighbor
        return best

    def path_to_goal(self, node: N) -> List[N]:
        """
        Ścieżka "staczania się" od węzła do celu (włącznie z oboma).

        Pusta lista jeśli węzła nie ma w mapie albo zejście utknęło
        przed celem - zdarza się tylko na grafach skierowanych,
        zbudowanych bez odwróconych krawędzi.
        """
        if node not in self._weights:
            return []
        path = [node]
        step = self.downhill(node)
        while step is not None:
            path.append(step)
            step = self.downhill(step)
        return path if path[-1] in self.goals else []


def dijkstra_map(
    goals: Iterable[N],
    max_range: Optional[float] = None,
    neighbors: Optional[NeighborFn] = None,
    walk_neighbors: Optional[NeighborFn] = None,
) -> DistanceMap[N]:
    """
    Buduje mapę odległości od zbioru celów.

    Args:
        goals: Węzły źródłowe (koszt 0). Pusty zbiór -> pusta mapa.
        max_range: Maksymalny koszt uwzględniony w mapie (włącznie).
                   None = bez limitu (graf musi być skończony).
        neighbors: Funkcja węzeł -> [(sąsiad, koszt)] używana do budowy.
                   Domyślnie node.neighbors() (kontrakt GraphNode).
        walk_neighbors: Krawędzie dla downhill / path_to_goal, gdy
                        mapa była budowana na odwróconym grafie.
                        Domyślnie te same co `neighbors`.

    Returns:
        DistanceMap: węzeł -> minimalny koszt do najbliższego celu

    Complexity:
        Time: O(E log V), Space: O(V)
    """
    neighbors_fn = resolve_neighbors(neighbors)
    goal_list = list(goals)

    weights: Dict[N, float] = {}
    hops: Dict[N, int] = {}
    counter = itertools.count()
    frontier: List[Tuple[float, int, N, int]] = [
        (0, next(counter), goal, 0) for goal in goal_list
    ]
    heapq.heapify(frontier)

    while frontier:
        cost, _, node, depth = heapq.heappop(frontier)

        if node in weights:
            continue
        if max_range is not None and cost > max_range:
            break

        weights[node] = cost
        hops[node] = depth

        for neighbor, step in neighbors_fn(node):
            assert step >= 0, f"Negative edge cost {step} from {node!r} to {neighbor!r}"
            if neighbor not in weights:
                heapq.heappush(frontier, (cost + step, next(counter), neighbor, depth + 1))

    logger.debug(
        "dijkstra_map: %d goal(s), %d node(s) reached, max_range=%s",
        len(goal_list), len(weights), max_range,
    )
    walk_fn = walk_neighbors if walk_neighbors is not None else neighbors_fn
    return DistanceMap(weights, goal_list, max_range, walk_fn, hops)
