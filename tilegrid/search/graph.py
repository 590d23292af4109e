"""
Kontrakt grafu dla algorytmów wyszukiwania.

Wyszukiwanie (Dijkstra, A*) nie wie nic o hexach ani mapach.
Działa na dowolnym typie węzła, który potrafi wyliczyć swoich
sąsiadów razem z kosztem krawędzi:

    class Room:
        def __hash__(self): ...
        def __eq__(self, other): ...
        def neighbors(self):
            return [(self.north, 1.0), (self.stairs, 2.5)]

Nie trzeba dziedziczyć po GraphNode - to Protocol (typowanie
strukturalne). Zamiast metody `neighbors()` można też przekazać
funkcję `neighbors=` do każdego algorytmu, np. dla HexCoord:

    dijkstra_map([goal], neighbors=grid_neighbors(grid))

Warunek wstępny: koszty krawędzi są NIEUJEMNE. Ujemny koszt to
niezdefiniowane zachowanie, wykrywane tylko przez assert (python -O
je wyłącza).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import (
    Callable, Generic, Hashable, Iterable, Iterator, Optional, Protocol, Tuple,
    TypeVar, Union, runtime_checkable,
)

N = TypeVar("N", bound=Hashable)

# Funkcja sąsiedztwa: węzeł -> (sąsiad, koszt)
NeighborFn = Callable[[N], Iterable[Tuple[N, float]]]


@runtime_checkable
class GraphNode(Protocol):
    """Węzeł grafu: hashowalny, wylicza (sąsiad, koszt >= 0)."""

    def __hash__(self) -> int: ...

    def neighbors(self) -> Iterable[Tuple["GraphNode", float]]: ...


def node_neighbors(node: GraphNode) -> Iterable[Tuple[GraphNode, float]]:
    """Domyślna funkcja sąsiedztwa - woła node.neighbors()."""
    return node.neighbors()


def resolve_neighbors(neighbors: Optional[NeighborFn]) -> NeighborFn:
    """Zwraca przekazaną funkcję albo domyślną opartą o GraphNode."""
    return neighbors if neighbors is not None else node_neighbors


@dataclass(frozen=True)
class Path(Generic[N]):
    """
    Ścieżka zwrócona przez A*.

    Kolejne węzły są zawsze sąsiadami w sensie tej samej funkcji
    sąsiedztwa, której użyto do jej znalezienia.

    Attributes:
        nodes (Tuple[N, ...]): Węzły od startu do celu (włącznie)
        cost (float): Suma kosztów krawędzi
    """
    nodes: Tuple[N, ...]
    cost: float

    @property
    def start(self) -> N:
        return self.nodes[0]

    @property
    def goal(self) -> N:
        return self.nodes[-1]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[N]:
        return iter(self.nodes)

    def __getitem__(self, index: Union[int, slice]) -> Union[N, Tuple[N, ...]]:
        return self.nodes[index]
