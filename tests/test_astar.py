"""
Testy dla A*.

Testuje:
- Przypadki brzegowe (start == cel, brak ścieżki, limit iteracji)
- Optymalność: koszt A* == odległość z mapy Dijkstry
- Spójność ścieżki (kolejne węzły są sąsiadami)
- Cel jako predykat (is_goal)
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tilegrid.core.hex_coord import HexCoord, ORIGIN
from tilegrid.core.hex_grid import HexGrid
from tilegrid.core.rng import GridRNG
from tilegrid.search import Path as SearchPath, astar_path, dijkstra_map, grid_neighbors


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

def random_graph(seed: int, size: int = 25, degree: int = 3):
    """Losowy graf skierowany: węzeł -> [(sąsiad, koszt 0-9)]."""
    rng = GridRNG(seed)
    return {
        node: [(rng.randint(0, size - 1), rng.randint(0, 9)) for _ in range(degree)]
        for node in range(size)
    }


def open_plane(pos: HexCoord):
    return [(n, 1) for n in pos.neighbors()]


@pytest.fixture
def walled_grid():
    """Siatka 9x9 z losowymi ścianami (seed 12345), (0, 0) zawsze wolne."""
    rng = GridRNG(seed=12345)
    grid = HexGrid(width=9, height=9, default=".")
    for pos in rng.sample(grid.get_all_valid_positions()[1:], 20):
        grid.set(pos, "#")
    return grid


def assert_connected(path, neighbors):
    """Kolejne węzły ścieżki są sąsiadami, a koszt to suma krawędzi."""
    total = 0
    for a, b in zip(path.nodes, path.nodes[1:]):
        costs = [c for n, c in neighbors(a) if n == b]
        assert costs, f"{b!r} is not a neighbor of {a!r}"
        total += min(costs)
    assert total == path.cost


# ═══════════════════════════════════════════════════════════════════════════
# TEST: EDGE CASES
# ═══════════════════════════════════════════════════════════════════════════

def test_start_equals_goal():
    path = astar_path(HexCoord(2, 2), HexCoord(2, 2), neighbors=open_plane)
    assert isinstance(path, SearchPath)
    assert path.nodes == (HexCoord(2, 2),)
    assert path.cost == 0
    assert len(path) == 1


def test_unreachable_returns_none():
    graph = {0: [(1, 1)], 1: [(0, 1)], 2: []}
    assert astar_path(0, 2, neighbors=lambda n: graph[n]) is None


def test_requires_exactly_one_goal_form():
    with pytest.raises(ValueError):
        astar_path(ORIGIN, neighbors=open_plane)
    with pytest.raises(ValueError):
        astar_path(ORIGIN, HexCoord(1, 0), is_goal=lambda n: True, neighbors=open_plane)


def test_max_iterations_gives_up():
    goal = HexCoord(20, 0)
    assert astar_path(ORIGIN, goal, neighbors=open_plane, max_iterations=3) is None
    assert astar_path(ORIGIN, goal, lambda n: n.distance(goal), neighbors=open_plane) is not None


def test_negative_cost_is_caught_by_assert():
    graph = {0: [(1, -2)], 1: [(2, 1)], 2: []}
    with pytest.raises(AssertionError):
        astar_path(0, 2, neighbors=lambda n: graph[n])


# ═══════════════════════════════════════════════════════════════════════════
# TEST: OPTYMALNOŚĆ
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("seed", [1, 2, 3, 42, 12345])
def test_cost_matches_distance_map(seed):
    """Koszt A* (heurystyka zerowa) == odległość Dijkstry od startu."""
    graph = random_graph(seed)
    neighbors = lambda n: graph[n]
    dmap = dijkstra_map([0], neighbors=neighbors)

    for target in graph:
        path = astar_path(0, target, neighbors=neighbors)
        if target not in dmap:
            assert path is None
            continue
        assert path.cost == dmap[target]
        assert path.start == 0
        assert path.goal == target
        assert_connected(path, neighbors)


def test_hex_heuristic_is_optimal(walled_grid):
    """Heurystyka hex distance nie psuje optymalności."""
    neighbors = grid_neighbors(walled_grid, passable=lambda v: v != "#")
    dmap = dijkstra_map([ORIGIN], neighbors=neighbors)

    for goal in walled_grid.get_all_valid_positions():
        if walled_grid.get(goal) == "#":
            continue
        path = astar_path(ORIGIN, goal, lambda n: n.distance(goal), neighbors=neighbors)
        if goal not in dmap:
            assert path is None
            continue
        assert path.cost == dmap[goal]
        assert len(path) == dmap[goal] + 1
        assert_connected(path, neighbors)


def test_open_plane_path_length():
    goal = HexCoord(3, -5)
    path = astar_path(ORIGIN, goal, lambda n: n.distance(goal), neighbors=open_plane)
    assert path.cost == ORIGIN.distance(goal)
    assert len(path) == ORIGIN.distance(goal) + 1


def test_weighted_detour():
    """Droga bezpośrednia jest droższa niż objazd."""
    graph = {
        "a": [("b", 10), ("c", 1)],
        "c": [("d", 1)],
        "d": [("b", 1)],
        "b": [],
    }
    path = astar_path("a", "b", neighbors=lambda n: graph[n])
    assert path.nodes == ("a", "c", "d", "b")
    assert path.cost == 3


# ═══════════════════════════════════════════════════════════════════════════
# TEST: IS_GOAL / GRAPH NODE
# ═══════════════════════════════════════════════════════════════════════════

def test_is_goal_predicate():
    """Cel jako predykat - najbliższy pasujący węzeł."""
    targets = {HexCoord(4, 0), HexCoord(-2, 0)}
    path = astar_path(ORIGIN, is_goal=lambda n: n in targets, neighbors=open_plane)
    assert path.goal == HexCoord(-2, 0)
    assert path.cost == 2


class Station:
    def __init__(self, name):
        self.name = name
        self.links = []

    def neighbors(self):
        return self.links


def test_graph_node_default_neighbors():
    a, b, c = Station("a"), Station("b"), Station("c")
    a.links = [(b, 2), (c, 7)]
    b.links = [(c, 2)]
    path = astar_path(a, c)
    assert path.nodes == (a, b, c)
    assert path.cost == 4


def test_path_indexing():
    goal = HexCoord(2, 0)
    path = astar_path(ORIGIN, goal, lambda n: n.distance(goal), neighbors=open_plane)
    assert list(path) == [ORIGIN, HexCoord(1, 0), goal]
    assert path[1] == HexCoord(1, 0)
    assert path[-1] == goal
