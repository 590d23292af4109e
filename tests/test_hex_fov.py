"""
Testy dla pola widzenia (shadow-casting).

Testuje:
- Pustą płaszczyznę (dokładnie koło o promieniu R, bez duplikatów)
- Kolejność (origin pierwszy, pierścień po pierścieniu)
- Cień pojedynczej ściany
- Zamknięty pierścień ścian (FOV bez limitu kończy się)
- Leniwość generatora
- has_line_of_sight
"""

import pytest
import sys
from itertools import islice
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tilegrid.core.hex_coord import HexCoord, ORIGIN
from tilegrid.core.hex_grid import HexGrid
from tilegrid.core.rng import GridRNG
from tilegrid.fov import (
    FovCell, FovValue, hex_fov, opacity_lookup, visible_positions, has_line_of_sight,
)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

FLOOR = FovCell(".")
WALL = FovCell("#", blocks_sight=True)


def plane_with_walls(walls):
    """Nieskończona płaszczyzna z podanymi ścianami."""
    walls = set(walls)

    def lookup(pos):
        return WALL if pos in walls else FLOOR

    return lookup


@pytest.fixture
def open_plane():
    return plane_with_walls([])


@pytest.fixture
def east_wall():
    """Jedna ściana tuż obok obserwatora, na wschód."""
    return plane_with_walls([HexCoord(1, 0)])


class CountingLookup:
    """Lookup liczący wywołania."""

    def __init__(self):
        self.calls = 0

    def __call__(self, pos):
        self.calls += 1
        return FLOOR


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PUSTA PŁASZCZYZNA
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("radius", [1, 2, 3, 6, 10])
def test_open_plane_sees_exact_disc(open_plane, radius):
    """Bez ścian widać dokładnie pola w odległości <= R, każde raz."""
    cells = [pos for pos, _ in hex_fov(ORIGIN, open_plane, radius)]

    assert len(cells) == len(set(cells))
    assert set(cells) == set(ORIGIN.spiral(radius))
    assert len(cells) == 1 + 3 * radius * (radius + 1)


def test_open_plane_off_origin(open_plane):
    origin = HexCoord(5, -7)
    visible = visible_positions(origin, open_plane, 3)
    assert visible == set(origin.spiral(3))


def test_origin_first_then_rings(open_plane):
    cells = [pos for pos, _ in hex_fov(ORIGIN, open_plane, 5)]
    assert cells[0] == ORIGIN
    distances = [ORIGIN.distance(pos) for pos in cells]
    assert distances == sorted(distances)


def test_radius_zero(open_plane):
    assert list(hex_fov(ORIGIN, open_plane, 0)) == [(ORIGIN, FLOOR)]


def test_origin_not_on_map():
    assert list(hex_fov(ORIGIN, lambda pos: None, 5)) == []


def test_yields_lookup_values(east_wall):
    values = dict(hex_fov(ORIGIN, east_wall, 2))
    assert values[HexCoord(1, 0)] is WALL
    assert values[HexCoord(0, 1)] is FLOOR


def test_observer_inside_wall_sees_around():
    lookup = plane_with_walls([ORIGIN])
    assert visible_positions(ORIGIN, lookup, 1) == set(ORIGIN.spiral(1))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: CIENIE
# ═══════════════════════════════════════════════════════════════════════════

def test_adjacent_wall_casts_shadow(east_wall):
    visible = visible_positions(ORIGIN, east_wall, 4)

    # ściana sama jest widoczna
    assert HexCoord(1, 0) in visible
    # dokładnie za nią - cień
    assert HexCoord(2, 0) not in visible
    assert HexCoord(3, 0) not in visible
    assert HexCoord(2, 1) not in visible
    # obok cienia - widoczne
    assert HexCoord(1, 1) in visible
    assert HexCoord(2, -1) in visible


def test_straight_wall_beside_observer_is_fully_visible():
    """Ściana korytarza wzdłuż obserwatora widoczna na całej długości."""
    radius = 6
    wall_row = [HexCoord(q, 1) for q in range(-radius, radius)]
    lookup = plane_with_walls(wall_row)

    cells = [pos for pos, _ in hex_fov(ORIGIN, lookup, radius)]
    visible = set(cells)

    assert len(cells) == len(visible)
    assert all(ORIGIN.distance(pos) <= radius for pos in wall_row)
    for pos in wall_row:
        assert pos in visible, f"Wall {pos} is hidden"
    # za ścianą nic nie widać
    assert all(pos.r <= 1 for pos in visible)


def test_wall_with_center_in_shadow_is_visible_but_floor_is_not():
    """Ściana widoczna częściowo - tak; podłoga o środku w cieniu - nie."""
    wall_row = [HexCoord(q, 1) for q in range(0, 4)]
    visible = visible_positions(ORIGIN, plane_with_walls(wall_row), 3)
    assert HexCoord(2, 1) in visible

    floor_only = plane_with_walls([HexCoord(0, 1), HexCoord(1, 1)])
    assert HexCoord(2, 1) not in visible_positions(ORIGIN, floor_only, 3)
    assert HexCoord(0, 1) in visible
    assert HexCoord(-2, 0) in visible


def test_walls_only_remove_cells(open_plane):
    """Ściany nigdy nie dodają widocznych pól."""
    rng = GridRNG(seed=12345)
    walls = {rng.random_position_in_range(ORIGIN, 6) for _ in range(15)} - {ORIGIN}
    lookup = plane_with_walls(walls)

    cells = [pos for pos, _ in hex_fov(ORIGIN, lookup, 6)]
    assert len(cells) == len(set(cells))
    assert set(cells) <= visible_positions(ORIGIN, open_plane, 6)
    assert cells[0] == ORIGIN


@pytest.mark.parametrize("seed", [1, 7, 99])
def test_cells_behind_wall_on_ray_are_hidden(seed):
    """Pole dokładnie za ścianą na promieniu Dir6 jest zawsze w cieniu."""
    rng = GridRNG(seed)
    direction = rng.random_dir6()
    distance = rng.randint(1, 3)
    wall = direction.offset * distance
    lookup = plane_with_walls([wall])

    visible = visible_positions(ORIGIN, lookup, 8)
    assert wall in visible
    assert direction.offset * (distance + 1) not in visible
    assert direction.offset * 8 not in visible


def test_sealed_ring_terminates():
    """Pierścień ścian na odległości 2 zamyka widok - bez limitu zasięgu."""
    lookup = lambda pos: WALL if ORIGIN.distance(pos) == 2 else FLOOR
    visible = visible_positions(ORIGIN, lookup, None)
    assert visible == set(ORIGIN.spiral(2))
    assert len(visible) == 19


def test_finite_grid_terminates():
    """Bez limitu zasięgu na skończonej mapie - pola spoza mapy blokują."""
    grid = HexGrid(width=6, height=6, default=".")
    lookup = opacity_lookup(grid.get, lambda v: v == "#")
    origin = HexCoord(2, 3)

    cells = [pos for pos, _ in hex_fov(origin, lookup)]
    assert cells[0] == origin
    assert len(cells) == len(set(cells))
    assert all(grid.is_valid(pos) for pos in cells)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: LENIWOŚĆ
# ═══════════════════════════════════════════════════════════════════════════

def test_generator_is_lazy():
    """Konsument biorący K pól nie płaci za resztę - nawet bez limitu."""
    lookup = CountingLookup()
    first = list(islice(hex_fov(ORIGIN, lookup, None), 7))

    assert len(first) == 7
    assert {pos for pos, _ in first} == set(ORIGIN.spiral(1))
    assert lookup.calls <= 13


def test_nothing_computed_before_iteration():
    lookup = CountingLookup()
    hex_fov(ORIGIN, lookup, 5)
    assert lookup.calls == 0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ADAPTERY
# ═══════════════════════════════════════════════════════════════════════════

def test_opacity_lookup_wraps_values():
    grid = HexGrid(width=3, height=3, default=".")
    grid.set(HexCoord(1, 1), "#")
    lookup = opacity_lookup(grid.get, lambda v: v == "#")

    assert lookup(HexCoord(1, 1)) == FovCell("#", blocks_sight=True)
    assert lookup(HexCoord(0, 0)) == FovCell(".", blocks_sight=False)
    assert lookup(HexCoord(-5, 0)) is None


def test_fov_cell_satisfies_protocol():
    assert isinstance(FLOOR, FovValue)


def test_custom_fov_value():
    """Dowolny obiekt z atrybutem blocks_sight."""

    class Tile:
        def __init__(self, opaque):
            self.blocks_sight = opaque

    lookup = lambda pos: Tile(pos == HexCoord(1, 0))
    visible = visible_positions(ORIGIN, lookup, 3)
    assert HexCoord(2, 0) not in visible
    assert HexCoord(0, 2) in visible


# ═══════════════════════════════════════════════════════════════════════════
# TEST: LINE OF SIGHT
# ═══════════════════════════════════════════════════════════════════════════

def test_line_of_sight(east_wall):
    assert has_line_of_sight(ORIGIN, HexCoord(3, 0), east_wall) is False
    # ściana na samym celu go nie zasłania
    assert has_line_of_sight(ORIGIN, HexCoord(1, 0), east_wall) is True
    assert has_line_of_sight(ORIGIN, HexCoord(0, 3), east_wall) is True
    assert has_line_of_sight(ORIGIN, ORIGIN, east_wall) is True


def test_line_of_sight_off_map_blocks():
    lookup = lambda pos: None if pos == HexCoord(1, 0) else FLOOR
    assert has_line_of_sight(ORIGIN, HexCoord(2, 0), lookup) is False
