"""
Testy dla Dir6 / Dir12.

Testuje:
- Kolejność i wektory kierunków
- Obroty i kierunki przeciwne
- Mapowanie Dir6 <-> Dir12
- Kierunek najbliższy wektorowi
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tilegrid.core.hex_coord import HexCoord, ORIGIN
from tilegrid.core.directions import Dir6, Dir12


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DIR6
# ═══════════════════════════════════════════════════════════════════════════

def test_dir6_offsets_are_neighbors():
    """Offsety Dir6 to dokładnie sąsiedzi (0, 0) w tej samej kolejności."""
    assert [d.offset for d in Dir6] == ORIGIN.neighbors()


def test_dir6_clockwise_from_east():
    assert Dir6.E.offset == HexCoord(1, 0)
    assert Dir6.SE.offset == HexCoord(0, 1)
    assert Dir6.W.offset == HexCoord(-1, 0)
    assert Dir6.NE.offset == HexCoord(1, -1)


def test_dir6_opposite_negates_offset():
    """opposite(d).offset == -d.offset."""
    pos = HexCoord(7, -3)
    for d in Dir6:
        assert d.opposite().offset == -d.offset
        assert d.opposite().opposite() == d
        assert pos + d.offset + d.opposite().offset == pos


def test_dir6_rotate():
    assert Dir6.E.rotate(1) == Dir6.SE
    assert Dir6.E.rotate(-1) == Dir6.NE
    assert Dir6.NW.rotate(3) == Dir6.SE
    for d in Dir6:
        assert d.rotate(6) == d
        assert d.rotate(-13) == d.rotate(-1)


def test_dir6_from_offset():
    for d in Dir6:
        assert Dir6.from_offset(d.offset) == d

    with pytest.raises(ValueError):
        Dir6.from_offset(HexCoord(2, 0))


def test_dir6_from_vector():
    """Kierunek najbliższy wektorowi."""
    for d in Dir6:
        assert Dir6.from_vector(d.offset * 4) == d
    assert Dir6.from_vector(HexCoord(5, -1)) == Dir6.E
    assert Dir6.from_vector(HexCoord(-3, 1)) == Dir6.W

    with pytest.raises(ValueError):
        Dir6.from_vector(ORIGIN)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DIR12
# ═══════════════════════════════════════════════════════════════════════════

def test_dir12_edges_match_dir6():
    """Dir6(d) <-> Dir12(2d)."""
    for d in Dir6:
        d12 = d.to_dir12()
        assert d12 == Dir12(2 * d.value)
        assert d12.is_edge
        assert d12.to_dir6() == d
        assert d12.offset == d.offset


def test_dir12_vertices():
    """Wierzchołki leżą pomiędzy dwoma kierunkami krawędzi."""
    assert Dir12.ESE.offset == HexCoord(1, 1)
    assert Dir12.N.offset == HexCoord(1, -2)
    for d12 in Dir12:
        if not d12.is_edge:
            assert d12.to_dir6() is None
            assert ORIGIN.distance(d12.offset) == 2
            left = d12.rotate(-1).offset
            right = d12.rotate(1).offset
            assert d12.offset == left + right


def test_dir12_opposite_and_rotate():
    for d12 in Dir12:
        assert d12.opposite().offset == -d12.offset
        assert d12.rotate(12) == d12
    assert Dir12.E.rotate(3) == Dir12.S
    assert Dir12.E.rotate(-3) == Dir12.N


def test_dir12_from_vector():
    for d12 in Dir12:
        assert Dir12.from_vector(d12.offset) == d12
        assert Dir12.from_vector(d12.offset * 3) == d12

    with pytest.raises(ValueError):
        Dir12.from_vector(ORIGIN)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SEKTORY
# ═══════════════════════════════════════════════════════════════════════════

def test_sector_bounds():
    """Sektor d ograniczony przez Dir12(2d) i Dir12(2d + 2)."""
    assert Dir6.E.sector_bounds() == (Dir12.E, Dir12.SE)
    assert Dir6.NE.sector_bounds() == (Dir12.NE, Dir12.E)

    for d in Dir6:
        begin, end = d.sector_bounds()
        assert begin.to_dir6() == d
        assert end.to_dir6() == d.rotate(1)
