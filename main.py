#!/usr/bin/env python3
"""
tilegrid - demo z linii komend
═══════════════════════════════════════════════════════════════════════════

Wczytuje prefab z data/prefabs.yaml, liczy pole widzenia z wybranego
pola i (opcjonalnie) ścieżkę A* do celu, a potem rysuje mapę w ASCII.

Użycie:
    python main.py                          # prefab "room", domyślne pole startowe
    python main.py --prefab glade --radius 4
    python main.py --origin 2,2 --goal 7,4  # FOV z (2, 2) i ścieżka do (7, 4)
    python main.py --seed 12345 --rubble 6  # losowe przeszkody
    python main.py --verbose                # logi DEBUG algorytmów

Legenda wydruku:
    @ = obserwator    * = ścieżka    ? = pole niewidoczne
    pozostałe znaki = tokeny legendy widocznych pól
"""

import argparse
import logging
import sys
from typing import Dict, Optional

from tilegrid.core.config_loader import ConfigLoader
from tilegrid.core.hex_coord import HexCoord
from tilegrid.core.hex_grid import HexGrid
from tilegrid.core.rng import GridRNG
from tilegrid.fov import hex_fov, opacity_lookup
from tilegrid.search import find_path

RUBBLE = {"name": "rubble", "blocks_sight": True, "passable": False}


def parse_coord(text: str) -> HexCoord:
    """'q,r' -> HexCoord (dla argparse)."""
    try:
        q, r = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected q,r - got {text!r}") from None
    return HexCoord(q, r)


def _flag(value: Optional[dict], key: str, default: bool) -> bool:
    if not isinstance(value, dict):
        return default
    return bool(value.get(key, default))


def _move_cost(value: Optional[dict]) -> float:
    if not isinstance(value, dict):
        return 1
    return value.get("move_cost", 1)


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="tilegrid demo: FOV and pathfinding on a prefab",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data", default="data/", help="Folder z plikami YAML (domyślnie: data/)")
    parser.add_argument("--prefab", default="room", help="Nazwa prefaba (domyślnie: room)")
    parser.add_argument("--origin", type=parse_coord, help="Pole obserwatora q,r")
    parser.add_argument("--goal", type=parse_coord, help="Cel ścieżki q,r")
    parser.add_argument("--radius", type=int, help="Zasięg widzenia (domyślnie z defaults.yaml)")
    parser.add_argument("--seed", type=int, default=12345, help="Ziarno losowości (domyślnie: 12345)")
    parser.add_argument("--rubble", type=int, default=0, help="Ile losowych przeszkód rozrzucić")
    parser.add_argument("--verbose", "-v", action="store_true", help="Szczegółowy output")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Załaduj konfigurację
    loader = ConfigLoader(args.data)
    try:
        definition = loader.load_prefab_definition(args.prefab)
        legend = loader.load_legend(definition["legend"])
        prefab = loader.load_prefab(args.prefab)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1

    grid: HexGrid[dict] = HexGrid.from_prefab(prefab)
    passable = lambda value: value is not None and _flag(value, "passable", True)
    floor = grid.find(passable)
    if not floor:
        print(f"Error: prefab '{args.prefab}' has no passable cells", file=sys.stderr)
        return 1

    origin = args.origin or floor[0]
    if grid.get(origin) is None:
        print(f"Error: origin {origin} is not a map cell", file=sys.stderr)
        return 1

    # Losowe przeszkody (nigdy na obserwatorze ani celu)
    if args.rubble > 0:
        rng = GridRNG(args.seed)
        candidates = [pos for pos in floor if pos not in (origin, args.goal)]
        for pos in rng.sample(candidates, min(args.rubble, len(candidates))):
            grid.set(pos, RUBBLE)

    radius = args.radius
    if radius is None:
        radius = loader.get_fov_config().get("default_radius")

    print("=" * 60)
    print(f"PREFAB: {args.prefab} ({len(prefab)} cells, legend '{definition['legend']}')")
    print(f"Origin: {origin}   radius: {radius}   seed: {args.seed}")
    print("=" * 60)

    # Pole widzenia
    lookup = opacity_lookup(grid.get, lambda value: _flag(value, "blocks_sight", False))
    visible = {pos for pos, _ in hex_fov(origin, lookup, radius)}

    marks: Dict[HexCoord, str] = {origin: "@"}

    # Ścieżka
    if args.goal is not None:
        path = find_path(
            grid, origin, args.goal,
            passable=passable,
            cost=_move_cost,
            max_iterations=loader.get_search_config().get("max_iterations", 1000),
        )
        if path:
            for pos in path[1:]:
                marks[pos] = "*"
            print(f"Path: {len(path) - 1} steps to {args.goal}")
        else:
            print(f"Path: {args.goal} is unreachable")

    def render(value: Optional[dict]) -> str:
        if value is None:
            return " "
        return legend.token_for(value) or "x"

    def render_visible(pos: HexCoord) -> str:
        if pos in marks:
            return marks[pos]
        if pos not in visible:
            return "?" if grid.get(pos) is not None else " "
        return render(grid.get(pos))

    print()
    print(grid.debug_print(marks={pos: render_visible(pos) for pos in grid.get_all_valid_positions()}))
    print()
    print(f"Visible: {len(visible)} cells")

    return 0


if __name__ == "__main__":
    sys.exit(main())
