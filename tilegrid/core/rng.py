"""
Powtarzalna losowość dla narzędzi wokół siatki.

Same algorytmy (search, FOV, prefab) są deterministyczne i nie losują.
GridRNG służy temu, co je otacza:
- main.py --seed rozrzuca przeszkody po prefabie
- testy budują losowe grafy i mapy z ustalonego seeda
- gra może losować kierunki (Dir6 / Dir12) i pola w promieniu

Każdy użytkownik trzyma własną instancję - globalny moduł random
jest współdzielony i psuje powtarzalność.

Przykład użycia:
    >>> rng = GridRNG(seed=12345)
    >>> rng.random_dir6()                             # zawsze ten sam
    >>> rng.random_position_in_range(ORIGIN, 3)       # jedno z 37 pól
"""

from __future__ import annotations
import random
from typing import List, Sequence, TypeVar

from .hex_coord import HexCoord
from .directions import Dir6, Dir12

T = TypeVar("T")


class GridRNG:
    """
    Generator z jawnym seedem (opakowanie random.Random).

    Attributes:
        seed (int): Seed podany przy tworzeniu
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    # ─────────────────────────────────────────────────────────────────────────
    # LICZBY I SEKWENCJE
    # ─────────────────────────────────────────────────────────────────────────

    def random(self) -> float:
        """Liczba z [0.0, 1.0)."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Liczba całkowita z [a, b], oba końce włącznie."""
        return self._rng.randint(a, b)

    def roll_chance(self, chance: float) -> bool:
        """True z prawdopodobieństwem `chance` (0.0 - 1.0)."""
        return self.random() < chance

    def choice(self, seq: Sequence[T]) -> T:
        """
        Jeden element sekwencji.

        Raises:
            IndexError: Dla pustej sekwencji
        """
        return self._rng.choice(seq)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """
        k różnych elementów (np. pola pod przeszkody).

        Raises:
            ValueError: Gdy k > len(seq)
        """
        return self._rng.sample(list(seq), k)

    def shuffle(self, items: List[T]) -> None:
        """Miesza listę w miejscu."""
        self._rng.shuffle(items)

    # ─────────────────────────────────────────────────────────────────────────
    # SIATKA
    # ─────────────────────────────────────────────────────────────────────────

    def random_dir6(self) -> Dir6:
        return Dir6(self._rng.randrange(6))

    def random_dir12(self) -> Dir12:
        return Dir12(self._rng.randrange(12))

    def random_position_in_range(self, center: HexCoord, radius: int) -> HexCoord:
        """
        Jednostajnie losowe pole w odległości <= radius od center.

        Wylicza wszystkie 1 + 3R(R+1) przesunięć (jak get_hexes_in_range)
        i wybiera jedno.
        """
        offsets = [
            (dq, dr)
            for dq in range(-radius, radius + 1)
            for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1)
        ]
        dq, dr = self._rng.choice(offsets)
        return HexCoord(center.q + dq, center.r + dr)

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    def get_state(self) -> tuple:
        """Stan do późniejszego set_state() - powtórka tej samej sekwencji."""
        return self._rng.getstate()

    def set_state(self, state: tuple) -> None:
        self._rng.setstate(state)

    def fork(self) -> GridRNG:
        """
        Niezależny generator, którego seed pochodzi z tego.

        Podsystem (np. rozrzucanie ścian) losuje wtedy ze swojej
        sekwencji i nie przesuwa głównej.
        """
        return GridRNG(self._rng.randrange(2**31))

    def __repr__(self) -> str:
        return f"GridRNG(seed={self.seed})"
