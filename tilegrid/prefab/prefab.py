"""
Prefaby: mapy zdefiniowane tekstem.

Prefab to rzadkie mapowanie HexCoord -> payload, budowane raz przez
sparsowanie wierszy tekstu z użyciem Legend.

Format tekstu:
    - jeden wiersz tekstu = jeden wiersz mapy
    - każdy znak to token legendy (bez sekwencji escape, bez komentarzy,
      bez tokenów wieloznakowych)
    - znak `empty` (domyślnie spacja) oznacza "brak wpisu"

Układ wierszy (odd-r, ten sam co HexGrid):
    znak w kolumnie x, wierszu y  ->  HexCoord(x - y // 2, y)

        "#.#"      ->  (0,0) (1,0) (2,0)
         "..."     ->   (0,1) (1,1) (2,1)      <- nieparzyste wiersze
        "###"      ->  (-1,2) (0,2) (1,2)         przesunięte o pół hexa

    Tekst piszemy BEZ wcięć - przesunięcie jest tylko w interpretacji.

Łączenie prefabów (merge):
    MergePolicy.REJECT (domyślnie)  - nakładające się pozycje -> PrefabConflict
    MergePolicy.OVERWRITE           - wygrywa prefab przekazany jako argument

Przykład użycia:
    >>> legend = Legend.from_mapping({"#": "wall", ".": "floor"})
    >>> room = Prefab.parse(["#.#", "..."], legend)
    >>> len(room)
    6
    >>> room[HexCoord(1, 0)]
    'floor'
    >>> for pos, payload in room:
    ...     print(pos, payload)
"""

from __future__ import annotations
from enum import Enum
from typing import (
    Callable, Dict, Generic, Iterable, Iterator, List, Mapping, Optional, Tuple,
    TypeVar, Union,
)
import logging

from ..core.hex_coord import HexCoord, ORIGIN, axial_to_offset, offset_to_axial
from ..errors import ParseError, PrefabConflict
from .legend import Legend

logger = logging.getLogger(__name__)

P = TypeVar("P")
Q = TypeVar("Q")

DEFAULT_EMPTY_TOKEN = " "


class MergePolicy(Enum):
    """Co zrobić, gdy łączone prefaby zajmują tę samą pozycję."""

    REJECT = "reject"
    OVERWRITE = "overwrite"


class PrefabIterator(Generic[P]):
    """
    Leniwy iterator par (pozycja, payload) prefaba.

    Każdy wpis pojawia się dokładnie raz. Kolejność nie jest
    gwarantowana. Żeby zacząć od nowa, wywołaj iter(prefab) ponownie.
    """

    def __init__(self, entries: Dict[HexCoord, P]):
        self._items = iter(entries.items())
        self._remaining = len(entries)

    def __iter__(self) -> "PrefabIterator[P]":
        return self

    def __next__(self) -> Tuple[HexCoord, P]:
        item = next(self._items)
        self._remaining -= 1
        return item

    def __length_hint__(self) -> int:
        return self._remaining


class Prefab(Generic[P]):
    """
    Rzadka mapa pozycja -> payload.

    Po zbudowaniu prefab się nie zmienia - translated(), merge()
    i map() zwracają nowe obiekty.

    Note:
        iter(prefab) zwraca pary (pozycja, payload), nie same klucze.
    """

    def __init__(self, entries: Optional[Mapping[HexCoord, P]] = None):
        self._entries: Dict[HexCoord, P] = dict(entries or {})

    # ─────────────────────────────────────────────────────────────────────────
    # PARSOWANIE
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def parse(
        cls,
        rows: Union[str, Iterable[str]],
        legend: Legend[P],
        empty: Optional[str] = DEFAULT_EMPTY_TOKEN,
    ) -> "Prefab[P]":
        """
        Parsuje wiersze tekstu do prefaba.

        Args:
            rows: Lista wierszy albo jeden tekst wielowierszowy
            legend: Token -> payload
            empty: Znak oznaczający brak wpisu (sprawdzany PRZED legendą);
                   None = każdy znak musi być w legendzie

        Returns:
            Prefab: Sparsowana mapa

        Raises:
            ParseError: Znak spoza legendy (z numerem wiersza, kolumny i znakiem)
        """
        if isinstance(rows, str):
            rows = rows.splitlines()

        entries: Dict[HexCoord, P] = {}
        row_count = 0
        for y, line in enumerate(rows):
            row_count += 1
            for x, char in enumerate(line):
                if char == empty:
                    continue
                if char not in legend:
                    raise ParseError(y, x, char, line)
                entries[offset_to_axial(x, y)] = legend[char]

        logger.debug("Parsed prefab: %d entries from %d rows", len(entries), row_count)
        return cls(entries)

    def to_rows(self, legend: Legend[P], empty: str = DEFAULT_EMPTY_TOKEN) -> List[str]:
        """
        Zamienia prefab z powrotem na wiersze tekstu (odwrotność parse).

        Tekst zaczyna się od lewego górnego rogu prefaba. Pierwszy wiersz
        ma zawsze parzysty numer offset, żeby zachować przesunięcie
        nieparzystych wierszy. Końcowe puste znaki są obcinane.

        Raises:
            ValueError: Payload bez tokenu w legendzie
        """
        bounds = self.offset_bounds()
        if bounds is None:
            return []
        min_x, min_y, max_x, max_y = bounds
        min_y -= min_y % 2

        rows = []
        for y in range(min_y, max_y + 1):
            chars = []
            for x in range(min_x, max_x + 1):
                pos = offset_to_axial(x, y)
                if pos not in self._entries:
                    chars.append(empty)
                    continue
                token = legend.token_for(self._entries[pos])
                if token is None:
                    raise ValueError(f"No legend token for payload {self._entries[pos]!r} at {pos}")
                chars.append(token)
            rows.append("".join(chars).rstrip(empty))
        return rows

    # ─────────────────────────────────────────────────────────────────────────
    # DOSTĘP
    # ─────────────────────────────────────────────────────────────────────────

    def __iter__(self) -> PrefabIterator[P]:
        return PrefabIterator(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pos: object) -> bool:
        return pos in self._entries

    def __getitem__(self, pos: HexCoord) -> P:
        return self._entries[pos]

    def get(self, pos: HexCoord, default: Optional[P] = None) -> Optional[P]:
        return self._entries.get(pos, default)

    def positions(self) -> List[HexCoord]:
        return list(self._entries)

    def offset_bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """
        Prostokąt offset obejmujący wszystkie wpisy.

        Returns:
            (min_x, min_y, max_x, max_y) albo None dla pustego prefaba
        """
        if not self._entries:
            return None
        offsets = [axial_to_offset(pos) for pos in self._entries]
        xs = [x for x, _ in offsets]
        ys = [y for _, y in offsets]
        return (min(xs), min(ys), max(xs), max(ys))

    # ─────────────────────────────────────────────────────────────────────────
    # TRANSFORMACJE
    # ─────────────────────────────────────────────────────────────────────────

    def translated(self, offset: HexCoord) -> "Prefab[P]":
        """Kopia przesunięta o wektor axial."""
        return Prefab({pos + offset: payload for pos, payload in self._entries.items()})

    def map(self, fn: Callable[[P], Q]) -> "Prefab[Q]":
        """Kopia z payloadami przetworzonymi przez fn."""
        return Prefab({pos: fn(payload) for pos, payload in self._entries.items()})

    def merge(
        self,
        other: "Prefab[P]",
        policy: Union[MergePolicy, str] = MergePolicy.REJECT,
        offset: HexCoord = ORIGIN,
    ) -> "Prefab[P]":
        """
        Łączy dwa prefaby w nowy.

        Args:
            other: Prefab do nałożenia
            policy: REJECT - konflikt pozycji rzuca PrefabConflict,
                    OVERWRITE - wartości z `other` nadpisują self
            offset: Przesunięcie `other` przed nałożeniem

        Raises:
            PrefabConflict: Nakładające się pozycje przy REJECT
        """
        policy = MergePolicy(policy)
        placed = other.translated(offset) if offset != ORIGIN else other

        if policy is MergePolicy.REJECT:
            overlap = [pos for pos in placed._entries if pos in self._entries]
            if overlap:
                raise PrefabConflict(overlap)

        merged = dict(self._entries)
        merged.update(placed._entries)
        return Prefab(merged)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Prefab):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Prefab({len(self._entries)} entries)"
