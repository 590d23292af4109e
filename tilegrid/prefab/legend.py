"""
Legenda prefabów: token (jeden znak) -> wartość (payload).

Legenda jest budowana przyrostowo przez LegendBuilder, a potem
zamrażana do niemutowalnej Legend:

    >>> legend = (LegendBuilder()
    ...           .add("#", "wall")
    ...           .add(".", "floor")
    ...           .build())
    >>> legend["#"]
    'wall'

Reguły:
    - token to dokładnie jeden drukowalny znak
    - ten sam token z INNĄ wartością -> LegendConflict
    - ten sam token z identyczną wartością -> nic się nie dzieje
"""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Generic, Iterator, Mapping as MappingType, Optional, TypeVar

from ..errors import LegendConflict

P = TypeVar("P")


def _check_token(token: str) -> None:
    """
    Waliduje token legendy.

    Raises:
        ValueError: Jeśli token nie jest pojedynczym drukowalnym znakiem
    """
    if not isinstance(token, str) or len(token) != 1 or not token.isprintable():
        raise ValueError(f"Legend token must be a single printable character, got {token!r}")


class Legend(Mapping, Generic[P]):
    """
    Niemutowalne mapowanie token -> payload.

    Tworzone przez LegendBuilder.build() albo Legend.from_mapping().
    """

    def __init__(self, entries: Dict[str, P]):
        self._entries = dict(entries)

    @classmethod
    def from_mapping(cls, mapping: MappingType[str, P]) -> "Legend[P]":
        """Buduje legendę ze słownika (przez LegendBuilder - te same walidacje)."""
        builder: LegendBuilder[P] = LegendBuilder()
        for token, payload in mapping.items():
            builder.add(token, payload)
        return builder.build()

    def __getitem__(self, token: str) -> P:
        return self._entries[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def token_for(self, payload: Any) -> Optional[str]:
        """
        Odwrotne wyszukiwanie: pierwszy token mapujący na payload.

        Porównuje przez ==, więc działa też dla niehashowalnych wartości
        (np. słowników z YAML).
        """
        for token, value in self._entries.items():
            if value == payload:
                return token
        return None

    def __repr__(self) -> str:
        return f"Legend({self._entries!r})"


class LegendBuilder(Generic[P]):
    """
    Przyrostowy budowniczy Legend.

    Example:
        >>> builder = LegendBuilder()
        >>> builder.add("#", "wall").add("#", "wall")  # ta sama wartość - OK
        >>> builder.add("#", "floor")
        Traceback (most recent call last):
        ...
        tilegrid.errors.LegendConflict: Legend token '#' already maps to 'wall', ...
    """

    def __init__(self):
        self._entries: Dict[str, P] = {}

    def add(self, token: str, payload: P) -> "LegendBuilder[P]":
        """
        Rejestruje token.

        Returns:
            self - pozwala łączyć wywołania

        Raises:
            ValueError: Nieprawidłowy token
            LegendConflict: Token już ma inną wartość
        """
        _check_token(token)
        if token in self._entries:
            existing = self._entries[token]
            if existing != payload:
                raise LegendConflict(token, existing, payload)
            return self
        self._entries[token] = payload
        return self

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def build(self) -> Legend[P]:
        """Zamraża aktualny stan do niemutowalnej Legend (builder można dalej używać)."""
        return Legend(self._entries)
