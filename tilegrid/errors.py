"""
Wyjątki biblioteki tilegrid.

Wszystkie dziedziczą po ValueError - to są błędy danych wejściowych
(tekstu mapy, legendy), które wywołujący może złapać i obsłużyć.

Brak ścieżki w A* NIE jest wyjątkiem - to zwykły wynik None.
"""

from __future__ import annotations
from typing import Any, Iterable, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .core.hex_coord import HexCoord


class LegendConflict(ValueError):
    """
    Token legendy zarejestrowany ponownie z inną wartością.

    Attributes:
        token (str): Token którego dotyczy konflikt
        existing (Any): Wartość już zarejestrowana
        payload (Any): Nowa, różna wartość
    """

    def __init__(self, token: str, existing: Any, payload: Any):
        self.token = token
        self.existing = existing
        self.payload = payload
        super().__init__(
            f"Legend token {token!r} already maps to {existing!r}, "
            f"cannot remap it to {payload!r}"
        )


class ParseError(ValueError):
    """
    Znak w tekście prefaba, którego nie ma w legendzie.

    Attributes:
        row (int): Numer wiersza tekstu (od 0)
        column (int): Numer kolumny tekstu (od 0)
        char (str): Nieznany znak
    """

    def __init__(self, row: int, column: int, char: str, line: str = ""):
        self.row = row
        self.column = column
        self.char = char
        message = f"Unknown legend token {char!r} at row {row}, column {column}"
        if line:
            message += f"\n  Row {row}: \"{line}\"\n  {' ' * (column + len(str(row)) + 7)}^"
        super().__init__(message)


class PrefabConflict(ValueError):
    """
    Łączenie prefabów, które zajmują te same pozycje (polityka REJECT).

    Attributes:
        positions (Tuple[HexCoord, ...]): Pozycje zajęte w obu prefabach
    """

    def __init__(self, positions: Iterable["HexCoord"]):
        self.positions: Tuple["HexCoord", ...] = tuple(positions)
        preview = ", ".join(str(p) for p in self.positions[:5])
        if len(self.positions) > 5:
            preview += ", ..."
        super().__init__(
            f"Prefabs overlap at {len(self.positions)} position(s): {preview}"
        )
