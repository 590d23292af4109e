"""
Prefab module - mapy zdefiniowane tekstem.

Zawiera:
- LegendBuilder / Legend: Token -> payload
- Prefab: Rzadka mapa pozycja -> payload
- PrefabIterator: Leniwy iterator wpisów
- MergePolicy: Polityka łączenia prefabów
"""

from .legend import Legend, LegendBuilder
from .prefab import Prefab, PrefabIterator, MergePolicy, DEFAULT_EMPTY_TOKEN

__all__ = [
    "Legend", "LegendBuilder", "Prefab", "PrefabIterator", "MergePolicy",
    "DEFAULT_EMPTY_TOKEN",
]
