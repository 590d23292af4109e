"""
FOV module - pole widzenia na siatce hexagonalnej.

Zawiera:
- hex_fov: Leniwy shadow-casting w 6 sektorach
- FovValue / FovCell: Kontrakt i gotowa wartość pola
- opacity_lookup: Adapter dowolnego źródła wartości
- visible_positions, has_line_of_sight: Pomocnicze zapytania
"""

from .hex_fov import (
    FovValue,
    FovCell,
    hex_fov,
    opacity_lookup,
    visible_positions,
    has_line_of_sight,
)

__all__ = [
    "FovValue", "FovCell", "hex_fov", "opacity_lookup",
    "visible_positions", "has_line_of_sight",
]
