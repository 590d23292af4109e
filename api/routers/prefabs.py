"""
Prefabs router - prefaby i legendy z data/prefabs.yaml.
"""

from fastapi import APIRouter, HTTPException
from typing import List, Dict, Any
from pathlib import Path

from tilegrid.core.config_loader import ConfigLoader


router = APIRouter()

# Initialize config loader
DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


@router.get("/prefabs")
async def get_prefabs() -> List[Dict[str, Any]]:
    """
    Zwraca listę wszystkich prefabów.

    Returns:
        Lista prefabów z nazwą legendy i liczbą pól.
    """
    result = []
    for prefab_id in _loader.get_prefab_ids():
        definition = _loader.load_prefab_definition(prefab_id)
        prefab = _loader.load_prefab(prefab_id)
        result.append({
            "id": prefab_id,
            "legend": definition["legend"],
            "cells": len(prefab),
        })
    return sorted(result, key=lambda x: x["id"])


@router.get("/prefabs/{prefab_id}")
async def get_prefab(prefab_id: str) -> Dict[str, Any]:
    """
    Zwraca szczegóły prefaba: wiersze tekstu i wszystkie pola.
    """
    try:
        definition = _loader.load_prefab_definition(prefab_id)
        legend = _loader.load_legend(definition["legend"])
        prefab = _loader.load_prefab(prefab_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Prefab '{prefab_id}' not found")

    cells = [
        {"pos": [pos.q, pos.r], "token": legend.token_for(payload), "payload": payload}
        for pos, payload in prefab
    ]
    cells.sort(key=lambda c: (c["pos"][1], c["pos"][0]))

    # Z nakładkami wiersze definicji nie opisują wyniku - renderuj prefab
    if definition.get("overlays"):
        rows = prefab.to_rows(legend, empty=definition.get("empty_token", " "))
    else:
        rows = definition.get("rows", [])

    return {
        "id": prefab_id,
        "legend": definition["legend"],
        "rows": rows,
        "cells": cells,
    }
