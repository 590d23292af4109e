"""
Odczyt data/*.yaml: ustawienia biblioteki, legendy i prefaby.

Pliki:
- defaults.yaml: wartości domyślne w sekcjach fov, search, prefab
- prefabs.yaml: nazwane legendy (token -> payload) i prefaby (wiersze tekstu)

Definicja prefaba podaje tylko to, co różni ją od sekcji `prefab`
z defaults.yaml. Reszta jest dokładana przy wczytaniu, a zagnieżdżone
słowniki łączone są klucz po kluczu:

    defaults.yaml                 prefabs.yaml
    ─────────────────────         ─────────────────────────────
    prefab:                       prefabs:
      empty_token: " "              room:
      merge_policy: reject            legend: dungeon
                                      empty_token: "_"
                                      rows: ["#####", "#___#"]

    load_prefab_definition("room") ->
        {empty_token: "_", merge_policy: reject, legend: dungeon,
         rows: [...], id: room}

Nakładki:
    Prefab może wymienić `overlays` - inne prefaby łączone na jego
    wiersze przez Prefab.merge z polityką `merge_policy`.

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> room = loader.load_prefab("room")
    >>> loader.get_fov_config()["default_radius"]
    8

Algorytmy nigdy nie sięgają do plików. Robi to tylko ten loader,
gdy poprosi o to CLI albo API.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import copy
import logging

import yaml

from ..prefab.legend import Legend
from ..prefab.prefab import Prefab
from .hex_coord import HexCoord

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Wczytuje pliki z folderu danych i pamięta je do reload().

    Attributes:
        data_path (Path): Ścieżka do folderu z danymi
        _defaults (Dict): defaults.yaml po pierwszym odczycie
        _prefab_file (Dict): prefabs.yaml po pierwszym odczycie
    """

    def __init__(self, data_path: str = "data/"):
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._prefab_file: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """Pusty plik daje {}. Brak pliku: FileNotFoundError."""
        path = self.data_path / filename
        logger.debug("Loading %s", path)
        with path.open(encoding="utf-8") as stream:
            return yaml.safe_load(stream) or {}

    def get_defaults(self) -> Dict:
        """Cały defaults.yaml."""
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_fov_config(self) -> Dict:
        """Sekcja `fov` (np. default_radius)."""
        return self.get_defaults().get("fov", {})

    def get_search_config(self) -> Dict:
        """Sekcja `search` (np. max_iterations, max_range)."""
        return self.get_defaults().get("search", {})

    def get_prefab_defaults(self) -> Dict:
        """Sekcja `prefab` (np. empty_token, merge_policy)."""
        return self.get_defaults().get("prefab", {})

    # ─────────────────────────────────────────────────────────────────────────
    # LEGENDY
    # ─────────────────────────────────────────────────────────────────────────

    def _get_prefab_file(self) -> Dict:
        if self._prefab_file is None:
            self._prefab_file = self._load_yaml("prefabs.yaml")
        return self._prefab_file

    def get_legend_ids(self) -> List[str]:
        """Zwraca listę nazw legend."""
        return list(self._get_prefab_file().get("legends", {}).keys())

    def load_legend(self, legend_id: str) -> Legend:
        """
        Wczytuje legendę.

        Klucze YAML to tokeny, wartości to dowolne payloady.
        Tokeny są walidowane przez LegendBuilder.

        Raises:
            KeyError: Jeśli legenda nie istnieje
            ValueError: Jeśli token nie jest pojedynczym znakiem
        """
        legends = self._get_prefab_file().get("legends", {})

        if legend_id not in legends:
            raise KeyError(f"Legend '{legend_id}' not found in prefabs.yaml")

        entries = {str(token): payload for token, payload in (legends[legend_id] or {}).items()}
        return Legend.from_mapping(copy.deepcopy(entries))

    # ─────────────────────────────────────────────────────────────────────────
    # PREFABY
    # ─────────────────────────────────────────────────────────────────────────

    def get_prefab_ids(self) -> List[str]:
        """Zwraca listę nazw prefabów."""
        return list(self._get_prefab_file().get("prefabs", {}).keys())

    def load_prefab_definition(self, prefab_id: str) -> Dict:
        """
        Definicja prefaba dopełniona sekcją `prefab` z defaults.yaml.

        Klucze definicji wygrywają. Wynik ma dodatkowo klucz "id".

        Raises:
            KeyError: Jeśli prefab nie istnieje
        """
        prefabs = self._get_prefab_file().get("prefabs", {})

        if prefab_id not in prefabs:
            raise KeyError(f"Prefab '{prefab_id}' not found in prefabs.yaml")

        definition = self._deep_merge(self.get_prefab_defaults(), prefabs[prefab_id] or {})
        definition["id"] = prefab_id
        return definition

    def load_prefab(self, prefab_id: str, _stack: Tuple[str, ...] = ()) -> Prefab:
        """
        Wczytuje i parsuje prefab razem z nakładkami.

        Nakładki (`overlays`) to inne prefaby łączone po kolei na wynik
        wierszy, z przesunięciem axial `offset: [q, r]`. Konflikty
        rozstrzyga `policy` nakładki, a bez niej `merge_policy`
        definicji (domyślnie z defaults.yaml).

        Raises:
            KeyError: Jeśli prefab lub jego legenda nie istnieje
            ParseError: Jeśli tekst zawiera znak spoza legendy
            PrefabConflict: Nakładka zajmuje zajęte pola przy polityce reject
            ValueError: Nakładki tworzą cykl
        """
        if prefab_id in _stack:
            chain = " -> ".join(_stack + (prefab_id,))
            raise ValueError(f"Prefab overlays form a cycle: {chain}")

        definition = self.load_prefab_definition(prefab_id)
        legend = self.load_legend(definition["legend"])
        rows = definition.get("rows") or []
        prefab = Prefab.parse(rows, legend, empty=definition.get("empty_token", " "))

        default_policy = definition.get("merge_policy", "reject")
        for overlay in definition.get("overlays") or []:
            stamp = self.load_prefab(overlay["prefab"], _stack + (prefab_id,))
            q, r = overlay.get("offset", (0, 0))
            policy = overlay.get("policy", default_policy)
            logger.debug("Overlay %s on %s at (%d, %d), %s", overlay["prefab"], prefab_id, q, r, policy)
            prefab = prefab.merge(stamp, policy, offset=HexCoord(q, r))

        return prefab

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Kopia base z nałożonym override.

        Gdy po obu stronach klucz wskazuje słownik, schodzi głębiej;
        w pozostałych przypadkach wartość z override zastępuje starą.
        """
        merged = copy.deepcopy(base)
        for key, value in override.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = ConfigLoader._deep_merge(current, value)
            else:
                merged[key] = copy.deepcopy(value)
        return merged

    def reload(self) -> None:
        """Zapomina wczytane pliki - następny odczyt pójdzie z dysku."""
        self._defaults = None
        self._prefab_file = None
