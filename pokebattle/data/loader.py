"""Runtime loader for the roster snapshot.

Provides cached access to the species/move JSON produced by
``scripts/build_roster.py``. The document has two tables: ``moves``
(name -> type/category/power/accuracy) and ``species`` (id, name, types,
sprite, base stats and a level-up learnset referencing move names).
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from pokebattle.core.errors import DataLoadError
from pokebattle.core.logging import logger
from pokebattle.core.paths import ROSTER_FILE

STAT_KEYS = ("hp", "attack", "defense", "special_attack", "special_defense", "speed")
MIN_BASE_STAT_TOTAL = 400

Roster = Dict[str, Any]


def _check_species(path: Path, entry: Dict[str, Any], moves: Dict[str, Any]):
    for key in ("id", "name", "types", "base_stats", "learnset"):
        if key not in entry:
            raise DataLoadError(str(path), f"species entry missing '{key}': {entry.get('name', '?')}")
    missing = [k for k in STAT_KEYS if k not in entry["base_stats"]]
    if missing:
        raise DataLoadError(str(path), f"{entry['name']} missing base stats {missing}")
    for learned in entry["learnset"]:
        if learned["name"] not in moves:
            raise DataLoadError(str(path), f"{entry['name']} learns unknown move '{learned['name']}'")


@lru_cache(maxsize=8)
def _load(path: Path) -> Roster:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise DataLoadError(str(path), "file not found") from None
    except json.JSONDecodeError as e:
        raise DataLoadError(str(path), f"invalid JSON ({e})") from e
    if not isinstance(raw, dict) or "species" not in raw or "moves" not in raw:
        raise DataLoadError(str(path), "expected top-level 'species' and 'moves'")
    for entry in raw["species"]:
        _check_species(path, entry, raw["moves"])
    logger.debug("RosterLoaded", path=str(path), species=len(raw["species"]), moves=len(raw["moves"]))
    return raw


def load_roster(path: Optional[Union[str, Path]] = None) -> Roster:
    return _load(Path(path) if path else ROSTER_FILE)


def base_stat_total(species: Dict[str, Any]) -> int:
    return sum(int(species["base_stats"][k]) for k in STAT_KEYS)


def eligible_species(roster: Roster, min_total: int = MIN_BASE_STAT_TOTAL) -> List[Dict[str, Any]]:
    return [s for s in roster["species"] if base_stat_total(s) >= min_total]


def find_species(roster: Roster, key: Union[int, str]) -> Optional[Dict[str, Any]]:
    if isinstance(key, str) and key.isdigit():
        key = int(key)
    for s in roster["species"]:
        if s["id"] == key or (isinstance(key, str) and s["name"] == key.lower()):
            return s
    return None


def move_data(roster: Roster, name: str) -> Dict[str, Any]:
    try:
        return roster["moves"][name]
    except KeyError:
        raise KeyError(f"Move not found: {name}") from None

__all__ = [
    "STAT_KEYS", "MIN_BASE_STAT_TOTAL", "load_roster", "base_stat_total",
    "eligible_species", "find_species", "move_data",
]
