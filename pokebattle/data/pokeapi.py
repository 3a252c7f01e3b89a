"""Normalize raw PokeAPI v2 documents into the roster snapshot schema.

Roster schema (see ``assets/roster/species.json``):
{
  "version": 2,
  "moves": { slug: {"type": str, "category": str, "power": int, "accuracy": int,
                    "ailment": str, "ailment_chance": int,
                    "stat_changes": [{"stat": str, "change": int, "chance": int, "on_self": bool}]} },
  "species": [
    {"id": int, "name": str, "types": [str, ...], "sprite": str,
     "base_stats": {"hp", "attack", "defense", "special_attack", "special_defense", "speed"},
     "learnset": [{"name": str, "level": int}]}
  ]
}

Only level-up learn data is kept; a move's learn level is the lowest level it
is learned at across the version groups present in the dump. Moves whose
effect the resolver cannot express (see ``UNSUPPORTED_META``) are dropped.
"""
from __future__ import annotations
from typing import Any, Dict, List, Iterable

ROSTER_VERSION = 2

# Healing, OHKO and forced-switch moves have no counterpart in the resolver
UNSUPPORTED_META = {"heal", "ohko", "force-switch"}

STAT_KEY_MAP = {
    "hp": "hp", "attack": "attack", "defense": "defense",
    "special-attack": "special_attack", "special-defense": "special_defense", "speed": "speed",
}


def extract_learnset(pokemon: Dict[str, Any]) -> List[Dict[str, Any]]:
    learnset: List[Dict[str, Any]] = []
    for m in pokemon.get("moves", []):
        levels = [
            int(v["level_learned_at"])
            for v in m.get("version_group_details", [])
            if v["move_learn_method"]["name"] == "level-up"
        ]
        if levels:
            learnset.append({"name": m["move"]["name"], "level": max(1, min(levels))})
    learnset.sort(key=lambda x: (x["level"], x["name"]))
    return learnset


def normalize_pokemon(pokemon: Dict[str, Any]) -> Dict[str, Any]:
    types = [t["type"]["name"] for t in sorted(pokemon["types"], key=lambda x: x["slot"])]
    stats = {STAT_KEY_MAP[s["stat"]["name"]]: int(s["base_stat"]) for s in pokemon["stats"]}
    return {
        "id": int(pokemon["id"]),
        "name": pokemon["name"],
        "types": types,
        "sprite": (pokemon.get("sprites") or {}).get("front_default") or "",
        "base_stats": stats,
        "learnset": extract_learnset(pokemon),
    }


def _stat_changes(move: Dict[str, Any]) -> List[Dict[str, Any]]:
    meta = move.get("meta") or {}
    category = (meta.get("category") or {}).get("name")
    target = (move.get("target") or {}).get("name")
    on_self = target == "user" or category == "damage+raise"
    changes = []
    for sc in move.get("stat_changes") or []:
        stat = STAT_KEY_MAP.get(sc["stat"]["name"])
        # accuracy/evasion stages are not modelled
        if stat and stat != "hp" and sc.get("change"):
            changes.append({
                "stat": stat,
                "change": int(sc["change"]),
                "chance": int(meta.get("stat_chance") or 0),
                "on_self": on_self,
            })
    return changes


def normalize_move(move: Dict[str, Any]) -> Dict[str, Any]:
    meta = move.get("meta") or {}
    ailment = (meta.get("ailment") or {}).get("name") or "none"
    return {
        "type": move["type"]["name"],
        "category": (move.get("damage_class") or {}).get("name") or "status",
        "power": int(move.get("power") or 0),
        "accuracy": int(move.get("accuracy") or 100),
        "ailment": ailment,
        "ailment_chance": int(meta.get("ailment_chance") or 0),
        "stat_changes": _stat_changes(move),
    }


def is_supported(move: Dict[str, Any]) -> bool:
    meta_category = ((move.get("meta") or {}).get("category") or {}).get("name")
    return meta_category not in UNSUPPORTED_META


def build_roster(pokemon_docs: Iterable[Dict[str, Any]], move_docs: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Combine raw documents; learnset entries without (supported) move data are dropped."""
    moves = {m["name"]: normalize_move(m) for m in move_docs if is_supported(m)}
    species = []
    for doc in sorted(pokemon_docs, key=lambda d: int(d["id"])):
        entry = normalize_pokemon(doc)
        entry["learnset"] = [m for m in entry["learnset"] if m["name"] in moves]
        species.append(entry)
    used = {m["name"] for s in species for m in s["learnset"]}
    return {
        "version": ROSTER_VERSION,
        "source": "pokeapi.co v2 snapshot (condensed)",
        "moves": {k: moves[k] for k in sorted(used)},
        "species": species,
    }

__all__ = ["ROSTER_VERSION", "extract_learnset", "normalize_pokemon", "normalize_move", "is_supported", "build_roster"]
