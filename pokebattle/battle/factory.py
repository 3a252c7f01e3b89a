"""Factory helpers for constructing Combatant instances from roster species.

Shared across the battle session, the CLI team builder and tests.
"""
from __future__ import annotations
import random
from typing import Any, Dict, List, Optional

from pokebattle.data.loader import Roster, STAT_KEYS, eligible_species, move_data, MIN_BASE_STAT_TOTAL
from .models import (
    Combatant, Move, MoveCategory, Stats, StatChange, MAX_MOVES, STAGE_STATS, status_from_ailment,
)
from .team import Team, TEAM_SIZE

DEFAULT_LEVEL = 50
PERFECT_IV = 31
MOVE_CANDIDATES = 6

# Guaranteed damaging move by primary type when a learnset has none
FALLBACK_MOVES: Dict[str, Move] = {
    "fire": Move("flamethrower", "fire", MoveCategory.SPECIAL, 90, 100),
    "water": Move("surf", "water", MoveCategory.SPECIAL, 90, 100),
    "grass": Move("energy-ball", "grass", MoveCategory.SPECIAL, 90, 100),
    "electric": Move("thunderbolt", "electric", MoveCategory.SPECIAL, 90, 100),
}
DEFAULT_FALLBACK = Move("body-slam", "normal", MoveCategory.PHYSICAL, 85, 100)
TACKLE = Move("tackle", "normal", MoveCategory.PHYSICAL, 40, 100)


def clamp_level(level: int) -> int:
    return max(1, min(100, int(level)))


def derive_stats(base: Dict[str, int], level: int) -> Stats:
    stats = {}
    for k in STAT_KEYS:
        scaled = ((2 * int(base[k]) + PERFECT_IV) * level) // 100
        stats[k] = scaled + level + 10 if k == "hp" else scaled + 5
    return Stats(**stats)


def move_from_data(name: str, md: Dict[str, Any]) -> Move:
    return Move(
        name=name,
        type=md["type"],
        category=MoveCategory(md.get("category") or "status"),
        power=int(md.get("power") or 0),
        accuracy=int(md.get("accuracy") or 100),
        ailment=status_from_ailment(md.get("ailment")),
        ailment_chance=int(md.get("ailment_chance") or 0),
        stat_changes=tuple(
            StatChange(sc["stat"], int(sc["change"]), int(sc.get("chance") or 0), bool(sc.get("on_self")))
            for sc in md.get("stat_changes", [])
            if sc.get("stat") in STAGE_STATS and sc.get("change")
        ),
    )


def select_moves(learnset: List[Dict[str, Any]], roster: Roster, level: int, primary_type: str) -> List[Move]:
    """Newest level-up moves first; always at least one damaging move."""
    learnable = [m for m in learnset if int(m.get("level", 1)) <= level]
    learnable.sort(key=lambda m: int(m.get("level", 1)), reverse=True)
    moves: List[Move] = []
    for entry in learnable[:MOVE_CANDIDATES]:
        try:
            moves.append(move_from_data(entry["name"], move_data(roster, entry["name"])))
        except (KeyError, ValueError):
            continue
    moves = moves[:MAX_MOVES]
    if not moves:
        return [TACKLE]
    if not any(m.power > 0 for m in moves):
        fallback = FALLBACK_MOVES.get(primary_type, DEFAULT_FALLBACK)
        if len(moves) >= MAX_MOVES:
            moves[-1] = fallback
        else:
            moves.append(fallback)
    return moves


def combatant_from_species(species: Dict[str, Any], roster: Roster, level: int = DEFAULT_LEVEL) -> Combatant:
    level = clamp_level(level)
    types = tuple(t.lower() for t in species["types"])
    return Combatant(
        species_id=int(species["id"]),
        name=species["name"],
        sprite=species.get("sprite", ""),
        types=types,
        level=level,
        stats=derive_stats(species["base_stats"], level),
        moves=tuple(select_moves(species["learnset"], roster, level, types[0])),
    )


def random_team(roster: Roster, rng: Optional[random.Random] = None, *, size: int = TEAM_SIZE,
                level: int = DEFAULT_LEVEL, min_total: int = MIN_BASE_STAT_TOTAL) -> Team:
    rng = rng or random.Random()
    pool = eligible_species(roster, min_total)
    if not pool:
        return Team(())
    picks = [rng.choice(pool) for _ in range(size)]
    return Team(tuple(combatant_from_species(s, roster, level) for s in picks))

__all__ = [
    "DEFAULT_LEVEL", "FALLBACK_MOVES", "TACKLE", "clamp_level", "derive_stats",
    "move_from_data", "select_moves", "combatant_from_species", "random_team",
]
