"""Damage & status resolver.

Pure functions over :mod:`pokebattle.battle.models` snapshots. Nothing here
mutates its inputs, logs or sleeps; the session layer owns sequencing.

Randomness is always drawn from the ``rng`` argument (any object exposing the
:class:`random.Random` methods ``uniform``, ``random`` and ``randint``) so
tests can pin variance and status rolls.
"""
from __future__ import annotations
from dataclasses import dataclass, replace, field
import math
import random
from typing import Dict, List, Optional, Tuple

from .models import Combatant, Move, MoveCategory, StatChange, Status
from .typechart import effectiveness, describe

STAGE_MULTIPLIERS: Dict[int, float] = {
    -6: 0.25, -5: 0.28, -4: 0.33, -3: 0.4, -2: 0.5, -1: 0.66,
    0: 1.0,
    1: 1.5, 2: 2.0, 3: 2.5, 4: 3.0, 5: 3.5, 6: 4.0,
}

STAB_BONUS = 1.5
VARIANCE_RANGE = (0.85, 1.0)
FREEZE_HOLD_CHANCE = 0.8
FULL_PARALYSIS_CHANCE = 0.25
SLEEP_TURNS = (1, 3)
BURN_DIVISOR = 16
POISON_DIVISOR = 8

# Secondary ailments for moves without PokeAPI meta: (status, percent chance)
SECONDARY_AILMENTS: Dict[str, Tuple[Status, int]] = {
    "ember": (Status.BURN, 10),
    "flamethrower": (Status.BURN, 10),
    "fire-punch": (Status.BURN, 10),
    "flame-wheel": (Status.BURN, 10),
    "fire-blast": (Status.BURN, 10),
    "will-o-wisp": (Status.BURN, 100),
    "thundershock": (Status.PARALYZE, 10),
    "thunder-shock": (Status.PARALYZE, 10),
    "thunderbolt": (Status.PARALYZE, 10),
    "thunder-punch": (Status.PARALYZE, 10),
    "body-slam": (Status.PARALYZE, 30),
    "thunder-wave": (Status.PARALYZE, 100),
    "stun-spore": (Status.PARALYZE, 100),
    "ice-beam": (Status.FREEZE, 10),
    "ice-punch": (Status.FREEZE, 10),
    "powder-snow": (Status.FREEZE, 10),
    "poison-sting": (Status.POISON, 30),
    "sludge-bomb": (Status.POISON, 30),
    "poison-powder": (Status.POISON, 100),
    "toxic": (Status.POISON, 100),
    "sleep-powder": (Status.SLEEP, 100),
    "hypnosis": (Status.SLEEP, 100),
    "sing": (Status.SLEEP, 100),
    "spore": (Status.SLEEP, 100),
}

def _lower(stat: str, n: int = 1) -> Tuple[StatChange, ...]:
    return (StatChange(stat, -n),)


def _raise(*stats: str, n: int = 1) -> Tuple[StatChange, ...]:
    return tuple(StatChange(s, n, on_self=True) for s in stats)


# Stat-stage moves without PokeAPI stat_changes (hand-built moves)
STAGE_EFFECTS: Dict[str, Tuple[StatChange, ...]] = {
    "growl": _lower("attack"),
    "leer": _lower("defense"),
    "tail-whip": _lower("defense"),
    "screech": _lower("defense", 2),
    "string-shot": _lower("speed"),
    "scary-face": _lower("speed", 2),
    "fake-tears": _lower("special_defense", 2),
    "swords-dance": _raise("attack", n=2),
    "howl": _raise("attack"),
    "harden": _raise("defense"),
    "withdraw": _raise("defense"),
    "iron-defense": _raise("defense", n=2),
    "agility": _raise("speed", n=2),
    "nasty-plot": _raise("special_attack", n=2),
    "amnesia": _raise("special_defense", n=2),
    "bulk-up": _raise("attack", "defense"),
    "calm-mind": _raise("special_attack", "special_defense"),
    "cosmic-power": _raise("defense", "special_defense"),
}

STATUS_MESSAGES = {
    Status.BURN: "was burned!",
    Status.PARALYZE: "was paralyzed!",
    Status.SLEEP: "fell asleep!",
    Status.POISON: "was poisoned!",
    Status.FREEZE: "was frozen solid!",
}

_STAT_LABELS = {
    "attack": "Attack", "defense": "Defense", "special_attack": "Sp. Atk",
    "special_defense": "Sp. Def", "speed": "Speed",
}


@dataclass(frozen=True)
class ActionCheck:
    combatant: Combatant
    can_act: bool
    messages: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TurnEndResult:
    combatant: Combatant
    damage_applied: int
    message: str = ""


@dataclass(frozen=True)
class MoveOutcome:
    attacker: Combatant
    defender: Combatant
    damage: int
    effectiveness: float
    messages: List[str] = field(default_factory=list)


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()

# ---------------------------------------------------------------------------
# Stage helpers
# ---------------------------------------------------------------------------

def stat_multiplier(stage: int) -> float:
    return STAGE_MULTIPLIERS.get(stage, 1.0)


def apply_stage_change(target: Combatant, stat: str, delta: int) -> Combatant:
    return replace(target, stages=target.stages.shifted(stat, delta))

# ---------------------------------------------------------------------------
# Damage
# ---------------------------------------------------------------------------

def calculate_damage(attacker: Combatant, defender: Combatant, move: Move,
                     rng: Optional[random.Random] = None) -> int:
    if move.power == 0:
        return 0
    if move.category == MoveCategory.PHYSICAL:
        atk = attacker.stats.attack * stat_multiplier(attacker.stages.attack)
        dfn = defender.stats.defense * stat_multiplier(defender.stages.defense)
    else:
        atk = attacker.stats.special_attack * stat_multiplier(attacker.stages.special_attack)
        dfn = defender.stats.special_defense * stat_multiplier(defender.stages.special_defense)
    atk_val = math.floor(atk)
    def_val = max(1, math.floor(dfn))

    if attacker.status == Status.BURN and move.category == MoveCategory.PHYSICAL:
        atk_val = atk_val // 2

    damage = float(math.floor((((2 * attacker.level / 5 + 2) * move.power * atk_val / def_val) / 50) + 2))

    if attacker.has_type(move.type):
        damage *= STAB_BONUS

    eff = effectiveness(move.type, defender.types)
    if eff == 0:
        return 0
    damage *= eff

    damage *= _rng(rng).uniform(*VARIANCE_RANGE)
    return max(0, math.floor(damage))


def apply_damage(target: Combatant, amount: int) -> Combatant:
    if target.is_fainted or amount <= 0:
        return target
    return target.with_hp(target.hp - amount)

# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

def apply_status(target: Combatant, status: Status, rng: Optional[random.Random] = None) -> Combatant:
    if target.status != Status.NONE or status == Status.NONE:
        return target
    sleep_turns = _rng(rng).randint(*SLEEP_TURNS) if status == Status.SLEEP else 0
    return target.with_status(status, sleep_turns)


def check_can_act(combatant: Combatant, rng: Optional[random.Random] = None) -> ActionCheck:
    """Turn-start gate: freeze, then sleep, then paralysis."""
    if combatant.is_fainted:
        return ActionCheck(combatant, False)
    name = combatant.display_name
    if combatant.status == Status.FREEZE:
        if _rng(rng).random() < FREEZE_HOLD_CHANCE:
            return ActionCheck(combatant, False, (f"{name} is frozen solid!",))
        return ActionCheck(combatant.with_status(Status.NONE), True, (f"{name} thawed out!",))
    if combatant.status == Status.SLEEP:
        if combatant.sleep_turns > 0:
            return ActionCheck(replace(combatant, sleep_turns=combatant.sleep_turns - 1), False,
                               (f"{name} is fast asleep!",))
        return ActionCheck(combatant.with_status(Status.NONE), True, (f"{name} woke up!",))
    if combatant.status == Status.PARALYZE:
        if _rng(rng).random() < FULL_PARALYSIS_CHANCE:
            return ActionCheck(combatant, False, (f"{name} is fully paralyzed!",))
    return ActionCheck(combatant, True)


def process_turn_end_status(combatant: Combatant) -> TurnEndResult:
    if combatant.is_fainted:
        return TurnEndResult(combatant, 0)
    if combatant.status == Status.BURN:
        damage = combatant.max_hp // BURN_DIVISOR
        message = f"{combatant.display_name} is hurt by burn!"
    elif combatant.status == Status.POISON:
        damage = combatant.max_hp // POISON_DIVISOR
        message = f"{combatant.display_name} is hurt by poison!"
    else:
        return TurnEndResult(combatant, 0)
    return TurnEndResult(combatant.with_hp(combatant.hp - damage), damage, message)

# ---------------------------------------------------------------------------
# Full move resolution
# ---------------------------------------------------------------------------

def secondary_ailment(move: Move) -> Optional[Tuple[Status, int]]:
    """Status the move may inflict and its percent chance, if any."""
    if move.ailment != Status.NONE:
        # PokeAPI reports 0 for guaranteed status moves
        chance = move.ailment_chance or (100 if move.category == MoveCategory.STATUS else 0)
        return (move.ailment, chance) if chance else None
    return SECONDARY_AILMENTS.get(move.name.lower())


def stage_effect(move: Move) -> Tuple[StatChange, ...]:
    return move.stat_changes or STAGE_EFFECTS.get(move.name.lower(), ())


def _stage_message(target: Combatant, stat: str, delta: int) -> str:
    adverb = " sharply" if abs(delta) >= 2 else ""
    direction = "rose" if delta > 0 else "fell"
    return f"{target.display_name}'s {_STAT_LABELS.get(stat, stat)}{adverb} {direction}!"


def _stage_roll(changes: Tuple[StatChange, ...], rng: random.Random, secondary: bool) -> bool:
    # One roll per move; a chance of 0 or 100 always applies
    chance = changes[0].chance
    if chance <= 0 or chance >= 100:
        return True
    return secondary and rng.random() * 100 < chance


def resolve_move(attacker: Combatant, defender: Combatant, move: Move,
                 rng: Optional[random.Random] = None, *, secondary: bool = True) -> MoveOutcome:
    """Execute ``move`` after the attacker passed its turn-start gate.

    Applies damage, stat-stage effects and (when ``secondary``) the move's
    chance-based side effects. Does not handle fainting.
    """
    rng = _rng(rng)
    messages: List[str] = [f"{attacker.display_name} used {move.display_name}!"]
    if defender.is_fainted:
        messages.append("But there was no target...")
        return MoveOutcome(attacker, defender, 0, 1.0, messages)

    eff = effectiveness(move.type, defender.types)
    damage = calculate_damage(attacker, defender, move, rng)
    if move.power > 0:
        defender = apply_damage(defender, damage)
        note = describe(eff)
        if note:
            messages.append(note)
        if damage > 0:
            messages.append(f"Dealt {damage} damage!")

    changes = stage_effect(move)
    if changes and _stage_roll(changes, rng, secondary):
        for sc in changes:
            if sc.on_self:
                attacker = apply_stage_change(attacker, sc.stat, sc.change)
                messages.append(_stage_message(attacker, sc.stat, sc.change))
            elif not defender.is_fainted:
                defender = apply_stage_change(defender, sc.stat, sc.change)
                messages.append(_stage_message(defender, sc.stat, sc.change))

    ailment = secondary_ailment(move)
    if ailment is None:
        if move.category == MoveCategory.STATUS and not changes:
            messages.append("But nothing happened.")
    elif secondary and not defender.is_fainted:
        status, chance = ailment
        if eff == 0:
            if move.category == MoveCategory.STATUS:
                messages.append(describe(eff))
        elif defender.status == Status.NONE and rng.random() * 100 < chance:
            defender = apply_status(defender, status, rng)
            messages.append(f"{defender.display_name} {STATUS_MESSAGES[status]}")
        elif move.category == MoveCategory.STATUS:
            messages.append("But it failed!")
    return MoveOutcome(attacker, defender, damage, eff, messages)

__all__ = [
    "STAGE_MULTIPLIERS", "SECONDARY_AILMENTS", "STAGE_EFFECTS",
    "ActionCheck", "TurnEndResult", "MoveOutcome",
    "stat_multiplier", "apply_stage_change", "secondary_ailment", "stage_effect", "calculate_damage", "apply_damage",
    "apply_status", "check_can_act", "process_turn_end_status", "resolve_move",
]
