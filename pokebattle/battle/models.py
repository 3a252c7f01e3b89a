"""Battle data model: moves, stats, stat stages and combatant snapshots.

Every type here is an immutable snapshot. Mechanics take a snapshot and
return a new one via :func:`dataclasses.replace`; callers keep whatever
state they want to persist.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from pokebattle.core.errors import ValidationError

MIN_STAGE = -6
MAX_STAGE = 6
MAX_MOVES = 4


class Status(str, Enum):
    NONE = "none"
    BURN = "burn"
    PARALYZE = "paralyze"
    SLEEP = "sleep"
    POISON = "poison"
    FREEZE = "freeze"


class MoveCategory(str, Enum):
    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


# PokeAPI ailment names -> battle status; anything else (confusion, trap...) is ignored
AILMENT_STATUS = {
    "burn": Status.BURN,
    "paralysis": Status.PARALYZE,
    "sleep": Status.SLEEP,
    "poison": Status.POISON,
    "freeze": Status.FREEZE,
}


def status_from_ailment(name: Optional[str]) -> Status:
    return AILMENT_STATUS.get(str(name or "").lower(), Status.NONE)


@dataclass(frozen=True)
class StatChange:
    """One stat-stage shift a move causes. ``chance`` 0 means always."""
    stat: str
    change: int
    chance: int = 0
    on_self: bool = False


@dataclass(frozen=True)
class Move:
    name: str
    type: str
    category: MoveCategory
    power: int = 0
    accuracy: int = 100
    ailment: Status = Status.NONE
    ailment_chance: int = 0
    stat_changes: Tuple[StatChange, ...] = ()

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()


@dataclass(frozen=True)
class Stats:
    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int


STAGE_STATS = ("attack", "defense", "special_attack", "special_defense", "speed")


def clamp_stage(stage: int) -> int:
    return max(MIN_STAGE, min(MAX_STAGE, int(stage)))


@dataclass(frozen=True)
class StatStages:
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    def get(self, stat: str) -> int:
        if stat not in STAGE_STATS:
            raise ValidationError(f"Unknown stat stage: {stat}")
        return getattr(self, stat)

    def shifted(self, stat: str, delta: int) -> "StatStages":
        return replace(self, **{stat: clamp_stage(self.get(stat) + delta)})


@dataclass(frozen=True)
class Combatant:
    species_id: int
    name: str
    types: Tuple[str, ...]
    level: int
    stats: Stats
    sprite: str = ""
    moves: Tuple[Move, ...] = ()
    current_hp: Optional[int] = None  # None => full health
    status: Status = Status.NONE
    sleep_turns: int = 0
    stages: StatStages = field(default_factory=StatStages)

    def __post_init__(self):
        if not 1 <= len(self.types) <= 2:
            raise ValidationError(f"{self.name} must have one or two types, got {self.types!r}")
        if len(self.moves) > MAX_MOVES:
            raise ValidationError(f"{self.name} knows {len(self.moves)} moves (max {MAX_MOVES})")
        hp = self.stats.hp if self.current_hp is None else max(0, min(self.current_hp, self.stats.hp))
        object.__setattr__(self, "current_hp", hp)

    @property
    def hp(self) -> int:
        return int(self.current_hp or 0)

    @property
    def max_hp(self) -> int:
        return self.stats.hp

    @property
    def is_fainted(self) -> bool:
        return self.hp <= 0

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()

    def has_type(self, type_name: str) -> bool:
        return type_name.lower() in self.types

    def with_hp(self, hp: int) -> "Combatant":
        return replace(self, current_hp=max(0, min(int(hp), self.max_hp)))

    def with_status(self, status: Status, sleep_turns: int = 0) -> "Combatant":
        return replace(self, status=status, sleep_turns=sleep_turns)

    def reset_stages(self) -> "Combatant":
        return replace(self, stages=StatStages())

    def restored(self) -> "Combatant":
        """Full heal used when a side is reset between battles."""
        return replace(self, current_hp=self.max_hp, status=Status.NONE,
                       sleep_turns=0, stages=StatStages())

__all__ = [
    "Status", "MoveCategory", "StatChange", "AILMENT_STATUS", "status_from_ailment", "Move", "Stats", "StatStages", "Combatant",
    "STAGE_STATS", "MIN_STAGE", "MAX_STAGE", "MAX_MOVES", "clamp_stage",
]
