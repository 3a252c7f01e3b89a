r"""Teams and the per-side faint/switch state machine.

    Active -> Fainted -> AwaitingSwitch -> Active (next member)
                      \-> Defeated (no healthy teammate; terminal)
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pokebattle.core.errors import InvalidSwitchError, ValidationError
from .models import Combatant

TEAM_SIZE = 3


class SideState(str, Enum):
    ACTIVE = "active"
    FAINTED = "fainted"
    AWAITING_SWITCH = "awaiting_switch"
    DEFEATED = "defeated"


class BattleOutcome(str, Enum):
    ONGOING = "ongoing"
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class Team:
    members: Tuple[Combatant, ...]
    active_index: int = 0

    def __post_init__(self):
        if len(self.members) > TEAM_SIZE:
            raise ValidationError(f"A team holds at most {TEAM_SIZE} members, got {len(self.members)}")
        if self.members and not 0 <= self.active_index < len(self.members):
            raise ValidationError(f"Active index {self.active_index} out of range")

    @classmethod
    def of(cls, members: List[Combatant]) -> "Team":
        return cls(tuple(members))

    def active(self) -> Optional[Combatant]:
        if not self.members:
            return None
        return self.members[self.active_index]

    def healthy_bench(self) -> List[int]:
        return [i for i, m in enumerate(self.members) if i != self.active_index and not m.is_fainted]

    def has_available(self) -> bool:
        return any(not m.is_fainted for m in self.members)

    def side_state(self) -> SideState:
        current = self.active()
        if current is not None and not current.is_fainted:
            return SideState.ACTIVE
        if self.healthy_bench():
            return SideState.AWAITING_SWITCH
        return SideState.DEFEATED

    def with_member(self, index: int, combatant: Combatant) -> "Team":
        members = list(self.members)
        members[index] = combatant
        return Team(tuple(members), self.active_index)

    def with_active(self, combatant: Combatant) -> "Team":
        return self.with_member(self.active_index, combatant)

    def switch_to(self, index: int) -> "Team":
        if not 0 <= index < len(self.members):
            raise InvalidSwitchError(index, "no such team member")
        if index == self.active_index:
            raise InvalidSwitchError(index, "already in battle")
        if self.members[index].is_fainted:
            raise InvalidSwitchError(index, "member has fainted")
        outgoing = self.members[self.active_index].reset_stages()
        return Team(self.with_member(self.active_index, outgoing).members, index)

    def send_out_next(self) -> "Team":
        """Replace a fainted active member with the first healthy teammate."""
        bench = self.healthy_bench()
        if not bench:
            return self
        return Team(self.members, bench[0])

    def restored(self) -> "Team":
        return Team(tuple(m.restored() for m in self.members), 0)


def resolve_outcome(player: Team, enemy: Team) -> BattleOutcome:
    if not player.has_available():
        return BattleOutcome.LOSS
    if not enemy.has_available():
        return BattleOutcome.WIN
    return BattleOutcome.ONGOING

__all__ = ["TEAM_SIZE", "SideState", "BattleOutcome", "Team", "resolve_outcome"]
