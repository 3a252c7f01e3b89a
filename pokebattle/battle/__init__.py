"""
Battle package.
- models.py (Combatant, Move, Stats, StatStages, Status)
- typechart.py (type matchups)
- mechanics.py (damage, status gating, turn-end damage)
- team.py (teams, faint/switch state machine)
- ai.py (opponent move choice)
- factory.py (combatants from roster species)
- session.py (turn sequencing)
"""
from .models import Combatant, Move, MoveCategory, StatChange, Stats, StatStages, Status
from .mechanics import (
    stat_multiplier, calculate_damage, apply_status, check_can_act, process_turn_end_status,
)
from .team import Team, SideState, BattleOutcome
from .session import BattleSession
__all__ = [
    "Combatant", "Move", "MoveCategory", "StatChange", "Stats", "StatStages", "Status",
    "stat_multiplier", "calculate_damage", "apply_status", "check_can_act", "process_turn_end_status",
    "Team", "SideState", "BattleOutcome", "BattleSession",
]
