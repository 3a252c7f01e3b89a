"""Opponent move choice: uniform random over the known moves."""
from __future__ import annotations
import random
from .models import Combatant, Move, MoveCategory

STRUGGLE = Move(name="struggle", type="normal", category=MoveCategory.PHYSICAL, power=50)


def choose_move(combatant: Combatant, rng: random.Random) -> Move:
    if not combatant.moves:
        return STRUGGLE
    return rng.choice(combatant.moves)
