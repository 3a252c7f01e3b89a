import pytest
from pokebattle.battle.models import Combatant, Move, MoveCategory, Stats, Status, StatStages


class FixedRng:
    """Stand-in for random.Random with pinned answers."""
    def __init__(self, *, variance=None, roll=0.99, randint=None, choice=0):
        self.variance = variance
        self.roll = roll
        self.fixed_int = randint
        self.choice_index = choice

    def uniform(self, a, b):
        return b if self.variance is None else self.variance

    def random(self):
        return self.roll

    def randint(self, a, b):
        return a if self.fixed_int is None else self.fixed_int

    def choice(self, seq):
        return seq[self.choice_index % len(seq)]


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def make_combatant():
    def _make(name="testmon", types=("normal",), level=50, hp=160, attack=100, defense=100,
              special_attack=100, special_defense=100, speed=100, moves=(), current_hp=None,
              status=Status.NONE, sleep_turns=0, stages=None):
        return Combatant(
            species_id=0,
            name=name,
            types=tuple(types),
            level=level,
            stats=Stats(hp, attack, defense, special_attack, special_defense, speed),
            moves=tuple(moves),
            current_hp=current_hp,
            status=status,
            sleep_turns=sleep_turns,
            stages=stages or StatStages(),
        )
    return _make


@pytest.fixture
def splash():
    return Move(name="splash", type="normal", category=MoveCategory.STATUS, power=0)
