import pytest
from pokebattle.battle.factory import move_from_data, combatant_from_species
from pokebattle.battle.mechanics import resolve_move, secondary_ailment, stage_effect
from pokebattle.battle.models import MoveCategory, StatChange, StatStages, Status
from pokebattle.data.loader import load_roster, find_species, move_data


@pytest.fixture(scope="module")
def roster():
    return load_roster()


def _move(roster, name):
    return move_from_data(name, move_data(roster, name))


def test_data_moves_carry_effects(roster):
    assert _move(roster, "lick").ailment == Status.PARALYZE
    assert _move(roster, "lick").ailment_chance == 30
    assert _move(roster, "calm-mind").stat_changes == (
        StatChange("special_attack", 1, 0, True),
        StatChange("special_defense", 1, 0, True),
    )
    # Confusion is not a battle status
    assert _move(roster, "psybeam").ailment == Status.NONE
    assert secondary_ailment(_move(roster, "psybeam")) is None
    assert secondary_ailment(_move(roster, "hypnosis")) == (Status.SLEEP, 100)


def test_every_roster_status_move_does_something(roster, make_combatant, fixed_rng):
    for name, md in roster["moves"].items():
        move = move_from_data(name, md)
        if move.category != MoveCategory.STATUS:
            continue
        user = make_combatant(name="user")
        target = make_combatant(name="target")
        result = resolve_move(user, target, move, fixed_rng(roll=0.0))
        if name == "splash":
            assert result.messages[-1] == "But nothing happened."
            continue
        changed = (result.attacker.stages != StatStages()
                   or result.defender.stages != StatStages()
                   or result.defender.status != Status.NONE)
        assert changed, name
        assert "But nothing happened." not in result.messages


def test_two_stat_boosts(roster, make_combatant, fixed_rng):
    alakazam = make_combatant(name="alakazam", types=("psychic",))
    result = resolve_move(alakazam, make_combatant(), _move(roster, "calm-mind"), fixed_rng())
    assert result.attacker.stages.special_attack == 1
    assert result.attacker.stages.special_defense == 1
    assert result.messages[1:] == ["Alakazam's Sp. Atk rose!", "Alakazam's Sp. Def rose!"]

    machamp = make_combatant(name="machamp", types=("fighting",))
    result = resolve_move(machamp, make_combatant(), _move(roster, "bulk-up"), fixed_rng())
    assert (result.attacker.stages.attack, result.attacker.stages.defense) == (1, 1)


@pytest.mark.parametrize("name,status", [
    ("lick", Status.PARALYZE),
    ("fire-fang", Status.BURN),
    ("ice-fang", Status.FREEZE),
    ("thunder-fang", Status.PARALYZE),
])
def test_damaging_moves_inflict_status(roster, make_combatant, fixed_rng, name, status):
    target = make_combatant(types=("water",), hp=500)
    hit = resolve_move(make_combatant(types=("water",)), target, _move(roster, name), fixed_rng(roll=0.0))
    assert hit.defender.status == status
    miss = resolve_move(make_combatant(types=("water",)), target, _move(roster, name), fixed_rng(roll=0.99))
    assert miss.defender.status == Status.NONE


def test_chance_stat_drop_and_self_drop(roster, make_combatant, fixed_rng):
    crunch = _move(roster, "crunch")
    hit = resolve_move(make_combatant(), make_combatant(hp=500), crunch, fixed_rng(roll=0.1))
    assert hit.defender.stages.defense == -1
    miss = resolve_move(make_combatant(), make_combatant(hp=500), crunch, fixed_rng(roll=0.5))
    assert miss.defender.stages.defense == 0
    # Free hits skip chance-based drops
    free = resolve_move(make_combatant(), make_combatant(hp=500), crunch, fixed_rng(roll=0.0), secondary=False)
    assert free.defender.stages.defense == 0

    close_combat = resolve_move(make_combatant(), make_combatant(hp=500), _move(roster, "close-combat"), fixed_rng())
    assert close_combat.attacker.stages.defense == -1
    assert close_combat.attacker.stages.special_defense == -1
    assert close_combat.defender.stages == StatStages()


def test_roster_species_learn_data_moves(roster):
    alakazam = combatant_from_species(find_species(roster, "alakazam"), roster, 50)
    calm_mind = next(m for m in alakazam.moves if m.name == "calm-mind")
    assert len(stage_effect(calm_mind)) == 2
    machamp = combatant_from_species(find_species(roster, "machamp"), roster, 50)
    assert [m.name for m in machamp.moves] == ["cross-chop", "bulk-up", "leer", "karate-chop"]
