import pytest
from pokebattle.battle.models import Move, MoveCategory, StatChange, Status
from pokebattle.battle.mechanics import (
    apply_damage, apply_status, check_can_act, process_turn_end_status, resolve_move,
)


def test_apply_damage_floors_at_zero(make_combatant):
    mon = make_combatant(hp=100)
    assert apply_damage(mon, 30).hp == 70
    assert apply_damage(mon, 500).hp == 0
    assert apply_damage(mon, 500).is_fainted


def test_apply_damage_ignores_fainted_and_nonpositive(make_combatant):
    fainted = make_combatant(current_hp=0)
    assert apply_damage(fainted, 10) is fainted
    mon = make_combatant()
    assert apply_damage(mon, 0) is mon
    assert apply_damage(mon, -5) is mon


def test_status_does_not_stack(make_combatant, fixed_rng):
    burned = make_combatant(status=Status.BURN)
    assert apply_status(burned, Status.POISON, fixed_rng()).status == Status.BURN
    assert apply_status(make_combatant(), Status.POISON, fixed_rng()).status == Status.POISON


def test_sleep_rolls_counter(make_combatant, fixed_rng):
    asleep = apply_status(make_combatant(), Status.SLEEP, fixed_rng(randint=3))
    assert asleep.status == Status.SLEEP
    assert asleep.sleep_turns == 3


def test_healthy_combatant_acts(make_combatant, fixed_rng):
    check = check_can_act(make_combatant(), fixed_rng(roll=0.0))
    assert check.can_act
    assert check.messages == ()


def test_fainted_combatant_cannot_act(make_combatant, fixed_rng):
    check = check_can_act(make_combatant(current_hp=0), fixed_rng())
    assert not check.can_act


def test_freeze_holds_then_thaws(make_combatant, fixed_rng):
    frozen = make_combatant(name="lapras", status=Status.FREEZE)
    held = check_can_act(frozen, fixed_rng(roll=0.5))
    assert not held.can_act
    assert held.combatant.status == Status.FREEZE
    assert held.messages == ("Lapras is frozen solid!",)

    thawed = check_can_act(frozen, fixed_rng(roll=0.8))
    assert thawed.can_act
    assert thawed.combatant.status == Status.NONE
    assert thawed.messages == ("Lapras thawed out!",)


def test_sleep_counts_down_and_wakes(make_combatant, fixed_rng):
    mon = make_combatant(name="snorlax", status=Status.SLEEP, sleep_turns=2)
    rng = fixed_rng()
    first = check_can_act(mon, rng)
    assert not first.can_act and first.combatant.sleep_turns == 1
    second = check_can_act(first.combatant, rng)
    assert not second.can_act and second.combatant.sleep_turns == 0
    assert second.messages == ("Snorlax is fast asleep!",)
    third = check_can_act(second.combatant, rng)
    assert third.can_act
    assert third.combatant.status == Status.NONE
    assert third.messages == ("Snorlax woke up!",)


@pytest.mark.parametrize("roll,can_act", [(0.1, False), (0.24, False), (0.25, True), (0.9, True)])
def test_paralysis_gate(make_combatant, fixed_rng, roll, can_act):
    mon = make_combatant(name="jolteon", status=Status.PARALYZE)
    check = check_can_act(mon, fixed_rng(roll=roll))
    assert check.can_act is can_act
    assert check.combatant.status == Status.PARALYZE
    if not can_act:
        assert check.messages == ("Jolteon is fully paralyzed!",)


def test_turn_end_burn_and_poison(make_combatant):
    burned = process_turn_end_status(make_combatant(name="gyarados", status=Status.BURN))
    assert burned.damage_applied == 10
    assert burned.combatant.hp == 150
    assert burned.message == "Gyarados is hurt by burn!"

    poisoned = process_turn_end_status(make_combatant(name="gengar", status=Status.POISON))
    assert poisoned.damage_applied == 20
    assert poisoned.combatant.hp == 140
    assert poisoned.message == "Gengar is hurt by poison!"


def test_turn_end_ignores_other_statuses(make_combatant):
    for status in (Status.NONE, Status.SLEEP, Status.PARALYZE, Status.FREEZE):
        result = process_turn_end_status(make_combatant(status=status))
        assert result.damage_applied == 0
        assert result.combatant.hp == 160


def test_turn_end_can_faint(make_combatant):
    result = process_turn_end_status(make_combatant(status=Status.POISON, current_hp=5))
    assert result.combatant.hp == 0
    assert result.combatant.is_fainted
    fainted = process_turn_end_status(make_combatant(status=Status.BURN, current_hp=0))
    assert fainted.damage_applied == 0


def test_resolve_move_messages(make_combatant, fixed_rng):
    attacker = make_combatant(name="charizard", types=("fire", "flying"))
    defender = make_combatant(name="venusaur", types=("grass", "poison"))
    move = Move("flamethrower", "fire", MoveCategory.SPECIAL, 90)
    result = resolve_move(attacker, defender, move, fixed_rng(roll=0.99))
    assert result.messages[0] == "Charizard used Flamethrower!"
    assert "It's super effective!" in result.messages
    assert f"Dealt {result.damage} damage!" in result.messages
    assert result.defender.hp == 160 - result.damage
    assert result.defender.status == Status.NONE
    assert result.effectiveness == 2.0


def test_secondary_ailment_roll(make_combatant, fixed_rng):
    attacker = make_combatant(types=("fire",))
    defender = make_combatant(name="venusaur", types=("water",), hp=400)
    move = Move("flamethrower", "fire", MoveCategory.SPECIAL, 90)
    hit = resolve_move(attacker, defender, move, fixed_rng(roll=0.05))
    assert hit.defender.status == Status.BURN
    assert "Venusaur was burned!" in hit.messages
    miss = resolve_move(attacker, defender, move, fixed_rng(roll=0.5))
    assert miss.defender.status == Status.NONE


def test_secondary_can_be_disabled(make_combatant, fixed_rng):
    attacker = make_combatant(types=("fire",))
    defender = make_combatant(types=("water",), hp=400)
    move = Move("flamethrower", "fire", MoveCategory.SPECIAL, 90)
    result = resolve_move(attacker, defender, move, fixed_rng(roll=0.0), secondary=False)
    assert result.defender.status == Status.NONE


def test_status_move_fails_on_statused_target(make_combatant, fixed_rng):
    wave = Move("thunder-wave", "electric", MoveCategory.STATUS, 0)
    target = make_combatant(status=Status.BURN)
    result = resolve_move(make_combatant(), target, wave, fixed_rng(roll=0.0))
    assert result.defender.status == Status.BURN
    assert result.messages[-1] == "But it failed!"


def test_status_move_immunity(make_combatant, fixed_rng):
    wave = Move("thunder-wave", "electric", MoveCategory.STATUS, 0)
    ground = make_combatant(types=("ground",))
    result = resolve_move(make_combatant(), ground, wave, fixed_rng(roll=0.0))
    assert result.defender.status == Status.NONE
    assert result.messages[-1] == "It doesn't affect the target..."


def test_stage_move_lowers_target(make_combatant, fixed_rng):
    growl = Move("growl", "normal", MoveCategory.STATUS, 0)
    result = resolve_move(make_combatant(), make_combatant(name="arcanine"), growl, fixed_rng())
    assert result.defender.stages.attack == -1
    assert result.damage == 0
    assert result.messages[-1] == "Arcanine's Attack fell!"


def test_stage_move_raises_self(make_combatant, fixed_rng):
    dance = Move("swords-dance", "normal", MoveCategory.STATUS, 0)
    result = resolve_move(make_combatant(name="machamp"), make_combatant(), dance, fixed_rng())
    assert result.attacker.stages.attack == 2
    assert result.messages[-1] == "Machamp's Attack sharply rose!"


def test_inert_status_move(make_combatant, fixed_rng, splash):
    result = resolve_move(make_combatant(name="magikarp"), make_combatant(), splash, fixed_rng())
    assert result.messages == ["Magikarp used Splash!", "But nothing happened."]
    assert result.defender.hp == 160


def test_side_effect_tables():
    from pokebattle.battle.mechanics import secondary_ailment, stage_effect
    assert secondary_ailment(Move("Ember", "fire", MoveCategory.SPECIAL, 40)) == (Status.BURN, 10)
    assert secondary_ailment(Move("thunder-wave", "electric", MoveCategory.STATUS)) == (Status.PARALYZE, 100)
    assert secondary_ailment(Move("tackle", "normal", MoveCategory.PHYSICAL, 40)) is None
    assert stage_effect(Move("growl", "normal", MoveCategory.STATUS)) == (StatChange("attack", -1),)
    assert stage_effect(Move("swords-dance", "normal", MoveCategory.STATUS)) == (StatChange("attack", 2, on_self=True),)
    assert stage_effect(Move("tackle", "normal", MoveCategory.PHYSICAL, 40)) == ()
