from pokebattle.battle.typechart import TYPES, TYPE_CHART, effectiveness, matchup, describe


def test_chart_covers_eighteen_types():
    assert len(TYPES) == 18
    assert set(TYPE_CHART) == set(TYPES)
    for row in TYPE_CHART.values():
        assert set(row) <= set(TYPES)
        assert set(row.values()) <= {0.0, 0.5, 2.0}


def test_missing_entry_is_neutral():
    assert matchup("normal", "fire") == 1.0
    assert matchup("unknown", "fire") == 1.0


def test_dual_type_product():
    assert effectiveness("fire", ("grass",)) == 2.0
    assert effectiveness("grass", ("fire",)) == 0.5
    assert effectiveness("ice", ("grass", "flying")) == 4.0
    assert effectiveness("fire", ("water", "dragon")) == 0.25
    assert effectiveness("electric", ("water", "ground")) == 0.0
    assert effectiveness("dragon", ("fairy",)) == 0.0


def test_describe():
    assert describe(2.0) == "It's super effective!"
    assert describe(0.5) == "It's not very effective..."
    assert describe(0) == "It doesn't affect the target..."
    assert describe(1.0) == ""
