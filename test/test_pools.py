"""
Pool supplier tests: assist rows, dice totals, roll validation and spark spending.
"""

from backend.engine.definitions import load_stat_definitions
from backend.engine.pools import (
    PoolRequest,
    action_dice_total,
    build_assist_map,
    danger_dice_total,
    spark_value,
    spend_spark,
    validate_pool_request,
)


STAT_DEFS = load_stat_definitions()


def make_request(**overrides) -> PoolRequest:
    """Helper to build a valid Brawn roll, overriding any field."""
    data = {
        "roller": "Ryn",
        "stat": "bra",
        "stat_dice": 2,
        "assists": {},
        "edges": 0,
        "danger_inputs": [],
        "danger_checks": [],
        "spark_used": 0,
    }
    data.update(overrides)
    return PoolRequest(**data)


# ===== Assist rows =====

def test_assist_rows_skip_empty_and_name_blanks():
    assists = build_assist_map([("Tam", 2), (None, 1), ("Nobody", 0), ("  ", 0)])
    assert assists == {"Tam": 2, "Assist": 1}


def test_repeated_assist_name_keeps_first_position():
    assists = build_assist_map([("Tam", 1), ("Vel", 1), ("Tam", 3)])
    assert list(assists) == ["Tam", "Vel"]
    assert assists["Tam"] == 3


def test_blank_assist_uses_given_default():
    assert build_assist_map([("", 1)], default_name="Helper") == {"Helper": 1}


# ===== Totals =====

def test_action_dice_total_adds_stat_assists_and_edges():
    assert action_dice_total(2, {"Tam": 1, "Vel": 2}, edges=1) == 6
    assert action_dice_total(3) == 3


def test_danger_dice_total_counts_inputs_and_checks():
    assert danger_dice_total([1, 2], [True, False, True]) == 5
    assert danger_dice_total() == 0


def test_request_totals():
    request = make_request(assists={"Tam": 1}, edges=1, danger_inputs=[1], danger_checks=[True])
    assert request.action_dice == 4
    assert request.danger_dice == 2


# ===== Validation =====

def test_valid_request():
    result = validate_pool_request(make_request(assists={"Tam": 1}), STAT_DEFS)
    assert result.valid
    assert result.to_dict() == {"valid": True, "error": None}


def test_unknown_stat_is_rejected():
    result = validate_pool_request(make_request(stat="luck"), STAT_DEFS)
    assert not result.valid
    assert "luck" in result.error


def test_typed_total_overrides_computed_total():
    request = make_request(assists={"Tam": 1}, total_dice=5)
    assert request.action_dice == 5


def test_assists_cannot_outnumber_the_pool():
    # Total typed over in the dialog, lower than the assist dice
    request = make_request(assists={"Tam": 2, "Vel": 1}, total_dice=2)
    result = validate_pool_request(request, STAT_DEFS)
    assert not result.valid
    assert "3 dice" in result.error


def test_assists_may_fill_the_whole_pool():
    request = PoolRequest(roller="Ryn", stat="bra", stat_dice=0, assists={"Tam": 2})
    assert validate_pool_request(request, STAT_DEFS).valid


def test_negative_pool_is_rejected():
    assert not validate_pool_request(make_request(stat_dice=-1), STAT_DEFS).valid
    assert not validate_pool_request(make_request(edges=-1), STAT_DEFS).valid
    assert not validate_pool_request(make_request(total_dice=-1), STAT_DEFS).valid


def test_negative_assist_is_rejected():
    result = validate_pool_request(make_request(assists={"Tam": -1}), STAT_DEFS)
    assert not result.valid
    assert "Tam" in result.error


def test_negative_danger_is_rejected():
    result = validate_pool_request(make_request(danger_inputs=[-1]), STAT_DEFS)
    assert not result.valid


def test_spark_cannot_exceed_available():
    request = make_request(spark_used=2)
    assert not validate_pool_request(request, STAT_DEFS, spark_available=1).valid
    assert validate_pool_request(request, STAT_DEFS, spark_available=2).valid


# ===== Spark =====

def test_spark_value_counts_ticked_steps():
    assert spark_value([True, True]) == 2
    assert spark_value([True, False]) == 1
    assert spark_value([]) == 0


def test_spending_one_of_two_spark():
    assert spend_spark([True, True], 1) == [True, False]


def test_spending_the_only_spark_clears_both():
    assert spend_spark([True, False], 1) == [False, False]


def test_spending_two_spark_clears_both():
    assert spend_spark([True, True], 2) == [False, False]


def test_spending_no_spark_changes_nothing():
    steps = [True, True]
    assert spend_spark(steps, 0) == [True, True]


def test_spend_spark_does_not_mutate_steps():
    steps = [True, True]
    spend_spark(steps, 2)
    assert steps == [True, True]
