"""
Roll reducer tests: a rolled pool applied to a roller's sheet snapshot.
"""

from backend.engine.events import MARK_CLEARED, ROLL_RESOLVED, SPARK_SPENT
from backend.engine.pools import PoolRequest
from backend.engine.reducer import apply_roll
from backend.engine.state import MESSY, RollerSheet


def create_sheet(**overrides) -> RollerSheet:
    """Helper to create a roller sheet snapshot for testing."""
    data = {
        "name": "Ryn",
        "stats": {"bra": 2, "agi": 1, "wis": 3, "pre": 0},
        "marked": {"bra": True, "agi": False},
        "spark_steps": [True, True],
    }
    data.update(overrides)
    return RollerSheet(**data)


def test_roll_spends_spark_and_clears_mark():
    sheet = create_sheet()
    request = PoolRequest(roller="Ryn", stat="bra", stat_dice=2, assists={"Tam": 1}, spark_used=1)

    new_sheet, outcome, events = apply_roll(sheet, request, [6, 5, 2], [4])

    assert outcome.grade == MESSY
    assert [e.type for e in events] == [ROLL_RESOLVED, SPARK_SPENT, MARK_CLEARED]
    assert events[0].payload["grade"] == MESSY
    assert events[0].payload["action_dice"] == 3
    assert events[0].payload["danger_dice"] == 1
    assert events[1].payload["new_steps"] == [True, False]
    assert new_sheet.spark_steps == [True, False]
    assert new_sheet.marked["bra"] is False

    # Assist grouping is carried through to the outcome
    assert [d.index for d in outcome.assists["Tam"]] == [2]


def test_roll_without_costs_only_resolves():
    sheet = create_sheet()
    request = PoolRequest(roller="Ryn", stat="agi", stat_dice=1)

    new_sheet, outcome, events = apply_roll(sheet, request, [3], [])

    assert [e.type for e in events] == [ROLL_RESOLVED]
    assert new_sheet.to_dict() == sheet.to_dict()


def test_original_sheet_is_not_modified():
    sheet = create_sheet()
    request = PoolRequest(roller="Ryn", stat="bra", stat_dice=2, spark_used=2)

    new_sheet, _, _ = apply_roll(sheet, request, [1, 1], [])

    assert sheet.spark_steps == [True, True]
    assert sheet.marked["bra"] is True
    assert new_sheet.spark_steps == [False, False]
