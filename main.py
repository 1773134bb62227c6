"""
Main entry point for the Grimwild Action dice engine.
Demonstrates core functionality with the worked rule examples and one random roll.
"""

from backend.engine.definitions import load_stat_definitions
from backend.engine.pools import PoolRequest, build_assist_map, validate_pool_request
from backend.engine.reducer import apply_roll
from backend.engine.resolution import resolve
from backend.engine.state import RollerSheet
from backend.engine.utils import print_outcome, roll_pools


# (label, action faces, danger faces)
EXAMPLES = [
    ("Two sixes, no killers", [6, 6, 2], [1, 2]),
    ("Every action die cut", [6, 3], [5, 4]),
    ("One killer takes the six", [6, 5, 2], [4]),
    ("No action dice at all", [], [6, 6]),
    ("Three fours", [4, 4, 4], []),
]


def main():
    print("Grimwild Action Dice Engine")
    print("=" * 60)

    for label, action, danger in EXAMPLES:
        outcome = resolve(action, danger)
        print_outcome(outcome, label)

    # Full roll: Brawn with two helpers and one danger die
    stat_defs = load_stat_definitions()
    sheet = RollerSheet(
        name="Ryn",
        stats={"bra": 2, "agi": 1, "wis": 3, "pre": 0},
        marked={"bra": True},
        spark_steps=[True, True],
    )
    request = PoolRequest(
        roller=sheet.name,
        stat="bra",
        stat_dice=sheet.stats["bra"],
        assists=build_assist_map([("Tam", 1), ("", 1), ("Nobody", 0)]),
        danger_inputs=[1],
        spark_used=1,
    )
    validation = validate_pool_request(request, stat_defs, spark_available=sheet.spark)
    if not validation.valid:
        print(f"Invalid roll: {validation.error}")
        return

    dice_rolls = roll_pools(request, seed=42)
    new_sheet, outcome, events = apply_roll(sheet, request, dice_rolls["action"], dice_rolls["danger"])
    print_outcome(outcome, sheet.name, stat_defs["bra"].display_name)

    print("Events:")
    for event in events:
        print(f"  - {event.type}: {event.payload}")
    print(f"Sheet after roll: {new_sheet.to_dict()}")


if __name__ == "__main__":
    main()
