"""
Utility functions for the dice engine.
Die rolling, formula text, and the chat card / console presentation of an Outcome.
"""

import random
from typing import Any

from backend.engine import DICE_SIDES, KILLER_THRESHOLD
from backend.engine.pools import PoolRequest
from backend.engine.state import ActionDie, Outcome


def roll_dice(count: int, sides: int = DICE_SIDES, seed: int | None = None) -> list[int]:
    """
    Roll count dice with the given number of sides.

    Args:
        count: Number of dice (negative counts roll nothing)
        sides: Faces per die
        seed: Optional random seed for reproducibility

    Returns:
        List of faces (1 to sides per die)
    """
    if seed is not None:
        random.seed(seed)
    return [random.randint(1, sides) for _ in range(max(count, 0))]


def roll_pools(request: PoolRequest, seed: int | None = None) -> dict[str, list[int]]:
    """
    Roll the action and danger pools for a pool request.

    Args:
        request: Validated pool request
        seed: Optional random seed (applies to both pools)

    Returns:
        Dict with "action" and "danger" face lists
    """
    action = roll_dice(request.action_dice, seed=seed)

    # Use a different seed for danger if seed was provided
    danger_seed = seed + 1 if seed is not None else None
    danger = roll_dice(request.danger_dice, seed=danger_seed)

    return {
        "action": action,
        "danger": danger,
    }


def format_formula(action_dice: int, danger_dice: int) -> str:
    """Dice formula as shown on the chat card, e.g. "{3d6, 1d6}"."""
    return f"{{{action_dice}d{DICE_SIDES}, {danger_dice}d{DICE_SIDES}}}"


def die_quality(value: Any) -> str:
    """Display class for an action die face."""
    total = int(value)
    if total > 5:
        return "perfect"
    elif total > 3:
        return "messy"
    return "grim"


def danger_mark(value: Any) -> str:
    """Display class for a danger die face: "cut" if it eliminates an action die."""
    return "cut" if int(value) >= KILLER_THRESHOLD else "skip"


def _die_for_chat(die: ActionDie) -> dict[str, Any]:
    return {
        "result": die.value,
        "eliminated": die.eliminated,
        "chosen": die.chosen,
        "quality": die_quality(die.value),
    }


def build_chat_data(
    outcome: Outcome,
    flavor: str | None = None,
    is_private: bool = False,
) -> dict[str, Any]:
    """
    Build the record a chat card template renders.

    Private rolls hide the formula and flavor, but keep the dice so the
    GM's copy of the card still renders.
    """
    action_count = len(outcome.all_action_dice())
    danger_count = len(outcome.danger)
    return {
        "formula": "???" if is_private else format_formula(action_count, danger_count),
        "flavor": None if is_private else flavor,
        "is_private": is_private,
        "dice": [_die_for_chat(d) for d in outcome.action],
        "assists": {
            name: [_die_for_chat(d) for d in group]
            for name, group in outcome.assists.items()
        },
        "danger": [
            {"result": d.value, "killer": d.killer, "mark": danger_mark(d.value)}
            for d in outcome.danger
        ],
        "result": outcome.grade,
        "success": outcome.success,
        "crit": outcome.crit,
        "boons": outcome.boons,
        "has_actions": outcome.has_actions,
        "action_dice_count": action_count,
        "danger_dice_count": danger_count,
    }


def _format_dice(dice) -> str:
    parts = []
    for d in dice:
        text = str(d.value)
        if d.eliminated:
            text = f"x{text}"
        elif d.chosen:
            text = f"[{text}]"
        parts.append(text)
    return " ".join(parts) if parts else "-"


def print_outcome(outcome: Outcome, roller: str, stat: str | None = None) -> None:
    """
    Pretty-print a resolved roll.

    Cut dice are prefixed with x, the chosen die is bracketed,
    killer danger dice are prefixed with !.

    Args:
        outcome: Resolved Outcome
        roller: Name of the rolling character
        stat: Optional stat label
    """
    title = f"{roller} rolls {stat}" if stat else f"{roller} rolls"
    print(f"\n{'='*60}")
    print(title)
    print(f"{'='*60}")

    print(f"Action: {_format_dice(outcome.action)}")
    for name, group in outcome.assists.items():
        print(f"  {name}: {_format_dice(group)}")

    danger_str = " ".join(
        f"!{d.value}" if d.killer else str(d.value) for d in outcome.danger
    ) or "-"
    print(f"Danger: {danger_str}")

    result = outcome.grade.upper()
    if outcome.boons:
        result += f" (+{outcome.boons} boon{'s' if outcome.boons > 1 else ''})"
    print(f"\nResult: {result}")
    if outcome.has_actions:
        print("The GM takes an action.")
    print(f"{'='*60}\n")
