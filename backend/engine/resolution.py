"""
Dice pool resolution.
Danger dice cut the highest action dice, then the best remaining action die sets the grade.
Pure and total: no randomness, no I/O, inputs are never mutated.
"""

from typing import Iterable, Mapping, Sequence

from backend.engine import KILLER_THRESHOLD
from backend.engine.state import (
    ActionDie,
    DangerDie,
    Outcome,
    DISASTER,
    GRIM,
    MESSY,
    PERFECT,
    CRIT,
)


def find_killers(danger: Sequence[int]) -> frozenset[int]:
    """Indices of danger dice showing KILLER_THRESHOLD or more."""
    return frozenset(i for i, v in enumerate(danger) if v >= KILLER_THRESHOLD)


def select_eliminated(action: Sequence[int], killer_count: int) -> frozenset[int]:
    """
    Pick the action dice cut by killer danger dice.

    One die per killer, highest faces first. sorted() is stable, so among
    equal faces the die rolled first goes first.
    """
    count = min(max(killer_count, 0), len(action))
    by_value = sorted(range(len(action)), key=lambda i: action[i], reverse=True)
    return frozenset(by_value[:count])


def highest_to_grade(highest: int, boons: int) -> str:
    """
    Map the best remaining face (and boons) to a grade.

    0 (nothing left) and 1 are both a disaster.
    """
    if highest <= 1:
        return DISASTER
    if highest <= 3:
        return GRIM
    if highest <= 5:
        return MESSY
    return CRIT if boons > 0 else PERFECT


def group_by_assists(
    dice: Sequence[ActionDie],
    assists: Mapping[str, int | None] | None,
) -> tuple[tuple[ActionDie, ...], dict[str, tuple[ActionDie, ...]]]:
    """
    Split annotated action dice into the roller's own dice and each assist's dice.

    Helpers are taken in declaration order, each one slicing its count of dice
    off the end of whatever has not been claimed yet. What is left over is the
    base group. Display only: the annotations are carried over unchanged.

    Example with dice [a, b, c, d, e] and assists {"Ana": 2, "Bo": 1}:
        Ana -> (d, e), Bo -> (c,), base -> (a, b)

    Returns:
        (base_group, {assist_name: group})
    """
    remaining = list(dice)
    groups: dict[str, tuple[ActionDie, ...]] = {}
    if not assists:
        return tuple(remaining), groups

    for name, count in assists.items():
        count = count or 0
        start = max(len(remaining) - count, 0)
        end = max(start + count, start)
        groups[name] = tuple(remaining[start:end])
        del remaining[start:end]

    return tuple(remaining), groups


def resolve(
    action: Iterable[int] | None,
    danger: Iterable[int] | None,
    assists: Mapping[str, int | None] | None = None,
) -> Outcome:
    """
    Resolve an action pool against a danger pool.

    Rules:
    - Each danger die at KILLER_THRESHOLD or above is a killer
    - Each killer cuts the highest remaining action die
    - The highest remaining face sets the grade; extra sixes are boons
    - The chosen die is the first uncut die showing the highest face

    Args:
        action: Action die faces in rolled order (None = no dice)
        danger: Danger die faces in rolled order (None = no dice)
        assists: Optional assist_name -> dice count, in declaration order.
                 Only changes how action dice are grouped for display.

    Returns:
        Outcome with grade, boons and per-die annotations
    """
    action = tuple(action or ())
    danger = tuple(danger or ())

    killers = find_killers(danger)
    eliminated = select_eliminated(action, len(killers))

    remaining = [v for i, v in enumerate(action) if i not in eliminated]
    highest = max(remaining) if remaining else 0

    # Boons: extra sixes beyond the chosen one
    boons = 0
    if highest == 6:
        boons = max(0, remaining.count(6) - 1)

    chosen_index = None
    if highest > 0:
        for i, v in enumerate(action):
            if i not in eliminated and v == highest:
                chosen_index = i
                break

    annotated = [
        ActionDie(
            index=i,
            value=v,
            eliminated=i in eliminated,
            chosen=i == chosen_index,
        )
        for i, v in enumerate(action)
    ]
    base, groups = group_by_assists(annotated, assists)

    return Outcome(
        grade=highest_to_grade(highest, boons),
        boons=boons,
        highest=highest,
        eliminated_indices=eliminated,
        chosen_index=chosen_index,
        killer_indices=killers,
        action=base,
        assists=groups,
        danger=tuple(
            DangerDie(index=i, value=v, killer=i in killers)
            for i, v in enumerate(danger)
        ),
    )
