"""
Roll reducer.
Applies a rolled pool to the roller's sheet snapshot, producing a new snapshot.
Returns (new_sheet, outcome, events) where events describe what happened.
"""

from copy import deepcopy

from backend.engine.state import RollerSheet, Outcome
from backend.engine.pools import PoolRequest, spend_spark
from backend.engine.resolution import resolve
from backend.engine.events import RollEvent, roll_resolved, spark_spent, mark_cleared


def apply_roll(
    sheet: RollerSheet,
    request: PoolRequest,
    action: list[int],
    danger: list[int],
) -> tuple[RollerSheet, Outcome, list[RollEvent]]:
    """
    Resolve a rolled pool and apply its costs to the roller.

    - Spent spark is removed from the spark steps
    - A marked stat is unmarked once it has been rolled
    The request is assumed to be validated already (see validate_pool_request).

    Args:
        sheet: Roller snapshot before the roll (not modified)
        request: The pool request that was rolled
        action: Action die faces in rolled order
        danger: Danger die faces in rolled order

    Returns:
        (new_sheet, outcome, events)
    """
    new_sheet = deepcopy(sheet)
    events: list[RollEvent] = []

    outcome = resolve(action, danger, request.assists)
    events.append(roll_resolved(
        roller=request.roller,
        stat=request.stat,
        grade=outcome.grade,
        boons=outcome.boons,
        action_dice=len(action),
        danger_dice=len(danger),
    ))

    if request.spark_used > 0:
        old_steps = list(sheet.spark_steps)
        new_sheet.spark_steps = spend_spark(old_steps, request.spark_used)
        events.append(spark_spent(request.roller, request.spark_used, old_steps, list(new_sheet.spark_steps)))

    if sheet.marked.get(request.stat):
        new_sheet.marked[request.stat] = False
        events.append(mark_cleared(request.roller, request.stat))

    return new_sheet, outcome, events
