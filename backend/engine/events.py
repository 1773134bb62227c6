"""
Roll events for UI hooks and logging.
Events describe what happened while a roll was applied to a roller.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class RollEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RollEvent":
        return cls(type=data["type"], payload=data["payload"])


# ===== Event Type Constants =====

ROLL_RESOLVED = "roll_resolved"
SPARK_SPENT = "spark_spent"
MARK_CLEARED = "mark_cleared"


# ===== Event Factory Functions =====

def roll_resolved(
    roller: str,
    stat: str,
    grade: str,
    boons: int,
    action_dice: int,
    danger_dice: int,
) -> RollEvent:
    return RollEvent(ROLL_RESOLVED, {
        "roller": roller,
        "stat": stat,
        "grade": grade,
        "boons": boons,
        "action_dice": action_dice,
        "danger_dice": danger_dice,
    })


def spark_spent(roller: str, spent: int, old_steps: list[bool], new_steps: list[bool]) -> RollEvent:
    return RollEvent(SPARK_SPENT, {
        "roller": roller,
        "spent": spent,
        "old_steps": old_steps,
        "new_steps": new_steps,
    })


def mark_cleared(roller: str, stat: str) -> RollEvent:
    return RollEvent(MARK_CLEARED, {
        "roller": roller,
        "stat": stat,
    })
