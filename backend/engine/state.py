"""
Roll state representation.
Outcomes are built once per resolution and never mutated afterwards.
Includes JSON serialization for roll history and the chat display.
"""

from dataclasses import dataclass, field
from typing import Any


# ===== Grades =====

DISASTER = "disaster"
GRIM = "grim"
MESSY = "messy"
PERFECT = "perfect"
CRIT = "crit"

# Worst to best
GRADES = (DISASTER, GRIM, MESSY, PERFECT, CRIT)

# Success scale used by the chat card (and older roll records)
GRADE_SUCCESS = {
    CRIT: 3,
    PERFECT: 2,
    MESSY: 1,
    GRIM: 0,
    DISASTER: -1,
}

MIN_SUCCESS = -1
MAX_SUCCESS = 3


def grade_for_success(success: int) -> str:
    """Clamp a success value to [-1, 3] and return the matching grade."""
    success = max(MIN_SUCCESS, min(MAX_SUCCESS, success))
    for grade, value in GRADE_SUCCESS.items():
        if value == success:
            return grade
    return GRIM


def _int(v: Any, default: int) -> int:
    try:
        return int(v) if v is not None else default
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ActionDie:
    """One annotated action die."""
    index: int  # Position in the rolled action pool
    value: int
    eliminated: bool = False  # Cut by a killer danger die
    chosen: bool = False  # The die whose face set the grade

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "result": self.value,
            "eliminated": self.eliminated,
            "chosen": self.chosen,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActionDie":
        if not isinstance(data, dict):
            data = {}
        return cls(
            index=_int(data.get("index"), 0),
            value=_int(data.get("result"), 0),
            eliminated=bool(data.get("eliminated", False)),
            chosen=bool(data.get("chosen", False)),
        )


@dataclass(frozen=True)
class DangerDie:
    """One annotated danger die."""
    index: int
    value: int
    killer: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "result": self.value, "killer": self.killer}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DangerDie":
        if not isinstance(data, dict):
            data = {}
        return cls(
            index=_int(data.get("index"), 0),
            value=_int(data.get("result"), 0),
            killer=bool(data.get("killer", False)),
        )


@dataclass(frozen=True)
class Outcome:
    """
    Result of resolving one action pool against one danger pool.

    action holds the base group of annotated action dice (every action die
    when no assists were given); assists holds each named helper's dice in
    the order the helpers were declared.
    """
    grade: str
    boons: int
    highest: int
    eliminated_indices: frozenset[int]
    chosen_index: int | None
    killer_indices: frozenset[int]
    action: tuple[ActionDie, ...] = ()
    assists: dict[str, tuple[ActionDie, ...]] = field(default_factory=dict)
    danger: tuple[DangerDie, ...] = ()

    @property
    def success(self) -> int:
        return GRADE_SUCCESS[self.grade]

    @property
    def crit(self) -> bool:
        return self.grade == CRIT

    @property
    def has_actions(self) -> bool:
        """On a disaster the GM gets to act against the roller."""
        return self.grade == DISASTER

    def all_action_dice(self) -> list[ActionDie]:
        """Every annotated action die in rolled order, ignoring assist grouping."""
        dice = list(self.action)
        for group in self.assists.values():
            dice.extend(group)
        return sorted(dice, key=lambda d: d.index)

    def to_dict(self) -> dict[str, Any]:
        return {
            "grade": self.grade,
            "success": self.success,
            "crit": self.crit,
            "boons": self.boons,
            "highest": self.highest,
            "eliminated_indices": sorted(self.eliminated_indices),
            "chosen_index": self.chosen_index,
            "killer_indices": sorted(self.killer_indices),
            "has_actions": self.has_actions,
            "dice": [d.to_dict() for d in self.action],
            "assists": {
                name: [d.to_dict() for d in group]
                for name, group in self.assists.items()
            },
            "danger": [d.to_dict() for d in self.danger],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outcome":
        if not isinstance(data, dict):
            data = {}
        grade = data.get("grade")
        if grade not in GRADES:
            grade = DISASTER
        chosen = data.get("chosen_index")
        assists_raw = data.get("assists")
        if not isinstance(assists_raw, dict):
            assists_raw = {}
        return cls(
            grade=grade,
            boons=max(0, _int(data.get("boons"), 0)),
            highest=_int(data.get("highest"), 0),
            eliminated_indices=frozenset(_int(i, 0) for i in data.get("eliminated_indices") or []),
            chosen_index=_int(chosen, 0) if chosen is not None else None,
            killer_indices=frozenset(_int(i, 0) for i in data.get("killer_indices") or []),
            action=tuple(ActionDie.from_dict(d) for d in data.get("dice") or []),
            assists={
                str(name): tuple(ActionDie.from_dict(d) for d in (group or []))
                for name, group in assists_raw.items()
            },
            danger=tuple(DangerDie.from_dict(d) for d in data.get("danger") or []),
        )


@dataclass
class RollerSheet:
    """
    Snapshot of the roller's sheet fields a roll reads or changes.
    Supplied by the host for each roll; this project never stores it.
    """
    name: str
    stats: dict[str, int] = field(default_factory=dict)  # stat_id -> dice
    marked: dict[str, bool] = field(default_factory=dict)  # stat_id -> marked
    spark_steps: list[bool] = field(default_factory=lambda: [False, False])

    @property
    def spark(self) -> int:
        return sum(1 for s in self.spark_steps if s)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "stats": dict(self.stats),
            "marked": dict(self.marked),
            "spark_steps": list(self.spark_steps),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RollerSheet":
        if not isinstance(data, dict):
            data = {}
        stats = data.get("stats") if isinstance(data.get("stats"), dict) else {}
        marked = data.get("marked") if isinstance(data.get("marked"), dict) else {}
        steps = data.get("spark_steps") if isinstance(data.get("spark_steps"), list) else [False, False]
        return cls(
            name=str(data.get("name") or ""),
            stats={str(k): _int(v, 0) for k, v in stats.items()},
            marked={str(k): bool(v) for k, v in marked.items()},
            spark_steps=[bool(s) for s in steps],
        )
