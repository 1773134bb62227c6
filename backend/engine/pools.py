"""
Pool supplier rules.
Works out how many action and danger dice a roll gets, who assisted,
and how spark is spent. Validation of the roll contract lives here,
not in the resolution engine.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from backend.config import DEFAULT_ASSIST_NAME
from backend.engine.definitions import StatDefinition


@dataclass
class ValidationResult:
    """Result of pool request validation."""
    valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error}


@dataclass
class PoolRequest:
    """Everything the roll dialog collects before dice are rolled."""
    roller: str
    stat: str  # Stat key, e.g. "bra"
    stat_dice: int  # Dice from the stat itself
    assists: dict[str, int] = field(default_factory=dict)  # assist_name -> dice, declaration order
    edges: int = 0
    danger_inputs: list[int] = field(default_factory=list)  # Numeric danger fields
    danger_checks: list[bool] = field(default_factory=list)  # Danger checkboxes
    spark_used: int = 0
    total_dice: int | None = None  # Total typed over in the dialog; None = computed

    @property
    def action_dice(self) -> int:
        if self.total_dice is not None:
            return self.total_dice
        return action_dice_total(self.stat_dice, self.assists, self.edges)

    @property
    def danger_dice(self) -> int:
        return danger_dice_total(self.danger_inputs, self.danger_checks)


def build_assist_map(
    rows: Iterable[tuple[str | None, int | None]],
    default_name: str = DEFAULT_ASSIST_NAME,
) -> dict[str, int]:
    """
    Build the assist map from dialog rows of (name, dice).

    Rows with no dice are ignored and a blank name becomes default_name.
    A repeated name keeps its first position but takes the later count.
    """
    assists: dict[str, int] = {}
    for name, value in rows:
        value = value or 0
        if value == 0:
            continue
        name = (name or "").strip() or default_name
        assists[name] = value
    return assists


def action_dice_total(stat_dice: int, assists: dict[str, int] | None = None, edges: int = 0) -> int:
    """Stat dice plus every assist's dice plus edges."""
    return stat_dice + sum((assists or {}).values()) + edges


def danger_dice_total(danger_inputs: Iterable[int] | None = None, danger_checks: Iterable[bool] | None = None) -> int:
    """Numeric danger inputs plus one die per ticked danger checkbox."""
    numeric = sum(int(v or 0) for v in (danger_inputs or []))
    checked = sum(1 for c in (danger_checks or []) if c)
    return numeric + checked


def validate_pool_request(
    request: PoolRequest,
    stat_defs: dict[str, StatDefinition],
    spark_available: int = 0,
) -> ValidationResult:
    """
    Validate a pool request without rolling it.
    Returns ValidationResult with valid=True or valid=False with error message.
    """
    if request.stat not in stat_defs:
        return ValidationResult(False, f"Unknown stat '{request.stat}'")

    if request.stat_dice < 0:
        return ValidationResult(False, "Stat dice cannot be negative")

    if request.edges < 0:
        return ValidationResult(False, "Edges cannot be negative")

    if request.action_dice < 0:
        return ValidationResult(False, "Action dice cannot be negative")

    for name, count in request.assists.items():
        if not name:
            return ValidationResult(False, "Assist name cannot be empty")
        if count < 0:
            return ValidationResult(False, f"Assist '{name}' cannot roll negative dice")

    # Assists are sliced out of the action pool, so they must fit inside it
    assist_total = sum(request.assists.values())
    if assist_total > request.action_dice:
        return ValidationResult(
            False,
            f"Assists roll {assist_total} dice but the action pool only has {request.action_dice}",
        )

    if any(v < 0 for v in request.danger_inputs):
        return ValidationResult(False, "Danger dice cannot be negative")

    if request.spark_used < 0:
        return ValidationResult(False, "Spark used cannot be negative")
    if request.spark_used > spark_available:
        return ValidationResult(
            False,
            f"Cannot use {request.spark_used} spark, only {spark_available} available",
        )

    return ValidationResult(True)


# ===== Spark =====

def spark_value(steps: Iterable[bool]) -> int:
    """Spark available = ticked spark steps."""
    return sum(1 for s in steps if s)


def spend_spark(steps: list[bool], spark_used: int) -> list[bool]:
    """
    Return new spark steps after spending spark on a roll.

    - Spending more than one, or spending the only one: both steps clear
    - Spending one of two: first step stays ticked
    - Spending none: unchanged
    Never mutates steps.
    """
    new_steps = list(steps) if steps else [False, False]
    while len(new_steps) < 2:
        new_steps.append(False)
    if spark_used <= 0:
        return new_steps

    available = spark_value(steps or [])
    if spark_used > 1 or available == 1:
        new_steps[0] = False
        new_steps[1] = False
    elif spark_used == 1 and available > 1:
        new_steps[0] = True
        new_steps[1] = False
    return new_steps
