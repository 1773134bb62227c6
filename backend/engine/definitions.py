"""
Static definitions for the stats a character can roll.
Data lives in data/stats.json: key -> { display_name, abbreviation, order }.
"""

import json
from dataclasses import dataclass
from pathlib import Path

DATA_DIR = Path(__file__).parent.parent / "data"


@dataclass
class StatDefinition:
    """Defines immutable properties of a rollable stat."""
    id: str  # Short key, e.g. "bra"
    display_name: str  # e.g. "Brawn"
    abbreviation: str  # e.g. "BRA"
    order: int = 100  # Sheet/dialog display order (unknown stats sort last)
    max_value: int = 3


def load_stat_definitions(data_dir: Path | str | None = None) -> dict[str, StatDefinition]:
    """
    Load stat definitions, ordered for display.

    Args:
        data_dir: Directory containing stats.json (defaults to backend/data).

    Returns: stat_id -> StatDefinition, in display order
    """
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
    with open(data_dir / "stats.json", "r") as f:
        stats_data = json.load(f)

    stats = []
    for stat_id, data in stats_data.items():
        stats.append(StatDefinition(
            id=stat_id,
            display_name=data.get("display_name", stat_id),
            abbreviation=data.get("abbreviation", stat_id.upper()),
            order=data.get("order", 100),
            max_value=data.get("max_value", 3),
        ))

    stats.sort(key=lambda s: s.order)
    return {s.id: s for s in stats}
