#!/usr/bin/env python3
"""
Delete stored rolls for one character (or all rolls) from the roll history.
Usage: python scripts/clear_rolls.py <roller name> | --all
From repo root with PYTHONPATH=. or: python -m scripts.clear_rolls <roller name>
"""
import sys
import os

# Allow running from repo root or scripts/
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from backend.api.database import SessionLocal, init_db
from backend.api.models import Roll


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python scripts/clear_rolls.py <roller name> | --all", file=sys.stderr)
        sys.exit(1)
    target = sys.argv[1].strip()
    if not target:
        print("Error: provide a roller name or --all.", file=sys.stderr)
        sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        query = db.query(Roll)
        if target != "--all":
            query = query.filter(Roll.roller == target)
        count = query.delete(synchronize_session=False)
        db.commit()
        if target == "--all":
            print(f"Deleted {count} roll(s).")
        else:
            print(f"Deleted {count} roll(s) by {target!r}.")
    except Exception as e:
        db.rollback()
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
