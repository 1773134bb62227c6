"""
FastAPI backend for the Grimwild Action dice engine.
Provides REST API endpoints for resolving and rolling dice pools and the roll history.
"""

import json
import os
import uuid
from dataclasses import asdict
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .database import get_db, init_db
from .models import Roll

from backend.config import ROLL_HISTORY_LIMIT
from backend.engine.definitions import load_stat_definitions
from backend.engine.pools import PoolRequest, build_assist_map, validate_pool_request
from backend.engine.reducer import apply_roll
from backend.engine.resolution import resolve
from backend.engine.state import Outcome, RollerSheet
from backend.engine.utils import build_chat_data, roll_pools

app = FastAPI(
    title="Grimwild Action API",
    description="Dice pool resolution for Grimwild Action rolls",
    version="1.0.0",
)

# CORS configuration for the tabletop client
CORS_ORIGINS = ["http://localhost:30000", "http://localhost:5173", "http://localhost:3000"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            print(f"[500] {method} {path}", flush=True)
        return response
    except Exception:
        print(f"[500] {method} {path} (exception)", flush=True)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    """Return 500 with CORS headers and full traceback so the client can read the error."""
    import traceback
    tb = traceback.format_exc()
    traceback.print_exc()
    origin = request.headers.get("origin")
    allow_origin = origin if origin in CORS_ORIGINS else CORS_ORIGINS[0]
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "traceback": tb},
        headers={
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Credentials": "true",
        },
    )


stat_defs = load_stat_definitions()

# Fixed seed for the die source (testing/replays); unset = fresh randomness per roll
_raw_seed = os.environ.get("ROLL_SEED")
ROLL_SEED = int(_raw_seed) if _raw_seed else None


# ===== Pydantic Models =====

class AssistRow(BaseModel):
    """One assist row from the roll dialog. Blank name = default assist name."""
    name: str | None = None
    dice: int = 0


class SheetSnapshot(BaseModel):
    name: str
    stats: dict[str, int] = {}
    marked: dict[str, bool] = {}
    spark_steps: list[bool] = [False, False]


class ResolveRequest(BaseModel):
    action: list[int] = []
    danger: list[int] = []
    assists: dict[str, int] | None = None  # assist_name -> dice, declaration order
    flavor: str | None = None
    is_private: bool = False


class RollRequest(BaseModel):
    sheet: SheetSnapshot
    stat: str
    """Dice from the stat. Omitted = the sheet's value for the stat."""
    stat_dice: int | None = None
    assists: list[AssistRow] = []
    edges: int = 0
    danger_inputs: list[int] = []
    danger_checks: list[bool] = []
    spark_used: int = 0
    """Total dice typed over in the dialog. Omitted = stat + assists + edges."""
    total_dice: int | None = None
    flavor: str | None = None
    is_private: bool = False


# ===== Helper Functions =====

def roll_to_dict(row: Roll) -> dict[str, Any]:
    """Convert a stored roll to a JSON-serializable dict."""
    outcome = Outcome.from_dict(json.loads(row.outcome))
    return {
        "id": row.id,
        "created_at": row.created_at.isoformat() if row.created_at else None,
        "roller": row.roller,
        "stat": row.stat,
        "flavor": row.flavor,
        "is_private": bool(row.is_private),
        "grade": row.grade,
        "boons": row.boons,
        "action_dice": json.loads(row.action_dice),
        "danger_dice": json.loads(row.danger_dice),
        "assists": json.loads(row.assists),
        "outcome": outcome.to_dict(),
        "chat": build_chat_data(outcome, row.flavor, bool(row.is_private)),
    }


def get_roll(roll_id: str, db: Session) -> Roll:
    """Get a stored roll; raise 404 if not found."""
    row = db.query(Roll).filter(Roll.id == roll_id).first()
    if not row:
        raise HTTPException(status_code=404, detail=f"Roll {roll_id} not found")
    return row


@app.on_event("startup")
def on_startup():
    init_db()


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": "Grimwild Action API", "version": "1.0.0"}


@app.get("/stats")
def get_stats():
    """List rollable stats in sheet order."""
    return {"stats": [asdict(s) for s in stat_defs.values()]}


@app.post("/rolls/resolve")
def do_resolve(request: ResolveRequest):
    """Resolve dice the caller already rolled. Nothing is stored."""
    outcome = resolve(request.action, request.danger, request.assists)
    return {
        "outcome": outcome.to_dict(),
        "chat": build_chat_data(outcome, request.flavor, request.is_private),
    }


@app.post("/rolls")
def do_roll(request: RollRequest, db: Session = Depends(get_db)):
    """
    Roll a stat for a character.

    Validates the pool, rolls action and danger dice, resolves them, applies
    spark/mark costs to the sheet snapshot and stores the roll in the history.
    """
    sheet = RollerSheet.from_dict(request.sheet.model_dump())
    stat_dice = request.stat_dice if request.stat_dice is not None else sheet.stats.get(request.stat, 0)
    pool = PoolRequest(
        roller=sheet.name,
        stat=request.stat,
        stat_dice=stat_dice,
        assists=build_assist_map((a.name, a.dice) for a in request.assists),
        edges=request.edges,
        danger_inputs=list(request.danger_inputs),
        danger_checks=list(request.danger_checks),
        spark_used=request.spark_used,
        total_dice=request.total_dice,
    )

    validation = validate_pool_request(pool, stat_defs, spark_available=sheet.spark)
    if not validation.valid:
        raise HTTPException(status_code=400, detail=validation.error)

    dice_rolls = roll_pools(pool, seed=ROLL_SEED)
    new_sheet, outcome, events = apply_roll(sheet, pool, dice_rolls["action"], dice_rolls["danger"])

    try:
        row = Roll(
            id=str(uuid.uuid4()),
            roller=pool.roller,
            stat=pool.stat,
            flavor=request.flavor,
            is_private=request.is_private,
            grade=outcome.grade,
            boons=outcome.boons,
            action_dice=json.dumps(dice_rolls["action"]),
            danger_dice=json.dumps(dice_rolls["danger"]),
            assists=json.dumps(pool.assists),
            outcome=json.dumps(outcome.to_dict()),
        )
        db.add(row)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Could not store roll: {str(e)}")

    return {
        "id": row.id,
        "dice_rolls": dice_rolls,
        "outcome": outcome.to_dict(),
        "chat": build_chat_data(outcome, request.flavor, request.is_private),
        "sheet": new_sheet.to_dict(),
        "events": [e.to_dict() for e in events],
    }


@app.get("/rolls")
def list_rolls(roller: str | None = None, limit: int = 20, db: Session = Depends(get_db)):
    """Recent rolls, newest first. limit is capped at ROLL_HISTORY_LIMIT."""
    limit = max(1, min(limit, ROLL_HISTORY_LIMIT))
    query = db.query(Roll)
    if roller:
        query = query.filter(Roll.roller == roller)
    rows = query.order_by(Roll.created_at.desc()).limit(limit).all()
    return {"rolls": [roll_to_dict(r) for r in rows]}


@app.get("/rolls/{roll_id}")
def read_roll(roll_id: str, db: Session = Depends(get_db)):
    return roll_to_dict(get_roll(roll_id, db))


@app.delete("/rolls/{roll_id}")
def delete_roll(roll_id: str, db: Session = Depends(get_db)):
    """Remove a roll from the history."""
    row = get_roll(roll_id, db)
    db.delete(row)
    db.commit()
    return {"deleted": roll_id}
