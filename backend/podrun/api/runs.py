from datetime import date, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from podrun.api.deps import get_current_user_id
from podrun.core.errors import RemoteError
from podrun.core.time_utils import seconds_to_hhmmss, format_duration_hm, utcnow
from podrun.db import get_db
from podrun.models.cheer import RunCheer
from podrun.models.run import Run
from podrun.schemas.run import RunRead, RunStats
from podrun.store import RunStore

router = APIRouter(prefix="/runs", tags=["runs"])


def run_to_read(run: Run) -> RunRead:
    return RunRead(
        id=run.id,
        user_id=run.user_id,
        distance_km=float(run.distance),
        duration_seconds=run.duration,
        duration=seconds_to_hhmmss(run.duration),
        pace=run.pace,
        location=run.location,
        mood=run.mood,
        note=run.journal_note,
        calories=run.calories,
        steps=run.steps,
        created_at=run.created_at,
    )


def run_day(run: Run) -> date:
    """Calendar day of a run (UTC; naive timestamps are already UTC)."""
    created = run.created_at
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc)
    return created.date()


def streak_days(days: set[date], today: date) -> int:
    """Consecutive days with a run, ending today (or yesterday if today is still open)."""
    current = today if today in days else today - timedelta(days=1)
    streak = 0
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak


@router.get("/", response_model=list[RunRead])
def list_runs(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Current user's runs, most recent first."""
    try:
        runs = RunStore(db).select_runs(user_id)
    except RemoteError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [run_to_read(run) for run in runs]


@router.get("/stats", response_model=RunStats)
def get_run_stats(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        runs = RunStore(db).select_runs(user_id)
    except RemoteError as e:
        raise HTTPException(status_code=502, detail=str(e))

    total_distance = sum(float(run.distance or 0) for run in runs)
    total_duration = sum(run.duration or 0 for run in runs)
    today = utcnow().date()

    return RunStats(
        total_runs=len(runs),
        total_distance_km=round(total_distance, 2),
        total_duration_seconds=total_duration,
        total_duration=format_duration_hm(total_duration),
        streak_days=streak_days({run_day(run) for run in runs}, today),
    )


@router.get("/{run_id}", response_model=RunRead)
def get_run(
    run_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    run = db.query(Run).filter(Run.id == run_id, Run.user_id == user_id).first()
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")
    return run_to_read(run)


@router.delete("/{run_id}")
def delete_run(
    run_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    run = db.query(Run).filter(Run.id == run_id, Run.user_id == user_id).first()
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")
    db.query(RunCheer).filter(RunCheer.run_id == run_id).delete()
    db.delete(run)
    db.commit()
    logger.info(f"Deleted run {run_id} for user {user_id}")
    return {"ok": True}
