from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from podrun.api.deps import get_current_user_id
from podrun.core.config import settings
from podrun.core.constants import ANONYMOUS_RUNNER
from podrun.core.time_utils import format_elapsed, humanize_ago
from podrun.db import get_db
from podrun.models.cheer import RunCheer
from podrun.models.profile import Profile
from podrun.models.run import Run
from podrun.schemas.feed import CheerCount, FeedItem


router = APIRouter(prefix="/feed", tags=["feed"])


def display_name(profile: Optional[Profile]) -> str:
    """'First Last', else the username, else a generic runner label."""
    if profile is None:
        return ANONYMOUS_RUNNER
    full = " ".join(p for p in (profile.first_name, profile.last_name) if p and p.strip())
    if full.strip():
        return full.strip()
    if profile.username and profile.username.strip():
        return profile.username.strip()
    return ANONYMOUS_RUNNER


def initials(name: str) -> str:
    """Avatar fallback: 'Alex Chen' -> 'AC', 'maya' -> 'M'."""
    parts = [p for p in name.split() if p]
    return "".join(p[0] for p in parts[:2]).upper()


def _cheer_count(db: Session, run_id: int, user_id: str) -> CheerCount:
    count = db.query(func.count(RunCheer.id)).filter(RunCheer.run_id == run_id).scalar() or 0
    mine = (
        db.query(RunCheer)
        .filter(RunCheer.run_id == run_id, RunCheer.user_id == user_id)
        .first()
        is not None
    )
    return CheerCount(run_id=run_id, cheers=count, cheered_by_me=mine)


def _require_run(db: Session, run_id: int) -> Run:
    run = db.query(Run).filter(Run.id == run_id).first()
    if not run:
        raise HTTPException(status_code=404, detail="Run not found")
    return run


@router.get("/", response_model=list[FeedItem])
def get_feed(
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Community feed: everyone's runs, newest first."""
    runs = (
        db.query(Run)
        .order_by(Run.created_at.desc(), Run.id.desc())
        .limit(limit or settings.feed_limit)
        .all()
    )
    if not runs:
        return []

    run_ids = [r.id for r in runs]
    profiles = {
        p.id: p
        for p in db.query(Profile).filter(Profile.id.in_(list({r.user_id for r in runs}))).all()
    }
    counts = dict(
        db.query(RunCheer.run_id, func.count(RunCheer.id))
        .filter(RunCheer.run_id.in_(run_ids))
        .group_by(RunCheer.run_id)
        .all()
    )
    mine = {
        run_id
        for (run_id,) in db.query(RunCheer.run_id)
        .filter(RunCheer.run_id.in_(run_ids), RunCheer.user_id == user_id)
        .all()
    }

    items: list[FeedItem] = []
    for run in runs:
        profile = profiles.get(run.user_id)
        name = display_name(profile)
        items.append(
            FeedItem(
                id=run.id,
                user_id=run.user_id,
                user=name,
                avatar=initials(name),
                avatar_url=profile.avatar_url if profile else None,
                distance_km=float(run.distance),
                duration=format_elapsed(run.duration),
                pace=run.pace,
                mood=run.mood,
                note=run.journal_note,
                location=run.location,
                time=humanize_ago(run.created_at),
                created_at=run.created_at,
                cheers=counts.get(run.id, 0),
                cheered_by_me=run.id in mine,
            )
        )
    return items


@router.post("/{run_id}/cheers", response_model=CheerCount)
def cheer_run(
    run_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    _require_run(db, run_id)
    exists = (
        db.query(RunCheer)
        .filter(RunCheer.run_id == run_id, RunCheer.user_id == user_id)
        .first()
    )
    if not exists:
        db.add(RunCheer(run_id=run_id, user_id=user_id))
        try:
            db.commit()
        except IntegrityError:
            # Double-tap from another request; the cheer is already there
            db.rollback()
    return _cheer_count(db, run_id, user_id)


@router.delete("/{run_id}/cheers", response_model=CheerCount)
def uncheer_run(
    run_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    _require_run(db, run_id)
    db.query(RunCheer).filter(RunCheer.run_id == run_id, RunCheer.user_id == user_id).delete()
    db.commit()
    return _cheer_count(db, run_id, user_id)
