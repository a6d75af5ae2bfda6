from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from sqlalchemy import func
from sqlalchemy.orm import Session

from podrun.api.deps import get_current_user_id
from podrun.core.time_utils import round_half_up, utcnow
from podrun.db import get_db
from podrun.models.pod import Pod, PodMember
from podrun.models.run import Run
from podrun.schemas.pod import PodCreate, PodProgress


router = APIRouter(prefix="/pods", tags=["pods"])


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())


def pod_progress(db: Session, pod: Pod, week_of: date) -> PodProgress:
    """Sum the members' distance for the Monday-based week containing `week_of`."""
    week_start = monday_of(week_of)
    start = datetime.combine(week_start, time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=7)

    member_ids = [
        user_id
        for (user_id,) in db.query(PodMember.user_id).filter(PodMember.pod_id == pod.id).all()
    ]
    total = 0.0
    if member_ids:
        total = (
            db.query(func.sum(Run.distance))
            .filter(Run.user_id.in_(member_ids))
            .filter(Run.created_at >= start)
            .filter(Run.created_at < end)
            .scalar()
            or 0
        )

    goal = float(pod.weekly_goal_km)
    current = round(float(total), 2)
    return PodProgress(
        id=pod.id,
        name=pod.name,
        members=len(member_ids),
        week_start=week_start,
        weekly_goal_km=goal,
        current_km=current,
        percent=round_half_up(current / goal * 100) if goal > 0 else 0,
    )


def _require_pod(db: Session, pod_id: int) -> Pod:
    pod = db.query(Pod).filter(Pod.id == pod_id).first()
    if not pod:
        raise HTTPException(status_code=404, detail="Pod not found")
    return pod


@router.post("/", response_model=PodProgress)
def create_pod(
    payload: PodCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if not payload.name.strip():
        raise HTTPException(status_code=422, detail="name must not be empty")
    if payload.weekly_goal_km <= 0:
        raise HTTPException(status_code=422, detail="weekly_goal_km must be > 0")

    pod = Pod(name=payload.name.strip(), weekly_goal_km=payload.weekly_goal_km)
    db.add(pod)
    db.flush()
    db.add(PodMember(pod_id=pod.id, user_id=user_id))
    db.commit()
    db.refresh(pod)
    logger.info(f"Pod {pod.id} ({pod.name!r}) created by {user_id}")
    return pod_progress(db, pod, utcnow().date())


@router.get("/mine", response_model=list[PodProgress])
def list_my_pods(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pods = (
        db.query(Pod)
        .join(PodMember, PodMember.pod_id == Pod.id)
        .filter(PodMember.user_id == user_id)
        .order_by(Pod.id)
        .all()
    )
    today = utcnow().date()
    return [pod_progress(db, pod, today) for pod in pods]


@router.post("/{pod_id}/members", response_model=PodProgress)
def join_pod(
    pod_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pod = _require_pod(db, pod_id)
    row = (
        db.query(PodMember)
        .filter(PodMember.pod_id == pod_id, PodMember.user_id == user_id)
        .first()
    )
    if not row:
        db.add(PodMember(pod_id=pod_id, user_id=user_id))
        db.commit()
        logger.info(f"User {user_id} joined pod {pod_id}")
    return pod_progress(db, pod, utcnow().date())


@router.delete("/{pod_id}/members", response_model=PodProgress)
def leave_pod(
    pod_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pod = _require_pod(db, pod_id)
    db.query(PodMember).filter(PodMember.pod_id == pod_id, PodMember.user_id == user_id).delete()
    db.commit()
    return pod_progress(db, pod, utcnow().date())


@router.get("/{pod_id}/progress", response_model=PodProgress)
def get_pod_progress(
    pod_id: int,
    week_of: Optional[date] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pod = _require_pod(db, pod_id)
    return pod_progress(db, pod, week_of or utcnow().date())
