from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from podrun.api.deps import get_current_user_id
from podrun.core.errors import RemoteError
from podrun.db import get_db
from podrun.models.profile import Profile
from podrun.schemas.profile import ProfileRead, ProfileUpsert
from podrun.store import RunStore


router = APIRouter(prefix="/profiles", tags=["profiles"])


def _load_profile(db: Session, user_id: str) -> Profile | None:
    try:
        return RunStore(db).select_profile(user_id)
    except RemoteError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/me", response_model=ProfileRead)
def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    # A brand-new user has no row yet; show an empty profile
    row = _load_profile(db, user_id)
    if not row:
        return ProfileRead(id=user_id)
    return row


@router.put("/me", response_model=ProfileRead)
def upsert_my_profile(
    payload: ProfileUpsert,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = _load_profile(db, user_id)
    if not row:
        row = Profile(id=user_id, **payload.model_dump())
        db.add(row)
    else:
        for key, value in payload.model_dump().items():
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    logger.info(f"Profile {user_id} updated")
    return row


@router.get("/{profile_id}", response_model=ProfileRead)
def get_profile(
    profile_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    row = _load_profile(db, profile_id)
    if not row:
        raise HTTPException(status_code=404, detail="Profile not found")
    return row
