"""Persistence collaborator for finished runs and profiles.

Everything the journal and stats code needs from the database goes through
``RunStore``. Database failures are rolled back and re-raised as
``RemoteError`` so callers only deal with one failure type.
"""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from podrun.core.errors import RemoteError
from podrun.models.profile import Profile
from podrun.models.run import Run
from podrun.schemas.run import RunRecord


class RunStore:
    def __init__(self, db: Session):
        self.db = db

    def insert_run(self, record: RunRecord) -> Run:
        run = Run(
            user_id=record.user_id,
            distance=record.distance_km,
            duration=record.duration_seconds,
            pace=record.pace,
            location=record.location,
            mood=record.mood.value,
            journal_note=record.note,
            calories=record.calories,
            steps=record.steps,
            created_at=record.created_at,
        )
        try:
            self.db.add(run)
            self.db.commit()
            self.db.refresh(run)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save run for user {record.user_id}: {e}")
            raise RemoteError("Failed to save run") from e
        logger.info(f"Saved run {run.id} for user {record.user_id}")
        return run

    def select_runs(self, user_id: str) -> list[Run]:
        try:
            return (
                self.db.query(Run)
                .filter(Run.user_id == user_id)
                .order_by(Run.created_at.desc(), Run.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load runs for user {user_id}: {e}")
            raise RemoteError("Failed to load runs") from e

    def select_profile(self, user_id: str) -> Profile | None:
        try:
            return self.db.query(Profile).filter(Profile.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load profile {user_id}: {e}")
            raise RemoteError("Failed to load profile") from e
