from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from podrun.api.deps import get_current_user_id, get_live_runs
from podrun.api.runs import run_to_read
from podrun.core.config import settings
from podrun.core.errors import RemoteError, ValidationError
from podrun.core.time_utils import format_elapsed
from podrun.db import get_db
from podrun.journal.mood import MoodCapture
from podrun.schemas.run import RunRead
from podrun.schemas.session import JournalEntry, SessionCreate, SessionRead
from podrun.store import RunStore
from podrun.tracker.live import LiveRun, LiveRunRegistry

router = APIRouter(prefix="/sessions", tags=["sessions"])

# Lifecycle routes are async so timers are started and cancelled on the
# event loop that owns them.


def session_to_read(run: LiveRun) -> SessionRead:
    tracker = run.tracker
    metrics = tracker.metrics()
    return SessionRead(
        id=run.id,
        status=tracker.status,
        location=run.location,
        started_at=run.started_at,
        elapsed_seconds=tracker.elapsed_seconds,
        elapsed=format_elapsed(tracker.elapsed_seconds),
        distance_km=round(tracker.distance_km, 3),
        pace=metrics.pace,
        calories=metrics.calories,
        steps=metrics.steps,
    )


def _get_live_run(live_runs: LiveRunRegistry, session_id: str, user_id: str) -> LiveRun:
    try:
        return live_runs.get(session_id, user_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/", response_model=SessionRead)
async def create_session(
    payload: Optional[SessionCreate] = None,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
):
    """Start a new run right away (there is no separate 'ready' screen)."""
    location = (payload.location if payload else None) or settings.default_location
    run = live_runs.create(user_id, location.strip() or settings.default_location)
    return session_to_read(run)


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
):
    return session_to_read(_get_live_run(live_runs, session_id, user_id))


@router.post("/{session_id}/pause", response_model=SessionRead)
async def pause_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
):
    run = _get_live_run(live_runs, session_id, user_id)
    run.pause()
    return session_to_read(run)


@router.post("/{session_id}/resume", response_model=SessionRead)
async def resume_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
):
    run = _get_live_run(live_runs, session_id, user_id)
    run.resume()
    return session_to_read(run)


@router.post("/{session_id}/stop", response_model=SessionRead)
async def stop_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
):
    run = _get_live_run(live_runs, session_id, user_id)
    run.stop()
    return session_to_read(run)


@router.delete("/{session_id}")
async def discard_session(
    session_id: str,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
):
    _get_live_run(live_runs, session_id, user_id)
    live_runs.discard(session_id)
    return {"ok": True}


@router.post("/{session_id}/journal", response_model=RunRead)
def journal_session(
    session_id: str,
    entry: JournalEntry,
    user_id: str = Depends(get_current_user_id),
    live_runs: LiveRunRegistry = Depends(get_live_runs),
    db: Session = Depends(get_db),
):
    """Attach mood + note to a stopped run and save it.

    The run is claimed for the duration of the save, so a second request for
    the same session gets 404 instead of storing the run twice. A failed save
    puts the run back for another try.
    """
    try:
        run = live_runs.claim(session_id, user_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Session not found")
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    saved = False
    with logger.contextualize(user_id=user_id, session_id=session_id):
        try:
            capture = MoodCapture(
                snapshot=run.tracker.snapshot(),
                location=run.location,
                user_id=user_id,
                store=RunStore(db),
                calories_per_km=run.tracker.calories_per_km,
                steps_per_km=run.tracker.steps_per_km,
            )
            capture.submit(mood=entry.mood, note=entry.note)
            saved = True
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except RemoteError as e:
            logger.warning(f"Journal not saved: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        finally:
            if saved:
                live_runs.finish(run)
            else:
                live_runs.release(run)

    return run_to_read(capture.saved)
