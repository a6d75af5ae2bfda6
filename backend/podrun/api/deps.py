from fastapi import Header, HTTPException, Request

from podrun.tracker.live import LiveRunRegistry


def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """Identify the caller from the ``X-User-Id`` header.

    Authentication happens upstream; the verified user id is passed along
    explicitly so no route reaches for a global session.
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def get_live_runs(request: Request) -> LiveRunRegistry:
    return request.app.state.live_runs
