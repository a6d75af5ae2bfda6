from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from podrun.api.runs import router as runs_router
from podrun.api.sessions import router as sessions_router
from podrun.api.profiles import router as profiles_router
from podrun.api.feed import router as feed_router
from podrun.api.pods import router as pods_router
from podrun.db import Base, engine
from podrun.models.run import Run  # noqa: F401  (import ensures table is registered)
from podrun.models.profile import Profile  # noqa: F401
from podrun.models.cheer import RunCheer  # noqa: F401
from podrun.models.pod import Pod, PodMember  # noqa: F401
from podrun.core.config import settings
from podrun.core.logger import setup_logger
from podrun.tracker.live import LiveRunRegistry


setup_logger(level=settings.log_level, log_file=settings.log_file)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # No live run may keep ticking after shutdown
    app.state.live_runs.close_all()
    logger.info("Live run timers cancelled")


app = FastAPI(title="podrun", lifespan=lifespan)

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (runs, profiles, etc.) on startup
Base.metadata.create_all(bind=engine)

# Runs in progress live in memory until they are journaled
app.state.live_runs = LiveRunRegistry.from_settings(settings)

app.include_router(sessions_router)
app.include_router(runs_router)
app.include_router(profiles_router)
app.include_router(feed_router)
app.include_router(pods_router)


@app.get("/")
def root():
    return {"message": "podrun backend is running"}
