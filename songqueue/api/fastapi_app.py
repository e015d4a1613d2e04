from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from songqueue.api.auth.routes import router as auth_router
from songqueue.api.health import router as health_router
from songqueue.api.playback.routes import router as playback_router
from songqueue.api.queue.routes import router as queue_router
from songqueue.api.spotify.routes import router as spotify_router
from songqueue.config import ALLOWED_ORIGINS, LOG_LEVEL
from songqueue.core import configure_logging

configure_logging(LOG_LEVEL)

app = FastAPI(
    title="Song Queue API",
    version="0.1.0",
    description="Shared hackathon song queue backed by Spotify.",
)

# CORS so the web UI can poll the queue from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["health"])

# Queue routes
app.include_router(queue_router, prefix="/queue", tags=["queue"])

# Playback routes (admin)
app.include_router(playback_router, prefix="/playback", tags=["playback"])

# Spotify OAuth + team/admin login
app.include_router(auth_router, tags=["auth"])

# Spotify search proxy
app.include_router(spotify_router, tags=["spotify"])
