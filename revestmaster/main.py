from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .persistence import StateSlot
from .store import ProjectStore
from .routers import projects, rooms, estimate, preferences, state

logger = logging.getLogger("revestmaster")
logger.setLevel(settings.LOG_LEVEL)

# Create tables (the store only needs the state_records slot)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="RevestMaster",
    description="Tile, mortar and grout estimator for tiling projects",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(projects.router, prefix="/api")
app.include_router(rooms.router, prefix="/api")
app.include_router(estimate.router, prefix="/api")
app.include_router(preferences.router, prefix="/api")
app.include_router(state.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "revestmaster"}


@app.on_event("startup")
def load_store():
    """Load the saved store. Selection always starts empty."""
    store = ProjectStore(StateSlot())
    store.load()
    app.state.store = store
