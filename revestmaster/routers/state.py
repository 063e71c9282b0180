from fastapi import APIRouter, Depends

from .. import schemas
from ..store import ProjectStore, get_store

router = APIRouter(prefix="/state", tags=["state"])


@router.get("/", response_model=schemas.StoreState)
def get_state(store: ProjectStore = Depends(get_store)):
    """The whole store, in its persisted shape."""
    return store.state


@router.delete("/")
def wipe_state(store: ProjectStore = Depends(get_store)):
    """Delete ALL projects. Preferences are kept. The client confirms before calling."""
    store.wipe()
    return {"ok": True}
