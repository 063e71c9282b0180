from typing import Optional

from fastapi import APIRouter, Depends

from .. import schemas
from ..store import ProjectStore, get_store

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/", response_model=schemas.Preferences)
def get_preferences(store: ProjectStore = Depends(get_store)):
    return store.preferences


@router.put("/theme", response_model=schemas.Preferences)
def set_theme(body: schemas.ThemeUpdate, store: ProjectStore = Depends(get_store)):
    store.set_theme(body.theme)
    return store.preferences


@router.post("/sidebar/toggle", response_model=schemas.Preferences)
def toggle_sidebar(body: Optional[schemas.SidebarToggle] = None,
                   store: ProjectStore = Depends(get_store)):
    store.toggle_sidebar(body.collapsed if body else None)
    return store.preferences
