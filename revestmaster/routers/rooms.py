from fastapi import APIRouter, Depends, HTTPException

from .. import schemas
from ..errors import InvalidInput, NotFound
from ..store import ProjectStore, get_store

router = APIRouter(prefix="/projects/{project_id}/rooms", tags=["rooms"])


@router.post("/", response_model=schemas.Room)
def add_room(project_id: str, body: schemas.RoomIn, store: ProjectStore = Depends(get_store)):
    try:
        return store.add_room(project_id, body, body.name)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{room_id}", response_model=schemas.Room)
def get_room(project_id: str, room_id: str, store: ProjectStore = Depends(get_store)):
    try:
        return store.get_room(project_id, room_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{room_id}", response_model=schemas.Room)
def edit_room(project_id: str, room_id: str, body: schemas.RoomIn,
              store: ProjectStore = Depends(get_store)):
    """Recompute a room from a full new spec. Id and position are kept."""
    try:
        return store.edit_room(project_id, room_id, body, body.name)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{room_id}")
def delete_room(project_id: str, room_id: str, store: ProjectStore = Depends(get_store)):
    try:
        store.delete_room(project_id, room_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}
