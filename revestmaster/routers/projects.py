from fastapi import APIRouter, Depends, HTTPException

from .. import schemas
from ..errors import NotFound
from ..store import ProjectStore, get_store

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=schemas.StoreOverview)
def list_projects(store: ProjectStore = Depends(get_store)):
    return schemas.StoreOverview(
        projects=store.project_summaries(),
        current_project_id=store.current_project_id,
    )


@router.post("/", response_model=schemas.Project)
def create_project(body: schemas.ProjectCreate, store: ProjectStore = Depends(get_store)):
    project_id = store.create_project(body.name)
    return store.get_project(project_id)


@router.post("/deselect")
def deselect_project(store: ProjectStore = Depends(get_store)):
    """Back to the home view with no project selected."""
    store.clear_selection()
    return {"ok": True, "currentProjectId": None}


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: str, store: ProjectStore = Depends(get_store)):
    try:
        return store.get_project(project_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{project_id}")
def delete_project(project_id: str, store: ProjectStore = Depends(get_store)):
    """Delete a project and all its rooms. The client confirms before calling."""
    try:
        store.delete_project(project_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True, "currentProjectId": store.current_project_id}


@router.post("/{project_id}/select", response_model=schemas.Project)
def select_project(project_id: str, store: ProjectStore = Depends(get_store)):
    try:
        return store.select_project(project_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{project_id}/totals", response_model=schemas.ProjectTotals)
def project_totals(project_id: str, store: ProjectStore = Depends(get_store)):
    try:
        return store.project_totals(project_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
