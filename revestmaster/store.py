"""
Project Store: projects → rooms → cached material results.

All state lives in one StoreState owned by a ProjectStore instance; the store
is passed to whoever needs it (FastAPI gets it through get_store). Every
operation that changes state saves the whole store before returning.
Operations that fail (InvalidInput, NotFound, or the save itself) leave the
in-memory state as it was.

Selection:
    NoSelection --create/select--> Selected(id)
    Selected(id) --delete(id)--> Selected(first remaining) | NoSelection
    process start (load) --> NoSelection, whatever was saved
"""

import logging
from contextlib import contextmanager
from typing import List, Optional

from fastapi import Request

from .calculators.base import round_half_up
from .calculators.tiling import as_room_spec, compute
from .config import settings
from .errors import InvalidInput, NotFound, PersistenceCorrupt
from .models import Theme
from .persistence import StateSlot, decode_state, encode_state, new_id
from .schemas import (
    Preferences, Project, ProjectSummary, ProjectTotals, Room, StoreState,
)

logger = logging.getLogger(__name__)


class ProjectStore:

    def __init__(self, slot: StateSlot, state: StoreState = None):
        self.slot = slot
        self.state = state if state is not None else StoreState()

    # --- Lifecycle ---

    def load(self) -> StoreState:
        """
        Replace the in-memory state with what's in the slot.

        Missing or unreadable data gives the default store. Never raises for
        bad data. The selection is always cleared.
        """
        payload = self.slot.read()
        if payload is None:
            state = StoreState()
        else:
            try:
                state = decode_state(payload)
            except PersistenceCorrupt as e:
                logger.warning("Saved state is unreadable, starting with an empty store: %s", e)
                state = StoreState()

        state.current_project_id = None
        self.state = state
        logger.info("Loaded %d project(s) from %s", len(state.projects), self.slot.key)
        return state

    def save(self) -> None:
        self.slot.write(encode_state(self.state))

    # --- Projects ---

    @property
    def projects(self) -> List[Project]:
        return self.state.projects

    @property
    def current_project_id(self) -> Optional[str]:
        return self.state.current_project_id

    def current_project(self) -> Optional[Project]:
        if self.state.current_project_id is None:
            return None
        return self.get_project(self.state.current_project_id)

    def get_project(self, project_id: str) -> Project:
        for project in self.state.projects:
            if project.id == project_id:
                return project
        raise NotFound("Project", project_id)

    @contextmanager
    def _saving(self):
        """
        Run one mutation and save it. If anything fails, the save included,
        the in-memory state goes back to what it was before.
        """
        before = self.state.model_copy(deep=True)
        try:
            yield
            self.save()
        except Exception:
            self.state = before
            raise

    def create_project(self, name: str = None) -> str:
        """New project goes to the front of the list and becomes the selection."""
        project = Project(id=new_id(), name=_clean_name(name, settings.DEFAULT_PROJECT_NAME))
        with self._saving():
            self.state.projects = [project] + self.state.projects
            self.state.current_project_id = project.id
        logger.info("Created project %s (%s)", project.id, project.name)
        return project.id

    def select_project(self, project_id: str) -> Project:
        with self._saving():
            self.state.current_project_id = self.get_project(project_id).id
        return self.get_project(project_id)

    def clear_selection(self) -> None:
        with self._saving():
            self.state.current_project_id = None

    def delete_project(self, project_id: str) -> None:
        """
        Remove a project with all its rooms.

        If it was selected, selection falls back to the new first project, or
        to none when no projects are left. Confirmation is the caller's job.
        """
        with self._saving():
            self.get_project(project_id)
            remaining = [p for p in self.state.projects if p.id != project_id]
            self.state.projects = remaining
            if self.state.current_project_id == project_id:
                self.state.current_project_id = remaining[0].id if remaining else None
        logger.info("Deleted project %s", project_id)

    # --- Rooms ---

    def get_room(self, project_id: str, room_id: str) -> Room:
        project = self.get_project(project_id)
        return project.rooms[self._room_index(project, room_id)]

    def add_room(self, project_id: str, spec, name: str = None) -> Room:
        """Compute and cache results, then append the room to the project."""
        with self._saving():
            project = self.get_project(project_id)
            room = _build_room(new_id(), spec, name)
            project.rooms = project.rooms + [room]
        return room

    def edit_room(self, project_id: str, room_id: str, spec, name: str = None) -> Room:
        """Replace a room with a recomputed one, keeping its id and position."""
        with self._saving():
            project = self.get_project(project_id)
            index = self._room_index(project, room_id)
            room = _build_room(room_id, spec, name)
            rooms = list(project.rooms)
            rooms[index] = room
            project.rooms = rooms
        return room

    def delete_room(self, project_id: str, room_id: str) -> None:
        with self._saving():
            project = self.get_project(project_id)
            self._room_index(project, room_id)
            project.rooms = [r for r in project.rooms if r.id != room_id]

    def _room_index(self, project: Project, room_id: str) -> int:
        for index, room in enumerate(project.rooms):
            if room.id == room_id:
                return index
        raise NotFound("Room", room_id)

    # --- Aggregates (derived on every call, never stored) ---

    def project_totals(self, project_id: str) -> ProjectTotals:
        project = self.get_project(project_id)
        results = [room.results for room in project.rooms]
        return ProjectTotals(
            area=round_half_up(sum(r.area_m2 for r in results)),
            tiles=sum(r.tiles_units for r in results),
            mortar_bags=sum(r.mortar_bags for r in results),
            grout=round_half_up(sum(r.grout_kg for r in results)),
        )

    def project_summaries(self) -> List[ProjectSummary]:
        """Home overview: one line per project, in list order."""
        return [
            ProjectSummary(
                id=project.id,
                name=project.name,
                room_count=len(project.rooms),
                total_area_m2=round_half_up(sum(room.results.area_m2 for room in project.rooms)),
            )
            for project in self.state.projects
        ]

    # --- Preferences ---

    @property
    def preferences(self) -> Preferences:
        return self.state.preferences

    def set_theme(self, theme) -> Theme:
        try:
            value = Theme(theme)
        except ValueError:
            raise InvalidInput(
                f"Unknown theme: {theme!r}. Available: {[t.value for t in Theme]}", field="theme") from None
        with self._saving():
            self.state.preferences.theme = value
        return value

    def toggle_sidebar(self, collapsed: bool = None) -> bool:
        """Flip the collapsed flag, or set it when a value is given. Returns the new value."""
        with self._saving():
            prefs = self.state.preferences
            prefs.sidebar_collapsed = (not prefs.sidebar_collapsed) if collapsed is None else bool(collapsed)
        return self.state.preferences.sidebar_collapsed

    # --- Wipe ---

    def wipe(self) -> None:
        """Delete every project and clear the selection. Preferences survive."""
        count = len(self.state.projects)
        with self._saving():
            self.state = StoreState(preferences=self.state.preferences.model_copy())
        logger.info("Wiped %d project(s)", count)


def _clean_name(name: Optional[str], default: str) -> str:
    name = (name or "").strip()
    return name or default


def _build_room(room_id: str, spec, name: Optional[str]) -> Room:
    spec = as_room_spec(spec)
    results = compute(spec)
    return Room(
        id=room_id,
        name=_clean_name(name, settings.DEFAULT_ROOM_NAME),
        results=results,
        **spec.model_dump(),
    )


def get_store(request: Request) -> ProjectStore:
    """FastAPI dependency. Returns the store loaded at startup, or loads it on first use."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = ProjectStore(StateSlot())
        store.load()
        request.app.state.store = store
    return store
