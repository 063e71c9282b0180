"""
Durable slot for the project store.

The whole store is serialized as one JSON record under a fixed key in the
state_records table. Writes are a single transaction: the new payload
replaces the old one only on commit, so a failed write leaves the previously
saved state intact.

Reading is forward-compatible:
- a record without preferences gets the default preferences, everything else kept
- rooms saved in the legacy schema (length/width/tileLength/..., results.area/tiles/
  mortar/grout) are migrated to the current field names and recomputed
- anything else that doesn't decode raises PersistenceCorrupt
"""

import json
import logging
import uuid
from typing import Optional

from pydantic import ValidationError

from . import models
from .calculators.tiling import compute
from .config import settings
from .coverage import LEGACY_MORTAR_CONSUMPTION
from .database import SessionLocal
from .errors import InvalidInput, PersistenceCorrupt
from .schemas import Preferences, StoreState

logger = logging.getLogger(__name__)

# Legacy room field → current stored field
LEGACY_ROOM_FIELDS = {
    "length": "length_m",
    "width": "width_m",
    "tileLength": "tileLength_cm",
    "tileWidth": "tileWidth_cm",
    "groutJoint": "groutJoint_mm",
    "wasteMargin": "wasteMargin_pct",
    "cementWeight": "mortarBagWeight_kg",
}


def new_id() -> str:
    return uuid.uuid4().hex


class StateSlot:
    """One keyed record in the state_records table."""

    def __init__(self, session_factory=SessionLocal, key: str = settings.STATE_KEY):
        self.session_factory = session_factory
        self.key = key

    def read(self) -> Optional[str]:
        """Raw payload, or None if nothing has been saved under this key yet."""
        db = self.session_factory()
        try:
            record = db.query(models.StateRecord).filter(models.StateRecord.key == self.key).first()
            return record.payload if record else None
        finally:
            db.close()

    def write(self, payload: str) -> None:
        db = self.session_factory()
        try:
            record = db.query(models.StateRecord).filter(models.StateRecord.key == self.key).first()
            if record:
                record.payload = payload
            else:
                db.add(models.StateRecord(key=self.key, payload=payload))
            db.commit()
            logger.debug("Saved state under %s (%d bytes)", self.key, len(payload))
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def encode_state(state: StoreState) -> str:
    return state.model_dump_json(by_alias=True)


def decode_state(payload: str) -> StoreState:
    """Parse a stored record into a StoreState. Raises PersistenceCorrupt."""
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise PersistenceCorrupt(f"State record is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceCorrupt(f"State record must be an object, got {type(data).__name__}")

    data = dict(data)
    data["preferences"] = _migrate_preferences(data.get("preferences"))

    projects = data.get("projects")
    if projects is None:
        projects = []
    if not isinstance(projects, list):
        raise PersistenceCorrupt("State record 'projects' must be a list")
    data["projects"] = [_migrate_project(project) for project in projects]

    try:
        state = StoreState.model_validate(data)
    except ValidationError as e:
        raise PersistenceCorrupt(f"State record does not match the store schema: {e}") from e

    # A selection pointing at a project that no longer exists is dropped
    if state.current_project_id is not None and \
            not any(p.id == state.current_project_id for p in state.projects):
        state.current_project_id = None
    return state


def _migrate_preferences(preferences) -> dict:
    if preferences is None:
        return Preferences().model_dump(by_alias=True, mode="json")
    try:
        return Preferences.model_validate(preferences).model_dump(by_alias=True, mode="json")
    except ValidationError:
        logger.warning("Stored preferences are unreadable, using defaults")
        return Preferences().model_dump(by_alias=True, mode="json")


def _migrate_project(project) -> dict:
    if not isinstance(project, dict):
        raise PersistenceCorrupt(f"Project record must be an object, got {type(project).__name__}")
    rooms = project.get("rooms")
    if rooms is None:
        rooms = []
    if not isinstance(rooms, list):
        raise PersistenceCorrupt(f"Rooms of project {project.get('id')} must be a list")

    migrated = []
    for room in rooms:
        if _is_legacy_room(room):
            room = _migrate_legacy_room(room)
            if room is None:
                continue
        migrated.append(room)
    return {**project, "rooms": migrated}


def _is_legacy_room(room) -> bool:
    return isinstance(room, dict) and "tileLength" in room and "tileLength_cm" not in room


def _migrate_legacy_room(room: dict) -> Optional[dict]:
    """
    Map a legacy room onto the current schema and recompute its results.

    Legacy rooms had no mortar consumption field; they were estimated at a
    fixed 5 kg/m². Returns None (room dropped) if its geometry is invalid.
    """
    spec = {
        new: room[old]
        for old, new in LEGACY_ROOM_FIELDS.items()
        if room.get(old) is not None
    }
    spec["mortarConsumption_kg_per_m2"] = LEGACY_MORTAR_CONSUMPTION

    try:
        results = compute(spec)
    except InvalidInput as e:
        logger.warning("Dropping legacy room %s (%s): %s", room.get("id"), room.get("name"), e)
        return None

    return {
        **spec,
        "id": str(room["id"]) if room.get("id") is not None else new_id(),
        "name": room.get("name") or settings.DEFAULT_ROOM_NAME,
        "results": results.model_dump(by_alias=True),
    }
