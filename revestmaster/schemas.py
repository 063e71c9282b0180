from pydantic import BaseModel, Field
from typing import Optional, List
from .config import settings
from .models import Theme

# Stored/wire names follow the persisted record shape (camelCase with unit
# suffixes); Python attribute names are snake_case.


class RoomSpec(BaseModel):
    length_m: float
    width_m: float
    tile_length_cm: float = Field(alias="tileLength_cm")
    tile_width_cm: float = Field(alias="tileWidth_cm")
    grout_joint_mm: float = Field(default=settings.DEFAULT_GROUT_JOINT_MM, alias="groutJoint_mm")
    waste_margin_pct: float = Field(default=settings.DEFAULT_WASTE_MARGIN_PCT, alias="wasteMargin_pct")
    mortar_consumption_kg_per_m2: float = Field(
        default=settings.DEFAULT_MORTAR_CONSUMPTION, alias="mortarConsumption_kg_per_m2")
    mortar_bag_weight_kg: float = Field(default=settings.DEFAULT_MORTAR_BAG_WEIGHT, alias="mortarBagWeight_kg")

    class Config:
        populate_by_name = True
        frozen = True


class MaterialResult(BaseModel):
    area_m2: float
    area_with_waste_m2: float = Field(alias="areaWithWaste_m2")
    tiles_units: int = Field(ge=0)
    mortar_bags: int = Field(alias="mortarBags", ge=0)
    grout_kg: float = Field(alias="groutKg", ge=0)

    class Config:
        populate_by_name = True
        frozen = True


class Room(RoomSpec):
    """Spec fields flattened next to the identity, plus the cached result."""
    id: str
    name: str
    results: MaterialResult


class RoomIn(RoomSpec):
    name: Optional[str] = None


class Project(BaseModel):
    id: str
    name: str
    rooms: List[Room] = []


class ProjectCreate(BaseModel):
    name: str = ""


class Preferences(BaseModel):
    theme: Theme = Theme.LIGHT
    sidebar_collapsed: bool = Field(default=True, alias="sidebarCollapsed")

    class Config:
        populate_by_name = True


class StoreState(BaseModel):
    projects: List[Project] = []
    current_project_id: Optional[str] = Field(default=None, alias="currentProjectId")
    preferences: Preferences = Field(default_factory=Preferences)

    class Config:
        populate_by_name = True


class ProjectTotals(BaseModel):
    area: float
    tiles: int
    mortar_bags: int = Field(alias="mortarBags")
    grout: float

    class Config:
        populate_by_name = True


class ProjectSummary(BaseModel):
    id: str
    name: str
    room_count: int = Field(alias="roomCount")
    total_area_m2: float = Field(alias="totalArea_m2")

    class Config:
        populate_by_name = True


class StoreOverview(BaseModel):
    projects: List[ProjectSummary] = []
    current_project_id: Optional[str] = Field(default=None, alias="currentProjectId")

    class Config:
        populate_by_name = True


class ThemeUpdate(BaseModel):
    theme: Theme


class SidebarToggle(BaseModel):
    collapsed: Optional[bool] = None
