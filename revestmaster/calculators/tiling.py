"""
Tiling calculator: floor or wall covered with rectangular tiles.

Area with waste = length × width × (1 + waste%).
Tiles = ceil(area with waste / tile area).
Mortar bags = ceil(area with waste × consumption / bag weight).
Grout = coverage formula (coverage.py) × area with waste, rounded to 0.01 kg.
"""

import logging
from collections.abc import Mapping

from pydantic import ValidationError

from .base import BaseCalculator
from ..coverage import cm_to_mm, tile_area_m2, grout_consumption
from ..errors import InvalidInput
from ..schemas import RoomSpec, MaterialResult

logger = logging.getLogger(__name__)


def as_room_spec(spec) -> RoomSpec:
    """
    Normalize calculator input to a plain RoomSpec.

    Accepts a RoomSpec (or a subclass such as Room / RoomIn, whose extra fields
    are dropped) or a mapping keyed by either the stored or the Python field names.
    """
    if isinstance(spec, RoomSpec):
        if type(spec) is RoomSpec:
            return spec
        return RoomSpec(**spec.model_dump(include=set(RoomSpec.model_fields)))
    if isinstance(spec, Mapping):
        try:
            return RoomSpec.model_validate(dict(spec))
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            raise InvalidInput(f"Invalid room spec: {field}: {first.get('msg')}", field=field) from e
    raise InvalidInput(f"Room spec must be a RoomSpec or a mapping, got {type(spec).__name__}")


class TilingCalculator(BaseCalculator):

    def calculate(self, spec) -> MaterialResult:
        spec = as_room_spec(spec)

        # Validate everything before computing anything
        length_m = self.require_positive(spec.length_m, "length_m")
        width_m = self.require_positive(spec.width_m, "width_m")
        tile_length_cm = self.require_positive(spec.tile_length_cm, "tileLength_cm")
        tile_width_cm = self.require_positive(spec.tile_width_cm, "tileWidth_cm")
        bag_weight_kg = self.require_positive(spec.mortar_bag_weight_kg, "mortarBagWeight_kg")
        joint_mm = self.require_non_negative(spec.grout_joint_mm, "groutJoint_mm")
        waste_pct = self.require_non_negative(spec.waste_margin_pct, "wasteMargin_pct")
        consumption = self.require_non_negative(spec.mortar_consumption_kg_per_m2,
                                                "mortarConsumption_kg_per_m2")

        # 1-2. Area
        area = length_m * width_m
        area_with_waste = self.apply_waste(area, waste_pct)

        # 3. Tiles
        tiles = self.round_up(area_with_waste / tile_area_m2(tile_length_cm, tile_width_cm))

        # 4. Mortar
        mortar_bags = self.round_up(area_with_waste * consumption / bag_weight_kg)

        # 5. Grout
        per_m2 = grout_consumption(cm_to_mm(tile_length_cm), cm_to_mm(tile_width_cm), joint_mm)
        grout_kg = self.round_half_up(per_m2 * area_with_waste)

        logger.debug(
            "Tiling %.2fx%.2f m, tile %sx%s cm: %d tiles, %d bags, %.2f kg grout",
            length_m, width_m, tile_length_cm, tile_width_cm, tiles, mortar_bags, grout_kg,
        )

        return MaterialResult(
            area_m2=self.round_half_up(area),
            area_with_waste_m2=self.round_half_up(area_with_waste),
            tiles_units=tiles,
            mortar_bags=mortar_bags,
            grout_kg=grout_kg,
        )


_calculator = TilingCalculator()


def compute(spec) -> MaterialResult:
    """Estimate materials for one room. Raises InvalidInput; never partially computes."""
    return _calculator.calculate(spec)
