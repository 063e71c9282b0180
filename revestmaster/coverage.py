# Tiling coverage constants. Source: coverage tables for rectified ceramic tile grouting

TILE_THICKNESS_MM = 8.0      # average tile thickness, assumed for every tile
GROUT_DENSITY = 1.58         # cementitious grout, kg/dm³

# Rooms saved before mortar consumption became a room field used a fixed rate
LEGACY_MORTAR_CONSUMPTION = 5.0  # kg/m²


def cm_to_mm(value_cm: float) -> float:
    return value_cm * 10


def cm_to_m(value_cm: float) -> float:
    return value_cm / 100


def tile_area_m2(tile_length_cm: float, tile_width_cm: float) -> float:
    """Face area of one tile in m²."""
    return cm_to_m(tile_length_cm) * cm_to_m(tile_width_cm)


def grout_consumption(tile_length_mm: float, tile_width_mm: float, joint_mm: float,
                      thickness_mm: float = TILE_THICKNESS_MM,
                      density: float = GROUT_DENSITY) -> float:
    """
    Grout mass per m² of tiled surface (kg/m²).

    ((L + W) / (L × W)) × J × H × density, with L, W, J, H in mm.
    Evaluated left to right in exactly this order so stored results reconcile.
    """
    return ((tile_length_mm + tile_width_mm) / (tile_length_mm * tile_width_mm)) * joint_mm * thickness_mm * density
