"""Biomes: how each region type colours, shapes and decorates its land."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from explorationmap.core import (
    ExplorationMapData,
    MapVoxelTypes,
    PlacedItemData,
    PlacedItemId,
    RegionType,
    random_int,
)

VoxFunction = Callable[[int, int, ExplorationMapData], MapVoxelTypes]
AltitudeFunction = Callable[[int, int, int, int, ExplorationMapData], int]
PlaceObjectFunction = Callable[
    [list[PlacedItemData], ExplorationMapData, int, int, int, int, int, int], None
]


class BiomeId(IntEnum):
    NONE = 0
    GRASS_LAND = 1
    GRASS_FOREST = 2
    CHERRY_BLOSSOM_FOREST = 3
    EXP_FIELD = 4
    DESERT = 5
    SHALLOW_OCEAN = 6
    DEEP_OCEAN = 7


@dataclass(frozen=True)
class Biome:
    """The three functions that decide a biome's voxels, objects and altitude."""

    vox_function: Optional[VoxFunction]
    placement_function: Optional[PlaceObjectFunction]
    altitude_function: Optional[AltitudeFunction]


def process_r_value(map_data: ExplorationMapData, x: int, y: int, radius: int) -> bool:
    """True if ``(x, y)`` holds the highest blue noise within ``radius``."""
    best = 0.0
    best_x, best_y = x, y
    width = map_data.width
    height = map_data.height
    noise = map_data.blue_noise_buffer
    for dy in range(-radius, radius + 1):
        yn = y + dy
        if not 0 <= yn < height:
            continue
        for dx in range(-radius, radius + 1):
            xn = x + dx
            if not 0 <= xn < width:
                continue
            value = noise[xn + yn * width]
            if value > best:
                best = value
                best_x, best_y = xn, yn
    return best_x == x and best_y == y


def _is_river(flags: int) -> bool:
    return bool(flags & MapVoxelTypes.RIVER)


def _grass_land_vox(altitude: int, moisture: int, map_data: ExplorationMapData) -> MapVoxelTypes:
    if altitude >= map_data.sea_level + 10:
        if moisture >= map_data.sea_level + 50:
            return MapVoxelTypes.TREES
        return MapVoxelTypes.DIRT
    return MapVoxelTypes.SAND


def _grass_land_place(placed_items, map_data, x, y, altitude, region, flags, moisture) -> None:
    if _is_river(flags):
        return
    if altitude >= map_data.sea_level + 10:
        if process_r_value(map_data, x, y, 1 if moisture >= 150 else 6):
            apple = random_int(0, 100) == 0
            item = PlacedItemId.TREE_APPLE if apple else PlacedItemId.TREE
            placed_items.append(PlacedItemData(x, y, region, item))


def _grass_forest_vox(altitude: int, moisture: int, map_data: ExplorationMapData) -> MapVoxelTypes:
    return MapVoxelTypes.TREES


def _grass_forest_place(placed_items, map_data, x, y, altitude, region, flags, moisture) -> None:
    if _is_river(flags):
        return
    if process_r_value(map_data, x, y, 1):
        placed_items.append(PlacedItemData(x, y, region, PlacedItemId.TREE))


def _cherry_blossom_vox(altitude: int, moisture: int, map_data: ExplorationMapData) -> MapVoxelTypes:
    if altitude < map_data.sea_level + 10:
        return MapVoxelTypes.SAND
    return MapVoxelTypes.TREES_CHERRY_BLOSSOM


def _cherry_blossom_place(placed_items, map_data, x, y, altitude, region, flags, moisture) -> None:
    if _is_river(flags):
        return
    if altitude < map_data.sea_level + 10:
        return
    if process_r_value(map_data, x, y, 1):
        placed_items.append(PlacedItemData(x, y, region, PlacedItemId.CHERRY_BLOSSOM_TREE))


def _exp_field_vox(altitude: int, moisture: int, map_data: ExplorationMapData) -> MapVoxelTypes:
    if altitude < map_data.sea_level + 10:
        return MapVoxelTypes.SAND_EXP_FIELD
    return MapVoxelTypes.DIRT_EXP_FIELD


def _sand_vox(altitude: int, moisture: int, map_data: ExplorationMapData) -> MapVoxelTypes:
    return MapVoxelTypes.SAND


def _desert_place(placed_items, map_data, x, y, altitude, region, flags, moisture) -> None:
    if _is_river(flags):
        return
    if process_r_value(map_data, x, y, 12):
        placed_items.append(PlacedItemData(x, y, region, PlacedItemId.CACTUS))


def _no_place(placed_items, map_data, x, y, altitude, region, flags, moisture) -> None:
    return None


def _no_altitude(altitude: int, moisture: int, x: int, y: int, map_data: ExplorationMapData) -> int:
    return altitude


def _desert_altitude(altitude: int, moisture: int, x: int, y: int, map_data: ExplorationMapData) -> int:
    """Raise the land into dunes, kept above sea level and below 255."""
    dune = abs(math.sin(float(x) * 0.1)) * 60 - 20
    height = float(altitude) + dune
    if height < map_data.sea_level:
        height = float(map_data.sea_level)
    elif height >= 0xFF:
        height = float(0xFF - 1)
    return int(height) & 0xFF


_BIOMES: dict[BiomeId, Biome] = {
    BiomeId.NONE: Biome(None, None, None),
    BiomeId.GRASS_LAND: Biome(_grass_land_vox, _grass_land_place, _no_altitude),
    BiomeId.GRASS_FOREST: Biome(_grass_forest_vox, _grass_forest_place, _no_altitude),
    BiomeId.CHERRY_BLOSSOM_FOREST: Biome(_cherry_blossom_vox, _cherry_blossom_place, _no_altitude),
    BiomeId.EXP_FIELD: Biome(_exp_field_vox, _no_place, _no_altitude),
    BiomeId.DESERT: Biome(_sand_vox, _desert_place, _desert_altitude),
    BiomeId.SHALLOW_OCEAN: Biome(_sand_vox, _no_place, _no_altitude),
    BiomeId.DEEP_OCEAN: Biome(_sand_vox, _no_place, _no_altitude),
}

_REGION_BIOMES: dict[RegionType, BiomeId] = {
    RegionType.GRASSLAND: BiomeId.GRASS_LAND,
    RegionType.CHERRY_BLOSSOM_FOREST: BiomeId.CHERRY_BLOSSOM_FOREST,
    RegionType.EXP_FIELDS: BiomeId.EXP_FIELD,
    RegionType.DESERT: BiomeId.DESERT,
}


def get_biome(region_type: RegionType) -> Biome:
    """The biome used for ``region_type``; grassland for anything unlisted."""
    return _BIOMES[_REGION_BIOMES.get(region_type, BiomeId.GRASS_LAND)]