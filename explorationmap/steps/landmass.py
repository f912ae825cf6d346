"""Stages that find, tidy and rank the land and water bodies of the map."""

from __future__ import annotations

from explorationmap.core import (
    INVALID_LAND_ID,
    INVALID_WATER_ID,
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    FloodFillEntry,
    read_world_point,
    wrap_world_point,
)
from explorationmap.floodfill import flood_fill
from explorationmap.steps.base import MapGenStep

WATER_GROUP_OFFSET = 2
LAND_GROUP_OFFSET = 3

MAX_REDUNDANT_ISLAND_SIZE = 30
MAX_REDUNDANT_WATER_SIZE = 100
WEIGHTED_LAND_SIZE = 100
EDGE_FLAG = 1 << 15


def _read_altitude(map_data: ExplorationMapData, x: int, y: int) -> int:
    return map_data.voxel_byte(wrap_world_point(x, y), 0)


def _is_land(map_data: ExplorationMapData, altitude: int) -> bool:
    return altitude >= map_data.sea_level


def _is_water(map_data: ExplorationMapData, altitude: int) -> bool:
    return altitude < map_data.sea_level


def _check_groups(map_data: ExplorationMapData) -> None:
    """Every cell must belong to a water group, a land group, or both."""
    for y in range(map_data.height):
        for x in range(map_data.width):
            point = wrap_world_point(x, y)
            water = map_data.voxel_byte(point, WATER_GROUP_OFFSET)
            land = map_data.voxel_byte(point, LAND_GROUP_OFFSET)
            if water == INVALID_WATER_ID and land == INVALID_LAND_ID:
                raise RuntimeError(f"cell ({x}, {y}) belongs to neither land nor water")


def _flood_fill_land_and_water(
    map_data: ExplorationMapData,
) -> tuple[list[FloodFillEntry], list[FloodFillEntry]]:
    water = flood_fill(_is_water, _read_altitude, map_data, WATER_GROUP_OFFSET)
    land = flood_fill(_is_land, _read_altitude, map_data, LAND_GROUP_OFFSET)
    _check_groups(map_data)
    return water, land


class PerformPreFloodFillStep(MapGenStep):
    """Find the first land and water bodies, kept in the workspace."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        workspace.water_data, workspace.land_data = _flood_fill_land_and_water(map_data)


def _drop_small(
    entries: list[FloodFillEntry], max_size: int, map_data: ExplorationMapData, altitude: int
) -> list[FloodFillEntry]:
    kept: list[FloodFillEntry] = []
    for entry in entries:
        if entry.total <= max_size:
            for point in entry.coords:
                map_data.set_voxel_byte(point, 0, altitude)
        else:
            kept.append(entry)
    return kept


class RemoveRedundantIslandsStep(MapGenStep):
    """Sink islands too small to matter just below sea level."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        workspace.land_data = _drop_small(
            workspace.land_data,
            MAX_REDUNDANT_ISLAND_SIZE,
            map_data,
            (int(map_data.sea_level) - 1) & 0xFF,
        )


class RemoveRedundantWaterStep(MapGenStep):
    """Raise small ponds up to sea level, turning them into land."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        workspace.water_data = _drop_small(
            workspace.water_data,
            MAX_REDUNDANT_WATER_SIZE,
            map_data,
            int(map_data.sea_level) & 0xFF,
        )


class PerformFinalFloodFillStep(MapGenStep):
    """Find the final land and water bodies and store them on the map."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        map_data.water_data, map_data.land_data = _flood_fill_land_and_water(map_data)


class WeightAndSortLandmassesStep(MapGenStep):
    """Sort landmasses largest first and build the weighted pick list.

    Each landmass gets one slot, filled from the smallest upwards; the
    remaining slots stay with the largest landmass (index 0).
    """

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        map_data.land_data.sort(key=lambda entry: entry.total, reverse=True)

        count = len(map_data.land_data)
        start = WEIGHTED_LAND_SIZE if count > WEIGHTED_LAND_SIZE else count - 1
        smallest_first = list(range(start, -1, -1))[:WEIGHTED_LAND_SIZE]
        weighted = smallest_first + [0] * (WEIGHTED_LAND_SIZE - len(smallest_first))
        workspace.land_weighted = weighted


class DetermineEdgesStep(MapGenStep):
    """Flag the edge voxels of every land and water body."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        voxels = map_data.voxel_buffer
        for entries in (map_data.land_data, map_data.water_data):
            for entry in entries:
                for point in entry.edges:
                    x, y = read_world_point(point)
                    idx = x + y * input_data.width
                    voxels[idx] = int(voxels[idx]) | EDGE_FLAG