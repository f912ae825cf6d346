"""Stages that trace rivers from the coast and carve them into the voxels."""

from __future__ import annotations

from typing import Optional, Sequence

from explorationmap.core import (
    INVALID_LAND_ID,
    INVALID_WORLD_POINT,
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    FloodFillEntry,
    MapVoxelTypes,
    RiverData,
    find_random_landmass_for_size,
    random_index,
    read_world_point,
    wrap_world_point,
)
from explorationmap.steps.base import MapGenStep

RIVER_MIN_LANDMASS = 20
MAX_RIVER_STEPS = 100
MIN_RIVER_LENGTH = 15

_NEIGHBOUR_OFFSETS = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-1, -1),
    (1, 1),
    (-1, -1),
    (1, 1),
)


def _in_bounds(map_data: ExplorationMapData, x: int, y: int) -> bool:
    return 0 <= x < map_data.width and 0 <= y < map_data.height


def _find_point_on_coast(land_data: Sequence[FloodFillEntry], land_id: int) -> int:
    edges = land_data[land_id].edges
    if not edges:
        return INVALID_WORLD_POINT
    return edges[random_index(edges)]


def _determine_river_origins(
    num_rivers: int, land_data: Sequence[FloodFillEntry], land_weighted: Sequence[int]
) -> list[int]:
    origins: list[int] = []
    for _ in range(num_rivers):
        land_id = find_random_landmass_for_size(land_data, land_weighted, RIVER_MIN_LANDMASS)
        if land_id == INVALID_LAND_ID:
            continue
        point = _find_point_on_coast(land_data, land_id)
        if point == INVALID_WORLD_POINT:
            continue
        origins.append(point)
    return origins


def _highest_neighbour(map_data: ExplorationMapData, x: int, y: int) -> Optional[tuple[int, int]]:
    """The first neighbour with the greatest non-zero altitude, or None."""
    best = 0
    found: Optional[tuple[int, int]] = None
    for dx, dy in _NEIGHBOUR_OFFSETS:
        nx, ny = x + dx, y + dy
        if not _in_bounds(map_data, nx, ny):
            continue
        altitude = map_data.voxel_byte(wrap_world_point(nx, ny), 0)
        if altitude > best:
            best = altitude
            found = (nx, ny)
    return found


def _calculate_rivers(origins: Sequence[int], map_data: ExplorationMapData) -> list[RiverData]:
    rivers: list[RiverData] = []
    for origin in origins:
        visited: set[int] = set()
        points: list[int] = []
        x, y = read_world_point(origin)
        for _ in range(MAX_RIVER_STEPS):
            step = _highest_neighbour(map_data, x, y)
            if step is None:
                break
            point = wrap_world_point(*step)
            if point in visited:
                break
            x, y = step
            visited.add(point)
            points.append(point)
        if len(points) <= MIN_RIVER_LENGTH:
            continue
        rivers.append(RiverData(origin, points))
    return rivers


class DetermineRiversStep(MapGenStep):
    """Trace rivers starting from random coast points of large landmasses."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        origins = _determine_river_origins(
            input_data.num_rivers, map_data.land_data, workspace.land_weighted
        )
        map_data.river_data = _calculate_rivers(origins, map_data)


class CarveRiversStep(MapGenStep):
    """Flag river voxels, widening each river point by its four neighbours."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        write_points: set[int] = set()
        for river in map_data.river_data:
            write_points.add(river.origin)
            for point in river.points:
                write_points.add(point)
                x, y = read_world_point(point)
                write_points.add(wrap_world_point(x - 1, y))
                write_points.add(wrap_world_point(x + 1, y))
                write_points.add(wrap_world_point(x, y - 1))
                write_points.add(wrap_world_point(x, y + 1))

        for point in write_points:
            x, y = read_world_point(point)
            if not _in_bounds(map_data, x, y):
                continue
            meta = map_data.voxel_byte(point, 1)
            map_data.set_voxel_byte(point, 1, meta | MapVoxelTypes.RIVER)