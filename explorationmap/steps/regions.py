"""Stages that split the land into regions and give some of them a type."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from explorationmap.collision import CollisionWorld
from explorationmap.core import (
    INVALID_LAND_ID,
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    FloodFillEntry,
    RegionData,
    RegionMeta,
    RegionType,
    random_index,
    random_int,
    read_world_point,
    wrap_world_point,
)
from explorationmap.floodfill import flood_fill_at
from explorationmap.steps.base import MapGenStep

NUM_MAIN_REGIONS = 3
MAIN_REGION_SEED_SIZE = 100
MAIN_REGION_COLLISION_RADIUS = 80
REGION_SEED_SIZE = 20
REGION_PADDING = 30
SEED_COLLISION_RADIUS = 2
MAX_SEED_DISTANCE = 10000.0
NUM_JOBS = 4
LAND_GROUP_OFFSET = 3

_TYPES_TO_ASSIGN = (RegionType.CHERRY_BLOSSOM_FOREST, RegionType.EXP_FIELDS, RegionType.DESERT)


@dataclass
class RegionSeed:
    """A point that land cells are assigned to by nearest distance."""

    point: int
    size: int


def _job_rows(height: int) -> Iterator[int]:
    """Rows of the four equal strips; remainder rows at the bottom are skipped."""
    strip = height // NUM_JOBS
    for job in range(NUM_JOBS):
        yield from range(job * strip, job * strip + strip)


def _determine_points(
    map_data: ExplorationMapData, seeds: list[RegionSeed], collision: CollisionWorld
) -> None:
    """Scatter extra region seeds over land on a coarse grid."""
    low = int(REGION_PADDING * 0.75)
    for y in range(0, map_data.height, REGION_PADDING):
        for x in range(0, map_data.width, REGION_PADDING):
            land = map_data.voxel_byte(wrap_world_point(x, y), LAND_GROUP_OFFSET)
            if land == INVALID_LAND_ID:
                continue
            if random_int(0, 2) == 0:
                continue

            xx = (x + random_int(low, REGION_PADDING)) & 0xFFFF
            yy = (y + random_int(low, REGION_PADDING)) & 0xFFFF
            if collision.check_collision_point(xx, yy, SEED_COLLISION_RADIUS):
                continue

            seeds.append(RegionSeed(wrap_world_point(xx, yy), REGION_SEED_SIZE))
            map_data.region_data.append(
                RegionData(id=len(map_data.region_data) & 0xFF, seed_x=xx, seed_y=yy)
            )


def _assign_cells(
    map_data: ExplorationMapData, input_data: ExplorationMapInputData, seeds: list[RegionSeed]
) -> None:
    """Give every land cell to the region whose seed is nearest."""
    seed_coords = [read_world_point(seed.point) for seed in seeds]
    for y in _job_rows(input_data.height):
        for x in range(input_data.width):
            point = wrap_world_point(x, y)
            if map_data.voxel_byte(point, 0) < map_data.sea_level:
                continue
            closest = MAX_SEED_DISTANCE
            closest_idx = -1
            for idx, (sx, sy) in enumerate(seed_coords):
                length = math.hypot(sx - x, sy - y)
                if length < closest:
                    closest = length
                    closest_idx = idx
            if closest_idx != -1:
                region = map_data.region_data[closest_idx]
                region.coords.append(point)
                region.total += 1


class DetermineEarlyRegionsStep(MapGenStep):
    """Seed regions at the blobs and across the land, then split land by nearest seed."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        if len(workspace.blob_seeds) < NUM_MAIN_REGIONS:
            raise ValueError(
                f"{NUM_MAIN_REGIONS} blob seeds are needed, got {len(workspace.blob_seeds)}"
            )

        collision = CollisionWorld(0)
        seeds: list[RegionSeed] = []
        for i, blob_seed in enumerate(workspace.blob_seeds[:NUM_MAIN_REGIONS]):
            x, y = read_world_point(blob_seed)
            seeds.append(RegionSeed(blob_seed, MAIN_REGION_SEED_SIZE))
            collision.add_collision_point(x, y, MAIN_REGION_COLLISION_RADIUS)
            map_data.region_data.append(
                RegionData(id=i, seed_x=x, seed_y=y, meta=int(RegionMeta.MAIN_REGION))
            )

        _determine_points(map_data, seeds, collision)
        _assign_cells(map_data, input_data, seeds)

        map_data.region_data = [r for r in map_data.region_data if r.total != 0]
        for idx, region in enumerate(map_data.region_data):
            region.id = idx & 0xFF
            for point in region.coords:
                map_data.set_region(point, region.id)


def _isolate_region(
    map_data: ExplorationMapData, region: RegionData, check_region: int, vals: list[int]
) -> None:
    """Split ``region`` into connected pieces, appending new regions for the extras."""

    def compare(data: ExplorationMapData, value: int) -> bool:
        altitude = (value >> 16) & 0xFF
        return altitude >= data.sea_level and (value & 0xFFFF) == check_region

    def read(data: ExplorationMapData, x: int, y: int) -> int:
        point = wrap_world_point(x, y)
        return (data.voxel_byte(point, 0) << 16) | data.region_at(point)

    current = region
    while True:
        if not current.coords:
            raise ValueError(f"region {current.id} has no coordinates to isolate")
        start_x, start_y = read_world_point(current.coords[0])
        result: list[FloodFillEntry] = []
        entry = flood_fill_at(compare, read, start_x, start_y, map_data, 0, vals, result)
        if entry is None:
            raise RuntimeError(f"region {current.id} could not be flood filled")

        current.edges = entry.edges
        if len(entry.coords) == len(current.coords):
            return

        filled = set(entry.coords)
        remaining = [p for p in current.coords if p not in filled]
        if not remaining or len(filled) >= len(current.coords):
            raise RuntimeError(f"region {current.id} flood fill escaped its coordinates")
        current.coords = entry.coords
        current.total = len(current.coords)

        seed_x, seed_y = read_world_point(remaining[0])
        new_region = RegionData(
            id=len(map_data.region_data) & 0xFF,
            seed_x=seed_x,
            seed_y=seed_y,
            coords=remaining,
            total=len(remaining),
        )
        map_data.region_data.append(new_region)
        current = new_region


class IsolateRegionsStep(MapGenStep):
    """Make every region one connected piece, splitting off the disconnected parts."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        vals = [0xFF] * (map_data.width * map_data.height)
        for region in list(map_data.region_data):
            _isolate_region(map_data, region, region.id, vals)

        for region in map_data.region_data:
            for point in region.coords:
                map_data.set_region(point, region.id)


class DetermineRegionTypesStep(MapGenStep):
    """Hand the special region types out at random among the three main regions."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        free_regions = list(range(NUM_MAIN_REGIONS))
        for region_type in _TYPES_TO_ASSIGN:
            target = random_index(free_regions)
            if target >= len(free_regions):
                continue
            region = map_data.region_data[free_regions[target]]
            region.type = region_type
            if region_type == RegionType.DESERT:
                region.meta |= int(RegionMeta.EXPANDABLE)
            del free_regions[target]