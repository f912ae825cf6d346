"""Stages that build the raw terrain: metadata, buffers, noise and altitude."""

from __future__ import annotations

import math
from typing import Iterator, Sequence

from explorationmap.core import (
    BLOB_SIZE,
    HALF_BLOB_SIZE,
    LINE_BOX_SIZE,
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    random_int,
    read_world_point,
    wrap_world_point,
)
from explorationmap.perlin import PerlinNoise
from explorationmap.rng import map_gen_random
from explorationmap.steps.base import MapGenStep

NUM_BLOBS = 3
NUM_JOBS = 4
_BLOB_PLACEMENT_ATTEMPTS = 50


def _distance(x1: float, y1: float, x2: float, y2: float) -> float:
    return math.hypot(x1 - x2, y1 - y2)


def _job_rows(height: int) -> Iterator[int]:
    """Rows covered by the four equal horizontal strips the work is split into.

    Each strip is ``height // 4`` rows tall, so any remainder rows at the
    bottom of the map are left untouched.
    """
    strip = height // NUM_JOBS
    for job in range(NUM_JOBS):
        yield from range(job * strip, job * strip + strip)


def bresenham_line(start_x: int, start_y: int, end_x: int, end_y: int) -> list[tuple[int, int]]:
    """Points stepped through between two ends, excluding both ends."""
    delta_x = abs(end_x - start_x)
    delta_y = abs(end_y - start_y)
    step_x = 1 if start_x < end_x else -1
    step_y = 1 if start_y < end_y else -1

    x, y = start_x, start_y
    difference = delta_x - delta_y
    points: list[tuple[int, int]] = []
    while True:
        doubled = 2 * difference
        if doubled > -delta_y:
            difference -= delta_y
            x += step_x
        if doubled < delta_x:
            difference += delta_x
            y += step_y
        if x == end_x and y == end_y:
            break
        points.append((x, y))
    return points


def point_to_line_distance(
    x0: float, y0: float, x1: float, y1: float, x2: float, y2: float
) -> float:
    """Distance from ``(x0, y0)`` to the infinite line through two points.

    A degenerate line (both points equal) gives 0.
    """
    dx = x2 - x1
    dy = y2 - y1
    numerator = abs(dy * x0 - dx * y0 + x2 * y1 - y2 * x1)
    denominator = math.sqrt(dx * dx + dy * dy)
    return numerator / denominator if denominator != 0 else 0.0


def _determine_blob_position(map_data: ExplorationMapData, seeds: Sequence[int], idx: int) -> int:
    x = y = 0
    for _ in range(_BLOB_PLACEMENT_ATTEMPTS):
        x = random_int(int(HALF_BLOB_SIZE), int(map_data.width - HALF_BLOB_SIZE))
        y = random_int(int(HALF_BLOB_SIZE), int(map_data.height - HALF_BLOB_SIZE))
        if idx == 0:
            break
        collision = False
        for seed in seeds[:idx]:
            sx, sy = read_world_point(seed)
            if _distance(x, y, sx, sy) < BLOB_SIZE:
                collision = True
        if not collision:
            break
    return wrap_world_point(x, y)


class GenerateMetaStep(MapGenStep):
    """Copy the input settings onto the map and choose the blob seeds."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        map_data.width = input_data.width
        map_data.height = input_data.height
        map_data.sea_level = input_data.sea_level
        map_data.moisture_seed = input_data.moisture_seed
        map_data.seed = input_data.seed
        map_data.variation_seed = input_data.variation_seed

        map_gen_random.seed(map_data.variation_seed)

        for i in range(NUM_BLOBS):
            workspace.blob_seeds.append(_determine_blob_position(map_data, workspace.blob_seeds, i))


class SetupBuffersStep(MapGenStep):
    """Allocate the voxel, secondary voxel and blue noise buffers."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        count = map_data.width * map_data.height
        map_data.voxel_buffer = [0.0] * count
        map_data.secondary_voxel_buffer = [0.0] * count
        map_data.blue_noise_buffer = [0.0] * count


class GenerateNoiseStep(MapGenStep):
    """Fill altitude, moisture and blue noise buffers from seeded noise."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        width = map_data.width
        altitude = PerlinNoise(map_data.seed)
        moisture = PerlinNoise(map_data.moisture_seed)
        variation = PerlinNoise(map_data.variation_seed)
        rows = list(_job_rows(input_data.height))

        for y in rows:
            for x in range(input_data.width):
                map_data.voxel_buffer[x + y * width] = altitude.perlin2d(x, y, 0.02, 4)
        for y in rows:
            for x in range(input_data.width):
                map_data.secondary_voxel_buffer[x + y * width] = moisture.perlin2d(x, y, 0.05, 4)
        for y in rows:
            for x in range(input_data.width):
                map_data.blue_noise_buffer[x + y * width] = variation.perlin2d(x, y, 0.5, 1)


def _calculate_lines(
    idx: int, values: list[float], map_data: ExplorationMapData, seeds: Sequence[int]
) -> None:
    x1, y1 = read_world_point(seeds[idx])
    x2, y2 = read_world_point(seeds[idx + 1])

    box = int(LINE_BOX_SIZE)
    draw_points = {
        (x + dx, y + dy)
        for x, y in bresenham_line(x1, y1, x2, y2)
        for dy in range(-box, box)
        for dx in range(-box, box)
    }

    max_distance = math.sqrt(LINE_BOX_SIZE ** 2 * 2) * 1.05
    width = map_data.width
    for x, y in draw_points:
        if x < 0 or y < 0 or x >= width or y >= map_data.height:
            continue
        distance = max_distance - point_to_line_distance(x, y, x1, y1, x2, y2)
        write = distance / width
        idx_val = x + y * width
        if write > values[idx_val]:
            values[idx_val] = write


def _calculate_blobs(values: list[float], map_data: ExplorationMapData, seeds: Sequence[int]) -> None:
    width = map_data.width
    height = map_data.height
    size = int(BLOB_SIZE)
    half = int(HALF_BLOB_SIZE)
    for seed in seeds[:NUM_BLOBS]:
        px, py = read_world_point(seed)
        for y in range(size):
            yy = y + py - half
            if yy < 0 or yy >= height:
                continue
            for x in range(size):
                xx = x + px - half
                if xx < 0 or xx >= width:
                    continue
                offset = _distance(xx, yy, px, py)
                val = (HALF_BLOB_SIZE - offset) / width * 2
                idx = xx + yy * width
                if val > values[idx]:
                    values[idx] = val


class GenerateAdditionLayerStep(MapGenStep):
    """Build a layer that raises land around the blob seeds and between them."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        seeds = workspace.blob_seeds
        if len(seeds) < NUM_BLOBS:
            raise ValueError(f"{NUM_BLOBS} blob seeds are needed, got {len(seeds)}")
        values = [0.0] * (map_data.width * map_data.height)
        for i in range(len(seeds) - 1):
            _calculate_lines(i, values, map_data, seeds)
        _calculate_blobs(values, map_data, seeds)
        workspace.addition_layer = values


def _height_for_point(
    value: float, x: float, y: float, idx: int, addition: Sequence[float]
) -> float:
    centre_offset = _distance(0.5, 0.5, x, y) + 0.1
    result = (1.0 - centre_offset * 1.2) * value * 1.3
    result += addition[idx] * 1.2
    return min(result, 1.0)


class MergeAltitudeStep(MapGenStep):
    """Fade altitude towards the map edges and add the addition layer."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        width = map_data.width
        voxels = map_data.voxel_buffer
        addition = workspace.addition_layer
        for y in _job_rows(input_data.height):
            y_val = y / map_data.height
            for x in range(input_data.width):
                idx = x + y * width
                voxels[idx] = _height_for_point(voxels[idx], x / width, y_val, idx, addition)


class ReduceNoiseStep(MapGenStep):
    """Convert unit-range altitude and moisture into whole byte values."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        width = map_data.width
        rows = list(_job_rows(input_data.height))

        voxels = map_data.voxel_buffer
        for y in rows:
            for x in range(input_data.width):
                idx = x + y * width
                voxels[idx] = int(float(voxels[idx]) * 0xFF) & 0xFFFFFFFF

        secondary = map_data.secondary_voxel_buffer
        for y in rows:
            for x in range(input_data.width):
                idx = x + y * width
                val = float(secondary[idx]) * 0xFF
                if val > 0xFF:
                    raise ValueError(f"moisture at ({x}, {y}) is above the unit range")
                secondary[idx] = int(val) & 0xFFFFFFFF