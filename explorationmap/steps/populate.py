"""Stage that applies each region's biome to its land voxels."""

from __future__ import annotations

from typing import Iterator

from explorationmap.biomes import get_biome
from explorationmap.core import (
    MAP_VOXEL_MASK,
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
)
from explorationmap.steps.base import MapGenStep

NUM_JOBS = 4


def _job_rows(height: int) -> Iterator[int]:
    """Rows of the four equal strips; remainder rows at the bottom are skipped."""
    strip = height // NUM_JOBS
    for job in range(NUM_JOBS):
        yield from range(job * strip, job * strip + strip)


class PopulateFinalBiomesStep(MapGenStep):
    """Set ground type and altitude for land voxels and place biome objects."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        voxels = map_data.voxel_buffer
        secondary = map_data.secondary_voxel_buffer
        for y in _job_rows(input_data.height):
            for x in range(input_data.width):
                # Voxel rows are strided by height, as everywhere else in the map.
                idx = x + y * map_data.height
                vox = int(voxels[idx])
                sec = int(secondary[idx])

                altitude = vox & 0xFF
                if altitude < map_data.sea_level:
                    continue

                moisture = sec & 0xFF
                flags = (vox >> 8) & ~MAP_VOXEL_MASK & 0xFF
                region_id = (sec >> 8) & 0xFF

                biome = get_biome(map_data.region_data[region_id].type)
                if (
                    biome.placement_function is None
                    or biome.vox_function is None
                    or biome.altitude_function is None
                ):
                    raise RuntimeError(f"biome for region {region_id} is incomplete")

                biome.placement_function(
                    map_data.placed_items, map_data, x, y, altitude, region_id, flags, moisture
                )
                final_vox = int(biome.vox_function(altitude, moisture, map_data)) & MAP_VOXEL_MASK
                final_altitude = biome.altitude_function(altitude, moisture, x, y, map_data) & 0xFF

                vox |= final_vox << 8
                voxels[idx] = (vox & ~0xFF & 0xFFFFFFFF) | final_altitude