"""Stages that fold small, enclosed or expandable regions into their neighbours."""

from __future__ import annotations

from explorationmap.core import (
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    RegionData,
    RegionMeta,
    find_neighbours_for_region,
    merge_region_data,
)
from explorationmap.steps.base import MapGenStep

SMALL_REGION_SIZE = 200
# Region id 0 is what unassigned cells read as, so it is never a merge target.
_IGNORED_REGION = 0


def _is_main(region: RegionData) -> bool:
    return bool(region.meta & RegionMeta.MAIN_REGION)


class MergeSmallRegionsStep(MapGenStep):
    """Merge every small, non-main region into its first neighbouring region."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        regions = map_data.region_data
        for region in regions:
            if region.total >= SMALL_REGION_SIZE:
                continue
            # Main regions stay, so the session always has the right number of them.
            if _is_main(region):
                continue
            for neighbour_id in sorted(find_neighbours_for_region(map_data, region)):
                if neighbour_id == _IGNORED_REGION:
                    continue
                target = regions[neighbour_id]
                if target.id == region.id:
                    continue
                merge_region_data(map_data, region, target)
                break


def _merge_if_isolated(map_data: ExplorationMapData, region: RegionData) -> bool:
    """Merge ``region`` with its only neighbour, if it has exactly one; True if merged."""
    if region.total == 0:
        return False
    regions = map_data.region_data

    found = find_neighbours_for_region(map_data, region)
    found.discard(_IGNORED_REGION)
    found.discard(region.id)
    found = {rid for rid in found if regions[rid].total != 0}
    if len(found) != 1:
        return False

    other = regions[next(iter(found))]
    if region.total >= other.total:
        biggest, smallest = region, other
    else:
        smallest, biggest = region, other
    if smallest.total == 0 or biggest.total == 0:
        return False

    # A main region is never absorbed by an ordinary one.
    if _is_main(smallest) and not _is_main(biggest):
        smallest, biggest = biggest, smallest

    merge_region_data(map_data, smallest, biggest)
    return True


class MergeIsolatedRegionsStep(MapGenStep):
    """Merge regions that touch only one other region, rescanning after each merge."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        i = 0
        while i < len(map_data.region_data):
            if _merge_if_isolated(map_data, map_data.region_data[i]):
                # The scan restarts just after the first region.
                i = 1
            else:
                i += 1


class MergeExpandableRegionsStep(MapGenStep):
    """Let expandable regions swallow every region beside them."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        regions = map_data.region_data
        for region in regions:
            if not region.meta & RegionMeta.EXPANDABLE:
                continue
            for neighbour_id in sorted(find_neighbours_for_region(map_data, region)):
                if neighbour_id == region.id or neighbour_id == _IGNORED_REGION:
                    continue
                merge_region_data(map_data, regions[neighbour_id], region)