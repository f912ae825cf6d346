"""Four-way flood fill over the map grid, collecting connected groups."""

from __future__ import annotations

from typing import Callable, MutableSequence, Optional

from explorationmap.core import (
    INVALID_REGION_ID,
    ExplorationMapData,
    FloodFillEntry,
    read_world_point,
    wrap_world_point,
)

Compare = Callable[[ExplorationMapData, int], bool]
Read = Callable[[ExplorationMapData, int, int], int]


def _visit(
    stack: list[tuple[int, int]],
    x: int,
    y: int,
    compare: Compare,
    read: Read,
    vals: MutableSequence[int],
    map_data: ExplorationMapData,
    current_idx: int,
    entry: FloodFillEntry,
) -> bool:
    """Claim ``(x, y)`` for ``entry`` if it matches; True when it borders the fill."""
    width = map_data.width
    height = map_data.height
    if x < 0 or y < 0 or x >= width or y >= height:
        return False
    idx = x + y * width
    if vals[idx] != INVALID_REGION_ID:
        return False
    if not compare(map_data, read(map_data, x, y)):
        return True

    if x == 0 or y == 0 or x == width - 1 or y == height - 1:
        entry.next_to_world_edge = True

    vals[idx] = current_idx
    entry.total += 1
    here = wrap_world_point(x, y)
    entry.coords.append(here)
    stack.append((wrap_world_point(x - 1, y), here))
    stack.append((wrap_world_point(x + 1, y), here))
    stack.append((wrap_world_point(x, y - 1), here))
    stack.append((wrap_world_point(x, y + 1), here))
    return False


def flood_fill_at(
    compare: Compare,
    read: Read,
    x: int,
    y: int,
    map_data: ExplorationMapData,
    current_idx: int,
    vals: MutableSequence[int],
    out_data: list[FloodFillEntry],
) -> Optional[FloodFillEntry]:
    """Fill outwards from ``(x, y)`` if it matches and is unclaimed.

    Matching cells are marked with ``current_idx`` in ``vals``. The new
    group is appended to ``out_data`` and returned; None if nothing was filled.
    """
    if not compare(map_data, read(map_data, x, y)):
        return None
    if vals[x + y * map_data.width] != INVALID_REGION_ID:
        return None
    if current_idx >= INVALID_REGION_ID:
        raise ValueError(f"group index {current_idx} is out of range")

    start = wrap_world_point(x, y)
    stack: list[tuple[int, int]] = [(start, start)]
    entry = FloodFillEntry(id=current_idx, seed_x=x, seed_y=y, next_to_world_edge=False)
    edge_coords: set[int] = set()

    while stack:
        point, parent = stack.pop()
        xx, yy = read_world_point(point)
        if _visit(stack, xx, yy, compare, read, vals, map_data, current_idx, entry):
            edge_coords.add(parent)

    entry.edges = sorted(edge_coords)
    out_data.append(entry)
    return entry


def flood_fill(
    compare: Compare,
    read: Read,
    map_data: ExplorationMapData,
    offset: int,
    write_to_blob: bool = True,
) -> list[FloodFillEntry]:
    """Find every connected group of matching cells on the map.

    Every group is tagged with index 0. When ``write_to_blob`` is set,
    byte ``offset`` of each voxel word receives the cell's group index,
    or the invalid id for cells outside every group.
    """
    if not 0 <= offset <= 3:
        raise ValueError(f"byte offset must be between 0 and 3, got {offset}")

    vals = [INVALID_REGION_ID] * (map_data.width * map_data.height)
    out: list[FloodFillEntry] = []
    for y in range(map_data.height):
        for x in range(map_data.width):
            flood_fill_at(compare, read, x, y, map_data, 0, vals, out)

    if write_to_blob:
        if len(map_data.voxel_buffer) != len(vals):
            raise ValueError("voxel buffer does not match the map dimensions")
        shift = offset * 8
        mask = ~(0xFF << shift) & 0xFFFFFFFF
        for i, value in enumerate(vals):
            word = int(map_data.voxel_buffer[i])
            map_data.voxel_buffer[i] = (word & mask) | ((value & 0xFF) << shift)
    return out