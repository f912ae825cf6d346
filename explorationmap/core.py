"""Map data structures, point packing and shared generation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Sequence

from explorationmap.rng import map_gen_random

INVALID_LAND_ID = 0xFF
INVALID_WATER_ID = 0xFF
INVALID_REGION_ID = 0xFF
INVALID_WORLD_POINT = 0xFFFFFFFF

MAP_VOXEL_MASK = 0x3F

BLOB_SIZE = 200.0
HALF_BLOB_SIZE = BLOB_SIZE / 2
LINE_BOX_SIZE = 50.0


class MapVoxelTypes(IntEnum):
    """Ground type stored in the low bits of a voxel's meta byte, plus flags."""

    SAND = 0
    GRASS = 1
    DIRT = 2
    SNOW = 3
    TREES = 4
    TREES_CHERRY_BLOSSOM = 5
    SAND_EXP_FIELD = 6
    DIRT_EXP_FIELD = 7
    RIVER = 0x40
    EDGE = 0x80


class RegionType(IntEnum):
    NONE = 0
    GRASSLAND = 1
    CHERRY_BLOSSOM_FOREST = 2
    EXP_FIELDS = 3
    DESERT = 4


class RegionMeta(IntFlag):
    MAIN_REGION = 1
    EXPANDABLE = 2


class PlacedItemId(IntEnum):
    NONE = 0
    TREE = 1
    TREE_APPLE = 2
    CHERRY_BLOSSOM_TREE = 3
    CACTUS = 4


@dataclass
class RegionData:
    id: int
    total: int = 0
    seed_x: int = 0
    seed_y: int = 0
    type: RegionType = RegionType.NONE
    meta: int = 0
    coords: list[int] = field(default_factory=list)
    edges: list[int] = field(default_factory=list)


@dataclass
class FloodFillEntry:
    id: int = 0
    total: int = 0
    seed_x: int = 0
    seed_y: int = 0
    next_to_world_edge: bool = False
    edges: list[int] = field(default_factory=list)
    coords: list[int] = field(default_factory=list)


@dataclass
class PlacedItemData:
    origin_x: int
    origin_y: int
    region: int
    type: PlacedItemId


@dataclass
class RiverData:
    origin: int
    points: list[int] = field(default_factory=list)


@dataclass
class PlaceDef:
    name: str
    desc: str
    rarity: float
    min_landmass: int = 10
    necessary_features: int = 0

    @classmethod
    def empty(cls) -> PlaceDef:
        """A blank place definition with no landmass requirement."""
        return cls("", "", 0.0, 0, 0)


@dataclass
class ExplorationMapInputData:
    width: int
    height: int
    seed: int = 0
    moisture_seed: int = 0
    variation_seed: int = 0
    num_rivers: int = 0
    num_regions: int = 0
    sea_level: int = 0


@dataclass
class ExplorationMapData:
    """The generated map: packed voxel buffers plus derived features.

    Each voxel word holds altitude (byte 0), meta flags (byte 1),
    water group (byte 2) and land group (byte 3). The secondary word
    holds moisture (byte 0) and region id (byte 1).
    """

    width: int = 0
    height: int = 0
    seed: int = 0
    moisture_seed: int = 0
    variation_seed: int = 0
    sea_level: int = 0
    player_start: int = 0
    gateway_position: int = 0
    voxel_buffer: list = field(default_factory=list)
    secondary_voxel_buffer: list = field(default_factory=list)
    blue_noise_buffer: list = field(default_factory=list)
    region_data: list[RegionData] = field(default_factory=list)
    placed_items: list[PlacedItemData] = field(default_factory=list)
    water_data: list[FloodFillEntry] = field(default_factory=list)
    land_data: list[FloodFillEntry] = field(default_factory=list)
    river_data: list[RiverData] = field(default_factory=list)

    def _index(self, point: int) -> int:
        x, y = read_world_point(point)
        # Rows are strided by height, matching how the generator lays out voxels.
        return x + y * self.height

    @staticmethod
    def _check_offset(offset: int) -> int:
        if not 0 <= offset <= 3:
            raise ValueError(f"byte offset must be between 0 and 3, got {offset}")
        return offset * 8

    def voxel_byte(self, point: int, offset: int) -> int:
        """Read one byte of the voxel word at ``point``."""
        shift = self._check_offset(offset)
        return (int(self.voxel_buffer[self._index(point)]) >> shift) & 0xFF

    def set_voxel_byte(self, point: int, offset: int, value: int) -> None:
        """Overwrite one byte of the voxel word at ``point``."""
        shift = self._check_offset(offset)
        idx = self._index(point)
        word = int(self.voxel_buffer[idx])
        self.voxel_buffer[idx] = (word & ~(0xFF << shift) & 0xFFFFFFFF) | ((value & 0xFF) << shift)

    def region_at(self, point: int) -> int:
        """Region id stored for ``point``."""
        return (int(self.secondary_voxel_buffer[self._index(point)]) >> 8) & 0xFF

    def set_region(self, point: int, region: int) -> None:
        """Store ``region`` as the region id for ``point``."""
        idx = self._index(point)
        word = int(self.secondary_voxel_buffer[idx])
        self.secondary_voxel_buffer[idx] = (word & ~0xFF00 & 0xFFFFFFFF) | ((region & 0xFF) << 8)


@dataclass
class ExplorationMapGenWorkspace:
    land_weighted: list[int] = field(default_factory=list)
    addition_layer: list[float] = field(default_factory=list)
    water_data: list[FloodFillEntry] = field(default_factory=list)
    land_data: list[FloodFillEntry] = field(default_factory=list)
    blob_seeds: list[int] = field(default_factory=list)


def wrap_world_point(x: int, y: int) -> int:
    """Pack two 16-bit coordinates into one world point."""
    return ((int(x) & 0xFFFF) << 16) | (int(y) & 0xFFFF)


def read_world_point(point: int) -> tuple[int, int]:
    """Unpack a world point into ``(x, y)``."""
    return (point >> 16) & 0xFFFF, point & 0xFFFF


def random_int(min_value: int, max_value: int) -> int:
    """Random integer in the inclusive range, from the shared generator."""
    min_value = int(min_value)
    max_value = int(max_value)
    if max_value < min_value:
        raise ValueError(f"empty range {min_value}..{max_value}")
    return min_value + map_gen_random.rand() % (max_value - min_value + 1)


def random_index(items: Sequence) -> int:
    """Random valid index into ``items``; 0 when it is empty."""
    if not items:
        return 0
    return random_int(0, len(items) - 1)


def find_random_point_in_landmass(entry: FloodFillEntry) -> int:
    return entry.coords[random_index(entry.coords)]


def find_random_landmass_for_size(
    land_data: Sequence[FloodFillEntry], land_weighted: Sequence[int], size: int
) -> int:
    """Pick a weighted landmass at least ``size`` large, giving up after 100 tries."""
    if not land_data:
        return INVALID_LAND_ID
    for _ in range(100):
        idx = land_weighted[random_index(land_weighted)]
        if land_data[idx].total >= size:
            return idx
    return INVALID_LAND_ID


def find_biggest_flood_entry(land_data: Sequence[FloodFillEntry]) -> int:
    """Index of the entry with the largest total, or the invalid id."""
    biggest = 0
    found = INVALID_LAND_ID
    for idx, entry in enumerate(land_data):
        if entry.total > biggest:
            biggest = entry.total
            found = idx
    return found


def find_neighbours_for_region(map_data: ExplorationMapData, region: RegionData) -> set[int]:
    """Region ids found directly beside any edge point of ``region``."""
    found: set[int] = set()
    for point in region.edges:
        x, y = read_world_point(point)
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            try:
                found.add(map_data.region_at(wrap_world_point(nx, ny)))
            except IndexError:
                continue
    return found


def merge_region_data(map_data: ExplorationMapData, source: RegionData, target: RegionData) -> None:
    """Move every coordinate of ``source`` into ``target`` and empty ``source``."""
    if source.id == target.id:
        raise ValueError("cannot merge a region into itself")
    target.coords.extend(source.coords)
    target.edges.extend(source.edges)
    for point in source.coords:
        map_data.set_region(point, target.id)
    source.total = 0
    source.coords.clear()
    source.edges.clear()