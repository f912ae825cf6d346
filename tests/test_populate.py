import pytest

from explorationmap.core import (
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    MapVoxelTypes,
    PlacedItemId,
    RegionData,
    RegionType,
    wrap_world_point,
)
from explorationmap.steps.populate import PopulateFinalBiomesStep

SEA = 50


def _map(size, altitude, region_type, meta_flags=0):
    count = size * size
    return ExplorationMapData(
        width=size,
        height=size,
        sea_level=SEA,
        voxel_buffer=[altitude | (meta_flags << 8)] * count,
        secondary_voxel_buffer=[0] * count,
        blue_noise_buffer=[0.0] * count,
        region_data=[RegionData(id=0, type=region_type)],
    )


def _run(map_data):
    PopulateFinalBiomesStep().process_step(
        ExplorationMapInputData(map_data.width, map_data.height),
        map_data,
        ExplorationMapGenWorkspace(),
    )


def test_water_is_left_alone():
    map_data = _map(4, SEA - 1, RegionType.DESERT)
    before = list(map_data.voxel_buffer)
    _run(map_data)
    assert map_data.voxel_buffer == before
    assert map_data.placed_items == []


def test_exp_field_sets_ground_type():
    map_data = _map(4, 100, RegionType.EXP_FIELDS)
    _run(map_data)
    point = wrap_world_point(1, 1)
    assert map_data.voxel_byte(point, 1) == MapVoxelTypes.DIRT_EXP_FIELD
    assert map_data.voxel_byte(point, 0) == 100
    assert map_data.placed_items == []


def test_desert_places_cactus_on_every_flat_cell():
    map_data = _map(4, 100, RegionType.DESERT)
    _run(map_data)
    assert len(map_data.placed_items) == 16
    assert {item.type for item in map_data.placed_items} == {PlacedItemId.CACTUS}
    for y in range(4):
        for x in range(4):
            point = wrap_world_point(x, y)
            assert map_data.voxel_byte(point, 0) >= SEA
            assert map_data.voxel_byte(point, 1) == MapVoxelTypes.SAND


def test_river_blocks_placement_and_keeps_flag():
    map_data = _map(4, 100, RegionType.DESERT, meta_flags=int(MapVoxelTypes.RIVER))
    _run(map_data)
    assert map_data.placed_items == []
    assert map_data.voxel_byte(wrap_world_point(2, 2), 1) & MapVoxelTypes.RIVER


def test_remainder_rows_are_skipped():
    map_data = _map(6, 100, RegionType.EXP_FIELDS)
    _run(map_data)
    assert map_data.voxel_byte(wrap_world_point(0, 3), 1) == MapVoxelTypes.DIRT_EXP_FIELD
    assert map_data.voxel_byte(wrap_world_point(0, 4), 1) == 0
    assert map_data.voxel_byte(wrap_world_point(5, 5), 1) == 0


def test_unknown_region_raises():
    map_data = _map(4, 100, RegionType.DESERT)
    map_data.secondary_voxel_buffer = [5 << 8] * 16
    before = list(map_data.voxel_buffer)
    with pytest.raises(IndexError):
        _run(map_data)
    assert map_data.placed_items == []
    assert map_data.voxel_buffer == before