from explorationmap.biomes import get_biome, process_r_value
from explorationmap.core import (
    ExplorationMapData,
    MapVoxelTypes,
    PlacedItemData,
    PlacedItemId,
    RegionType,
)
from explorationmap.rng import map_gen_random

SEA = 50


def _make_map(width=5, height=5, noise=None):
    data = ExplorationMapData(width=width, height=height, sea_level=SEA)
    data.blue_noise_buffer = noise if noise is not None else [0.0] * (width * height)
    return data


def _peak_map(px, py, width=5, height=5):
    noise = [0.1] * (width * height)
    noise[px + py * width] = 0.9
    return _make_map(width, height, noise)


def test_process_r_value_true_at_peak():
    data = _peak_map(2, 2)
    assert process_r_value(data, 2, 2, 1) is True


def test_process_r_value_false_beside_peak():
    data = _peak_map(2, 2)
    assert process_r_value(data, 1, 2, 1) is False
    assert process_r_value(data, 3, 3, 1) is False


def test_process_r_value_far_from_peak_with_small_radius():
    data = _peak_map(4, 4)
    assert process_r_value(data, 0, 0, 1) is True


def test_process_r_value_flat_zero_noise_is_true():
    data = _make_map()
    assert process_r_value(data, 2, 2, 3) is True


def test_unknown_region_uses_grassland():
    assert get_biome(RegionType.NONE) is get_biome(RegionType.GRASSLAND)


def test_grassland_voxels():
    data = _make_map()
    vox = get_biome(RegionType.GRASSLAND).vox_function
    assert vox(SEA, 0, data) == MapVoxelTypes.SAND
    assert vox(SEA + 10, 0, data) == MapVoxelTypes.DIRT
    assert vox(SEA + 10, SEA + 50, data) == MapVoxelTypes.TREES


def test_cherry_blossom_voxels():
    data = _make_map()
    vox = get_biome(RegionType.CHERRY_BLOSSOM_FOREST).vox_function
    assert vox(SEA + 9, 0, data) == MapVoxelTypes.SAND
    assert vox(SEA + 10, 0, data) == MapVoxelTypes.TREES_CHERRY_BLOSSOM


def test_exp_field_voxels():
    data = _make_map()
    vox = get_biome(RegionType.EXP_FIELDS).vox_function
    assert vox(SEA, 0, data) == MapVoxelTypes.SAND_EXP_FIELD
    assert vox(SEA + 20, 0, data) == MapVoxelTypes.DIRT_EXP_FIELD


def test_desert_voxels_are_sand():
    data = _make_map()
    assert get_biome(RegionType.DESERT).vox_function(200, 200, data) == MapVoxelTypes.SAND


def test_desert_places_cactus_at_peak():
    data = _peak_map(2, 2)
    items = []
    get_biome(RegionType.DESERT).placement_function(items, data, 2, 2, SEA, 3, 0, 0)
    assert items == [PlacedItemData(2, 2, 3, PlacedItemId.CACTUS)]


def test_river_flag_blocks_placement():
    data = _peak_map(2, 2)
    items = []
    for region_type in (RegionType.GRASSLAND, RegionType.CHERRY_BLOSSOM_FOREST, RegionType.DESERT):
        get_biome(region_type).placement_function(
            items, data, 2, 2, SEA + 20, 1, int(MapVoxelTypes.RIVER), 0
        )
    assert items == []


def test_cherry_blossom_places_tree_on_high_ground_only():
    data = _peak_map(2, 2)
    place = get_biome(RegionType.CHERRY_BLOSSOM_FOREST).placement_function
    items = []
    place(items, data, 2, 2, SEA, 1, 0, 0)
    assert items == []
    place(items, data, 2, 2, SEA + 10, 1, 0, 0)
    assert items == [PlacedItemData(2, 2, 1, PlacedItemId.CHERRY_BLOSSOM_TREE)]


def test_grassland_places_tree_or_apple_tree():
    map_gen_random.seed(1234)
    data = _peak_map(2, 2)
    items = []
    get_biome(RegionType.GRASSLAND).placement_function(items, data, 2, 2, SEA + 10, 4, 0, 200)
    assert len(items) == 1
    assert items[0].type in (PlacedItemId.TREE, PlacedItemId.TREE_APPLE)
    assert (items[0].origin_x, items[0].origin_y, items[0].region) == (2, 2, 4)


def test_grassland_skips_low_ground():
    data = _peak_map(2, 2)
    items = []
    get_biome(RegionType.GRASSLAND).placement_function(items, data, 2, 2, SEA + 9, 4, 0, 200)
    assert items == []


def test_exp_field_places_nothing():
    data = _peak_map(2, 2)
    items = []
    get_biome(RegionType.EXP_FIELDS).placement_function(items, data, 2, 2, SEA + 50, 0, 0, 0)
    assert items == []


def test_grassland_altitude_unchanged():
    data = _make_map()
    assert get_biome(RegionType.GRASSLAND).altitude_function(123, 0, 7, 9, data) == 123


def test_desert_altitude_never_below_sea():
    data = _make_map()
    assert get_biome(RegionType.DESERT).altitude_function(SEA, 0, 0, 0, data) == SEA


def test_desert_altitude_clamped_below_255():
    data = _make_map()
    assert get_biome(RegionType.DESERT).altitude_function(250, 0, 16, 0, data) == 0xFF - 1


def test_desert_altitude_stays_in_range():
    data = _make_map()
    altitude = get_biome(RegionType.DESERT).altitude_function
    for x in range(0, 200, 7):
        for alt in (SEA, 100, 200, 254):
            result = altitude(alt, 0, x, 0, data)
            assert SEA <= result <= 0xFF - 1