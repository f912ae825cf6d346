import pytest

from explorationmap.core import (
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    FloodFillEntry,
    read_world_point,
    wrap_world_point,
)
from explorationmap.rng import map_gen_random
from explorationmap.steps.placement import (
    DetermineGatewayPositionStep,
    DeterminePlayerStartStep,
)


@pytest.fixture(autouse=True)
def _seeded():
    map_gen_random.seed(1234)


def test_player_start_defaults_to_centre_without_land():
    inp = ExplorationMapInputData(width=10, height=8)
    map_data = ExplorationMapData(width=10, height=8)
    DeterminePlayerStartStep().process_step(inp, map_data, ExplorationMapGenWorkspace())
    assert read_world_point(map_data.player_start) == (10 // 2, 8 // 2)


def test_player_start_single_point_landmass():
    point = wrap_world_point(3, 7)
    map_data = ExplorationMapData(land_data=[FloodFillEntry(total=1, coords=[point])])
    DeterminePlayerStartStep().process_step(
        ExplorationMapInputData(20, 20), map_data, ExplorationMapGenWorkspace()
    )
    assert map_data.player_start == point


def test_player_start_uses_first_landmass():
    first = [wrap_world_point(x, 1) for x in range(10)]
    second = [wrap_world_point(x, 9) for x in range(10)]
    map_data = ExplorationMapData(
        land_data=[FloodFillEntry(total=10, coords=first), FloodFillEntry(total=10, coords=second)]
    )
    DeterminePlayerStartStep().process_step(
        ExplorationMapInputData(20, 20), map_data, ExplorationMapGenWorkspace()
    )
    assert map_data.player_start in first


def test_gateway_without_land_uses_map_centre():
    map_data = ExplorationMapData(width=30, height=40)
    DetermineGatewayPositionStep().process_step(
        ExplorationMapInputData(30, 40), map_data, ExplorationMapGenWorkspace()
    )
    assert read_world_point(map_data.gateway_position) == (30 // 2, 40 // 2)


def test_gateway_landmass_too_small_uses_centre():
    coords = [wrap_world_point(x, 0) for x in range(39)]
    map_data = ExplorationMapData(
        width=50, height=50, land_data=[FloodFillEntry(total=39, coords=coords)]
    )
    ws = ExplorationMapGenWorkspace(land_weighted=[0])
    DetermineGatewayPositionStep().process_step(ExplorationMapInputData(50, 50), map_data, ws)
    assert read_world_point(map_data.gateway_position) == (25, 25)


def test_gateway_lands_in_large_landmass():
    coords = [wrap_world_point(x, y) for x in range(300, 310) for y in range(300, 305)]
    map_data = ExplorationMapData(
        width=400,
        height=400,
        player_start=wrap_world_point(0, 0),
        land_data=[FloodFillEntry(total=len(coords), coords=coords)],
    )
    ws = ExplorationMapGenWorkspace(land_weighted=[0])
    DetermineGatewayPositionStep().process_step(ExplorationMapInputData(400, 400), map_data, ws)
    assert map_data.gateway_position in coords


def test_gateway_near_player_still_placed_on_land():
    coords = [wrap_world_point(x, y) for x in range(10) for y in range(5)]
    map_data = ExplorationMapData(
        width=100,
        height=100,
        player_start=coords[0],
        land_data=[FloodFillEntry(total=len(coords), coords=coords)],
    )
    ws = ExplorationMapGenWorkspace(land_weighted=[0])
    DetermineGatewayPositionStep().process_step(ExplorationMapInputData(100, 100), map_data, ws)
    assert map_data.gateway_position in coords