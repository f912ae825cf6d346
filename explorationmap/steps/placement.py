"""Stages that choose where the player starts and where the gateway sits."""

from __future__ import annotations

import math

from explorationmap.core import (
    INVALID_LAND_ID,
    INVALID_WORLD_POINT,
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
    find_random_landmass_for_size,
    find_random_point_in_landmass,
    read_world_point,
    wrap_world_point,
)
from explorationmap.steps.base import MapGenStep

GATEWAY_ATTEMPTS = 5
GATEWAY_MIN_LANDMASS = 40
GATEWAY_MIN_DISTANCE = 200


class DeterminePlayerStartStep(MapGenStep):
    """Start the player on the largest landmass, or the map centre if none."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        if not map_data.land_data:
            map_data.player_start = wrap_world_point(input_data.width // 2, input_data.height // 2)
            return
        map_data.player_start = find_random_point_in_landmass(map_data.land_data[0])


class DetermineGatewayPositionStep(MapGenStep):
    """Place the gateway on land, preferably far from the player start."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        point = INVALID_WORLD_POINT
        px, py = read_world_point(map_data.player_start)
        for _ in range(GATEWAY_ATTEMPTS):
            land_id = find_random_landmass_for_size(
                map_data.land_data, workspace.land_weighted, GATEWAY_MIN_LANDMASS
            )
            if land_id == INVALID_LAND_ID:
                continue
            point = find_random_point_in_landmass(map_data.land_data[land_id])
            x, y = read_world_point(point)
            if math.hypot(px - x, py - y) > GATEWAY_MIN_DISTANCE:
                break

        if point == INVALID_WORLD_POINT:
            point = wrap_world_point(map_data.width // 2, map_data.height // 2)
        map_data.gateway_position = point