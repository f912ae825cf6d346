"""Per-session gameplay state and place definitions."""

from __future__ import annotations

from explorationmap.core import ExplorationMapData, PlaceDef

_PLACES: list[PlaceDef] = []
_PLACES_BY_TYPE: list[list[int]] = []


def get_places() -> list[PlaceDef]:
    """All known place definitions."""
    return list(_PLACES)


def get_places_by_type() -> list[list[int]]:
    """Place indices grouped by place type."""
    return [list(group) for group in _PLACES_BY_TYPE]


class GameplayState:
    """Tracks which regions of the current map the player has found."""

    def __init__(self) -> None:
        self._found_regions: list[bool] = []

    def set_new_map_data(self, map_data: ExplorationMapData) -> None:
        """Reset discovery for a new map; every region starts unfound."""
        self._found_regions = [False] * max(len(map_data.region_data), 1)

    def is_region_found(self, region: int) -> bool:
        return self._found_regions[region]

    def set_region_found(self, region: int, found: bool) -> None:
        self._found_regions[region] = found