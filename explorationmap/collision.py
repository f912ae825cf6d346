"""Point collision worlds, with an optional coarse blocking grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

GRID_CELL_SIZE = 5


@dataclass(frozen=True)
class _CollisionPoint:
    x: float
    y: float
    radius: float


class CollisionWorld:
    """Circles checked against each other one by one."""

    def __init__(self, world_id: int = 0) -> None:
        self.world_id = world_id
        self._points: list[_CollisionPoint] = []

    def add_collision_point(self, x: float, y: float, radius: float) -> None:
        self._points.append(_CollisionPoint(x, y, radius))

    def check_collision_point(self, x: float, y: float, radius: float) -> bool:
        """True if a circle at ``(x, y)`` overlaps any stored circle."""
        for p in self._points:
            dx = p.x - x
            dy = p.y - y
            reach = p.radius + radius
            if dx * dx + dy * dy < reach * reach:
                return True
        return False


class CollisionDetectionWorld(CollisionWorld):
    """Collision world that also blocks cells of a grid of 5x5 tiles."""

    def __init__(self, world_id: int = 0) -> None:
        super().__init__(world_id)
        self._grid: list[bool] = []
        self._width = 0
        self._height = 0

    def check_collision_point(self, x: float, y: float, radius: float) -> bool:
        point_check = super().check_collision_point(x, y, radius)
        if not self._grid:
            return point_check

        for yy in range(int(y - radius), int(y + radius)):
            cell_y = int(yy / GRID_CELL_SIZE)
            for xx in range(int(x - radius), int(x + radius)):
                cell_x = int(xx / GRID_CELL_SIZE)
                if cell_x < 0 or cell_y < 0 or cell_x >= self._width or cell_y >= self._height:
                    continue
                if self._grid[cell_x + cell_y * self._width]:
                    return True
        return point_check

    def set_collision_grid(self, grid: Iterable[bool], width: int, height: int) -> None:
        """Replace the blocking grid, stored row by row."""
        self._width = width
        self._height = height
        self._grid = list(grid)