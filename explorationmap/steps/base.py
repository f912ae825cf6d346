"""Base class for a single stage of map generation."""

from __future__ import annotations

import time

from explorationmap.core import (
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
)


class MapGenStep:
    """One stage of the generator; subclasses override ``process_step``."""

    def process_step(
        self,
        input_data: ExplorationMapInputData,
        map_data: ExplorationMapData,
        workspace: ExplorationMapGenWorkspace,
    ) -> None:
        """Default stage: waits one second and leaves the map untouched."""
        time.sleep(1.0)