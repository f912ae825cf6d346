# explorationmap

Procedural generation of exploration maps for games, in pure Python with no
third-party dependencies. A map is built by running a sequence of generation
steps over one shared map object. Blob seeds and noise produce an altitude
map. Flood fills find landmasses and lakes. The land is split into regions,
and regions receive types and biomes. Objects such as trees and cacti are
placed, and rivers are traced and carved into the voxels.

## Installing

```
pip install .
```

Tests run with pytest:

```
pip install ".[test]"
pytest
```

## Generating a map

Each step is a `MapGenStep` subclass with a method
`process_step(input_data, map_data, workspace)`. Run them in this order over
one `ExplorationMapData` and one `ExplorationMapGenWorkspace`:

```python
from explorationmap.core import (
    ExplorationMapData,
    ExplorationMapGenWorkspace,
    ExplorationMapInputData,
)
from explorationmap.steps.landmass import (
    DetermineEdgesStep,
    PerformFinalFloodFillStep,
    PerformPreFloodFillStep,
    RemoveRedundantIslandsStep,
    RemoveRedundantWaterStep,
    WeightAndSortLandmassesStep,
)
from explorationmap.steps.placement import DetermineGatewayPositionStep, DeterminePlayerStartStep
from explorationmap.steps.populate import PopulateFinalBiomesStep
from explorationmap.steps.region_merge import (
    MergeExpandableRegionsStep,
    MergeIsolatedRegionsStep,
    MergeSmallRegionsStep,
)
from explorationmap.steps.regions import (
    DetermineEarlyRegionsStep,
    DetermineRegionTypesStep,
    IsolateRegionsStep,
)
from explorationmap.steps.rivers import CarveRiversStep, DetermineRiversStep
from explorationmap.steps.terrain import (
    GenerateAdditionLayerStep,
    GenerateMetaStep,
    GenerateNoiseStep,
    MergeAltitudeStep,
    ReduceNoiseStep,
    SetupBuffersStep,
)

STEPS = [
    GenerateMetaStep(),
    SetupBuffersStep(),
    GenerateNoiseStep(),
    GenerateAdditionLayerStep(),
    MergeAltitudeStep(),
    ReduceNoiseStep(),
    PerformPreFloodFillStep(),
    RemoveRedundantIslandsStep(),
    RemoveRedundantWaterStep(),
    DetermineEarlyRegionsStep(),
    IsolateRegionsStep(),
    MergeSmallRegionsStep(),
    MergeIsolatedRegionsStep(),
    DetermineRegionTypesStep(),
    MergeExpandableRegionsStep(),
    PopulateFinalBiomesStep(),
    PerformFinalFloodFillStep(),
    WeightAndSortLandmassesStep(),
    DetermineEdgesStep(),
    DetermineRiversStep(),
    CarveRiversStep(),
    DeterminePlayerStartStep(),
    DetermineGatewayPositionStep(),
]

input_data = ExplorationMapInputData(
    width=400,
    height=400,
    seed=100,
    moisture_seed=200,
    variation_seed=300,
    num_rivers=12,
    num_regions=14,
    sea_level=100,
)
map_data = ExplorationMapData()
workspace = ExplorationMapGenWorkspace()
for step in STEPS:
    step.process_step(input_data, map_data, workspace)

print(map_data.player_start, map_data.gateway_position)
print(len(map_data.region_data), "regions,", len(map_data.placed_items), "placed items")
```

A few points about the inputs:

- `GenerateMetaStep` seeds the shared random engine from `variation_seed`, so
  the same input always produces the same map.
- Blob seeds are kept 100 cells away from every border. Width and height must
  therefore be at least 200.
- Some voxel lookups stride rows by the map height and others by its width.
  Use square maps.
- Work is split into four horizontal strips of `height // 4` rows each.
  When the height is not a multiple of 4, the leftover bottom rows are not
  processed.
- Everything is pure Python, so large maps take a while.

The base `MapGenStep.process_step` only sleeps for one second.

## Map data

`explorationmap.core` holds the data model and its helpers.

- `wrap_world_point(x, y)` packs two 16-bit coordinates into one world point,
  and `read_world_point(point)` unpacks it.
- Each voxel word holds four bytes:
  - the altitude;
  - the ground type (`MapVoxelTypes`) together with the river and edge flags;
  - the water group;
  - the land group.
- Each secondary word holds the moisture and the region id.
- `ExplorationMapData.voxel_byte`, `set_voxel_byte`, `region_at` and
  `set_region` read and write those fields.

The map carries its results in `region_data` (`RegionData`), `land_data` and
`water_data` (`FloodFillEntry`), `placed_items` (`PlacedItemData`) and
`river_data` (`RiverData`). It also holds `player_start` and
`gateway_position`.

Shared helpers:

- `random_int` and `random_index` draw from the one Mersenne Twister in
  `explorationmap.rng` (`RandomWrapper`, instance `map_gen_random`).
- `find_random_landmass_for_size`, `find_random_point_in_landmass` and
  `find_biggest_flood_entry` pick and rank landmasses.
- `find_neighbours_for_region` and `merge_region_data` work on regions.

## Other modules

- `explorationmap.perlin.PerlinNoise`: seeded fractal value noise, through
  `perlin2d(x, y, freq, depth)`.
- `explorationmap.floodfill`: `flood_fill` finds every connected group of
  matching cells and can write group indices into a voxel byte.
  `flood_fill_at` fills a single group from one cell.
- `explorationmap.biomes`: `get_biome(region_type)` returns the `Biome` for a
  region type. Each biome has a voxel function, an object placement function
  and an altitude function. `process_r_value` tests whether a cell holds the
  local maximum of the blue noise.
- `explorationmap.collision`: `CollisionWorld` checks circles against each
  other. `CollisionDetectionWorld` also blocks the cells of a grid of 5×5
  tiles, set with `set_collision_grid`.
- `explorationmap.gameplay`: `GameplayState` tracks which regions have been
  found. `set_new_map_data` resets discovery for a map, and
  `is_region_found` / `set_region_found` query and update it.
  `get_places()` and `get_places_by_type()` return the place definitions,
  which are currently empty.

## What the package does not do

- There is no driver object that runs the steps on a background thread or
  reports progress by stage. You run the steps yourself, as shown above.
- Nothing turns a map into an image or texture.
- There is no logging setup.
- There is no command-line tool.