[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "explorationmap"
version = "0.1.0"
description = "Procedural exploration map generation steps: terrain, landmasses, regions, biomes and rivers."
requires-python = ">=3.10"
dependencies = []
keywords = ["procedural-generation", "map", "terrain", "noise", "flood-fill", "game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["explorationmap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
