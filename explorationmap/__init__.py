"""Procedural exploration map generation: data model, noise, flood fill, collision, biomes and gameplay state."""

__version__ = "0.1.0"