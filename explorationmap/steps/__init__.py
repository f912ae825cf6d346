"""Map generation steps: terrain, landmasses, regions, region merging, biomes, rivers and placement."""