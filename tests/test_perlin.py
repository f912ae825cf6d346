import pytest

from explorationmap.perlin import PerlinNoise


def test_values_in_unit_range():
    noise = PerlinNoise(12)
    values = [noise.perlin2d(x, y, 0.02, 4) for x in range(0, 60, 3) for y in range(0, 60, 7)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_deterministic_for_seed():
    a = PerlinNoise(5)
    b = PerlinNoise(5)
    points = [(x * 1.5, y * 2.5) for x in range(10) for y in range(10)]
    assert [a.perlin2d(x, y, 0.05, 4) for x, y in points] == [b.perlin2d(x, y, 0.05, 4) for x, y in points]


def test_seeds_change_output():
    a = PerlinNoise(1)
    b = PerlinNoise(2)
    points = [(x, y) for x in range(20) for y in range(20)]
    assert [a.perlin2d(x, y, 0.5, 1) for x, y in points] != [b.perlin2d(x, y, 0.5, 1) for x, y in points]


@pytest.mark.parametrize("x,y", [(0, 0), (3, 7), (200, 15)])
def test_lattice_points_are_table_values(x, y):
    value = PerlinNoise(9).perlin2d(x, y, 1.0, 1) * 256
    assert value == int(value)
    assert 0 <= value <= 255


def test_seed_wraps_every_256():
    a = PerlinNoise(3)
    b = PerlinNoise(3 + 256)
    assert a.perlin2d(4.3, 8.9, 1.0, 3) == b.perlin2d(4.3, 8.9, 1.0, 3)


def test_zero_depth_divides_by_zero():
    with pytest.raises(ZeroDivisionError):
        PerlinNoise(0).perlin2d(1.0, 1.0, 1.0, 0)