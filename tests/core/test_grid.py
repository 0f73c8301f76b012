import math

import numpy as np
import pytest

from noisedrift.core.gradient import AngularVelocityRange, GradientVector
from noisedrift.core.grid import GradientGrid, grid_shape
from noisedrift.core.random_source import default_random_source

_VELOCITY = AngularVelocityRange(low=0.0005, high=0.005)


@pytest.mark.parametrize(
    "size, cell",
    [((1000, 1000), 100), ((200, 200), 100), ((900, 450), 90), ((640, 480), 40)],
)
def test_grid_shape_is_floor_plus_one_for_exact_division(size: tuple[int, int], cell: int) -> None:
    w, h = size
    assert grid_shape(size, cell) == (h // cell + 1, w // cell + 1)


def test_grid_shape_covers_partial_last_cell() -> None:
    rows, cols = grid_shape((250, 130), 100)
    assert (rows, cols) == (3, 4)
    # 最大座標（249, 129）の点にも右下の隅が存在する。
    assert math.floor(249 / 100) + 1 < cols
    assert math.floor(129 / 100) + 1 < rows


@pytest.mark.parametrize("cell", [0, -10])
def test_grid_shape_rejects_non_positive_cell(cell: float) -> None:
    with pytest.raises(ValueError):
        grid_shape((100, 100), cell)


def test_random_grid_has_fence_post_shape() -> None:
    grid = GradientGrid.random(
        (200, 200),
        cell_size=100,
        velocity_range=_VELOCITY,
        source=default_random_source(0),
    )
    assert grid.shape == (3, 3)
    assert grid.cell_size == 100.0


def test_evaluate_matches_individual_vectors() -> None:
    grid = GradientGrid.random(
        (300, 200),
        cell_size=100,
        velocity_range=_VELOCITY,
        source=default_random_source(1),
    )
    frame = grid.evaluate(1234.5)
    assert frame.directions.shape == (grid.rows, grid.cols, 2)
    assert frame.time_ms == 1234.5

    for row in range(grid.rows):
        for col in range(grid.cols):
            expected = grid.vector(row, col).evaluate(1234.5)
            assert frame.direction(row, col) == pytest.approx(expected, abs=1e-12)

    norms = np.linalg.norm(frame.directions, axis=-1)
    np.testing.assert_allclose(norms, 1.0, atol=1e-12)


def test_grid_and_frames_are_read_only() -> None:
    grid = GradientGrid.random(
        (200, 200),
        cell_size=100,
        velocity_range=_VELOCITY,
        source=default_random_source(2),
    )
    before = grid.vector(1, 1)
    frame = grid.evaluate(10.0)
    with pytest.raises(ValueError):
        frame.directions[0, 0, 0] = 5.0

    grid.evaluate(99999.0)
    assert grid.vector(1, 1) == before


def test_from_vectors_keeps_layout() -> None:
    vectors = [
        [GradientVector(0.0, 0.0), GradientVector(math.pi / 2, 0.0)],
        [GradientVector(math.pi, 0.0), GradientVector(0.5, 0.001)],
    ]
    grid = GradientGrid.from_vectors(vectors, cell_size=10)
    assert grid.shape == (2, 2)
    assert grid.vector(1, 1) == GradientVector(0.5, 0.001)
    assert grid.evaluate(0.0).direction(0, 1) == pytest.approx((0.0, 1.0), abs=1e-12)


def test_grid_rejects_mismatched_or_tiny_tables() -> None:
    with pytest.raises(ValueError):
        GradientGrid(np.zeros((3, 3)), np.zeros((3, 2)), cell_size=10)
    with pytest.raises(ValueError):
        GradientGrid(np.zeros((1, 3)), np.zeros((1, 3)), cell_size=10)
    with pytest.raises(ValueError):
        GradientGrid(np.zeros((2, 2)), np.zeros((2, 2)), cell_size=0)
