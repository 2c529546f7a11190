import numpy as np
import pytest

from grids import make_grid, map_grid, mirror, convolve


class TestMakeGrid:
    def test_constant_fill(self):
        grid = make_grid(4, 3, 7)
        assert grid.shape == (3, 4)
        assert np.all(grid == 7)

    def test_vector_fill(self):
        grid = make_grid(4, 3, [0.0, 1.0])
        assert grid.shape == (3, 4, 2)
        assert np.all(grid[..., 1] == 1.0)

    def test_callable_fill_is_row_major(self):
        grid = make_grid(3, 2, lambda x, y: x + 10 * y)
        assert grid.tolist() == [[0, 1, 2], [10, 11, 12]]

    @pytest.mark.parametrize("w,h", [(0, 3), (3, 0), (-1, 2)])
    def test_rejects_empty_dimensions(self, w, h):
        with pytest.raises(ValueError):
            make_grid(w, h, 0)


def test_map_grid_passes_coordinates_and_keeps_input():
    grid = make_grid(3, 2, 1.0)
    out = map_grid(grid, lambda v, x, y: v + x * y)
    assert out.tolist() == [[1.0, 1.0, 1.0], [1.0, 2.0, 3.0]]
    assert np.all(grid == 1.0)


class TestMirror:
    def test_right_half_copies_left_half(self):
        grid = np.array([[1, 2, 3, 4], [5, 6, 7, 8]])
        assert mirror(grid).tolist() == [[1, 2, 2, 1], [5, 6, 6, 5]]

    def test_odd_width_keeps_centre_column(self):
        grid = np.array([[1, 2, 3, 4, 5]])
        assert mirror(grid).tolist() == [[1, 2, 3, 2, 1]]

    def test_is_idempotent(self):
        grid = np.arange(30).reshape(5, 6)
        once = mirror(grid)
        assert np.array_equal(mirror(once), once)
        odd = np.arange(35).reshape(5, 7)
        assert np.array_equal(mirror(mirror(odd)), mirror(odd))

    def test_symmetric_grid_is_unchanged(self):
        grid = np.array([[1, 2, 2, 1], [3, 4, 4, 3]])
        assert np.array_equal(mirror(mirror(grid)), grid)

    def test_does_not_modify_input(self):
        grid = np.array([[1, 2, 3, 4]])
        mirror(grid)
        assert grid.tolist() == [[1, 2, 3, 4]]


class TestConvolve:
    def setup_method(self):
        self.grid = np.arange(12, dtype=np.float64).reshape(3, 4)

    def test_unit_kernel_is_identity(self):
        assert np.array_equal(convolve(self.grid, [[1]]), self.grid)

    def test_zero_kernel_gives_zero_grid(self):
        out = convolve(self.grid, np.zeros((3, 3)))
        assert out.shape == self.grid.shape
        assert np.all(out == 0)

    def test_box_kernel_zero_pads_edges(self):
        out = convolve(np.ones((3, 3)), np.ones((3, 3)))
        assert out.tolist() == [[4, 6, 4], [6, 9, 6], [4, 6, 4]]

    def test_even_kernel_is_offset_by_half_width(self):
        out = convolve(np.array([[1.0, 2.0, 3.0]]), [[1, 1]])
        assert out.tolist() == [[1.0, 3.0, 5.0]]

    def test_kernel_is_not_flipped(self):
        out = convolve(np.array([[1.0, 2.0, 3.0]]), [[0, 0, 1]])
        assert out.tolist() == [[2.0, 3.0, 0.0]]

    def test_rejects_invalid_kernels(self):
        with pytest.raises(ValueError):
            convolve(self.grid, [[1, 2], [3]])
        with pytest.raises(ValueError):
            convolve(self.grid, np.zeros((0, 0)))
        with pytest.raises(ValueError):
            convolve(self.grid, np.ones((5, 5)))

    def test_rejects_vector_grid(self):
        with pytest.raises(ValueError):
            convolve(np.zeros((3, 3, 2)), [[1]])
