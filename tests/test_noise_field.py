import math

import numpy as np
import pytest

from flow_field import flow_field, sample_flow
from noise_field import fade, perlin_noise, _GradientLattice
from random_stream import RandomStream


def test_fade_endpoints_and_midpoint():
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    assert fade(0.5) == pytest.approx(0.5)


class TestPerlinNoise:
    def setup_method(self):
        self.seed = 4242

    def test_shape_and_bounds(self):
        grid = perlin_noise(RandomStream(self.seed), 40, 30)
        assert grid.shape == (30, 40)
        assert grid.min() >= 0.0
        assert grid.max() <= 1.0

    def test_deterministic_for_seed(self):
        a = perlin_noise(RandomStream(self.seed), 32, 32, freq=4)
        b = perlin_noise(RandomStream(self.seed), 32, 32, freq=4)
        assert np.array_equal(a, b)

    def test_lattice_points_are_value_zero(self):
        # Cells on lattice points have zero offset, so the signed value is 0.
        grid = perlin_noise(RandomStream(self.seed), 12, 12, freq=6)
        assert grid[0, 0] == pytest.approx(0.5)
        assert grid[2, 4] == pytest.approx(0.5)

    def test_each_gradient_is_drawn_once(self):
        # A 12x12 grid at freq 6 touches every point of the 7x7 lattice.
        stream = RandomStream(self.seed)
        perlin_noise(stream, 12, 12, freq=6)
        reference = RandomStream(self.seed)
        for _ in range(49):
            reference.next()
        assert stream.next() == reference.next()

    def test_amp_scales_around_midpoint(self):
        full = perlin_noise(RandomStream(self.seed), 20, 20, amp=1.0)
        half = perlin_noise(RandomStream(self.seed), 20, 20, amp=0.5)
        assert np.allclose(half - 0.5, (full - 0.5) * 0.5)

    def test_rejects_invalid_arguments(self):
        with pytest.raises(ValueError):
            perlin_noise(RandomStream(1), 0, 10)
        with pytest.raises(ValueError):
            perlin_noise(RandomStream(1), 10, 10, freq=0)

    def test_integral_float_frequency_matches_int(self):
        a = perlin_noise(RandomStream(self.seed), 8, 8, freq=4.0)
        b = perlin_noise(RandomStream(self.seed), 8, 8, freq=4)
        assert np.array_equal(a, b)

    @pytest.mark.parametrize("freq", [4.5, "4", None, True])
    def test_rejects_non_integral_frequency(self, freq):
        with pytest.raises(ValueError):
            perlin_noise(RandomStream(1), 8, 8, freq=freq)

    def test_output_is_read_only(self):
        grid = perlin_noise(RandomStream(self.seed), 8, 8)
        with pytest.raises(ValueError):
            grid[0, 0] = 0.0


def test_gradient_lattice_reuses_vectors():
    lattice = _GradientLattice(RandomStream(3), 4)
    first = lattice.gradient(2, 1).copy()
    again = lattice.gradient(2, 1)
    assert np.array_equal(first, again)
    assert math.hypot(*first) == pytest.approx(1.0)
    assert int(lattice.drawn.sum()) == 1


class TestFlowField:
    def test_unit_vectors(self):
        field = flow_field(RandomStream(8), 30, 20, 4)
        assert field.shape == (20, 30, 2)
        assert np.allclose(np.linalg.norm(field, axis=-1), 1.0)

    def test_deterministic_for_seed(self):
        a = flow_field(RandomStream(8), 16, 16, 3)
        b = flow_field(RandomStream(8), 16, 16, 3)
        assert np.array_equal(a, b)

    def test_integral_float_scale_accepted(self):
        a = flow_field(RandomStream(8), 16, 16, 4.0)
        b = flow_field(RandomStream(8), 16, 16, 4)
        assert np.array_equal(a, b)

    def test_field_is_read_only(self):
        field = flow_field(RandomStream(8), 6, 6, 2)
        with pytest.raises(ValueError):
            field[0, 0] = (1.0, 0.0)

    def test_sample_inside_and_outside(self):
        field = flow_field(RandomStream(8), 5, 4, 2)
        assert np.array_equal(sample_flow(field, 2, 3), field[3, 2])
        assert np.array_equal(sample_flow(field, 5, 0), [0.0, 0.0])
        assert np.array_equal(sample_flow(field, -1, 0), [0.0, 0.0])
        assert np.array_equal(sample_flow(field, 0, 4), [0.0, 0.0])
