"""Tests for vectorised kernel weights."""

import math

import numpy as np
import pytest

from TreeCrownKernels.config import KernelParameters
from TreeCrownKernels.core import kernels
from TreeCrownKernels.core.kernels import Point3D
from TreeCrownKernels.core.weighting import (
    allometric_kernel_weights,
    cylinder_mask,
    epanechnikov_weights,
    gauss_weights,
    kernel_weights,
    local_density,
    vertical_distances,
)


@pytest.fixture
def returns():
    rng = np.random.default_rng(11)
    points = rng.uniform([-3.0, -3.0, 0.0], [3.0, 3.0, 15.0], size=(300, 3))
    # exact boundary cases
    extra = np.array([[2.0, 0.0, 10.0], [0.0, 0.0, 9.0], [0.0, 0.0, 11.0], [0.0, 0.0, 10.5]])
    return np.vstack([points, extra])


class TestAgreementWithScalarPrimitives:
    """Vectorised functions agree element-wise with kernels.py."""

    def test_cylinder_mask(self, returns):
        center = Point3D(0.0, 0.0, 10.0)
        mask = cylinder_mask(returns, center, 2.0, 2.0)
        expected = [kernels.in_cylinder(Point3D(*p), 2.0, 2.0, center) for p in returns]
        assert mask.tolist() == expected
        assert mask[-4:].all()

    def test_vertical_distances(self, returns):
        expected = [kernels.vertical_distance(4.0, 10.0, z) for z in returns[:, 2]]
        np.testing.assert_array_equal(vertical_distances(4.0, 10.0, returns[:, 2]), expected)

    def test_epanechnikov_weights(self, returns):
        expected = [kernels.epanechnikov_weight(4.0, 10.0, z) for z in returns[:, 2]]
        np.testing.assert_array_equal(epanechnikov_weights(4.0, 10.0, returns[:, 2]), expected)

    def test_gauss_weights(self, returns):
        expected = [kernels.gauss_weight(3.0, 0.5, -0.5, x, y) for x, y in returns[:, :2]]
        np.testing.assert_allclose(gauss_weights(3.0, 0.5, -0.5, returns[:, 0], returns[:, 1]), expected)


class TestKernelWeights:
    """Combined horizontal and vertical weights."""

    def test_product_of_kernels(self):
        points = np.array([[0.0, 0.0, 10.5], [1.0, 0.0, 10.5], [0.0, 0.0, 20.0]])
        weights = kernel_weights(points, [0.0, 0.0, 10.0], 2.0, 4.0)
        assert weights[0] == pytest.approx(1.0)
        assert weights[1] == pytest.approx(math.exp(-5.0))
        assert weights[2] == 0.0

    def test_local_density_sums_weights(self, returns):
        center = (0.0, 0.0, 10.0)
        assert local_density(returns, center, 2.0, 4.0) == pytest.approx(
            kernel_weights(returns, center, 2.0, 4.0).sum()
        )

    def test_local_density_max_distance(self, returns):
        center = (0.0, 0.0, 10.0)
        near = returns[np.hypot(returns[:, 0], returns[:, 1]) <= 1.5]
        assert local_density(returns, center, 2.0, 4.0, max_distance=1.5) == pytest.approx(
            kernel_weights(near, center, 2.0, 4.0).sum()
        )
        assert local_density(returns, center, 2.0, 4.0, max_distance=1.5) < local_density(
            returns, center, 2.0, 4.0
        )

    def test_empty_points(self):
        assert kernel_weights(np.empty((0, 3)), (0.0, 0.0, 0.0), 1.0, 1.0).shape == (0,)
        assert local_density([], (0.0, 0.0, 0.0), 1.0, 1.0) == 0.0

    def test_degenerate_sizes_propagate(self):
        weights = kernel_weights([[0.0, 0.0, 0.0]], (0.0, 0.0, 0.0), 0.0, 0.0)
        assert np.isnan(weights[0])

    def test_rejects_bad_center(self):
        with pytest.raises(ValueError):
            kernel_weights([[0.0, 0.0, 0.0]], (0.0, 0.0), 1.0, 1.0)

    def test_rejects_bad_points(self):
        with pytest.raises(ValueError):
            cylinder_mask([[0.0, 0.0]], (0.0, 0.0, 0.0), 1.0, 1.0)


class TestAllometricKernelWeights:
    """Kernel sized from the height of the center."""

    def test_uses_crown_dimensions(self):
        params = KernelParameters()
        center = np.array([0.0, 0.0, 10.0])
        points = np.array([[1.0, 0.0, 10.0], [0.0, 0.5, 11.0]])
        expected = kernel_weights(points, center, params.crown_width(10.0), params.crown_length(10.0))
        np.testing.assert_allclose(allometric_kernel_weights(points, center, params), expected)

    def test_low_returns_get_zero(self):
        params = KernelParameters(minz=2.0, h2cl=2.0)
        points = np.array([[0.0, 0.0, 1.5], [0.0, 0.0, 2.5]])
        weights = allometric_kernel_weights(points, (0.0, 0.0, 2.0), params)
        assert weights[0] == 0.0
        assert weights[1] > 0.0


@pytest.mark.filterwarnings("error")
def test_vertical_distances_huge_values_do_not_warn():
    values = vertical_distances(1e308, 1e308, np.array([-1e308, 0.0]))
    assert values.shape == (2,)
