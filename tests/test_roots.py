"""Unit tests for the closed-form polynomial root solvers."""

import numpy as np
import pytest

from core.roots import (smallest_positive_root, solve_cubic, solve_quadratic,
                        solve_quartic)


def _expand(roots):
    """Coefficients (highest degree first) of the monic polynomial with these roots."""
    return np.poly(roots)


class TestQuadratic:
    """Tests for solve_quadratic."""

    def test_two_real_roots(self):
        """Test that x^2 - 3x + 2 yields 1 and 2 in ascending order."""
        roots = solve_quadratic(1, -3, 2)
        assert list(roots) == pytest.approx([1.0, 2.0])

    def test_no_real_roots(self):
        """Test that x^2 + 1 has no real roots."""
        assert len(solve_quadratic(1, 0, 1)) == 0

    def test_double_root(self):
        """Test that a perfect square reports its root once."""
        roots = solve_quadratic(1, -2, 1)
        assert list(roots) == pytest.approx([1.0])

    def test_vanishing_leading_coefficient_degrades_to_linear(self):
        """Test that 0 x^2 + 2x - 4 is solved as a linear equation."""
        roots = solve_quadratic(0, 2, -4)
        assert list(roots) == pytest.approx([2.0])

    def test_zero_polynomial_has_no_roots(self):
        """Test that an identically zero polynomial reports nothing."""
        assert len(solve_quadratic(0, 0, 0)) == 0

    def test_cancellation_free_small_root(self):
        """Test that the small root of x^2 - 1e8 x + 1 keeps full precision."""
        roots = solve_quadratic(1, -1e8, 1)
        assert roots[0] == pytest.approx(1e-8, rel=1e-9)
        assert roots[1] == pytest.approx(1e8, rel=1e-9)


class TestCubic:
    """Tests for solve_cubic."""

    def test_three_distinct_roots(self):
        """Test that (x-1)(x-2)(x-3) yields 1, 2, 3."""
        roots = solve_cubic(1, -6, 11, -6)
        assert list(roots) == pytest.approx([1.0, 2.0, 3.0], abs=1e-9)

    def test_single_real_root(self):
        """Test that x^3 - 1 has exactly one real root."""
        roots = solve_cubic(1, 0, 0, -1)
        assert list(roots) == pytest.approx([1.0])

    def test_triple_root(self):
        """Test that (x-2)^3 reports the root once."""
        roots = solve_cubic(1, -6, 12, -8)
        assert list(roots) == pytest.approx([2.0])

    def test_degrades_to_quadratic(self):
        """Test that a zero cubic coefficient falls back to the quadratic solver."""
        roots = solve_cubic(0, 1, -3, 2)
        assert list(roots) == pytest.approx([1.0, 2.0])


class TestQuartic:
    """Tests for solve_quartic."""

    def test_four_distinct_roots(self):
        """Test that (x-1)(x-2)(x-3)(x-4) yields its four roots in order."""
        roots = solve_quartic(1, -10, 35, -50, 24)
        assert list(roots) == pytest.approx([1.0, 2.0, 3.0, 4.0], abs=1e-6)

    def test_biquadratic(self):
        """Test that x^4 - 5x^2 + 4 yields -2, -1, 1, 2."""
        roots = solve_quartic(1, 0, -5, 0, 4)
        assert list(roots) == pytest.approx([-2.0, -1.0, 1.0, 2.0], abs=1e-9)

    def test_no_real_roots(self):
        """Test that x^4 + 1 has no real roots."""
        assert len(solve_quartic(1, 0, 0, 0, 1)) == 0

    def test_two_real_roots(self):
        """Test that (x^2 - 4)(x^2 + 1) yields only -2 and 2."""
        roots = solve_quartic(1, 0, -3, 0, -4)
        assert list(roots) == pytest.approx([-2.0, 2.0], abs=1e-9)

    def test_degrades_to_cubic(self):
        """Test that a zero quartic coefficient falls back to the cubic solver."""
        roots = solve_quartic(0, 1, -6, 11, -6)
        assert list(roots) == pytest.approx([1.0, 2.0, 3.0], abs=1e-9)

    @pytest.mark.parametrize("expected", [
        [-3.5, -0.25, 0.75, 6.0],
        [0.1, 0.2, 5.0, 9.0],
        [-7.0, -4.0, -2.5, -1.0],
        [-1.5, 0.5, 2.25, 3.0],
    ])
    def test_roots_are_ascending(self, expected):
        """Test that quartics built from known roots return them sorted."""
        roots = solve_quartic(*_expand(expected))
        assert list(roots) == pytest.approx(expected, abs=1e-6)
        assert all(np.diff(roots) >= 0)


class TestSmallestPositiveRoot:
    """Tests for the root selection policy."""

    def test_picks_smallest_above_epsilon(self):
        """Test that negative roots never win over positive ones."""
        assert smallest_positive_root(np.array([-2.0, 3.0, 0.5]), 1e-6) == 0.5

    def test_ignores_roots_at_origin(self):
        """Test that a root at zero is rejected."""
        assert smallest_positive_root(np.array([0.0, 2.0]), 1e-6) == 2.0

    def test_none_when_all_behind(self):
        """Test that only negative roots yield None."""
        assert smallest_positive_root(np.array([-3.0, -1.0]), 1e-6) is None

    def test_none_for_empty(self):
        """Test that an empty root array yields None."""
        assert smallest_positive_root(np.array([]), 1e-6) is None
