"""Tests for the cosmetic demo curve."""

import pytest

from plan_backtest.reporting.demo_curve import generate_demo_curve


class TestGenerateDemoCurve:
    """Test generate_demo_curve."""

    @pytest.mark.parametrize("final_return", [0.13, 0.0, -0.08, 0.6])
    def test_endpoints(self, final_return):
        curve = generate_demo_curve(final_return)

        assert len(curve) == 240
        assert curve[0].v == 1.0
        assert curve[-1].v == pytest.approx(1 + final_return)

    def test_labels_are_indices(self):
        curve = generate_demo_curve(0.1, points=5)
        assert [p.t for p in curve] == ["0", "1", "2", "3", "4"]

    def test_minimum_points(self):
        curve = generate_demo_curve(0.1, points=2)
        assert [p.v for p in curve] == pytest.approx([1.0, 1.1])

    def test_too_few_points(self):
        with pytest.raises(ValueError):
            generate_demo_curve(0.1, points=1)

    def test_deterministic(self):
        assert generate_demo_curve(0.05) == generate_demo_curve(0.05)
