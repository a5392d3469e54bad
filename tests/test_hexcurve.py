"""Tests for hexcurve lines, arcs, piecewise curves and sampling."""

import math

import numpy as np
import numpy.testing as npt
import pytest

from _hex_common import NumericDegenerateError, OutOfRangeError
from hexcoord import Hex, HexFractional, direction
from hexcurve import (
    Arc,
    CircularArc,
    Line,
    Piecewise,
    Spin,
    join,
    sample_curve,
    signed_area,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def F(q, r):
    return HexFractional(float(q), float(r))


def _close(a: HexFractional, b: HexFractional, tol=1e-9):
    return a.distance_to(b) == pytest.approx(0.0, abs=tol)


O = F(0, 0)
UNIT_START = F(1, 0)
UNIT_TANGENT = F(1, -2).normalize()


def _unit_arc(i: int) -> Arc:
    return Arc(UNIT_START, UNIT_TANGENT, direction(i).to_fractional())


# ===========================================================================
# Orientation
# ===========================================================================

class TestSignedArea:
    def test_collinear(self):
        assert signed_area(F(0, 0), F(1, 0), F(3, 0)) == 0.0

    def test_sign_follows_direction_order(self):
        # Direction 0 to direction 1 turns the way rotation indices increase.
        assert signed_area(O, F(1, 0), F(1, -1)) < 0
        assert signed_area(O, F(1, -1), F(1, 0)) > 0

    def test_negative_area_is_counter_clockwise(self):
        arc = _unit_arc(2)
        assert signed_area(arc.pi, arc.pi + arc.ti, arc.pe) < 0
        assert arc.spin() is Spin.COUNTER_CLOCKWISE


# ===========================================================================
# Line
# ===========================================================================

class TestLine:
    line = Line(F(1, 1), F(4, 1))

    def test_length(self):
        assert self.line.length() == pytest.approx(3.0)
        assert Line(O, F(1, -1)).length() == pytest.approx(1.0)

    def test_sample(self):
        s = self.line.sample(0.5)
        assert _close(s.position, F(2.5, 1))
        assert _close(s.tangent, F(1, 0))
        assert s.curvature == HexFractional.origin()

    def test_end_points(self):
        assert _close(self.line.sample(0.0).position, F(1, 1))
        assert _close(self.line.sample(1.0).position, F(4, 1))

    def test_spin(self):
        assert self.line.spin() is Spin.NONE

    @pytest.mark.parametrize("t", [-0.01, 1.01])
    def test_parameter_range(self, t):
        with pytest.raises(OutOfRangeError):
            self.line.sample(t)
        with pytest.raises(ValueError):
            self.line.sample(t)

    def test_zero_length(self):
        with pytest.raises(NumericDegenerateError):
            Line(F(2, 2), F(2, 2))


# ===========================================================================
# Arc
# ===========================================================================

class TestArc:
    @pytest.mark.parametrize("i", [1, 2, 3, 4, 5])
    def test_unit_arc(self, i):
        arc = _unit_arc(i)
        assert arc.length() == pytest.approx(i * math.pi / 3)
        assert arc.spin() is Spin.COUNTER_CLOCKWISE
        assert arc.radius == pytest.approx(1.0)
        assert _close(arc.center, O)

    @pytest.mark.parametrize("t", [0.0, 0.3, 0.5, 1.0])
    def test_samples_lie_on_circle(self, t):
        s = _unit_arc(4).sample(t)
        assert s.position.length() == pytest.approx(1.0)
        assert s.tangent.length() == pytest.approx(1.0)
        assert s.tangent.dot(s.position) == pytest.approx(0.0, abs=1e-9)
        assert s.curvature.length() == pytest.approx(1.0)
        assert _close(s.curvature, -s.position)

    def test_end_points_and_tangents(self):
        arc = _unit_arc(2)
        start = arc.sample(0.0)
        end = arc.sample(1.0)
        assert _close(start.position, UNIT_START)
        assert _close(start.tangent, UNIT_TANGENT)
        assert _close(end.position, direction(2).to_fractional())
        # Tangent at direction 2 keeps turning toward direction 3.
        assert _close(end.tangent, F(-2, 1).normalize())

    def test_midpoint(self):
        s = _unit_arc(2).sample(0.5)
        assert _close(s.position, direction(1).to_fractional())

    def test_clockwise(self):
        arc = Arc(UNIT_START, -UNIT_TANGENT, direction(5).to_fractional())
        assert arc.spin() is Spin.CLOCKWISE
        assert arc.length() == pytest.approx(math.pi / 3)
        assert _close(arc.sample(1.0).position, direction(5).to_fractional())
        assert _close(arc.sample(0.5).position, F(1, 1).normalize())

    def test_radius_scales(self):
        arc = Arc(F(3, 0), F(1, -2).normalize(), F(-3, 0))
        assert arc.radius == pytest.approx(3.0)
        assert arc.length() == pytest.approx(3.0 * math.pi)

    def test_straight_arc_is_degenerate(self):
        with pytest.raises(NumericDegenerateError):
            Arc(O, F(1, 0), F(2, 0))

    def test_parameter_range(self):
        with pytest.raises(OutOfRangeError):
            _unit_arc(1).sample(2.0)


class TestCircularArc:
    def test_to_curve_arc(self):
        curve = CircularArc(UNIT_START, UNIT_TANGENT, direction(3).to_fractional()).to_curve()
        assert isinstance(curve, Arc)
        assert curve.length() == pytest.approx(math.pi)

    def test_to_curve_line(self):
        curve = CircularArc(O, F(1, 0), F(3, 0)).to_curve()
        assert isinstance(curve, Line)
        assert curve.length() == pytest.approx(3.0)

    def test_str(self):
        arc = CircularArc(F(1, 0), F(0, 1), F(1, 1))
        assert str(arc) == "{I: {1.000, 0.000, -1.000}, T: {0.000, 1.000, -1.000}, E: {1.000, 1.000, -2.000}}"


# ===========================================================================
# Piecewise
# ===========================================================================

class TestPiecewise:
    def test_length_is_sum(self):
        curve = join(Line(O, F(1, 0)), Line(F(1, 0), F(3, 0)))
        assert isinstance(curve, Piecewise)
        assert curve.length() == pytest.approx(3.0)
        assert len(curve) == 2

    def test_sample_by_arc_length(self):
        curve = join(Line(O, F(1, 0)), Line(F(1, 0), F(3, 0)))
        assert _close(curve.sample(0.5).position, F(1.5, 0))
        assert _close(curve.sample(0.25).position, F(0.75, 0))
        assert _close(curve.sample(0.0).position, O)
        assert _close(curve.sample(1.0).position, F(3, 0))

    def test_mixed_curves(self):
        arc = _unit_arc(3)
        tail = Line(direction(3).to_fractional(), F(-1, 2))
        curve = join(arc, tail)
        assert curve.length() == pytest.approx(math.pi + 2.0)
        assert curve.spin() is Spin.NONE
        split = math.pi / curve.length()
        assert _close(curve.sample(split).position, F(-1, 0))

    def test_common_spin(self):
        curve = join(_unit_arc(1), _unit_arc(2))
        assert curve.spin() is Spin.COUNTER_CLOCKWISE
        assert join(Line(O, F(1, 0))).spin() is Spin.NONE

    def test_empty(self):
        with pytest.raises(ValueError):
            join()
        with pytest.raises(ValueError):
            Piecewise([])

    def test_parameter_range(self):
        with pytest.raises(OutOfRangeError):
            join(Line(O, F(1, 0))).sample(-0.5)


# ===========================================================================
# Sampling
# ===========================================================================

class TestSampleCurve:
    def test_line(self):
        pos, tan, curv = sample_curve(Line(O, F(2, 0)), 3)
        npt.assert_allclose(pos, [[0, 0], [1, 0], [2, 0]], atol=1e-12)
        npt.assert_allclose(tan, [[1, 0]] * 3, atol=1e-12)
        npt.assert_array_equal(curv, np.zeros((3, 2)))

    def test_cartesian(self):
        pos, tan, _ = sample_curve(Line(O, F(2, 0)), 3, cartesian=True)
        npt.assert_allclose(pos[:, 0], [0.0, math.sqrt(3), 2 * math.sqrt(3)])
        npt.assert_allclose(pos[:, 1], 0.0, atol=1e-12)
        npt.assert_allclose(tan[0], [math.sqrt(3), 0.0])

    def test_arc_shapes(self):
        pos, tan, curv = sample_curve(_unit_arc(5), 50)
        assert pos.shape == tan.shape == curv.shape == (50, 2)
        npt.assert_allclose(pos[0], [1.0, 0.0], atol=1e-9)
        npt.assert_allclose(pos[-1], [0.0, 1.0], atol=1e-9)

    def test_empty_and_invalid(self):
        pos, _, _ = sample_curve(Line(O, F(1, 0)), 0)
        assert pos.shape == (0, 2)
        with pytest.raises(ValueError):
            sample_curve(Line(O, F(1, 0)), -1)

    def test_hex_waypoints(self):
        curve = Line(Hex(0, 0).to_fractional(), Hex(0, 3).to_fractional())
        pos, _, _ = sample_curve(curve, 4)
        npt.assert_allclose(pos[:, 1], [0, 1, 2, 3], atol=1e-12)
