import math

import pytest

from py_puttcalc import (Green, PuttParametersError, ResistanceModel, SlopeConvention, Unit, Vector,
                         compute_deceleration, slope_acceleration)
from py_puttcalc.constants import cStandardGravity


class TestDeceleration:

    def test_stimp_nine(self):
        # 1.83^2 / (2 * 9 * 0.3048)
        assert compute_deceleration(9.0) == pytest.approx(0.6104, abs=1e-4)

    def test_dimensioned_stimp(self):
        assert compute_deceleration(Unit.Foot(9)) == pytest.approx(compute_deceleration(9.0))
        assert compute_deceleration(Unit.Meter(9 * 0.3048)) == pytest.approx(compute_deceleration(9.0))

    def test_faster_green_decelerates_less(self):
        assert compute_deceleration(13.0) < compute_deceleration(9.0) < compute_deceleration(7.0)

    @pytest.mark.parametrize("stimp", [0.0, 0.01, -5.0])
    def test_degenerate_reading_is_clamped(self, stimp):
        # Roll-out length clamped to 0.1 m
        assert compute_deceleration(stimp) == pytest.approx(1.83 ** 2 / 0.2)
        assert math.isfinite(compute_deceleration(stimp))


class TestSlopeConvention:

    def test_tangent(self):
        slope = math.radians(2)
        assert SlopeConvention.TANGENT.downhill_acceleration(slope) == pytest.approx(
            cStandardGravity * math.tan(slope))

    def test_sine(self):
        slope = math.radians(2)
        assert SlopeConvention.SINE.downhill_acceleration(slope) == pytest.approx(
            cStandardGravity * math.sin(slope))

    def test_conventions_differ(self):
        slope = math.radians(5)
        assert (SlopeConvention.TANGENT.downhill_acceleration(slope)
                > SlopeConvention.SINE.downhill_acceleration(slope))

    def test_from_config_value(self):
        assert SlopeConvention('tan') is SlopeConvention.TANGENT
        assert SlopeConvention('sin') is SlopeConvention.SINE

    def test_slope_vector_direction(self):
        g_s = cStandardGravity * math.tan(math.radians(1))
        downhill = slope_acceleration(math.radians(1), 0.0)
        assert downhill.x == pytest.approx(0.0)
        assert downhill.y == pytest.approx(g_s)
        side = slope_acceleration(math.radians(1), math.radians(90))
        assert side.x == pytest.approx(g_s)
        assert side.y == pytest.approx(0.0, abs=1e-12)
        uphill = slope_acceleration(math.radians(-1), 0.0)
        assert uphill.y == pytest.approx(-g_s)


class TestResistanceModel:

    def test_constant_magnitude(self):
        velocity = Vector(0.0, 2.0)
        a = ResistanceModel.CONSTANT.acceleration(velocity, velocity.magnitude(), 0.6, 2.0)
        assert a.magnitude() == pytest.approx(0.6)
        assert a.y < 0

    def test_linear_scales_with_speed(self):
        a_fast = ResistanceModel.LINEAR.acceleration(Vector(0.0, 2.0), 2.0, 0.6, 2.0)
        a_slow = ResistanceModel.LINEAR.acceleration(Vector(0.0, 1.0), 1.0, 0.6, 2.0)
        assert a_fast.y == pytest.approx(-0.6)
        assert a_slow.y == pytest.approx(-0.3)

    def test_zero_velocity_has_no_resistance(self):
        a = ResistanceModel.CONSTANT.acceleration(Vector(0.0, 0.0), 0.0, 0.6, 2.0)
        assert a == Vector(0.0, 0.0)

    def test_holds_ball(self):
        assert ResistanceModel.CONSTANT.holds_ball(0.3, 0.6)
        assert not ResistanceModel.CONSTANT.holds_ball(0.9, 0.6)
        assert ResistanceModel.LINEAR.holds_ball(0.0, 0.6)
        assert not ResistanceModel.LINEAR.holds_ball(0.1, 0.6)

    def test_launch_speed_estimate(self):
        assert ResistanceModel.CONSTANT.launch_speed_estimate(0.6104, 3.5) == pytest.approx(
            math.sqrt(2 * 0.6104 * 3.5))
        assert ResistanceModel.CONSTANT.launch_speed_estimate(0.0, 3.5) == 0.0
        assert ResistanceModel.CONSTANT.launch_speed_estimate(0.6, -1.0) == 0.0

    def test_stopping_time_estimate(self):
        assert ResistanceModel.CONSTANT.stopping_time_estimate(2.0, 0.5, 0.01) == pytest.approx(4.0)
        assert ResistanceModel.CONSTANT.stopping_time_estimate(2.0, 0.0, 0.01) == math.inf
        assert ResistanceModel.LINEAR.stopping_time_estimate(2.0, 0.5, 0.01) > 4.0

    def test_stopping_time_on_slope(self):
        # A holding slope slows the ball at a_roll - slope at worst
        assert ResistanceModel.CONSTANT.stopping_time_estimate(2.0, 0.5, 0.01, 0.25) == pytest.approx(8.0)
        assert ResistanceModel.CONSTANT.stopping_time_estimate(2.0, 0.5, 0.01, 0.5) == pytest.approx(4.0)
        assert ResistanceModel.CONSTANT.stopping_time_estimate(2.0, 0.5, 0.01, 1.0) == pytest.approx(4.0)


class TestGreen:

    def test_defaults(self):
        green = Green(9)
        assert green.stimp >> Unit.Foot == pytest.approx(9)
        assert green.slope >> Unit.Degree == 0
        assert green.fall_line >> Unit.Degree == 0
        assert green.slope_vector() == Vector(0.0, 0.0)

    def test_deceleration(self):
        assert Green(Unit.Foot(9)).deceleration == pytest.approx(compute_deceleration(9.0))

    def test_slope_vector(self):
        green = Green(9, Unit.Degree(2), Unit.Degree(90))
        vector = green.slope_vector(SlopeConvention.SINE)
        assert vector.x == pytest.approx(cStandardGravity * math.sin(math.radians(2)))
        assert vector.y == pytest.approx(0.0, abs=1e-12)

    def test_repr(self):
        assert repr(Green(9, 1.5, 90)) == "Green(stimp=9.0ft, slope=1.5°, fall_line=90.0°)"

    def test_from_deceleration(self):
        green = Green.from_deceleration(0.6104, Unit.Degree(1), Unit.Degree(90))
        assert green.deceleration == pytest.approx(0.6104)
        assert green.stimp >> Unit.Foot == pytest.approx(9.0, abs=0.01)
        assert green.slope >> Unit.Degree == pytest.approx(1)
        assert green.fall_line >> Unit.Degree == pytest.approx(90)

    @pytest.mark.parametrize("a_roll", [0.0, -0.5, math.nan, math.inf, 17.0])
    def test_from_deceleration_rejects(self, a_roll):
        with pytest.raises(PuttParametersError):
            Green.from_deceleration(a_roll)
