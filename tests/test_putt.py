import math

import pytest

from py_puttcalc import (Green, Putt, PuttParametersError, PuttProps, ResistanceModel, SlopeConvention,
                         Unit, Vector, compute_deceleration)
from py_puttcalc.constants import cStandardGravity


class TestPutt:

    def test_bare_numbers_use_preferred_units(self):
        putt = Putt(3.0, Green(9), 1.0, 0.5)
        assert putt.distance >> Unit.Meter == pytest.approx(3.0)
        assert putt.launch_angle >> Unit.Degree == pytest.approx(1.0)
        assert putt.overrun >> Unit.Meter == pytest.approx(0.5)

    def test_defaults(self):
        putt = Putt(Unit.Foot(10), Green(9))
        assert putt.launch_angle >> Unit.Radian == 0
        assert putt.overrun >> Unit.Meter == 0

    @pytest.mark.parametrize("distance", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_distance(self, distance):
        with pytest.raises(PuttParametersError):
            Putt(distance, Green(9))

    @pytest.mark.parametrize("stimp", [0.0, -9.0, math.nan])
    def test_invalid_stimp(self, stimp):
        with pytest.raises(PuttParametersError):
            Putt(3.0, Green(stimp))

    def test_negative_overrun(self):
        with pytest.raises(PuttParametersError):
            Putt(3.0, Green(9), overrun=-0.1)

    @pytest.mark.parametrize("field", ["slope", "fall_line"])
    def test_non_finite_angles(self, field):
        kwargs = {field: math.inf}
        with pytest.raises(PuttParametersError, match=field):
            Putt(3.0, Green(9, **kwargs))

    def test_validate_after_mutation(self):
        putt = Putt(3.0, Green(9))
        putt.launch_angle = Unit.Degree(math.nan)
        with pytest.raises(PuttParametersError, match="launch_angle"):
            putt.validate()

    def test_parameters_error_is_value_error(self):
        with pytest.raises(ValueError):
            Putt(-3.0, Green(9))


class TestPuttProps:

    def test_from_putt(self):
        putt = Putt(3.0, Green(9, 1.0, 90), 2.0, 0.5)
        props = PuttProps.from_putt(putt)
        assert props.distance_m == pytest.approx(3.0)
        assert props.launch_angle_rad == pytest.approx(math.radians(2.0))
        assert props.overrun_m == pytest.approx(0.5)
        assert props.a_roll == pytest.approx(compute_deceleration(9))
        assert props.slope_vector.x == pytest.approx(cStandardGravity * math.tan(math.radians(1.0)))
        assert props.cup.center == Vector(0.0, 3.0)
        assert props.resistance is ResistanceModel.CONSTANT

    def test_from_putt_options(self):
        putt = Putt(3.0, Green(9, 1.0))
        props = PuttProps.from_putt(putt, slope_convention=SlopeConvention.SINE,
                                    resistance=ResistanceModel.LINEAR, gravity=10.0,
                                    cup_diameter=0.2, calc_step=0.005)
        assert props.slope_vector.y == pytest.approx(10.0 * math.sin(math.radians(1.0)))
        assert props.cup.radius == pytest.approx(0.1)
        assert props.calc_step == 0.005
        assert props.resistance is ResistanceModel.LINEAR

    def test_from_putt_validates(self):
        putt = Putt(3.0, Green(9))
        putt.overrun = Unit.Meter(-1)
        with pytest.raises(PuttParametersError):
            PuttProps.from_putt(putt)

    def test_effective_deceleration(self):
        flat = PuttProps.from_putt(Putt(3.0, Green(9)))
        downhill = PuttProps.from_putt(Putt(3.0, Green(9, 1.0)))
        uphill = PuttProps.from_putt(Putt(3.0, Green(9, -1.0)))
        assert flat.effective_deceleration == pytest.approx(flat.a_roll)
        assert downhill.effective_deceleration < flat.effective_deceleration < uphill.effective_deceleration
        steep = PuttProps.from_putt(Putt(3.0, Green(9, 5.0)))
        assert steep.effective_deceleration <= 0

    def test_flat_launch_speed(self):
        props = PuttProps.from_putt(Putt(3.0, Green(9), overrun=0.5))
        assert props.flat_launch_speed() == pytest.approx(math.sqrt(2 * props.a_roll * 3.5))
        assert props.flat_launch_speed(1.0) == pytest.approx(math.sqrt(2 * props.a_roll * 4.0))
        assert props.flat_launch_speed(-10.0) == pytest.approx(math.sqrt(2 * props.a_roll * 0.05))
