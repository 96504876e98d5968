import pytest

from py_puttcalc import loadImperialUnits, loadMetricUnits
from py_puttcalc.unit import *


def back_n_forth_pytest(value, units, unit_class):
    u = unit_class(value, units)
    v = u >> units
    assert pytest.approx(v, abs=1e-7) == value


class TestUnitLoaders:
    def test_loaders(self):
        PreferredUnits.restore_defaults()
        assert PreferredUnits.distance == Unit.Meter
        loadImperialUnits()
        assert PreferredUnits.distance == Unit.Foot
        assert PreferredUnits.velocity == Unit.FPS
        loadMetricUnits()
        assert PreferredUnits.distance == Unit.Meter
        assert PreferredUnits.velocity == Unit.MPS
        PreferredUnits.restore_defaults()
        assert PreferredUnits.stimp == Unit.Foot


class TestUnitsParser:
    @pytest.mark.parametrize(
        "case",
        ['10', '10.2', '.2', '0.', '10m', '10 meter'],
        ids=lambda c: f"parse_value_{c.replace('.', '_').replace(' ', '_')}"
    )
    def test_parse_values(self, case):
        ret = Unit.parse(case, Unit.Meter)
        assert isinstance(ret, Distance)
        assert ret.units == Unit.Meter

        ret = Unit.parse(case, 'meter')
        assert isinstance(ret, Distance)
        assert ret.units == Unit.Meter

        ret = Unit.parse(case, 'distance')
        assert isinstance(ret, Distance)
        assert ret.units == Unit.Meter

    def test_parse_units(self):
        assert Unit._parse_unit('ft') == Unit.Foot
        assert Unit._parse_unit('feet') == Unit.Foot
        assert Unit._parse_unit('m/s') == Unit.MPS
        assert Unit._parse_unit('deg') == Unit.Degree
        assert Unit._parse_unit('meters') == Unit.Meter
        assert Unit._parse_unit('stimp') == PreferredUnits.stimp
        assert Unit._parse_unit('oops') is None

    def test_parse_with_suffix(self):
        ret = Unit.parse('9.5ft')
        assert isinstance(ret, Distance)
        assert ret >> Unit.Meter == pytest.approx(9.5 * 0.3048)

        ret = Unit.parse('1.5deg')
        assert isinstance(ret, Angular)
        assert ret.units == Unit.Degree

    @pytest.mark.parametrize("bad", ['10parsecs', 'meter'])
    def test_parse_errors(self, bad):
        with pytest.raises(UnitAliasError):
            Unit.parse(bad)

    def test_parse_preferred_alias_error(self):
        with pytest.raises(UnitAliasError):
            Unit.parse(10, 'nonsense')

    def test_parse_type_error(self):
        with pytest.raises(TypeError):
            Unit.parse([10], Unit.Meter)  # type: ignore[arg-type]


class TestDistance:
    @pytest.mark.parametrize("unit", [Unit.Millimeter, Unit.Centimeter, Unit.Meter,
                                      Unit.Inch, Unit.Foot, Unit.Yard])
    def test_back_n_forth(self, unit):
        back_n_forth_pytest(3, unit, Distance)

    def test_conversions(self):
        d = Distance.Foot(10)
        assert d >> Distance.Meter == pytest.approx(3.048)
        assert (d << Distance.Inch).units == Unit.Inch
        assert (d << Distance.Inch) >> Distance.Inch == pytest.approx(120)
        assert Distance.Centimeter(10.8) >> Distance.Meter == pytest.approx(0.108)

    def test_must_fail(self):
        with pytest.raises(UnitConversionError):
            Distance(1, Unit.Degree)
        with pytest.raises(TypeError):
            Distance(1, 12)  # type: ignore[arg-type]


class TestAngular:
    @pytest.mark.parametrize("unit", [Unit.Radian, Unit.Degree])
    def test_back_n_forth(self, unit):
        back_n_forth_pytest(3, unit, Angular)

    def test_degree_radian(self):
        assert Angular.Degree(180) >> Angular.Radian == pytest.approx(3.141592653589793)


class TestVelocity:
    @pytest.mark.parametrize("unit", [Unit.MPS, Unit.KMH, Unit.FPS, Unit.MPH])
    def test_back_n_forth(self, unit):
        back_n_forth_pytest(3, unit, Velocity)

    def test_fps(self):
        assert Velocity.FPS(10) >> Velocity.MPS == pytest.approx(3.048)


class TestUnitArithmetic:
    def test_add_sub_mul(self):
        d = Distance.Meter(3)
        assert (d + 1) >> Distance.Meter == pytest.approx(4)
        assert (d - Distance.Centimeter(50)) >> Distance.Meter == pytest.approx(2.5)
        assert (2 * d) >> Distance.Meter == pytest.approx(6)
        assert (-d) >> Distance.Meter == pytest.approx(-3)

    def test_comparisons(self):
        assert Distance.Meter(1) < Distance.Meter(2)
        assert Distance.Foot(3) <= Distance.Meter(1)
        assert Distance.Meter(1) == Distance.Centimeter(100)

    def test_unit_call_accepts_dimension(self):
        d = Distance.Foot(10)
        converted = Unit.Meter(d)
        assert converted.units == Unit.Meter
        assert converted >> Unit.Meter == pytest.approx(3.048)

    def test_unit_call_rejects_other_dimension(self):
        with pytest.raises(UnitConversionError):
            Unit.Meter(Angular.Degree(1))


class TestPreferredUnits:
    def test_set_from_strings(self):
        PreferredUnits.set(distance='ft', velocity='fps')
        assert PreferredUnits.distance == Unit.Foot
        assert PreferredUnits.velocity == Unit.FPS

    def test_set_invalid_is_ignored(self):
        PreferredUnits.set(distance='parsec', nosuchfield=Unit.Meter)
        assert PreferredUnits.distance == Unit.Meter

    def test_bare_numbers_use_preferred(self):
        PreferredUnits.distance = Unit.Foot
        assert PreferredUnits.distance(10) >> Distance.Meter == pytest.approx(3.048)
