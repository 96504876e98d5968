import pytest

from py_puttcalc import Calculator, PreferredUnits, Unit
from tests.fixtures_and_helpers import create_flat_putt

pytestmark = pytest.mark.extended


def test_dataframe_smoke(loaded_engine_instance):
    calc = Calculator(engine=loaded_engine_instance)
    result = calc.simulate(create_flat_putt())

    try:
        df = result.dataframe()
    except ImportError as e:
        # Allow running without pandas
        assert "py_puttcalc[charts]" in str(e)
        return

    assert list(df.columns) == ['time', 'x', 'y', 'velocity_x', 'velocity_y', 'speed', 'captured']
    assert len(df) == len(result)
    assert df['captured'].sum() == 1
    assert bool(df['captured'].iloc[-1])
    assert df['y'].iloc[-1] == pytest.approx(result.stop_position.y)


def test_dataframe_units(loaded_engine_instance):
    pytest.importorskip("pandas")
    calc = Calculator(engine=loaded_engine_instance)
    result = calc.simulate(create_flat_putt(), capture=False)

    PreferredUnits.distance = Unit.Foot
    df = result.dataframe()
    assert df['y'].iloc[-1] == pytest.approx(result.stop_position.y / 0.3048)
    assert not df['captured'].any()

    formatted = result.dataframe(formatted=True)
    assert formatted['y'].iloc[-1].endswith('ft')
    assert formatted['time'].iloc[0] == '0.000 s'
