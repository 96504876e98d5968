import math

import pytest

from py_puttcalc.exceptions import (AimFindingError, PuttParametersError, SolverRuntimeError, SpeedFindingError,
                                    UnitAliasError, UnitConversionError, UnitTypeError)
from py_puttcalc.trajectory_data import SpeedSolution
from py_puttcalc.unit import Angular

pytestmark = pytest.mark.extended


def test_aim_finding_error_message_and_attrs():
    afe = AimFindingError(0.5, 7, Angular.Degree(1.2))
    assert "after 7 iterations" in str(afe)
    assert afe.iterations_count == 7
    assert afe.aim_error == 0.5
    assert afe.last_launch_angle >> Angular.Degree == pytest.approx(1.2)
    assert afe.reason == ""

    afe2 = AimFindingError(0.1, 2, Angular.Degree(0.1), reason=AimFindingError.NON_CONVERGENT)
    assert str(afe2).startswith(AimFindingError.NON_CONVERGENT)


def test_speed_finding_error_carries_solution():
    solution = SpeedSolution(2.1, False, 12, 0.03, SpeedSolution.NON_CONVERGENT)
    sfe = SpeedFindingError(solution)
    assert sfe.solution is solution
    assert SpeedSolution.NON_CONVERGENT in str(sfe)
    assert "after 12 iterations" in str(sfe)

    degenerate = SpeedFindingError(SpeedSolution(0.05, False, 0, math.nan, SpeedSolution.DEGENERATE))
    assert "nan" in str(degenerate)


def test_hierarchy():
    assert issubclass(PuttParametersError, ValueError)
    assert issubclass(UnitAliasError, ValueError)
    assert issubclass(UnitConversionError, UnitTypeError)
    assert issubclass(UnitTypeError, TypeError)
    assert issubclass(AimFindingError, SolverRuntimeError)
    assert issubclass(SpeedFindingError, SolverRuntimeError)
    assert issubclass(SolverRuntimeError, RuntimeError)
