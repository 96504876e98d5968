"""py_puttcalc exception types.

Exception Hierarchy
-------------------

Exception (built-in Python)
├── TypeError
│   └── UnitTypeError
│       └── UnitConversionError
├── ValueError
│   ├── UnitAliasError
│   └── PuttParametersError
└── RuntimeError
    └── SolverRuntimeError
        ├── AimFindingError
        └── SpeedFindingError

Exception Types
---------------

- PuttParametersError: Raised when a parameter set is rejected before integration
  (non-finite values, non-positive distance or stimp, negative overrun).

- AimFindingError: Raised when the aim-angle bisection cannot produce an angle. Contains:
  - aim_error: Deflection (in meters) at the target distance for the last angle tried
  - iterations_count: Number of bisection iterations performed
  - last_launch_angle: Last evaluated launch angle (Angular instance)
  - reason: Enumerated reasons:
    - TARGET_NOT_REACHED: Trajectory stops short of the cup at every sampled angle
    - NOT_BRACKETED: Deflection has the same sign at every angle that reaches the cup
    - NON_CONVERGENT: Iteration budget exhausted

- SpeedFindingError: Raised on request when the launch-speed search did not converge.
  Carries the best-effort SpeedSolution as `solution`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_puttcalc.trajectory_data import SpeedSolution
    from py_puttcalc.unit import Angular

__all__ = (
    'UnitTypeError',
    'UnitConversionError',
    'UnitAliasError',
    'PuttParametersError',
    'SolverRuntimeError',
    'AimFindingError',
    'SpeedFindingError',
)


class UnitTypeError(TypeError):
    """Unit type error."""


class UnitConversionError(UnitTypeError):
    """Unit conversion error."""


class UnitAliasError(ValueError):
    """Unit alias error."""


class PuttParametersError(ValueError):
    """Invalid putt parameters."""


class SolverRuntimeError(RuntimeError):
    """Solver error."""


class AimFindingError(SolverRuntimeError):
    """Exception for aim-angle search failures.

    Contains:
    - Deflection at the target distance for the last angle tried
    - Iteration count
    - Last launch angle (Angular instance)
    """

    TARGET_NOT_REACHED = "Target distance not reached"
    NOT_BRACKETED = "Target not bracketed"
    NON_CONVERGENT = "Bisection non-convergent"

    def __init__(self,
                 aim_error: float,
                 iterations_count: int,
                 last_launch_angle: Angular,
                 reason: str = ""):
        self.aim_error: float = aim_error
        self.iterations_count: int = iterations_count
        self.last_launch_angle: Angular = last_launch_angle
        self.reason: str = reason
        msg = (f'Deflection {aim_error} '
               f'meters with {last_launch_angle} launch angle, '
               f'after {iterations_count} iterations.')
        if reason:
            msg = f"{reason}. " + msg
        super().__init__(msg)


class SpeedFindingError(SolverRuntimeError):
    """Exception for a launch-speed search that ended outside tolerance."""

    def __init__(self, solution: SpeedSolution):
        self.solution = solution
        super().__init__(f'{solution.reason}: overrun error {solution.error} meters '
                         f'with {solution.speed} m/s, after {solution.iterations} iterations.')
