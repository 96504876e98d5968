"""Surface model of the putting green.

Components:
    - compute_deceleration: stimpmeter reading -> rolling-resistance deceleration magnitude
    - SlopeConvention: how a slope angle becomes a downhill acceleration
    - ResistanceModel: how rolling resistance depends on ball velocity
    - Green: slope, stimp and fall-line of a green

Deceleration Model:
    A stimpmeter releases the ball at `cStimpReleaseSpeed` and the reading is the roll-out
    length in feet. Under a constant deceleration `a`, `v_ref**2 = 2 * a * length`, so

        a_roll = v_ref**2 / (2 * max(0.1, stimp_ft * 0.3048))

Slope:
    A positive slope means the green falls toward `fall_line`, an angle measured from the
    launch->cup line toward +x. `fall_line=0` is a straight downhill putt; `fall_line=90deg`
    is a side slope that breaks the ball toward +x. The slope acceleration is the
    constant vector `g_s * (sin(fall_line), cos(fall_line))` with `g_s` given by the
    configured SlopeConvention.
"""
from __future__ import annotations

import math
from enum import Enum

from typing_extensions import Optional, Union

from py_puttcalc.constants import (cStandardGravity, cStimpReleaseSpeed, cStimpUnitLength,
                                   cMinimumStimpLength, cVelocityEpsilon)
from py_puttcalc.exceptions import PuttParametersError
from py_puttcalc.unit import Angular, Distance, PreferredUnits
from py_puttcalc.vector import Vector

__all__ = (
    'compute_deceleration',
    'slope_acceleration',
    'SlopeConvention',
    'ResistanceModel',
    'Green',
)


def compute_deceleration(stimp: Union[float, Distance]) -> float:
    """Rolling-resistance deceleration (m/s^2) for a stimpmeter reading.

    Args:
        stimp: Stimpmeter reading. Bare numbers are in `PreferredUnits.stimp` (feet by default).

    Returns:
        Positive deceleration magnitude. Degenerate (tiny, zero or negative) readings are
        clamped to a 0.1 m roll-out instead of dividing by zero.

    Examples:
        >>> round(compute_deceleration(9.0), 2)
        0.61
    """
    stimp_ft = PreferredUnits.stimp(stimp) >> Distance.Foot
    length_m = max(cMinimumStimpLength, stimp_ft * cStimpUnitLength)
    return cStimpReleaseSpeed * cStimpReleaseSpeed / (2.0 * length_m)


class SlopeConvention(Enum):
    """Formula turning a slope angle into the downhill acceleration magnitude.

    TANGENT: `g * tan(slope)`
    SINE: `g * sin(slope)`, the component of gravity along an inclined plane
    """

    TANGENT = 'tan'
    SINE = 'sin'

    def downhill_acceleration(self, slope_rad: float, gravity: float = cStandardGravity) -> float:
        """Signed acceleration along the fall line (m/s^2)."""
        if self is SlopeConvention.SINE:
            return gravity * math.sin(slope_rad)
        return gravity * math.tan(slope_rad)


def slope_acceleration(slope_rad: float, fall_line_rad: float,
                       convention: SlopeConvention = SlopeConvention.TANGENT,
                       gravity: float = cStandardGravity) -> Vector:
    """Constant slope acceleration vector in the local frame."""
    g_s = convention.downhill_acceleration(slope_rad, gravity)
    return Vector(g_s * math.sin(fall_line_rad), g_s * math.cos(fall_line_rad))


class ResistanceModel(Enum):
    """Rolling-resistance policy.

    CONSTANT: magnitude `a_roll` opposing the velocity, `-a_roll * v / |v|`
    LINEAR: linear drag `-k * v` with `k = a_roll / launch_speed`, so the
        initial deceleration equals `a_roll` and decays with speed
    """

    CONSTANT = 'constant'
    LINEAR = 'linear'

    def acceleration(self, velocity: Vector, speed: float, a_roll: float, launch_speed: float) -> Vector:
        """Resistance acceleration for the current velocity."""
        if self is ResistanceModel.LINEAR:
            k = a_roll / max(launch_speed, cVelocityEpsilon)
            return velocity * -k  # type: ignore[return-value]
        return velocity * (-a_roll / (speed + cVelocityEpsilon))  # type: ignore[return-value]

    def holds_ball(self, slope_magnitude: float, a_roll: float) -> bool:
        """True if resistance alone keeps a ball that has come to rest from rolling again.

        Constant resistance acts like static friction up to `a_roll`; linear drag vanishes at rest.
        """
        if self is ResistanceModel.LINEAR:
            return slope_magnitude == 0
        return slope_magnitude <= a_roll

    def launch_speed_estimate(self, deceleration: float, travel: float) -> float:
        """Launch speed that rolls `travel` meters on a plane with the given deceleration.

        Exact for a flat green with the constant model; the linear model ignores the
        stopping-speed threshold.
        """
        if deceleration <= 0 or travel <= 0:
            return 0.0
        if self is ResistanceModel.LINEAR:
            return math.sqrt(deceleration * travel)
        return math.sqrt(2.0 * deceleration * travel)

    def stopping_time_estimate(self, launch_speed: float, a_roll: float, min_speed: float,
                               slope_magnitude: float = 0.0) -> float:
        """Rough time (s) for the ball to slow to `min_speed`.

        With constant resistance that holds the ball, the speed drops at least at
        `a_roll - slope_magnitude`, which bounds the stopping time on any slope. Otherwise
        the flat-green time is returned.
        """
        if a_roll <= 0:
            return math.inf
        if self is ResistanceModel.LINEAR:
            if launch_speed <= min_speed or min_speed <= 0:
                return launch_speed / a_roll
            return launch_speed / a_roll * math.log(launch_speed / min_speed)
        if 0 < slope_magnitude < a_roll:
            return launch_speed / (a_roll - slope_magnitude)
        return launch_speed / a_roll


class Green:
    """Slope and speed of a putting green.

    Attributes:
        stimp: Stimpmeter reading (roll-out length).
        slope: Inclination of the green. Positive falls toward `fall_line`.
        fall_line: Direction the green falls, from the launch->cup line toward +x.
    """

    stimp: Distance
    slope: Angular
    fall_line: Angular

    def __init__(self,
                 stimp: Union[float, Distance],
                 slope: Optional[Union[float, Angular]] = None,
                 fall_line: Optional[Union[float, Angular]] = None):
        """
        Args:
            stimp: Stimpmeter reading; bare numbers in `PreferredUnits.stimp`.
            slope: Slope angle; bare numbers in `PreferredUnits.angular`.
            fall_line: Fall-line direction; bare numbers in `PreferredUnits.angular`.

        Example:
            ```python
            from py_puttcalc import Green, Unit
            green = Green(stimp=Unit.Foot(10), slope=Unit.Degree(1.5), fall_line=Unit.Degree(90))
            ```
        """
        self.stimp = PreferredUnits.stimp(stimp)
        self.slope = PreferredUnits.angular(slope or 0)
        self.fall_line = PreferredUnits.angular(fall_line or 0)

    def __repr__(self) -> str:
        return f"Green(stimp={self.stimp}, slope={self.slope}, fall_line={self.fall_line})"

    @property
    def deceleration(self) -> float:
        """Rolling-resistance deceleration for this green (m/s^2)."""
        return compute_deceleration(self.stimp)

    def slope_vector(self, convention: SlopeConvention = SlopeConvention.TANGENT,
                     gravity: float = cStandardGravity) -> Vector:
        """Slope acceleration vector for this green (m/s^2)."""
        return slope_acceleration(self.slope >> Angular.Radian, self.fall_line >> Angular.Radian,
                                  convention, gravity)

    @classmethod
    def from_deceleration(cls, a_roll: float,
                          slope: Optional[Union[float, Angular]] = None,
                          fall_line: Optional[Union[float, Angular]] = None) -> Green:
        """Green whose stimp reading yields the rolling-resistance deceleration `a_roll`.

        Args:
            a_roll: Deceleration (m/s^2).
            slope: Slope angle; bare numbers in `PreferredUnits.angular`.
            fall_line: Fall-line direction; bare numbers in `PreferredUnits.angular`.

        Raises:
            PuttParametersError: If `a_roll` is not positive, or is above the deceleration of
                the shortest roll-out the stimp model accepts.

        Examples:
            >>> round(Green.from_deceleration(0.6104).stimp >> Distance.Foot, 2)
            9.0
        """
        a_max = cStimpReleaseSpeed * cStimpReleaseSpeed / (2.0 * cMinimumStimpLength)
        if not (math.isfinite(a_roll) and 0 < a_roll <= a_max):
            raise PuttParametersError(f"a_roll must be in (0, {a_max:.2f}] m/s^2, got {a_roll}")
        length_m = cStimpReleaseSpeed * cStimpReleaseSpeed / (2.0 * a_roll)
        return cls(Distance.Foot(length_m / cStimpUnitLength), slope, fall_line)
