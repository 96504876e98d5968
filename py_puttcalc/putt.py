"""Parameters for computing putt trajectories.

Classes:
- Putt: The parameter set of one request: distance to the cup, green, launch angle and overrun.
- PuttProps: A dataclass translating a Putt into engine-ready scalars in SI units
    (meters, seconds, radians), including the derived rolling deceleration and slope vector.

Notes:
- End users typically work with Putt objects; engines construct PuttProps internally
    to avoid per-step unit conversions.
- PuttResult objects include the PuttProps instance used to calculate a trajectory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from typing_extensions import Optional, Union

from py_puttcalc.constants import cCupDiameter, cMinimumTravel, cStandardGravity
from py_puttcalc.cup import Cup
from py_puttcalc.exceptions import PuttParametersError
from py_puttcalc.green import Green, ResistanceModel, SlopeConvention
from py_puttcalc.unit import Angular, Distance, PreferredUnits
from py_puttcalc.vector import Vector

__all__ = ("Putt", "PuttProps")


class Putt:
    """All information needed to compute a putt.

    Attributes:
        distance: Distance from the ball to the cup center.
        green: Green the putt is rolled on.
        launch_angle: Offset of the launch direction from the straight line to the cup,
            positive toward +x.
        overrun: How far past the cup the ball would roll on a flat green at the chosen speed.
    """

    distance: Distance
    green: Green
    launch_angle: Angular
    overrun: Distance

    def __init__(self,
                 distance: Union[float, Distance],
                 green: Green,
                 launch_angle: Optional[Union[float, Angular]] = None,
                 overrun: Optional[Union[float, Distance]] = None):
        """Initialize `Putt` and validate it.

        Args:
            distance: Distance to the cup center; bare numbers in `PreferredUnits.distance`.
            green: Green instance.
            launch_angle: Launch offset; bare numbers in `PreferredUnits.angular`.
            overrun: Overrun distance; bare numbers in `PreferredUnits.distance`.

        Raises:
            PuttParametersError: If any value is non-finite, or distance, stimp or overrun
                is out of range.

        Example:
            ```python
            from py_puttcalc import Green, Putt, Unit
            putt = Putt(Unit.Meter(3), Green(stimp=9), launch_angle=0, overrun=Unit.Meter(0.5))
            ```
        """
        self.distance = PreferredUnits.distance(distance)
        self.green = green
        self.launch_angle = PreferredUnits.angular(launch_angle or 0)
        self.overrun = PreferredUnits.distance(overrun or 0)
        self.validate()

    def __repr__(self) -> str:
        return (f"Putt(distance={self.distance}, green={self.green!r}, "
                f"launch_angle={self.launch_angle}, overrun={self.overrun})")

    def validate(self) -> None:
        """Reject parameter sets that cannot be integrated.

        Raises:
            PuttParametersError: On the first invalid value found.
        """
        values = {
            'distance': self.distance >> Distance.Meter,
            'slope': self.green.slope >> Angular.Radian,
            'stimp': self.green.stimp >> Distance.Foot,
            'fall_line': self.green.fall_line >> Angular.Radian,
            'launch_angle': self.launch_angle >> Angular.Radian,
            'overrun': self.overrun >> Distance.Meter,
        }
        for name, value in values.items():
            if not math.isfinite(value):
                raise PuttParametersError(f"{name} must be finite, got {value}")
        if values['distance'] <= 0:
            raise PuttParametersError(f"distance must be positive, got {self.distance}")
        if values['stimp'] <= 0:
            raise PuttParametersError(f"stimp must be positive, got {self.green.stimp}")
        if values['overrun'] < 0:
            raise PuttParametersError(f"overrun must not be negative, got {self.overrun}")


@dataclass
class PuttProps:
    """Putt parameters in engine units.

    Attributes:
        distance_m: Distance to the cup center (m).
        launch_angle_rad: Launch offset (rad).
        overrun_m: Requested overrun (m).
        a_roll: Rolling-resistance deceleration (m/s^2).
        slope_vector: Constant slope acceleration (m/s^2).
        cup: Cup in the local frame.
        resistance: Rolling-resistance policy.
        calc_step: Integration time step (s).
    """

    distance_m: float
    launch_angle_rad: float
    overrun_m: float
    a_roll: float
    slope_vector: Vector
    cup: Cup
    resistance: ResistanceModel = ResistanceModel.CONSTANT
    calc_step: float = 0.01

    @classmethod
    def from_putt(cls, putt: Putt,
                  slope_convention: SlopeConvention = SlopeConvention.TANGENT,
                  resistance: ResistanceModel = ResistanceModel.CONSTANT,
                  gravity: float = cStandardGravity,
                  cup_diameter: float = cCupDiameter,
                  calc_step: float = 0.01) -> PuttProps:
        """Validate `putt` and convert it to engine units."""
        putt.validate()
        distance_m = putt.distance >> Distance.Meter
        return cls(
            distance_m=distance_m,
            launch_angle_rad=putt.launch_angle >> Angular.Radian,
            overrun_m=putt.overrun >> Distance.Meter,
            a_roll=putt.green.deceleration,
            slope_vector=putt.green.slope_vector(slope_convention, gravity),
            cup=Cup.at_distance(distance_m, cup_diameter),
            resistance=resistance,
            calc_step=calc_step,
        )

    @property
    def effective_deceleration(self) -> float:
        """Net deceleration along the launch->cup line (m/s^2); <= 0 when the slope wins."""
        return self.a_roll - self.slope_vector.y

    def flat_launch_speed(self, overrun_m: Optional[float] = None) -> float:
        """Launch speed that would roll `distance + overrun` on a flat green (m/s)."""
        if overrun_m is None:
            overrun_m = self.overrun_m
        travel = max(cMinimumTravel, self.distance_m + overrun_m)
        return self.resistance.launch_speed_estimate(self.a_roll, travel)
