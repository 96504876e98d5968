"""Euler integration engine for putt trajectories.

The ball rolls on a constant-slope plane. At each fixed time step the net acceleration is the
rolling resistance plus the constant slope acceleration, and the state advances by the
forward Euler update, velocity first:

    velocity += acceleration * dt
    position += velocity * dt

Hole capture is tested on the straight segment covered by each step, so a fast ball cannot
skip over the cup between two samples.

Classes:
    EulerPuttEngine: Concrete implementation using Euler's method

Examples:
    >>> from py_puttcalc import Calculator
    >>> calc = Calculator(engine="py_puttcalc.engines.euler:EulerPuttEngine")

See Also:
    py_puttcalc.engines.base_engine.BasePuttEngine: Base class
"""

import math

from typing_extensions import List, Optional, override

from py_puttcalc.engines.base_engine import BaseEngineConfigDict, BasePuttEngine
from py_puttcalc.logger import logger
from py_puttcalc.putt import PuttProps
from py_puttcalc.trajectory_data import PuttResult, PuttState, StopRecord, Termination
from py_puttcalc.vector import Vector, ZERO_VECTOR

__all__ = ('EulerPuttEngine',)


class EulerPuttEngine(BasePuttEngine[BaseEngineConfigDict]):
    """Euler integration engine for putt trajectories.

    Attributes:
        integration_step_count: Number of integration steps performed.

    Examples:
        >>> config = BaseEngineConfigDict(cTimeStep=0.005)
        >>> engine = EulerPuttEngine(config)
    """

    def __init__(self, config: BaseEngineConfigDict) -> None:
        super().__init__(config)
        self.integration_step_count: int = 0

    @override
    def _integrate(self, props: PuttProps, launch_angle_rad: float, launch_speed: float,
                   capture: bool = True) -> PuttResult:
        """Create PuttResult for the specified putt.

        Args:
            props: Information specific to the putt.
            launch_angle_rad: Launch offset from the launch->cup line (rad).
            launch_speed: Launch speed (m/s).
            capture: False removes the cup.

        Returns:
            PuttResult: Object describing the trajectory.
        """
        _cMinimumSpeed = self._config.cMinimumSpeed
        _cMinimumAcceleration = self._config.cMinimumAcceleration
        _cRecordStride = max(1, self._config.cRecordStride)
        dt = props.calc_step
        a_roll = props.a_roll
        slope_vector = props.slope_vector
        resistance = props.resistance
        holds_ball = resistance.holds_ball(slope_vector.magnitude(), a_roll)
        max_duration = self.max_duration(props, launch_speed)

        # region Initialize velocity and position of the ball
        time = 0.0
        position = ZERO_VECTOR
        velocity = Vector(math.sin(launch_angle_rad), math.cos(launch_angle_rad)).mul_by_const(launch_speed)
        # endregion

        trajectory: List[PuttState] = [PuttState(time, position, velocity)]
        termination: Optional[Termination] = None
        stop: Optional[StopRecord] = None

        # region Trajectory Loop
        integration_step_count = 0
        while True:
            speed = velocity.magnitude()
            if speed < _cMinimumSpeed:
                termination = Termination.STOPPED
                break
            if time > max_duration:
                termination = Termination.TIMEOUT
                break

            acceleration = resistance.acceleration(velocity, speed, a_roll, launch_speed) + slope_vector
            if acceleration.magnitude() < _cMinimumAcceleration:
                termination = Termination.NO_ACCELERATION
                break

            integration_step_count += 1
            new_velocity = velocity + acceleration * dt  # type: ignore[operator]
            if holds_ball and new_velocity * velocity <= 0:
                # Resistance would reverse the ball within this step: it comes to rest
                new_velocity = ZERO_VECTOR
            new_position = position + new_velocity * dt  # type: ignore[operator]
            time += dt

            if capture:
                crossing = props.cup.hit(position, new_position)
                if crossing is not None:
                    fraction = (crossing - position).magnitude() / (new_position - position).magnitude()
                    crossing_time = time - dt + fraction * dt
                    trajectory.append(PuttState(crossing_time, crossing, new_velocity))
                    stop = StopRecord(crossing, crossing_time, True, new_velocity.magnitude(), len(trajectory) - 1)
                    termination = Termination.CAPTURED
                    break

            velocity, position = new_velocity, new_position
            if integration_step_count % _cRecordStride == 0:
                trajectory.append(PuttState(time, position, velocity))
        # endregion

        if stop is None:
            if trajectory[-1].time != time:
                trajectory.append(PuttState(time, position, velocity))
            stop = StopRecord(position, time)

        logger.debug(f"Euler ran {integration_step_count} iterations")
        self.integration_step_count += integration_step_count
        return PuttResult(props, launch_speed, trajectory, stop, termination)
