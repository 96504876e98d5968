"""Putt trajectory data structures.

Core Components:
    - PuttState: Kinematic state of the ball at one instant
    - StopRecord: Where and how a trajectory ended
    - Termination: Which condition ended a trajectory
    - PuttResult: Complete trajectory with its parameters and stop record
    - SpeedSolution: Outcome of the launch-speed search

Typical Usage:
    ```python
    from py_puttcalc import Calculator, Green, Putt

    calc = Calculator()
    putt = Putt(3.0, Green(stimp=9), overrun=0.5)
    result = calc.integrate(putt)

    for state in result:
        print(f"{state.time:.2f}s x={state.position.x:.3f} y={state.position.y:.3f}")

    print(result.captured, result.stop_position, result.overrun)
    at_cup = result.crossing(putt.distance)
    ```

All values are stored in SI units (seconds, meters, m/s) to avoid unit tracking in the engines.
"""
from __future__ import annotations

import typing
from dataclasses import dataclass, field
from enum import Enum

from typing_extensions import Iterator, List, NamedTuple, Optional, Tuple, Union

from py_puttcalc.unit import Distance, GenericDimension, PreferredUnits, Time, Unit, Velocity
from py_puttcalc.vector import Vector

if typing.TYPE_CHECKING:
    from pandas import DataFrame
    from py_puttcalc.putt import PuttProps

__all__ = (
    'PuttState',
    'StopRecord',
    'Termination',
    'PuttResult',
    'SpeedSolution',
)


class PuttState(NamedTuple):
    """Ball state at a single point in time.

    Attributes:
        time: Time since launch in seconds.
        position: Position in meters (x=deflection, y=toward the cup).
        velocity: Velocity in meters per second.
    """

    time: float  # Units: seconds
    position: Vector  # Units: meters
    velocity: Vector  # Units: m/s

    @property
    def speed(self) -> float:
        """Magnitude of the velocity (m/s)."""
        return self.velocity.magnitude()

    @staticmethod
    def interpolate(key_attribute: str, key_value: float, p0: PuttState, p1: PuttState) -> PuttState:
        """Linearly interpolate a state between two samples.

        Args:
            key_attribute: 'time' or a vector component like 'position.y' or 'velocity.x'.
            key_value: The value to interpolate for.
            p0: First bracketing point.
            p1: Second bracketing point.

        Returns:
            The interpolated state.

        Raises:
            AttributeError: If the key_attribute is not a member of PuttState.
            ZeroDivisionError: If both points have the same key value.
        """
        def get_key_val(state: PuttState, path: str) -> float:
            if '.' in path:
                top, component = path.split('.', 1)
                return getattr(getattr(state, top), component)
            return getattr(state, path)

        x0 = get_key_val(p0, key_attribute)
        x1 = get_key_val(p1, key_attribute)
        ratio = (key_value - x0) / (x1 - x0)

        def _lerp(y0: float, y1: float) -> float:
            return y0 + (y1 - y0) * ratio

        time = _lerp(p0.time, p1.time) if key_attribute != 'time' else key_value
        position = Vector(_lerp(p0.position.x, p1.position.x), _lerp(p0.position.y, p1.position.y))
        velocity = Vector(_lerp(p0.velocity.x, p1.velocity.x), _lerp(p0.velocity.y, p1.velocity.y))
        return PuttState(time, position, velocity)

    def formatted(self) -> Tuple[str, ...]:
        """Return attributes as tuple of strings, formatted per PreferredUnits."""

        def _fmt(v: GenericDimension, u: Unit) -> str:
            return f"{v >> u:.{u.accuracy}f} {u.symbol}"

        return (
            _fmt(Time.Second(self.time), PreferredUnits.time),
            _fmt(Distance.Meter(self.position.x), PreferredUnits.distance),
            _fmt(Distance.Meter(self.position.y), PreferredUnits.distance),
            _fmt(Velocity.MPS(self.velocity.x), PreferredUnits.velocity),
            _fmt(Velocity.MPS(self.velocity.y), PreferredUnits.velocity),
            _fmt(Velocity.MPS(self.speed), PreferredUnits.velocity),
        )

    def in_def_units(self) -> Tuple[float, ...]:
        """Return attributes as tuple of floats converted to PreferredUnits."""
        return (
            Time.Second(self.time) >> PreferredUnits.time,
            Distance.Meter(self.position.x) >> PreferredUnits.distance,
            Distance.Meter(self.position.y) >> PreferredUnits.distance,
            Velocity.MPS(self.velocity.x) >> PreferredUnits.velocity,
            Velocity.MPS(self.velocity.y) >> PreferredUnits.velocity,
            Velocity.MPS(self.speed) >> PreferredUnits.velocity,
        )


#: Column names matching PuttState.formatted() and PuttState.in_def_units()
PUTT_STATE_COLUMNS: Tuple[str, ...] = ('time', 'x', 'y', 'velocity_x', 'velocity_y', 'speed')


class Termination(Enum):
    """Condition that ended a trajectory."""

    STOPPED = 'speed below stopping threshold'
    NO_ACCELERATION = 'net acceleration vanished'
    CAPTURED = 'ball captured by the cup'
    TIMEOUT = 'maximum duration exceeded'


class StopRecord(NamedTuple):
    """Terminal outcome of a trajectory.

    Attributes:
        position: Final position (m); equals the last trajectory sample.
        time: Elapsed time at termination (s).
        captured: True if the cup captured the ball.
        capture_speed: Speed (m/s) on the step that crossed the cup, None unless captured.
        captured_index: Index of the crossing sample in the trajectory, None unless captured.
    """

    position: Vector
    time: float
    captured: bool = False
    capture_speed: Optional[float] = None
    captured_index: Optional[int] = None


@dataclass(frozen=True)
class PuttResult:
    """Computed trajectory of a putt.

    Attributes:
        props: The parameters the trajectory was computed from.
        launch_speed: Launch speed in m/s.
        trajectory: Ordered PuttState samples from launch to termination.
        stop: Terminal outcome.
        termination: Condition that ended the trajectory.
    """

    props: PuttProps
    launch_speed: float
    trajectory: List[PuttState] = field(repr=False)
    stop: StopRecord
    termination: Termination

    def __len__(self) -> int:
        return len(self.trajectory)

    def __iter__(self) -> Iterator[PuttState]:
        yield from self.trajectory

    def __getitem__(self, item):
        return self.trajectory[item]

    @property
    def stop_position(self) -> Vector:
        return self.stop.position

    @property
    def captured(self) -> bool:
        return self.stop.captured

    @property
    def capture_speed(self) -> Optional[float]:
        return self.stop.capture_speed

    @property
    def captured_index(self) -> Optional[int]:
        return self.stop.captured_index

    @property
    def elapsed_time(self) -> float:
        return self.stop.time

    @property
    def overrun(self) -> float:
        """Signed distance (m) past the cup along the launch->cup axis; negative when short."""
        return self.stop.position.y - self.props.distance_m

    def positions(self) -> List[Vector]:
        """Positions of all samples, in order."""
        return [state.position for state in self.trajectory]

    def crossing(self, distance: Union[float, Distance]) -> Optional[PuttState]:
        """First state where the ball reaches `distance` along the launch->cup axis.

        Args:
            distance: Along-line distance; bare numbers in `PreferredUnits.distance`.

        Returns:
            State interpolated between the two straddling samples, or None if the ball
            never gets that far.
        """
        target = PreferredUnits.distance(distance) >> Distance.Meter
        prev: Optional[PuttState] = None
        for state in self.trajectory:
            if state.position.y >= target:
                if prev is None or state.position.y == prev.position.y:
                    return state
                return PuttState.interpolate('position.y', target, prev, state)
            prev = state
        return None

    def dataframe(self, formatted: bool = False) -> DataFrame:
        """Return the trajectory table as a DataFrame.

        Args:
            formatted: False for values as floats; True for strings in PreferredUnits. Default is False.

        Raises:
            ImportError: If pandas is not installed.
        """
        try:
            from py_puttcalc.visualize.dataframe import putt_result_as_dataframe
            return putt_result_as_dataframe(self, formatted)
        except ImportError as err:
            raise ImportError(
                "Use `pip install py_puttcalc[charts]` to get trajectory as pandas.DataFrame"
            ) from err


class SpeedSolution(NamedTuple):
    """Result of the launch-speed search.

    Attributes:
        speed: Launch speed in m/s (best effort when not converged).
        converged: True if the overrun error fell within tolerance.
        iterations: Number of trajectories evaluated.
        error: Last signed overrun error in meters (actual minus requested).
        reason: Empty when converged, else DEGENERATE or NON_CONVERGENT.
    """

    speed: float
    converged: bool
    iterations: int = 0
    error: float = 0.0
    reason: str = ''

    DEGENERATE = "Degenerate dynamics"
    NON_CONVERGENT = "Speed search non-convergent"

    @property
    def velocity(self) -> Velocity:
        """Launch speed as a dimensioned value in `PreferredUnits.velocity`."""
        return Velocity.MPS(self.speed) << PreferredUnits.velocity
