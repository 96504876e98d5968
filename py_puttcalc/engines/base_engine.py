"""Base engine for putt trajectory calculations.

The module serves as the core framework for the engine system, providing:
- Engine configuration management through BaseEngineConfig and BaseEngineConfigDict
- Abstract base class BasePuttEngine implementing the EngineProtocol
- The launch-speed and aim-angle solvers, which use an engine's `_integrate` as a
  black-box function evaluator

Classes:
    BaseEngineConfig: Dataclass configuration for engine parameters
    BaseEngineConfigDict: TypedDict version for flexible configuration
    BasePuttEngine: Abstract base class for integration engines

Architecture:
    BasePuttEngine provides the common interface and both solvers, while concrete
    subclasses implement `_integrate` with a specific numerical method.

See Also:
    py_puttcalc.generics.engine.EngineProtocol: Protocol interface
    py_puttcalc.engines.euler: Forward-Euler implementation
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict

from typing_extensions import List, Optional, Tuple, TypedDict, TypeVar, Union

from py_puttcalc.constants import cCupDiameter, cMinimumTravel, cStandardGravity
from py_puttcalc.exceptions import AimFindingError
from py_puttcalc.generics.engine import EngineProtocol
from py_puttcalc.green import ResistanceModel, SlopeConvention
from py_puttcalc.logger import logger
from py_puttcalc.putt import Putt, PuttProps
from py_puttcalc.trajectory_data import PuttResult, SpeedSolution, Termination
from py_puttcalc.unit import Angular, Distance, PreferredUnits, Velocity
from py_puttcalc.vector import Vector

__all__ = (
    'create_base_engine_config',
    'BaseEngineConfig',
    'BaseEngineConfigDict',
    'DEFAULT_BASE_ENGINE_CONFIG',
    'BasePuttEngine',
)

cTimeStep: float = 0.01  # seconds per integration step
cMinimumSpeed: float = 0.01  # m/s, ball is at rest below this speed
cMinimumAcceleration: float = 1e-6  # m/s^2, resistance and slope cancel out below this
cMinimumDuration: float = 10.0  # seconds, floor of the simulated-duration safety bound
cMaximumDuration: float = 120.0  # seconds, ceiling of the simulated-duration safety bound
cDurationMargin: float = 2.0  # seconds added to the stopping-time estimate
cRecordStride: int = 1  # record every n-th integration step
cSpeedMaxIterations: int = 12  # trajectories evaluated by the speed search
cSpeedTolerance: float = 0.01  # meters of overrun error accepted by the speed search
cSpeedDampingGain: float = 0.4  # (m/s) of speed correction per meter of overrun error
cMinimumLaunchSpeed: float = 0.05  # m/s, floor of the speed search
cAimBracket: float = 45.0  # degrees either side of the launch line
cAimScanSteps: int = 36  # launch angles sampled on each side of the launch line
cAimEdgeIterations: int = 12  # bisections locating the outermost angle that reaches the cup
cAimMaxIterations: int = 60  # bisection iterations
cAimTolerance: float = 0.001  # meters of deflection accepted by the aim search


@dataclass
class BaseEngineConfig:
    """Configuration dataclass for putt engines.

    All parameters use SI units (meters, seconds, m/s).

    Attributes:
        cTimeStep: Fixed integration step (s). Defaults to 0.01.
        cMinimumSpeed: Speed (m/s) below which the ball is at rest. Defaults to 0.01.
        cMinimumAcceleration: Net acceleration (m/s^2) below which the trajectory ends.
        cMinimumDuration: Floor of the simulated-duration bound (s). Defaults to 10.
        cMaximumDuration: Ceiling of the simulated-duration bound (s). Defaults to 120.
        cDurationMargin: Seconds added to the stopping-time estimate for the duration bound.
        cRecordStride: Record every n-th step. Capture and final points are always recorded.
        cGravityConstant: Gravitational acceleration (m/s^2). Defaults to 9.80665.
        cCupDiameter: Cup diameter (m). Defaults to 0.108.
        cSlopeConvention: 'tan' or 'sin', see SlopeConvention.
        cResistanceModel: 'constant' or 'linear', see ResistanceModel.
        cSpeedMaxIterations: Trajectories evaluated by the speed search.
        cSpeedTolerance: Accepted overrun error (m) of the speed search.
        cSpeedDampingGain: Proportional gain of the speed search, in (0, 1].
        cMinimumLaunchSpeed: Floor (m/s) of the speed search.
        cAimBracket: Half-width (degrees) of the aim search bracket.
        cAimScanSteps: Launch angles sampled on each side of the launch line before bisection.
        cAimEdgeIterations: Bisections locating the outermost angle whose trajectory reaches the cup.
        cAimMaxIterations: Bisection iterations of the aim search.
        cAimTolerance: Accepted deflection (m) of the aim search.

    Examples:
        >>> config = BaseEngineConfig(cTimeStep=0.005, cSlopeConvention='sin')
    """

    cTimeStep: float = cTimeStep
    cMinimumSpeed: float = cMinimumSpeed
    cMinimumAcceleration: float = cMinimumAcceleration
    cMinimumDuration: float = cMinimumDuration
    cMaximumDuration: float = cMaximumDuration
    cDurationMargin: float = cDurationMargin
    cRecordStride: int = cRecordStride
    cGravityConstant: float = cStandardGravity
    cCupDiameter: float = cCupDiameter
    cSlopeConvention: str = SlopeConvention.TANGENT.value
    cResistanceModel: str = ResistanceModel.CONSTANT.value
    cSpeedMaxIterations: int = cSpeedMaxIterations
    cSpeedTolerance: float = cSpeedTolerance
    cSpeedDampingGain: float = cSpeedDampingGain
    cMinimumLaunchSpeed: float = cMinimumLaunchSpeed
    cAimBracket: float = cAimBracket
    cAimScanSteps: int = cAimScanSteps
    cAimEdgeIterations: int = cAimEdgeIterations
    cAimMaxIterations: int = cAimMaxIterations
    cAimTolerance: float = cAimTolerance


#: Default configuration instance
DEFAULT_BASE_ENGINE_CONFIG: BaseEngineConfig = BaseEngineConfig()


class BaseEngineConfigDict(TypedDict, total=False):
    """TypedDict for flexible engine configuration from dictionaries.

    All fields are optional; unspecified fields take their values from
    DEFAULT_BASE_ENGINE_CONFIG when passed through create_base_engine_config().

    Examples:
        >>> config_dict: BaseEngineConfigDict = {
        ...     'cTimeStep': 0.005,
        ...     'cResistanceModel': 'linear',
        ... }
        >>> config = create_base_engine_config(config_dict)
    """

    cTimeStep: Optional[float]
    cMinimumSpeed: Optional[float]
    cMinimumAcceleration: Optional[float]
    cMinimumDuration: Optional[float]
    cMaximumDuration: Optional[float]
    cDurationMargin: Optional[float]
    cRecordStride: Optional[int]
    cGravityConstant: Optional[float]
    cCupDiameter: Optional[float]
    cSlopeConvention: Optional[str]
    cResistanceModel: Optional[str]
    cSpeedMaxIterations: Optional[int]
    cSpeedTolerance: Optional[float]
    cSpeedDampingGain: Optional[float]
    cMinimumLaunchSpeed: Optional[float]
    cAimBracket: Optional[float]
    cAimScanSteps: Optional[int]
    cAimEdgeIterations: Optional[int]
    cAimMaxIterations: Optional[int]
    cAimTolerance: Optional[float]


def create_base_engine_config(interface_config: Optional[BaseEngineConfigDict] = None) -> BaseEngineConfig:
    """Create BaseEngineConfig from optional dictionary configuration.

    Args:
        interface_config: Optional dictionary of overrides. Only specified fields override defaults.

    Returns:
        BaseEngineConfig instance with merged configuration values.

    Examples:
        >>> create_base_engine_config({'cSpeedTolerance': 0.005}).cSpeedTolerance
        0.005
    """
    config = asdict(DEFAULT_BASE_ENGINE_CONFIG)
    if interface_config is not None and isinstance(interface_config, dict):
        config.update(interface_config)
    return BaseEngineConfig(**config)


_BaseEngineConfigDictT = TypeVar("_BaseEngineConfigDictT", bound='BaseEngineConfigDict', covariant=True)


class BasePuttEngine(ABC, EngineProtocol[_BaseEngineConfigDictT]):
    """All calculations are done in SI units (meters, seconds, radians)."""

    def __init__(self, _config: _BaseEngineConfigDictT):
        """Initialize the class.

        Args:
            _config: The configuration object.
        """
        self._config: BaseEngineConfig = create_base_engine_config(_config)
        self.slope_convention = SlopeConvention(self._config.cSlopeConvention)
        self.resistance = ResistanceModel(self._config.cResistanceModel)

    def get_calc_step(self) -> float:
        """Get step size for integration."""
        return self._config.cTimeStep

    def _init_trajectory(self, putt: Putt) -> PuttProps:
        """Convert Putt properties into floats dimensioned in internal units.

        Raises:
            PuttParametersError: If `putt` is invalid.
        """
        return PuttProps.from_putt(putt,
                                   slope_convention=self.slope_convention,
                                   resistance=self.resistance,
                                   gravity=self._config.cGravityConstant,
                                   cup_diameter=self._config.cCupDiameter,
                                   calc_step=self.get_calc_step())

    def max_duration(self, props: PuttProps, launch_speed: float) -> float:
        """Simulated-duration safety bound (s) for a run at `launch_speed`."""
        estimate = props.resistance.stopping_time_estimate(launch_speed, props.a_roll, self._config.cMinimumSpeed,
                                                           props.slope_vector.magnitude())
        bound = min(self._config.cMaximumDuration, estimate + self._config.cDurationMargin)
        return max(self._config.cMinimumDuration, bound)

    def integrate(self, putt: Putt,
                  launch_speed: Optional[Union[float, Velocity]] = None,
                  capture: bool = True) -> PuttResult:
        """Compute the trajectory of the putt.

        Args:
            putt: The putt parameters.
            launch_speed: Launch speed; bare numbers in `PreferredUnits.velocity`. Defaults to the
                flat-green speed that rolls `distance + overrun`.
            capture: False removes the cup.

        Returns:
            PuttResult describing the trajectory.
        """
        props = self._init_trajectory(putt)
        if launch_speed is None:
            speed_mps = props.flat_launch_speed()
        else:
            speed_mps = PreferredUnits.velocity(launch_speed) >> Velocity.MPS
        return self._integrate(props, props.launch_angle_rad, speed_mps, capture)

    def find_launch_speed(self, putt: Putt,
                          overrun: Optional[Union[float, Distance]] = None) -> SpeedSolution:
        """Find the launch speed for which the ball stops `overrun` past the cup.

        Args:
            putt: The putt parameters; the launch angle is kept fixed.
            overrun: Requested overrun; defaults to `putt.overrun`.

        Returns:
            SpeedSolution; check `converged` before trusting `speed`.
        """
        props = self._init_trajectory(putt)
        overrun_m = props.overrun_m if overrun is None else PreferredUnits.distance(overrun) >> Distance.Meter
        return self._find_launch_speed(props, overrun_m)

    def _find_launch_speed(self, props: PuttProps, overrun_m: float) -> SpeedSolution:
        """Damped proportional search on the launch speed.

        Every evaluation integrates with the cup removed and measures the signed overrun
        along the launch->cup axis. A step that increases the error is reverted and retried
        with a tighter gain; a step that overshoots the target also tightens the gain.

        Args:
            props: Putt parameters.
            overrun_m: Requested overrun (m).

        Returns:
            SpeedSolution with `converged=False` when the iteration budget runs out, or with
            reason DEGENERATE when the slope overcomes the rolling resistance or a trajectory
            does not come to rest.
        """
        _cMinimumLaunchSpeed = self._config.cMinimumLaunchSpeed
        _cSpeedTolerance = self._config.cSpeedTolerance

        a_effective = props.effective_deceleration
        slope_magnitude = props.slope_vector.magnitude()
        if a_effective <= 0 or not props.resistance.holds_ball(slope_magnitude, props.a_roll):
            logger.warning(f"Slope acceleration {slope_magnitude:.3f} m/s^2 overcomes "
                           f"{props.resistance.value} rolling resistance {props.a_roll:.3f} m/s^2; "
                           f"using minimum launch speed {_cMinimumLaunchSpeed} m/s")
            return SpeedSolution(_cMinimumLaunchSpeed, False, 0, math.nan, SpeedSolution.DEGENERATE)

        def clamp(speed: float) -> float:
            if not math.isfinite(speed) or speed < _cMinimumLaunchSpeed:
                return _cMinimumLaunchSpeed
            return speed

        travel = max(cMinimumTravel, props.distance_m + overrun_m)
        guess = clamp(props.resistance.launch_speed_estimate(a_effective, travel))

        gain = self._config.cSpeedDampingGain
        damping_rate = 0.7
        prev_abs_error = math.inf
        prev_error = 0.0
        last_step = 0.0
        evaluated = guess
        error = math.nan
        iterations_count = 0

        while iterations_count < self._config.cSpeedMaxIterations:
            iterations_count += 1
            evaluated = guess
            result = self._integrate(props, props.launch_angle_rad, guess, capture=False)
            if result.termination is not Termination.STOPPED:
                # The overrun of a ball that is still rolling is meaningless
                logger.warning(f"Trajectory at {guess:.4f} m/s ended with '{result.termination.value}' "
                               f"after {iterations_count} iterations")
                return SpeedSolution(guess, False, iterations_count, math.nan, SpeedSolution.DEGENERATE)
            error = result.overrun - overrun_m
            if math.fabs(error) < _cSpeedTolerance:
                return SpeedSolution(guess, True, iterations_count, error)

            if math.fabs(error) > prev_abs_error:  # Error is increasing, we are diverging
                gain *= damping_rate
                logger.debug(f'Tightened damping to {gain:.2f} after {iterations_count} iterations')
                guess -= last_step  # Revert previous adjustment
                step = last_step * damping_rate
            else:
                if error * prev_error < 0:  # Overshot the target
                    gain *= damping_rate
                    logger.debug(f'Tightened damping to {gain:.2f} after overshoot at {iterations_count} iterations')
                prev_abs_error = math.fabs(error)
                prev_error = error
                step = -error * gain

            previous = guess
            guess = clamp(guess + step)
            last_step = guess - previous

        logger.warning(f"Launch speed search did not converge: overrun error {error:.4f} m "
                       f"at {evaluated:.4f} m/s after {iterations_count} iterations")
        return SpeedSolution(evaluated, False, iterations_count, error, SpeedSolution.NON_CONVERGENT)

    def find_launch_angle(self, putt: Putt,
                          overrun: Optional[Union[float, Distance]] = None) -> Angular:
        """Find the launch angle for which the ball passes through the cup center.

        Args:
            putt: The putt parameters; `putt.launch_angle` is ignored.
            overrun: Overrun that fixes the launch speed; defaults to `putt.overrun`.

        Returns:
            Launch angle in `PreferredUnits.angular`.

        Raises:
            AimFindingError: If the target is not reached, not bracketed, or bisection does not converge.
        """
        props = self._init_trajectory(putt)
        overrun_m = props.overrun_m if overrun is None else PreferredUnits.distance(overrun) >> Distance.Meter
        return self._find_launch_angle(props, overrun_m) << PreferredUnits.angular

    def _find_launch_angle(self, props: PuttProps, overrun_m: float) -> Angular:
        """Bisection on the launch angle.

        The objective is the deflection where the cup-less trajectory first reaches the cup's
        distance. The launch speed is the flat-green speed for `overrun_m` and is the same for
        every angle tried.

        The bracket is found by sampling `cAimScanSteps` angles on each side of the launch
        line. A sign change between two samples that both reach the cup's distance brackets
        the root directly. Otherwise each gap between a reaching and a short sample is bisected
        on reachability toward the edge of reach, and the reaching angles met on the way are
        searched for the sign change.

        Args:
            props: Putt parameters.
            overrun_m: Overrun (m) that fixes the launch speed.

        Returns:
            Launch angle in radians.
        """
        launch_speed = props.flat_launch_speed(overrun_m)
        target = Distance.Meter(props.distance_m)
        _cAimTolerance = self._config.cAimTolerance

        def deflection_at_target(angle_rad: float) -> Tuple[Optional[float], PuttResult]:
            """Deflection (m) at the cup distance, or None if short, and the trajectory."""
            _res = self._integrate(props, angle_rad, launch_speed, capture=False)
            state = _res.crossing(target)
            return (state.position.x if state is not None else None), _res

        def reach_edge(reached_rad: float, short_rad: float) -> List[Tuple[float, float]]:
            """Bisect on reachability toward the outermost angle that still reaches the cup distance.

            Returns every reaching angle evaluated on the way, with its deflection.
            """
            reaching: List[Tuple[float, float]] = []
            for _ in range(self._config.cAimEdgeIterations):
                mid_rad = (reached_rad + short_rad) / 2.0
                deflection, _ = deflection_at_target(mid_rad)
                if deflection is None:
                    short_rad = mid_rad
                else:
                    reached_rad = mid_rad
                    reaching.append((mid_rad, deflection))
            return reaching

        def sign_changes(points: List[Tuple[float, float]]) -> List[Tuple[float, float, float, float]]:
            return [(a0, f0, a1, f1) for (a0, f0), (a1, f1) in zip(points, points[1:]) if f0 * f1 < 0]

        bracket = math.radians(self._config.cAimBracket)
        steps = max(1, self._config.cAimScanSteps)
        samples: List[Tuple[float, Optional[float]]] = []
        stops: List[Tuple[float, Vector]] = []
        for k in range(-steps, steps + 1):
            angle_rad = bracket * k / steps
            deflection, _res = deflection_at_target(angle_rad)
            if deflection is not None and math.fabs(deflection) < _cAimTolerance:
                return Angular.Radian(angle_rad)
            stops.append((angle_rad, _res.stop_position))
            samples.append((angle_rad, deflection))

        reached = [(a, f) for a, f in samples if f is not None]
        if not reached:
            farthest_angle, farthest_stop = max(stops, key=lambda s: s[1].y)
            raise AimFindingError(farthest_stop.x, 0, Angular.Radian(farthest_angle),
                                  reason=AimFindingError.TARGET_NOT_REACHED)

        brackets = sign_changes(reached)
        if not brackets:
            # The root may lie between the last reaching sample and the edge of reach
            points = list(reached)
            for (a0, f0), (a1, f1) in zip(samples, samples[1:]):
                if f0 is not None and f1 is None:
                    points.extend(reach_edge(a0, a1))
                elif f0 is None and f1 is not None:
                    points.extend(reach_edge(a1, a0))
            points.sort()
            for angle_rad, deflection in points:
                if math.fabs(deflection) < _cAimTolerance:
                    return Angular.Radian(angle_rad)
            brackets = sign_changes(points)

        if not brackets:
            (low_angle, f_low), (high_angle, f_high) = reached[0], reached[-1]
            reason = (f"{AimFindingError.NOT_BRACKETED} in launch angle range "
                      f"({math.degrees(low_angle):.2f}, {math.degrees(high_angle):.2f} deg). "
                      f"Deflections at bracket: f(low)={f_low:.3f}, f(high)={f_high:.3f}")
            raise AimFindingError(f_low, 0, Angular.Radian(low_angle), reason=reason)

        # Prefer the root closest to the launch line
        low_angle, f_low, high_angle, f_high = min(brackets, key=lambda b: math.fabs(b[0] + b[2]))

        iterations_count = 0
        mid_angle = (low_angle + high_angle) / 2.0
        f_mid = math.nan
        while iterations_count < self._config.cAimMaxIterations:
            iterations_count += 1
            mid_angle = (low_angle + high_angle) / 2.0
            deflection, _res = deflection_at_target(mid_angle)
            if deflection is not None:
                if math.fabs(deflection) < _cAimTolerance:
                    logger.debug(f"Aim search converged after {iterations_count} iterations")
                    return Angular.Radian(mid_angle)
                f_mid = deflection
            else:
                # Short of the cup: the side the ball stopped on tells which half to keep
                f_mid = _res.stop_position.x
            if f_mid * f_low < 0:
                high_angle, f_high = mid_angle, f_mid
            else:
                low_angle, f_low = mid_angle, f_mid

        raise AimFindingError(f_mid, iterations_count, Angular.Radian(mid_angle),
                              reason=AimFindingError.NON_CONVERGENT)

    @abstractmethod
    def _integrate(self, props: PuttProps, launch_angle_rad: float, launch_speed: float,
                   capture: bool = True) -> PuttResult:
        """Create PuttResult for the specified putt.

        Args:
            props: Information specific to the putt.
            launch_angle_rad: Launch offset from the launch->cup line (rad).
            launch_speed: Launch speed (m/s).
            capture: False removes the cup.

        Returns:
            PuttResult object describing the trajectory.
        """
        ...
