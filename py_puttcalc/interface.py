"""Putt calculator interface and engine loading system.

This module provides the main `Calculator` class, which loads an integration engine through
Python entry points and exposes simulation, solver and sweep methods on top of it. The module
relies on the EngineProtocol to ensure that engines offer the necessary methods.

It also provides a plain function-call surface for callers that do not want to build
`Putt` objects:

    compute_deceleration(stimp)
    integrate(distance, slope, stimp, launch_angle, launch_speed, capture=True, a_roll=None)
    solve_launch_speed(distance, slope, stimp, launch_angle, overrun)
    solve_launch_angle(distance, slope, stimp, overrun)

Key Classes:
    - Calculator: Main putt calculator with pluggable engine support
    - _EngineLoader: Internal utility for discovering and loading engine plugins
"""
import copy
from dataclasses import dataclass, field
from importlib.metadata import entry_points, EntryPoint
from typing import Generic, Any

from typing_extensions import Union, List, NamedTuple, Optional, TypeVar, Type, Generator

from py_puttcalc.engines import EulerPuttEngine
from py_puttcalc.exceptions import AimFindingError, PuttParametersError, SpeedFindingError
from py_puttcalc.generics.engine import EngineProtocol
from py_puttcalc.green import Green, compute_deceleration
from py_puttcalc.logger import logger
from py_puttcalc.putt import Putt
from py_puttcalc.trajectory_data import PuttResult, SpeedSolution
from py_puttcalc.unit import Angular, Distance, GenericDimension, PreferredUnits, Velocity

ConfigT = TypeVar('ConfigT', covariant=True)

DEFAULT_ENTRY_SUFFIX = '_engine'
DEFAULT_ENTRY_GROUP = 'py_puttcalc'
DEFAULT_ENTRY: Type[EngineProtocol] = EulerPuttEngine

EngineProtocolType = Type[EngineProtocol[ConfigT]]
EngineProtocolEntry = Union[str, EngineProtocolType, None]

#: Default step between neighbouring runs of Calculator.sweep()
SWEEP_STEPS = {
    'launch_angle': Angular.Degree(1.0),
    'slope': Angular.Degree(0.5),
    'overrun': Distance.Meter(0.25),
}


@dataclass
class _EngineLoader:
    _entry_point_group = DEFAULT_ENTRY_GROUP
    _entry_point_suffix = DEFAULT_ENTRY_SUFFIX

    @classmethod
    def _get_entries_by_group(cls) -> set:
        all_entry_points = entry_points()
        if hasattr(all_entry_points, 'select'):  # for importlib >= 5
            putt_entry_points = all_entry_points.select(group=cls._entry_point_group)
        elif hasattr(all_entry_points, 'get'):  # for importlib < 5
            putt_entry_points = all_entry_points.get(cls._entry_point_group, [])  # type: ignore[arg-type]
        else:
            raise RuntimeError('Entry point not supported')
        return set(putt_entry_points)

    @classmethod
    def iter_engines(cls) -> Generator[EntryPoint, None, None]:
        """Iterate over all available engines in the entry points."""
        for ep in cls._get_entries_by_group():
            if ep.name.endswith(cls._entry_point_suffix):
                yield ep

    @classmethod
    def _load_from_entry(cls, ep: EntryPoint) -> Optional[EngineProtocolType]:
        try:
            handle: EngineProtocolType = ep.load()
            if not isinstance(handle, EngineProtocol):
                raise TypeError(f"Unsupported engine {ep.value} does not implement EngineProtocol")
            logger.info(f"Loaded calculator from: {ep.value} (Class: {handle})")
            return handle  # type: ignore
        except ImportError as e:
            logger.error(f"Error loading engine from {ep.value}: {e}")
        except AttributeError as e:
            logger.error(f"Error loading attribute from {ep.value}: {e}")
        except Exception as e:
            logger.exception(f"An unexpected error occurred loading {ep.value}: {e}")
        return None

    @classmethod
    def load(cls, entry_point: EngineProtocolEntry = DEFAULT_ENTRY) -> Type[EngineProtocol[Any]]:
        if entry_point is None:
            entry_point = DEFAULT_ENTRY
        if isinstance(entry_point, EngineProtocol):
            return entry_point  # type: ignore
        if isinstance(entry_point, str):
            handle: Optional[EngineProtocolType] = None
            for ep in cls.iter_engines():
                if ep.name == entry_point:
                    if handle := cls._load_from_entry(ep):
                        return handle

            if not handle:
                ep = EntryPoint(entry_point, entry_point, cls._entry_point_group)
                if handle := cls._load_from_entry(ep):
                    return handle
            raise ValueError(f"No 'engine' entry point found containing '{entry_point}'")
        raise TypeError("Invalid entry_point type, expected 'str' or 'EngineProtocol'")


class SweepRun(NamedTuple):
    """One run of a parameter sweep: the swept value and its trajectory."""

    value: GenericDimension
    result: PuttResult


@dataclass
class Calculator(Generic[ConfigT]):
    """Basic interface for the putt calculator."""

    config: Optional[ConfigT] = field(default=None)
    engine: EngineProtocolEntry = field(default=DEFAULT_ENTRY)
    _engine_instance: EngineProtocol[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._engine_instance = _EngineLoader.load(self.engine)(self.config)

    def __getattr__(self, item: str) -> Any:
        """Delegate attribute access to the underlying engine instance.

        Raises:
            AttributeError: If the attribute is not found on either the
                `Calculator` object or its `_engine_instance`.

        Examples:
            >>> calc = Calculator()
            >>> calc.get_calc_step()
            0.01
        """
        if hasattr(self._engine_instance, item):
            return getattr(self._engine_instance, item)
        raise AttributeError(
            f"'{self.__class__.__name__}' object or its underlying engine "
            f"'{self._engine_instance.__class__.__name__}' has no attribute '{item}'"
        )

    def simulate(self, putt: Putt,
                 launch_speed: Optional[Union[float, Velocity]] = None, *,
                 capture: bool = True) -> PuttResult:
        """Calculate the trajectory of a putt.

        Args:
            putt: Putt parameters.
            launch_speed: Launch speed; defaults to the flat-green speed that rolls
                `putt.distance + putt.overrun`.
            capture: False removes the cup, so the ball rolls until it stops.

        Returns:
            PuttResult: Object containing computed trajectory.
        """
        return self._engine_instance.integrate(putt, launch_speed, capture)

    def launch_speed_for_overrun(self, putt: Putt,
                                 overrun: Optional[Union[float, Distance]] = None, *,
                                 strict: bool = False) -> SpeedSolution:
        """Launch speed for which the ball, with the cup removed, stops `overrun` past the cup.

        Args:
            putt: Putt parameters; the launch angle is kept fixed.
            overrun: Requested overrun; defaults to `putt.overrun`.
            strict: If True, raise instead of returning a best-effort solution.

        Raises:
            SpeedFindingError: If `strict` and the search did not converge.
        """
        solution = self._engine_instance.find_launch_speed(putt, overrun)
        if strict and not solution.converged:
            raise SpeedFindingError(solution)
        return solution

    def aim_for_cup(self, putt: Putt, overrun: Optional[Union[float, Distance]] = None) -> Angular:
        """Set `putt.launch_angle` so that the ball passes through the cup center.

        Raises:
            AimFindingError: If no launch angle can be found; `putt` is left unchanged.
        """
        putt.launch_angle = self._engine_instance.find_launch_angle(putt, overrun)
        return putt.launch_angle

    def sweep(self, putt: Putt, attribute: str,
              step: Optional[Union[float, GenericDimension]] = None, *,
              minus: bool = True, plus: bool = True) -> List[SweepRun]:
        """Simulate the putt at its current value of `attribute` and up to two steps either side.

        Args:
            putt: Center of the sweep; not modified.
            attribute: 'launch_angle', 'slope' or 'overrun'.
            step: Spacing between runs; bare numbers in the attribute's preferred units.
                Defaults to 1 degree, 0.5 degree or 0.25 meter.
            minus: Include the two runs below the center.
            plus: Include the two runs above the center.

        Returns:
            One SweepRun per simulated value, in increasing order. Overrun values below zero
            are skipped.

        Raises:
            ValueError: If `attribute` cannot be swept.
        """
        if attribute not in SWEEP_STEPS:
            raise ValueError(f"Cannot sweep '{attribute}', expected one of {', '.join(SWEEP_STEPS)}")
        if attribute == 'overrun':
            center: GenericDimension = putt.overrun
            step = PreferredUnits.distance(step) if step is not None else SWEEP_STEPS[attribute]
        else:
            center = putt.green.slope if attribute == 'slope' else putt.launch_angle
            step = PreferredUnits.angular(step) if step is not None else SWEEP_STEPS[attribute]

        ks: List[int] = []
        if minus:
            ks.extend((-2, -1))
        ks.append(0)
        if plus:
            ks.extend((1, 2))

        runs: List[SweepRun] = []
        for k in ks:
            value = center.__class__.new_from_raw(center.raw_value + k * step.raw_value, center.units)
            if attribute == 'overrun' and value.raw_value < 0:
                logger.debug(f"Skipping sweep value overrun={value}")
                continue
            variant = copy.deepcopy(putt)
            if attribute == 'slope':
                variant.green.slope = value
            else:
                setattr(variant, attribute, value)
            runs.append(SweepRun(value, self.simulate(variant)))
        return runs

    @staticmethod
    def iter_engines() -> Generator[EntryPoint, None, None]:
        """Iterate all available engines in the entry points."""
        yield from _EngineLoader.iter_engines()


def _make_putt(distance: Union[float, Distance],
               slope: Union[float, Angular],
               stimp: Optional[Union[float, Distance]],
               launch_angle: Union[float, Angular] = 0,
               overrun: Union[float, Distance] = 0,
               fall_line: Optional[Union[float, Angular]] = None,
               a_roll: Optional[float] = None) -> Putt:
    if a_roll is not None:
        green = Green.from_deceleration(a_roll, slope, fall_line)
    elif stimp is not None:
        green = Green(stimp, slope, fall_line)
    else:
        raise PuttParametersError("Either stimp or a_roll is required")
    return Putt(distance, green, launch_angle, overrun)


def integrate(distance: Union[float, Distance],
              slope: Union[float, Angular],
              stimp: Optional[Union[float, Distance]],
              launch_angle: Union[float, Angular],
              launch_speed: Union[float, Velocity],
              capture: bool = True, *,
              a_roll: Optional[float] = None,
              fall_line: Optional[Union[float, Angular]] = None,
              engine: EngineProtocolEntry = None) -> PuttResult:
    """Simulate one putt.

    Bare numbers are in PreferredUnits: meters, degrees, feet (stimp) and m/s by default.
    Pass `a_roll` (m/s^2) to give the rolling-resistance deceleration directly; it takes
    precedence over `stimp`, which may then be None.

    Raises:
        PuttParametersError: If any parameter is invalid, or neither stimp nor a_roll is given.

    Examples:
        >>> result = integrate(3.0, 0.0, 9.0, 0.0, 2.07, capture=False)
        >>> round(result.stop_position.y, 1)
        3.5
        >>> round(integrate(3.0, 0.0, None, 0.0, 2.07, capture=False, a_roll=0.6104).props.a_roll, 4)
        0.6104
    """
    putt = _make_putt(distance, slope, stimp, launch_angle, fall_line=fall_line, a_roll=a_roll)
    return Calculator(engine=engine).simulate(putt, launch_speed, capture=capture)


def solve_launch_speed(distance: Union[float, Distance],
                       slope: Union[float, Angular],
                       stimp: Union[float, Distance],
                       launch_angle: Union[float, Angular],
                       overrun: Union[float, Distance], *,
                       fall_line: Optional[Union[float, Angular]] = None,
                       engine: EngineProtocolEntry = None) -> SpeedSolution:
    """Launch speed for which the ball stops `overrun` past the cup, with the cup removed.

    Raises:
        PuttParametersError: If any parameter is invalid.
    """
    putt = _make_putt(distance, slope, stimp, launch_angle, overrun, fall_line)
    return Calculator(engine=engine).launch_speed_for_overrun(putt)


def solve_launch_angle(distance: Union[float, Distance],
                       slope: Union[float, Angular],
                       stimp: Union[float, Distance],
                       overrun: Union[float, Distance], *,
                       fall_line: Optional[Union[float, Angular]] = None,
                       engine: EngineProtocolEntry = None) -> Optional[Angular]:
    """Launch angle that sends the ball through the cup center, or None if there is none.

    Raises:
        PuttParametersError: If any parameter is invalid.
    """
    putt = _make_putt(distance, slope, stimp, overrun=overrun, fall_line=fall_line)
    try:
        return Calculator(engine=engine).find_launch_angle(putt)
    except AimFindingError as e:
        logger.warning(f"Failed to find launch angle: {e}")
        return None


__all__ = (
    'Calculator',
    'SweepRun',
    '_EngineLoader',
    'compute_deceleration',
    'integrate',
    'solve_launch_speed',
    'solve_launch_angle',
)
