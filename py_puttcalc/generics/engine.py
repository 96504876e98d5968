"""Engine protocol module for py_puttcalc.

Defines the EngineProtocol type protocol that all putt engines must implement, so that
engine implementations are interchangeable behind the Calculator interface.

Classes:
    EngineProtocol: Type protocol for putt trajectory engines

Type Variables:
    ConfigT: Configuration type for the engine (covariant)
"""

from abc import abstractmethod
from typing import Optional, TypeVar, Union

from typing_extensions import Protocol, runtime_checkable

from py_puttcalc.putt import Putt
from py_puttcalc.trajectory_data import PuttResult, SpeedSolution
from py_puttcalc.unit import Angular, Distance, Velocity

__all__ = ['EngineProtocol', 'ConfigT']

ConfigT = TypeVar("ConfigT", covariant=True)


@runtime_checkable
class EngineProtocol(Protocol[ConfigT]):
    """Interface of a putt trajectory engine.

    Required Methods:
        - integrate: Simulate one putt from launch to termination.
        - find_launch_speed: Launch speed that yields the requested overrun.
        - find_launch_angle: Launch angle that sends the ball through the cup center.

    Examples:
        ```python
        from py_puttcalc.engines.base_engine import BaseEngineConfigDict

        class MyEngine(EngineProtocol[BaseEngineConfigDict]):
            def __init__(self, config: BaseEngineConfigDict):
                self.config = config

            def integrate(self, putt, launch_speed=None, capture=True):
                ...

            def find_launch_speed(self, putt, overrun=None):
                ...

            def find_launch_angle(self, putt, overrun=None):
                ...

        isinstance(MyEngine(BaseEngineConfigDict()), EngineProtocol)  # True
        ```

    Note:
        The @runtime_checkable decorator enables isinstance() checks at runtime.
    """

    def __init__(self, config: Optional[ConfigT] = None) -> None:
        ...

    @abstractmethod
    def integrate(self, putt: Putt,
                  launch_speed: Optional[Union[float, Velocity]] = None,
                  capture: bool = True) -> PuttResult:
        """Simulate the putt from launch until it stops, is captured or times out.

        Args:
            putt: Parameter set of the putt.
            launch_speed: Launch speed; defaults to the flat-green speed for `putt.overrun`.
            capture: False removes the cup, so the ball rolls until it stops.

        Returns:
            PuttResult: The trajectory and its stop record.

        Raises:
            PuttParametersError: If `putt` is invalid.
        """
        ...

    @abstractmethod
    def find_launch_speed(self, putt: Putt,
                          overrun: Optional[Union[float, Distance]] = None) -> SpeedSolution:
        """Launch speed for which the ball, with the cup removed, stops `overrun` past the cup."""
        ...

    @abstractmethod
    def find_launch_angle(self, putt: Putt,
                          overrun: Optional[Union[float, Distance]] = None) -> Angular:
        """Launch angle for which the ball passes through the cup center.

        Raises:
            AimFindingError: If no angle can be found.
        """
        ...
