"""Integration engines for putt trajectory calculations.

All engines implement the EngineProtocol interface and share the launch-speed and aim-angle
solvers of BasePuttEngine.

Available Engines:
    - BasePuttEngine: Abstract base class for all integration engines
    - EulerPuttEngine: Fixed-step forward-Euler method (euler_engine, default)

Configuration:
    All engines accept BaseEngineConfigDict for configuration.

Examples:
    >>> from py_puttcalc.engines import EulerPuttEngine, BaseEngineConfigDict
    >>> custom_config = BaseEngineConfigDict(cTimeStep=0.005)

    >>> from py_puttcalc import Calculator
    >>> calc = Calculator(engine="euler_engine")  # By name
    >>> calc = Calculator(config=custom_config, engine=EulerPuttEngine)  # By class
"""

from .base_engine import *
from .euler import *

__all__ = (
    'create_base_engine_config',
    'BaseEngineConfig',
    'BaseEngineConfigDict',
    'DEFAULT_BASE_ENGINE_CONFIG',
    'BasePuttEngine',
    'EulerPuttEngine',
)
