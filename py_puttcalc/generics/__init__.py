"""Generic type definitions for putt trajectory engines.

Protocol Definitions:
    EngineProtocol: Core interface for putt trajectory engines

Type Variables:
    ConfigT: Generic configuration type for engine parameters

Examples:
    >>> from py_puttcalc.generics import EngineProtocol
    >>> from py_puttcalc.engines.base_engine import BaseEngineConfigDict
    >>>
    >>> engine: EngineProtocol[BaseEngineConfigDict]
    >>> result = engine.integrate(putt)
"""

from .engine import ConfigT, EngineProtocol

__all__ = (
    'ConfigT',
    'EngineProtocol',
)
