"""Library for golf putt trajectory calculations."""

import importlib.metadata

__version__ = importlib.metadata.version("py_puttcalc")

# Standard library imports
import importlib.resources
import os
import sys

# Third-party imports
from typing_extensions import Dict, Optional

# Local imports
from .logger import logger as log
from .unit import Unit, PreferredUnits

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib


_CONFIG_NAMES = ('.pypc.toml', 'pypc.toml')


def _find_config(start_dir: str) -> Optional[str]:
    """Nearest .pypc.toml or pypc.toml in `start_dir` or one of its parents."""
    directory = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_NAMES:
            candidate = os.path.join(directory, name)
            if os.path.isfile(candidate):
                return candidate
        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def _load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> None:
    """Apply the `[pypc.preferred_units]` table of a TOML file to PreferredUnits.

    Args:
        filepath: Config file. If None, the nearest config above the working directory is
            used, then one next to this package; nothing is loaded if neither exists.
        suppress_warnings: If True, a file without the table is skipped silently.
    """
    if filepath is None:
        filepath = _find_config(os.getcwd()) or _find_config(os.path.dirname(__file__))
    if filepath is None:
        return

    log.debug(f"Loading preferred units from {filepath}")
    with open(filepath, "rb") as fp:
        preferred_units = tomllib.load(fp).get('pypc', {}).get('preferred_units')

    if preferred_units:
        PreferredUnits.set(**preferred_units)
    elif not suppress_warnings:
        log.warning(f"{os.path.basename(filepath)} has no `pypc.preferred_units` table")


def _basic_config(filename: Optional[str] = None,
                  preferred_units: Optional[Dict[str, Unit]] = None,
                  suppress_warnings: bool = False) -> None:
    """Set PreferredUnits from a TOML file or a mapping of field name to unit.

    With neither argument, the nearest `.pypc.toml` is loaded if there is one.

    Raises:
        ValueError: If both filename and preferred_units are provided
    """
    if filename and preferred_units:
        raise ValueError("Can't use preferred_units and config file at same time")
    if not filename and preferred_units:
        PreferredUnits.set(**preferred_units)
    else:
        _load_config(filename, suppress_warnings)


def _resolve_resource_path(path: str) -> str:
    return str(importlib.resources.files('py_puttcalc').joinpath(path))


def _load_imperial_units() -> None:
    """Load imperial unit preferences."""
    _basic_config(_resolve_resource_path('assets/.pypc-imperial.toml'), suppress_warnings=True)


def _load_metric_units() -> None:
    """Load metric unit preferences."""
    _basic_config(_resolve_resource_path('assets/.pypc-metrics.toml'), suppress_warnings=True)


loadImperialUnits = _load_imperial_units
loadMetricUnits = _load_metric_units

basicConfig = _basic_config

basicConfig()


from .constants import (cStandardGravity, cStimpReleaseSpeed, cStimpUnitLength, cMinimumStimpLength,
                        cCupDiameter, cMinimumTravel, cVelocityEpsilon)
from .cup import Cup, segment_circle_hit
from .engines import (create_base_engine_config, BaseEngineConfig, BaseEngineConfigDict,
                      BasePuttEngine, EulerPuttEngine)
from .exceptions import (UnitTypeError, UnitConversionError, UnitAliasError, PuttParametersError,
                         SolverRuntimeError, AimFindingError, SpeedFindingError)
from .green import Green, SlopeConvention, ResistanceModel, compute_deceleration, slope_acceleration
from .interface import Calculator, SweepRun, _EngineLoader, integrate, solve_launch_speed, solve_launch_angle
from .logger import logger, enable_file_logging, disable_file_logging
from .putt import Putt, PuttProps
from .trajectory_data import PuttState, StopRecord, Termination, PuttResult, SpeedSolution
from .unit import (Unit, UnitAliases, GenericDimension, UnitProps, UnitPropsDict,
                   Distance, Velocity, Angular, Time, PreferredUnits)
from .vector import Vector

# DRY: build __all__ from global symbols
_SKIP_GLOBALS = {
    # Skip Python builtins
    "__name__", "__doc__", "__package__", "__loader__", "__spec__",
    "__file__", "__cached__", "__builtins__",
    # Skip imported modules
    "tomllib", "sys", "os", "importlib",
    # Skip private/internal symbols
    "_load_config", "_basic_config", "_resolve_resource_path",
    "_load_imperial_units", "_load_metric_units",
}
# Build __all__ from the module's global namespace
__all__ = [
    name for name in globals()
    if not name.startswith("_") and name not in _SKIP_GLOBALS
]
# Add the public aliases for private functions
__all__.extend(["basicConfig", "loadImperialUnits", "loadMetricUnits"])
