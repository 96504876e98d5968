"""Physical and model constants used by py_puttcalc.

All values are SI (meters, seconds, radians) unless noted.
"""
from typing_extensions import Final

__all__ = (
    'cStandardGravity',
    'cStimpReleaseSpeed',
    'cStimpUnitLength',
    'cMinimumStimpLength',
    'cCupDiameter',
    'cMinimumTravel',
    'cVelocityEpsilon',
)

# Earth gravitational acceleration (m/s^2)
cStandardGravity: Final[float] = 9.80665

# Ball speed as it leaves a stimpmeter ramp (m/s)
cStimpReleaseSpeed: Final[float] = 1.83

# Stimpmeter readings are published in feet
cStimpUnitLength: Final[float] = 0.3048

# Floor on roll-out length (m), keeps the deceleration finite for degenerate stimp readings
cMinimumStimpLength: Final[float] = 0.1

# Regulation cup diameter (m)
cCupDiameter: Final[float] = 0.108

# Floor on the travel distance used for the flat-green launch-speed estimate (m)
cMinimumTravel: Final[float] = 0.05

# Added to |v| in resistance denominators (m/s)
cVelocityEpsilon: Final[float] = 1e-9
