from py_puttcalc import Green, Putt, Unit


def create_flat_putt(distance: float = 3.0, overrun: float = 0.5, stimp: float = 9.0,
                     launch_angle: float = 0.0) -> Putt:
    """Straight putt on a flat green, values in meters, feet (stimp) and degrees."""
    return Putt(Unit.Meter(distance), Green(Unit.Foot(stimp)), Unit.Degree(launch_angle), Unit.Meter(overrun))


def create_side_slope_putt(slope_deg: float = 1.0, distance: float = 3.0, overrun: float = 0.5) -> Putt:
    """Putt on a green that falls toward +x, so the ball breaks right."""
    green = Green(Unit.Foot(9), Unit.Degree(slope_deg), Unit.Degree(90))
    return Putt(Unit.Meter(distance), green, 0, Unit.Meter(overrun))


def create_uphill_putt(slope_deg: float = 2.0, distance: float = 3.0, overrun: float = 0.1) -> Putt:
    """Putt against the fall line: flat-green speed is not enough to reach the cup."""
    green = Green(Unit.Foot(9), Unit.Degree(-slope_deg), 0)
    return Putt(Unit.Meter(distance), green, 0, Unit.Meter(overrun))
