"""The cup and the hole-capture test.

Capture is decided on the straight segment between two consecutive integration steps,
not on the sampled positions: two samples may both lie outside the cup while the segment
between them clips it.
"""
from __future__ import annotations

from dataclasses import dataclass

from typing_extensions import Optional

from py_puttcalc.constants import cCupDiameter
from py_puttcalc.vector import Vector

__all__ = ('segment_circle_hit', 'Cup')


def segment_circle_hit(p0: Vector, p1: Vector, center: Vector, radius: float) -> Optional[Vector]:
    """Closest point of segment p0->p1 to `center`, if it lies within `radius`.

    The segment is `p(t) = p0 + t * (p1 - p0)` with `t` clamped to [0, 1], so the closest
    point is on the segment rather than on the infinite line.

    Args:
        p0: Segment start.
        p1: Segment end.
        center: Circle center.
        radius: Circle radius.

    Returns:
        The crossing point (closest point on the segment to `center`) or None.
        A zero-length segment never reports a crossing.

    Examples:
        >>> segment_circle_hit(Vector(-1.0, 0.0), Vector(1.0, 0.0), Vector(0.0, 0.05), 0.054)
        Vector(x=0.0, y=0.0)
    """
    d = p1 - p0
    dd = d.x * d.x + d.y * d.y
    if dd == 0.0:
        return None
    t = ((center.x - p0.x) * d.x + (center.y - p0.y) * d.y) / dd
    t = min(1.0, max(0.0, t))
    closest = Vector(p0.x + t * d.x, p0.y + t * d.y)
    dx = closest.x - center.x
    dy = closest.y - center.y
    if dx * dx + dy * dy <= radius * radius:
        return closest
    return None


@dataclass(frozen=True)
class Cup:
    """Circular target on the green.

    Attributes:
        center: Cup center in the local frame, `(0, distance)` for a putt of `distance` meters.
        radius: Capture radius, half the cup diameter (m).
    """

    center: Vector
    radius: float = cCupDiameter / 2.0

    @classmethod
    def at_distance(cls, distance: float, diameter: float = cCupDiameter) -> Cup:
        """Cup straight ahead of the launch point."""
        return cls(Vector(0.0, distance), diameter / 2.0)

    def hit(self, p0: Vector, p1: Vector) -> Optional[Vector]:
        """Crossing point of the step p0->p1 with this cup, or None."""
        return segment_circle_hit(p0, p1, self.center, self.radius)

    def contains(self, point: Vector) -> bool:
        return (point - self.center).magnitude() <= self.radius
