"""2D Vector Mathematics.

The Vector class is implemented as an immutable NamedTuple. All positions, velocities and
accelerations on the green are expressed in the local frame:

    * the ball is launched from the origin,
    * `y` points from the launch point toward the cup,
    * `x` is the deflection axis (positive to the right of the launch line).

Typical Usage:
    ```python
    from py_puttcalc import Vector

    position = Vector(0.0, 0.0)
    velocity = Vector(0.0, 6.5)  # m/s straight at the cup
    position = position + velocity * 0.01
    speed = velocity.magnitude()
    ```
"""
from __future__ import annotations

import math
from typing import Union, NamedTuple

__all__ = ('Vector', 'ZERO_VECTOR')


class Vector(NamedTuple):
    """Immutable 2D vector on the plane of the green.

    Attributes:
        x: Deflection component (positive = right of the launch line).
        y: Along-line component (positive = toward the cup).
    """

    x: float
    y: float

    def magnitude(self) -> float:
        """Euclidean norm of the vector, computed with math.hypot()."""
        return math.hypot(self.x, self.y)

    def mul_by_const(self, a: float) -> Vector:
        """Multiply vector by a scalar constant."""
        return Vector(self.x * a, self.y * a)

    def mul_by_vector(self, b: Vector) -> float:
        """Dot product of two vectors."""
        return self.x * b.x + self.y * b.y

    def add(self, b: Vector) -> Vector:
        """Add two vectors component-wise."""
        return Vector(self.x + b.x, self.y + b.y)

    def subtract(self, b: Vector) -> Vector:
        """Subtract one vector from another component-wise."""
        return Vector(self.x - b.x, self.y - b.y)

    def __mul__(self, other: Union[int, float, Vector]) -> Union[float, Vector]:  # type: ignore[override]
        """Scalar multiplication for numbers, dot product for vectors.

        Raises:
            TypeError: If other is not int, float, or Vector instance.
        """
        if isinstance(other, (int, float)):
            return self.mul_by_const(other)
        if isinstance(other, Vector):
            return self.mul_by_vector(other)
        raise TypeError(other)

    # Operator overloads - aliases more efficient than wrappers
    __add__ = add  # type: ignore[assignment]
    __radd__ = add
    __iadd__ = add
    __sub__ = subtract
    __isub__ = subtract
    __rmul__ = __mul__  # type: ignore[assignment]
    __imul__ = __mul__

    def __str__(self) -> str:
        return f"Vector(x={self.x:.6f}, y={self.y:.6f})"


ZERO_VECTOR = Vector(0.0, 0.0)
