
import pytest

from py_puttcalc import Vector


class TestVector:

    def test_magnitude_available(self):
        assert Vector(3, 4).magnitude() == 5

    def test_mul_by_constant(self):
        assert Vector(-1, -2).mul_by_const(2) == Vector(-2, -4)

    def test_mul_by_vector(self):
        assert Vector(-1, -2).mul_by_vector(Vector(4, 5)) == -14

    def test_add(self):
        assert Vector(-1, -2).add(Vector(4, 6)) == Vector(3, 4)

    def test_subtract(self):
        assert Vector(-1, -2).subtract(Vector(4, 5)) == Vector(-5, -7)

    def test_vector_mul_type_error(self):
        v = Vector(1.0, 2.0)
        with pytest.raises(TypeError):
            _ = v * "x"  # type: ignore[operator]

    def test_vector_operators(self):
        v1 = Vector(1.0, 2.0)
        assert 2 * v1 == Vector(2.0, 4.0)
        assert v1 * 2 == Vector(2.0, 4.0)
        assert v1 * Vector(3.0, 4.0) == 11.0
        assert v1 + Vector(1.0, 1.0) == Vector(2.0, 3.0)
        assert v1 - Vector(1.0, 1.0) == Vector(0.0, 1.0)

    def test_vector_str(self):
        assert str(Vector(0.5, 1.25)) == "Vector(x=0.500000, y=1.250000)"
