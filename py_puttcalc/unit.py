"""Dimensioned values for putt parameters.

Every dimension stores a single float in its raw unit and converts on demand:

    * Angular: raw unit radian (slope, fall line, launch angle)
    * Distance: raw unit meter (putt length, overrun, stimp reading)
    * Velocity: raw unit meters per second (launch speed)
    * Time: raw unit second (elapsed time)

Bare numbers passed to putt parameters are read in `PreferredUnits`; dimensioned values
are accepted anywhere a bare number is.

Examples:
    >>> stimp = Distance.Foot(10)
    >>> stimp << Distance.Meter        # -> Distance in new units
    <Distance: 3.048m (3.048)>
    >>> round(stimp >> Distance.Meter, 4)        # -> float
    3.048
    >>> round(Unit.parse('1.5deg') >> Angular.Radian, 4)
    0.0262
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields, MISSING
from enum import IntEnum
from math import pi
from typing import Any, Final, Generic, Mapping, NamedTuple, Optional, Tuple, TypeVar, Union

from typing_extensions import Self, TypeAlias

from py_puttcalc.exceptions import UnitAliasError, UnitConversionError, UnitTypeError
from py_puttcalc.logger import logger

Number: TypeAlias = Union[float, int]

_GenericDimensionType = TypeVar('_GenericDimensionType', bound='GenericDimension')

_NUMBER_PATTERN = r'-?(?:\d+\.\d*|\.\d+|\d+\.?)'


class Unit(IntEnum):
    """Units of measure.

    Members are grouped by decade, one decade per dimension: 0-9 angular,
    10-19 distance, 60-69 velocity, 80-89 time. Calling a member builds a value:

    Examples:
        >>> Unit.Meter(3)
        <Distance: 3.0m (3.0)>
        >>> round(Unit.Degree(1.5) >> Unit.Radian, 4)
        0.0262
    """

    Radian = 0
    Degree = 1

    Millimeter = 10
    Centimeter = 11
    Meter = 12
    Inch = 13
    Foot = 14
    Yard = 15

    MPS = 60
    KMH = 61
    FPS = 62
    MPH = 63

    Second = 80
    Millisecond = 81

    @property
    def key(self) -> str:
        return UnitPropsDict[self].name

    @property
    def accuracy(self) -> int:
        """Decimal places used when the value is displayed."""
        return UnitPropsDict[self].accuracy

    @property
    def symbol(self) -> str:
        return UnitPropsDict[self].symbol

    def __repr__(self) -> str:
        return UnitPropsDict[self].name

    def __call__(self: Self, value: Union[Number, _GenericDimensionType]) -> _GenericDimensionType:
        """Build a value of this unit's dimension, or convert an existing one.

        Raises:
            UnitTypeError: If no dimension owns this unit.
            UnitConversionError: If `value` belongs to another dimension.
        """
        if isinstance(value, GenericDimension):
            return value << self  # type: ignore
        dimension = _DIMENSION_BY_DECADE.get(self // 10)
        if dimension is None:
            raise UnitTypeError(f"{self} Unit is not supported")
        return dimension(value, self)  # type: ignore

    @staticmethod
    def _find_unit_by_alias(alias: str, aliases: UnitAliasesType) -> Optional[Unit]:
        for names, unit in aliases.items():
            if alias in names:
                return unit
        return None

    @staticmethod
    def _parse_unit(input_: str) -> Union[Unit, None, Any]:
        """Resolve a unit name.

        Lookup order: a PreferredUnits field (e.g. 'stimp'), a Unit member name, an alias,
        then the alias with a trailing 's' dropped.

        Examples:
            >>> Unit._parse_unit('ft')
            foot
            >>> Unit._parse_unit('stimp')
            foot
            >>> Unit._parse_unit('parsec')
        """
        if not isinstance(input_, str):
            raise TypeError(f"String expected, got {type(input_)=}, {input_=}")
        name = re.sub(r"\s+", "", input_).lower()
        if name in _PREFERRED_FIELDS:
            return getattr(PreferredUnits, name)
        for unit in Unit:
            if unit.name.lower() == name:
                return unit
        if (unit := Unit._find_unit_by_alias(name, UnitAliases)) is not None:
            return unit
        if name.endswith('s'):
            return Unit._find_unit_by_alias(name[:-1], UnitAliases)
        return None

    @staticmethod
    def parse(input_: Union[str, Number],
              preferred: Optional[Union[Unit, str]] = None) -> Optional[Union[GenericDimension[Any], Any, Unit]]:
        """Parse a number or a string like '10ft' into a dimensioned value.

        Args:
            input_: Number, numeric string, or numeric string with a unit suffix.
            preferred: Unit for inputs without a suffix, as a Unit or a name accepted by
                `_parse_unit` (including PreferredUnits field names).

        Raises:
            TypeError: If `input_` is neither a string nor a number.
            UnitAliasError: If a unit name cannot be resolved.

        Examples:
            >>> Unit.parse(3, Unit.Meter)
            <Distance: 3.0m (3.0)>
            >>> Unit.parse('10ft')
            <Distance: 10.0ft (3.048)>
            >>> Unit.parse('1.5', 'angular')
            <Angular: 1.5° (0.0262)>
        """
        if isinstance(input_, (float, int)):
            value, suffix = float(input_), ''
        elif isinstance(input_, str):
            match = re.match(rf'^({_NUMBER_PATTERN})(.*)$', input_.replace(" ", ""))
            if match is None:
                raise UnitAliasError(f"Can't parse unit {input_=}")
            value, suffix = float(match.group(1)), match.group(2)
        else:
            raise TypeError(f"type, [str, float, int] expected for 'input_', got {type(input_)}")

        if suffix:
            if (units := Unit._parse_unit(suffix)) is not None:
                return units(value)
            raise UnitAliasError(f"Unsupported unit alias={suffix!r}")

        units = Unit._parse_unit(preferred) if isinstance(preferred, str) else preferred
        if not isinstance(units, Unit):
            raise UnitAliasError(f"Unsupported {preferred=} unit alias")
        return units(value)


class UnitProps(NamedTuple):
    """Display properties of a unit.

    Attributes:
        name: Readable name.
        accuracy: Decimal places when displayed.
        symbol: Symbol appended to displayed values.
    """

    name: str
    accuracy: int
    symbol: str


#: Unit -> UnitProps used when values are displayed
UnitPropsDict: Mapping[Unit, UnitProps] = {
    Unit.Radian: UnitProps('radian', 6, 'rad'),
    Unit.Degree: UnitProps('degree', 4, '°'),

    Unit.Millimeter: UnitProps('millimeter', 1, 'mm'),
    Unit.Centimeter: UnitProps('centimeter', 2, 'cm'),
    Unit.Meter: UnitProps('meter', 3, 'm'),
    Unit.Inch: UnitProps('inch', 2, 'inch'),
    Unit.Foot: UnitProps('foot', 2, 'ft'),
    Unit.Yard: UnitProps('yard', 2, 'yd'),

    Unit.MPS: UnitProps('mps', 3, 'm/s'),
    Unit.KMH: UnitProps('kmh', 2, 'km/h'),
    Unit.FPS: UnitProps('fps', 2, 'ft/s'),
    Unit.MPH: UnitProps('mph', 2, 'mph'),

    Unit.Second: UnitProps('second', 3, 's'),
    Unit.Millisecond: UnitProps('millisecond', 0, 'ms'),
}

UnitAliasesType: TypeAlias = Mapping[Tuple[str, ...], Unit]

#: Lower-case names accepted by Unit.parse()
UnitAliases: UnitAliasesType = {
    ('radian', 'rad'): Unit.Radian,
    ('degree', 'deg'): Unit.Degree,

    ('millimeter', 'mm'): Unit.Millimeter,
    ('centimeter', 'cm'): Unit.Centimeter,
    ('meter', 'm'): Unit.Meter,
    ('inch', 'in'): Unit.Inch,
    ('foot', 'feet', 'ft'): Unit.Foot,
    ('yard', 'yd'): Unit.Yard,

    ('meter/second', 'm/s', 'mps'): Unit.MPS,
    ('kilometer/hour', 'km/h', 'kmh'): Unit.KMH,
    ('foot/second', 'feet/second', 'ft/s', 'fps'): Unit.FPS,
    ('mile/hour', 'mi/h', 'mph'): Unit.MPH,

    ('second', 's', 'sec'): Unit.Second,
    ('millisecond', 'ms'): Unit.Millisecond,
}


class GenericDimension(Generic[_GenericDimensionType]):
    """A value of one physical dimension.

    Subclasses declare `_conversion_factors`, the size of each supported unit in the raw unit.
    Comparisons and arithmetic work on raw values, so `Distance.Foot(3) < Distance.Meter(1)`.
    """

    _value: Number
    _defined_units: Unit
    __slots__ = ('_value', '_defined_units')
    _conversion_factors: Mapping[Unit, float] = {}

    def __init__(self, value: Number, units: Unit):
        self._value: Number = self.__class__.to_raw(value, units)
        self._defined_units: Unit = units

    def __str__(self) -> str:
        units = self._defined_units
        return f'{round(self >> units, units.accuracy)}{units.symbol}'

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}: {self} ({round(self._value, 4)})>'

    def __float__(self) -> float:
        return float(self._value)

    def __int__(self) -> int:
        return int(self._value)

    def __hash__(self) -> int:
        return hash((self._value, self._defined_units))

    def __eq__(self, other) -> bool:
        return float(self) == other

    def __lt__(self, other) -> bool:
        return float(self) < other

    def __le__(self, other) -> bool:
        return float(self) <= other

    def __gt__(self, other) -> bool:
        return float(self) > other

    def __ge__(self, other) -> bool:
        return float(self) >= other

    @classmethod
    def _validate_unit_type(cls, units: Unit):
        """Raise unless `units` belongs to this dimension.

        Raises:
            TypeError: If `units` is not a Unit.
            UnitConversionError: If `units` belongs to another dimension.
        """
        if not isinstance(units, Unit):
            raise TypeError(f"Type expected: {Unit}; got: {type(units).__name__} ({units})")
        if units not in cls._conversion_factors:
            raise UnitConversionError(f'{cls.__name__}: unit {units} is not supported')

    @classmethod
    def new_from_raw(cls, raw_value: float, to_units: Unit) -> Self:
        """Build a value from its raw representation, displayed in `to_units`."""
        cls._validate_unit_type(to_units)
        return cls(raw_value / cls._conversion_factors[to_units], to_units)

    @classmethod
    def from_raw(cls, raw_value: float, unit: Unit) -> Number:
        cls._validate_unit_type(unit)
        return raw_value / cls._conversion_factors[unit]

    @classmethod
    def to_raw(cls, value: Number, units: Unit) -> Number:
        cls._validate_unit_type(units)
        return value * cls._conversion_factors[units]

    def convert(self, units: Unit) -> Self:
        """Same value displayed in `units`."""
        return self.__class__.new_from_raw(self._value, units)

    def get_in(self, units: Unit) -> Number:
        """Numeric value in `units`."""
        return self.__class__.from_raw(self._value, units)

    @property
    def units(self) -> Unit:
        return self._defined_units

    @property
    def unit_value(self) -> Number:
        """Numeric value in the units this value was defined with."""
        return self.get_in(self._defined_units)

    @property
    def raw_value(self) -> Number:
        return self._value

    __rshift__ = get_in
    __lshift__ = convert
    __rlshift__ = convert

    def __mul__(self, other: Number) -> Self:
        if isinstance(other, (int, float)):
            return self.__class__.new_from_raw(self._value * other, self._defined_units)
        return NotImplemented

    __rmul__ = __mul__

    def __add__(self, other: Union[Number, Self]) -> Self:
        """Add a number read in this value's units, or a value of the same dimension."""
        if isinstance(other, (int, float)):
            return self.__class__(self.unit_value + other, self._defined_units)
        if isinstance(other, self.__class__):
            return self.__class__.new_from_raw(self._value + other.raw_value, self._defined_units)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other: Union[Number, Self]) -> Self:
        if isinstance(other, (int, float)):
            return self.__class__(self.unit_value - other, self._defined_units)
        if isinstance(other, self.__class__):
            return self.__class__.new_from_raw(self._value - other.raw_value, self._defined_units)
        return NotImplemented

    def __neg__(self) -> Self:
        return self.__class__.new_from_raw(-self._value, self._defined_units)


class Angular(GenericDimension):
    """Angle; raw unit radian."""

    _conversion_factors = {
        Unit.Radian: 1.,
        Unit.Degree: pi / 180,
    }

    Radian: Final[Unit] = Unit.Radian
    Degree: Final[Unit] = Unit.Degree


class Distance(GenericDimension):
    """Length; raw unit meter."""

    _conversion_factors = {
        Unit.Millimeter: 1e-3,
        Unit.Centimeter: 1e-2,
        Unit.Meter: 1.,
        Unit.Inch: 0.0254,
        Unit.Foot: 0.3048,
        Unit.Yard: 0.9144,
    }

    Millimeter: Final[Unit] = Unit.Millimeter
    Centimeter: Final[Unit] = Unit.Centimeter
    Meter: Final[Unit] = Unit.Meter
    Inch: Final[Unit] = Unit.Inch
    Foot: Final[Unit] = Unit.Foot
    Feet: Final[Unit] = Unit.Foot
    Yard: Final[Unit] = Unit.Yard


class Velocity(GenericDimension):
    """Speed; raw unit meters per second."""

    _conversion_factors = {
        Unit.MPS: 1.,
        Unit.KMH: 1. / 3.6,
        Unit.FPS: 0.3048,
        Unit.MPH: 0.44704,
    }

    MPS: Final[Unit] = Unit.MPS
    KMH: Final[Unit] = Unit.KMH
    FPS: Final[Unit] = Unit.FPS
    MPH: Final[Unit] = Unit.MPH


class Time(GenericDimension):
    """Duration; raw unit second."""

    _conversion_factors = {
        Unit.Second: 1.,
        Unit.Millisecond: 1e-3,
    }

    Second: Final[Unit] = Unit.Second
    Millisecond: Final[Unit] = Unit.Millisecond


_DIMENSION_BY_DECADE = {
    0: Angular,
    1: Distance,
    6: Velocity,
    8: Time,
}


class PreferredUnitsMeta(type):
    """Readable repr for the PreferredUnits class itself."""

    def __repr__(cls):
        return '\n'.join(f'{field} = {getattr(cls, field)!r}'
                         for field in getattr(cls, '__dataclass_fields__'))


@dataclass
class PreferredUnits(metaclass=PreferredUnitsMeta):
    """Units assumed for bare numbers, one field per kind of putt parameter.

    Defaults:
        * angular: degree (slope, fall line, launch angle)
        * distance: meter (putt length, overrun)
        * stimp: foot (stimpmeter reading)
        * velocity: m/s (launch speed)
        * time: second (elapsed time)

    Examples:
        >>> PreferredUnits.set(distance='ft', velocity='fps')
        >>> round(PreferredUnits.distance(10) >> Distance.Meter, 4)
        3.048
        >>> PreferredUnits.restore_defaults()
    """

    angular: Unit = Unit.Degree
    distance: Unit = Unit.Meter
    stimp: Unit = Unit.Foot
    velocity: Unit = Unit.MPS
    time: Unit = Unit.Second

    @classmethod
    def restore_defaults(cls):
        for f in fields(cls):
            if f.default is not MISSING:
                setattr(cls, f.name, f.default)

    @classmethod
    def set(cls, **kwargs: Union[Unit, str]):
        """Set fields from Unit members or unit names.

        Unknown fields and unresolvable names are logged as warnings and skipped.
        """
        for attribute, value in kwargs.items():
            if attribute not in _PREFERRED_FIELDS:
                logger.warning(f"{attribute=} not found in preferred_units")
                continue
            unit = Unit._parse_unit(value) if isinstance(value, str) else value
            if isinstance(unit, Unit):
                setattr(cls, attribute, unit)
            else:
                logger.warning(f"{value=} not a member of Unit")


_PREFERRED_FIELDS = frozenset(f.name for f in fields(PreferredUnits))


__all__ = (
    'Unit',
    'GenericDimension',
    'UnitProps',
    'UnitAliases',
    'UnitPropsDict',
    'Distance',
    'Velocity',
    'Angular',
    'Time',
    'PreferredUnits',
    'UnitAliasError',
    'UnitTypeError',
    'UnitConversionError',
)
