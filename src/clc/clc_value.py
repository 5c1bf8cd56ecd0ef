"""CLC value hierarchy - immutable typed numbers with an optional unit."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
import math
from typing import Union

from clc.clc_error import CLCTypeError
from clc.clc_number_type import CLCNumberType, DEFAULT_INTEGER_TYPE
from clc.clc_unit import CLCUnit


class CLCValue(ABC):
    """
    Abstract base class for all CLC values.

    All CLC values are immutable. A value with no unit is dimensionless.
    """
    unit: CLCUnit | None

    @property
    @abstractmethod
    def number_type(self) -> CLCNumberType:
        """The numeric type of the value."""

    @abstractmethod
    def to_python(self) -> Union[int, float]:
        """Convert to the Python number this value represents."""

    @abstractmethod
    def as_float(self) -> float:
        """The value as a Python float."""

    def type_name(self) -> str:
        """Return the CLC type name for error messages."""
        return self.number_type.value

    def is_integer(self) -> bool:
        """Check if this value is a fixed-width integer."""
        return self.number_type.is_integer

    def is_float(self) -> bool:
        """Check if this value is a float."""
        return self.number_type.is_float

    def is_dimensionless(self) -> bool:
        """Check if this value carries no unit."""
        return self.unit is None

    def as_bool(self) -> bool:
        """Boolean interpretation: zero is false, anything else is true."""
        return self.to_python() != 0

    def with_unit(self, unit: CLCUnit | None) -> 'CLCValue':
        """Return a copy of this value tagged with a different unit (no conversion)."""
        return replace(self, unit=unit)  # type: ignore[type-var]

    def without_unit(self) -> 'CLCValue':
        """Return a dimensionless copy of this value."""
        return self.with_unit(None)

    def cast(self, number_type: CLCNumberType) -> 'CLCValue':
        """Cast to another numeric type, keeping the unit."""
        return cast_value(self, number_type)

    def describe(self) -> str:
        """Describe the value for messages, e.g. '255', '1.5°C'."""
        unit = self.unit.symbol if self.unit is not None else ""
        return f"{self.to_python()}{unit}"


@dataclass(frozen=True)
class CLCInteger(CLCValue):
    """
    A fixed-width integer.

    `bits` is the raw bit pattern; it is always reduced to the width of the
    type, so negative Python ints passed in are stored in two's complement.
    """
    bits: int
    integer_type: CLCNumberType = DEFAULT_INTEGER_TYPE
    unit: CLCUnit | None = None

    def __post_init__(self) -> None:
        if not self.integer_type.is_integer:
            raise ValueError(f"CLCInteger requires an integer type, got {self.integer_type}")

        object.__setattr__(self, 'bits', self.bits & self.integer_type.mask)

    @property
    def number_type(self) -> CLCNumberType:
        return self.integer_type

    @property
    def value(self) -> int:
        """The integer the bit pattern represents under the type's signedness."""
        if self.integer_type.signed and self.bits >> (self.integer_type.bits - 1):
            return self.bits - (1 << self.integer_type.bits)

        return self.bits

    def to_python(self) -> int:
        return self.value

    def as_float(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class CLCFloat(CLCValue):
    """A 64-bit IEEE 754 float."""
    value: float
    unit: CLCUnit | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'value', float(self.value))

    @property
    def number_type(self) -> CLCNumberType:
        return CLCNumberType.F64

    def to_python(self) -> float:
        return self.value

    def as_float(self) -> float:
        return self.value


def make_value(number: Union[int, float], number_type: CLCNumberType, unit: CLCUnit | None = None) -> CLCValue:
    """Build a value of the given type from a Python number, casting as needed."""
    if number_type.is_float:
        return CLCFloat(float(number), unit)

    if isinstance(number, float):
        return CLCInteger(float_to_integer_bits(number, number_type), number_type, unit)

    return CLCInteger(number, number_type, unit)


def float_to_integer_bits(number: float, number_type: CLCNumberType) -> int:
    """
    Convert a float to an integer of the given type.

    Truncates toward zero and saturates at the type's range; NaN becomes 0.
    """
    if math.isnan(number):
        return 0

    if math.isinf(number):
        return number_type.max_value if number > 0 else number_type.min_value

    truncated = math.trunc(number)
    return max(number_type.min_value, min(number_type.max_value, truncated))


def cast_value(value: CLCValue, number_type: CLCNumberType) -> CLCValue:
    """
    Cast a value to another numeric type, keeping its unit.

    Integer to integer keeps the low bits of the two's complement pattern
    (sign extending when widening a signed value) and reinterprets them under
    the target signedness. Float to integer truncates toward zero. Integer to
    float gives the nearest representable float.
    """
    if value.number_type == number_type:
        return value

    if number_type.is_float:
        return CLCFloat(value.as_float(), value.unit)

    if isinstance(value, CLCInteger):
        return CLCInteger(value.value, number_type, value.unit)

    return CLCInteger(float_to_integer_bits(value.as_float(), number_type), number_type, value.unit)


def attach_unit(value: CLCValue, unit: CLCUnit) -> CLCValue:
    """
    Tag a dimensionless magnitude with a unit.

    Temperatures are float valued, so integers become f64 when given a
    temperature unit; size units keep the value's type.
    """
    if unit.is_temperature and value.is_integer():
        value = cast_value(value, CLCNumberType.F64)

    return value.with_unit(unit)


def result_with_unit(value: CLCValue, unit: CLCUnit | None) -> CLCValue:
    """Give a computed result the unit it is measured in, if any."""
    if unit is None:
        return value

    return attach_unit(value, unit)


def convert_value(value: CLCValue, unit: CLCUnit) -> CLCValue:
    """
    Convert a value into another unit of the same category.

    A dimensionless value simply has the unit attached. Otherwise the value is
    taken to its category's base unit and from there to the target unit.

    Raises:
        CLCTypeError: If the units belong to different categories
    """
    source = value.unit
    if source is None:
        return attach_unit(value, unit)

    if source.category != unit.category:
        raise CLCTypeError(
            message=f"Cannot convert {source.category.value} to {unit.category.value}",
            received=f"Value {value.describe()} (unit: {source.name})",
            expected=f"A {unit.category.value} value or a dimensionless number",
            suggestion=f"Only {unit.category.value} units can be converted to {unit.name}",
            example="kilobyte(2048B) → 2K, celsius(212°F) → 100°C"
        )

    if source == unit:
        return value

    if unit.is_size:
        return _convert_size(value, source, unit)

    return CLCFloat(unit.from_base(source.to_base(value.as_float())), unit)


def _convert_size(value: CLCValue, source: CLCUnit, target: CLCUnit) -> CLCValue:
    """Convert between size units, staying integral when the result is exact and in range."""
    if isinstance(value, CLCInteger):
        in_bytes = value.value * source.scale
        if in_bytes % target.scale == 0:
            converted = in_bytes // target.scale
            number_type = value.integer_type
            if number_type.min_value <= converted <= number_type.max_value:
                return CLCInteger(converted, number_type, target)

        return CLCFloat(in_bytes / target.scale, target)

    return CLCFloat(target.from_base(source.to_base(value.as_float())), target)
