"""Numeric types understood by CLC: fixed-width integers and 64-bit floats."""

from enum import Enum


class CLCNumberType(Enum):
    """
    The type of a CLC value.

    Each member's value is its lowercase name, which is also the name of the
    cast function that converts to it.
    """
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    F64 = "f64"

    @property
    def is_float(self) -> bool:
        """True for the floating point type."""
        return self is CLCNumberType.F64

    @property
    def is_integer(self) -> bool:
        """True for the fixed-width integer types."""
        return self is not CLCNumberType.F64

    @property
    def signed(self) -> bool:
        """True for signed integer types (and f64)."""
        return self.value[0] in "if"

    @property
    def bits(self) -> int:
        """Width in bits."""
        return int(self.value[1:])

    @property
    def mask(self) -> int:
        """Bit mask selecting the low `bits` bits."""
        return (1 << self.bits) - 1

    @property
    def min_value(self) -> int:
        """Smallest representable integer."""
        if self.is_float:
            raise ValueError("f64 has no integer range")

        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        """Largest representable integer."""
        if self.is_float:
            raise ValueError("f64 has no integer range")

        return (1 << (self.bits - 1)) - 1 if self.signed else self.mask

    def to_signed(self) -> 'CLCNumberType':
        """Signed integer type of the same width (identity for signed types)."""
        if self.signed:
            return self

        return CLCNumberType("i" + self.value[1:])

    def to_unsigned(self) -> 'CLCNumberType':
        """Unsigned integer type of the same width."""
        if self.is_float:
            raise ValueError("f64 has no unsigned counterpart")

        return CLCNumberType("u" + self.value[1:])

    @classmethod
    def from_name(cls, name: str) -> 'CLCNumberType | None':
        """Look up a type by its lowercase name, e.g. 'u8'."""
        try:
            return cls(name)

        except ValueError:
            return None

    @classmethod
    def integer_types(cls) -> list['CLCNumberType']:
        """All integer types, unsigned first, narrowest first."""
        return [t for t in cls if t.is_integer]

    def __str__(self) -> str:
        return self.value


# Type given to integer literals written without an explicit cast (0xFF, 42, 0b1).
DEFAULT_INTEGER_TYPE = CLCNumberType.U64

# Type given to float literals (1.5, .5).
DEFAULT_FLOAT_TYPE = CLCNumberType.F64
