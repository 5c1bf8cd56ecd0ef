"""Units of measure: byte-scale sizes and temperatures."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Tuple


class CLCUnitCategory(Enum):
    """A family of units within which conversions are permitted."""
    SIZE = "size"
    TEMPERATURE = "temperature"


@dataclass(frozen=True)
class CLCUnit:
    """
    A unit of measure.

    Every unit converts to and from the base unit of its category (bytes for
    sizes, celsius for temperatures). Size units additionally carry their
    exact integer scale factor so that conversions between them can be done
    without going through floating point.
    """
    name: str
    symbol: str
    suffixes: Tuple[str, ...]
    category: CLCUnitCategory
    to_base: Callable[[float], float] = field(compare=False, repr=False)
    from_base: Callable[[float], float] = field(compare=False, repr=False)
    scale: int = 1

    @property
    def is_size(self) -> bool:
        """True for byte-scale units."""
        return self.category == CLCUnitCategory.SIZE

    @property
    def is_temperature(self) -> bool:
        """True for temperature units."""
        return self.category == CLCUnitCategory.TEMPERATURE

    def __str__(self) -> str:
        return self.symbol


def _size_unit(name: str, symbol: str, power: int) -> CLCUnit:
    """Create a size unit scaled by 1024 ** power bytes."""
    scale = 1024 ** power
    return CLCUnit(
        name=name,
        symbol=symbol,
        suffixes=(symbol,),
        category=CLCUnitCategory.SIZE,
        to_base=lambda x: x * scale,
        from_base=lambda x: x / scale,
        scale=scale
    )


BYTE = _size_unit("byte", "B", 0)
KILOBYTE = _size_unit("kilobyte", "K", 1)
MEGABYTE = _size_unit("megabyte", "M", 2)
GIGABYTE = _size_unit("gigabyte", "G", 3)
TERABYTE = _size_unit("terabyte", "T", 4)
PETABYTE = _size_unit("petabyte", "P", 5)

CELSIUS = CLCUnit(
    name="celsius",
    symbol="°C",
    suffixes=("°", "°C"),
    category=CLCUnitCategory.TEMPERATURE,
    to_base=lambda c: c,
    from_base=lambda c: c
)

FAHRENHEIT = CLCUnit(
    name="fahrenheit",
    symbol="°F",
    suffixes=("°F",),
    category=CLCUnitCategory.TEMPERATURE,
    to_base=lambda f: (f - 32.0) * 5.0 / 9.0,
    from_base=lambda c: c * 9.0 / 5.0 + 32.0
)

KELVIN = CLCUnit(
    name="kelvin",
    symbol="°K",
    suffixes=("°K",),
    category=CLCUnitCategory.TEMPERATURE,
    to_base=lambda k: k - 273.15,
    from_base=lambda c: c + 273.15
)

# Ordered as they are listed to users: smallest size first, base temperature first.
ALL_UNITS: Tuple[CLCUnit, ...] = (
    BYTE, KILOBYTE, MEGABYTE, GIGABYTE, TERABYTE, PETABYTE,
    CELSIUS, FAHRENHEIT, KELVIN,
)

BASE_UNITS: Dict[CLCUnitCategory, CLCUnit] = {
    CLCUnitCategory.SIZE: BYTE,
    CLCUnitCategory.TEMPERATURE: CELSIUS,
}


def units_in_category(category: CLCUnitCategory) -> List[CLCUnit]:
    """Return every unit of a category in display order."""
    return [unit for unit in ALL_UNITS if unit.category == category]


def unit_from_suffix(suffix: str) -> CLCUnit | None:
    """Find the unit a literal suffix (e.g. 'K', '°F') stands for."""
    for unit in ALL_UNITS:
        if suffix in unit.suffixes:
            return unit

    return None


def unit_from_name(name: str) -> CLCUnit | None:
    """Find a unit by its full name (e.g. 'kilobyte')."""
    for unit in ALL_UNITS:
        if unit.name == name:
            return unit

    return None
