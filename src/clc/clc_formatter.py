"""Rendering of CLC results as plain text and as Alfred script filter JSON."""

import json
import math
from typing import Any, Dict, List

from clc.clc_unit import units_in_category
from clc.clc_value import CLCInteger, CLCValue, convert_value


# Alfred shows at most this many alternative renderings of a result.
MAX_ALFRED_ITEMS = 4


def format_number(value: CLCValue) -> str:
    """
    Format the magnitude of a value without its unit.

    Integers print their interpreted decimal value. Whole floats print
    without a fractional part, other floats with two decimals.
    """
    if isinstance(value, CLCInteger):
        return str(value.value)

    number = value.as_float()
    if math.isnan(number):
        return "NaN"

    if math.isinf(number):
        return "inf" if number > 0 else "-inf"

    if number.is_integer():
        return f"{number:.0f}"

    return f"{number:.2f}"


def format_value(value: CLCValue) -> str:
    """Format a value with its unit symbol appended, e.g. '255', '1.50K', '32°F'."""
    unit = value.unit.symbol if value.unit is not None else ""
    return f"{format_number(value)}{unit}"


def format_typed(value: CLCValue) -> str:
    """Format a value prefixed by its type, e.g. 'u8 255', 'f64 1.50°C'."""
    return f"{value.type_name()} {format_value(value)}"


def format_integer_bases(value: CLCInteger) -> List[str]:
    """Decimal, hex, octal and binary renderings of an integer's bit pattern."""
    return [
        str(value.value),
        f"{value.bits:#x}",
        f"{value.bits:#o}",
        f"{value.bits:#b}",
    ]


def alternative_renderings(value: CLCValue) -> List[str]:
    """
    The renderings offered for a result.

    Dimensionless integers are shown in four bases, other dimensionless values
    once, and values with a unit in each unit of their category.
    """
    if value.unit is None:
        if isinstance(value, CLCInteger):
            return format_integer_bases(value)

        return [format_value(value)]

    units = units_in_category(value.unit.category)[:MAX_ALFRED_ITEMS]
    return [format_value(convert_value(value, unit)) for unit in units]


def _alfred_item(title: str) -> Dict[str, Any]:
    return {
        "arg": title,
        "valid": "YES",
        "autocomplete": title,
        "type": "default",
        "title": title,
        "subtitle": f"copy+paste as \"{title}\"",
    }


def alfred_result(value: CLCValue) -> str:
    """Alfred script filter JSON listing every rendering of a result."""
    items = [_alfred_item(rendering) for rendering in alternative_renderings(value)]
    return json.dumps({"items": items}, ensure_ascii=False)


def alfred_error(message: str) -> str:
    """Alfred script filter JSON for a failed evaluation."""
    item = {
        "arg": "...",
        "valid": "NO",
        "autocomplete": "...",
        "type": "default",
        "title": message,
        "subtitle": "...",
    }
    return json.dumps({"items": [item]}, ensure_ascii=False)
