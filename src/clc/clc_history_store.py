"""JSON persistence of the CLC result history between runs."""

import json
import logging
import os
from typing import Any, Dict

from clc.clc_history import CLCHistory
from clc.clc_number_type import CLCNumberType
from clc.clc_unit import unit_from_suffix
from clc.clc_value import CLCValue, make_value


HISTORY_FORMAT_VERSION = 1

logger = logging.getLogger("CLCHistoryStore")


def value_to_json(value: CLCValue) -> Dict[str, Any]:
    """Serialize a value as {"type", "value", "unit"}."""
    return {
        "type": value.type_name(),
        "value": value.to_python(),
        "unit": value.unit.symbol if value.unit is not None else None,
    }


def value_from_json(data: Any) -> CLCValue:
    """
    Deserialize a value written by value_to_json.

    Raises:
        ValueError: If the entry is malformed
    """
    if not isinstance(data, dict):
        raise ValueError(f"History entry must be an object, got {type(data).__name__}")

    number_type = CLCNumberType.from_name(str(data.get("type")))
    if number_type is None:
        raise ValueError(f"Unknown type in history entry: {data.get('type')!r}")

    number = data.get("value")
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        raise ValueError(f"History entry value must be a number, got {number!r}")

    if number_type.is_integer and not isinstance(number, int):
        raise ValueError(f"History entry of type {number_type} must hold an integer, got {number!r}")

    unit = None
    symbol = data.get("unit")
    if symbol is not None:
        unit = unit_from_suffix(str(symbol))
        if unit is None:
            raise ValueError(f"Unknown unit in history entry: {symbol!r}")

    return make_value(number, number_type, unit)


def load(path: str, capacity: int) -> CLCHistory:
    """
    Load a history file.

    A missing or unreadable file gives an empty history. Malformed entries are
    skipped. Only the most recent `capacity` entries are kept.
    """
    history = CLCHistory(capacity)
    path = os.path.expanduser(path)
    if not os.path.exists(path):
        return history

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read history file %s: %s", path, e)
        return history

    entries = data.get("history") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        logger.warning("History file %s has no history list, ignoring it", path)
        return history

    if data.get("version") != HISTORY_FORMAT_VERSION:
        logger.warning("History file %s has version %r, expected %d", path, data.get("version"), HISTORY_FORMAT_VERSION)

    for i, entry in enumerate(entries):
        try:
            history.append(value_from_json(entry))

        except ValueError as e:
            logger.warning("Skipping history entry %d in %s: %s", i, path, e)

    return history


def save(history: CLCHistory, path: str) -> None:
    """
    Write a history file, oldest result first, creating its directory if needed.

    Raises:
        OSError: If the file cannot be written
    """
    path = os.path.expanduser(path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = {
        "version": HISTORY_FORMAT_VERSION,
        "history": [value_to_json(value) for value in history.values()],
    }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=4, ensure_ascii=False)
