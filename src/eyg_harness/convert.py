"""Marshalling between host-native containers and the canonical encoding.

Records keep Python ``dict`` insertion order, so ``entries`` always yields
pairs in the order they were first inserted and ``object_from_entries``
re-consumes them into an identical record.
"""
from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Sequence, Tuple

from .types import (
    EygArray,
    EygBuiltin,
    EygClosure,
    EygNumber,
    EygRecord,
    EygString,
    EygValue,
    EygVariant,
    Family,
    MarshalError,
    is_eyg_value,
)
from .values import EMPTY, head, is_list, make_bool

_EXPONENT_THRESHOLD = 1e21

def to_value(host: Any) -> EygValue:
    """Lift a host value into the encoding; encoded values pass through."""
    if is_eyg_value(host):
        return host

    # bool before int: bool is an int subclass
    if isinstance(host, bool):
        return make_bool(host)

    if isinstance(host, (int, float)):
        return EygNumber(float(host))

    if isinstance(host, str):
        return EygString(host)

    if isinstance(host, (list, tuple)):
        return EygArray(tuple(to_value(item) for item in host))

    if isinstance(host, Mapping):
        slots = {}

        for key, value in host.items():
            if not isinstance(key, str):
                raise MarshalError(f"Record keys must be strings, got {type(key).__name__}")
            slots[key] = to_value(value)

        return EygRecord(slots)

    raise MarshalError(f"Cannot marshal {type(host).__name__} into a value")

def to_host(value: EygValue) -> Any:
    match value:
        case EygNumber(value=num):
            # JSON.stringify switches to exponent form from 1e21 upwards
            if math.isfinite(num) and float(num).is_integer() and abs(num) < _EXPONENT_THRESHOLD:
                return int(num)
            return float(num)
        case EygString(value=s):
            return s
        case EygArray(items=items):
            return [to_host(item) for item in items]
        case EygRecord(slots=slots):
            return {key: to_host(val) for key, val in slots.items()}
        case EygVariant(family=Family.BOOLEAN, tag=tag):
            return tag == "True"
        case EygVariant(family=Family.LIST):
            return [to_host(item) for item in to_array(value)]
        case EygClosure() | EygBuiltin():
            raise MarshalError(f"Cannot marshal function {value!r} to a host value")
        case _:
            raise MarshalError(f"Unexpected value type {type(value).__name__}")

# ---------------- Lists ----------------

def from_array(array: Sequence[Any]) -> EygVariant:
    result = EMPTY

    for item in reversed(list(array)):
        result = head(to_value(item), result)

    return result

def to_array(value: EygValue) -> List[EygValue]:
    if not is_list(value):
        raise MarshalError(f"Expected a list, got {value!r}")

    items: List[EygValue] = []
    node = value

    while node.tag == "Head":  # type: ignore[union-attr]
        element, node = node.payload.items  # type: ignore[union-attr]
        items.append(element)

    return items

def to_list(value: EygValue) -> List[Any]:
    """Canonical list to a host-native Python list."""
    return [to_host(item) for item in to_array(value)]

# ---------------- Records ----------------

def object_from_entries(pairs: Iterable[Any]) -> EygRecord:
    slots = {}

    for pair in pairs:
        if isinstance(pair, EygArray):
            pair = pair.items

        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise MarshalError(f"Record entries must be [key, value] pairs, got {pair!r}")

        key, value = pair
        if isinstance(key, EygString):
            key = key.value

        if not isinstance(key, str):
            raise MarshalError(f"Record keys must be strings, got {key!r}")

        # repeated keys keep their first position and take the last value
        slots[key] = to_value(value)

    return EygRecord(slots)

def entries(record: EygValue) -> List[Tuple[str, EygValue]]:
    if not isinstance(record, EygRecord):
        raise MarshalError(f"Expected a record, got {record!r}")

    return list(record.slots.items())

# ---------------- Text ----------------

def json_to_string(value: Any, indent: int = 2) -> str:
    host = to_host(to_value(value))

    try:
        return json.dumps(host, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as exc:
        raise MarshalError(f"Cannot serialize value: {exc}") from exc
