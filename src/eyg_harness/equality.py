"""Deep structural equality over encoded values.

The comparison reports its answer as the canonical boolean variant so that
compiled code can dispatch on it like any other boolean.

``legacy_key_count`` reproduces the reference harness, which read the key
count of *both* operands from the left one. In that mode a record (or array)
on the right that holds every left key plus extras still compares equal.
The default checks both key sets.
"""
from __future__ import annotations

from typing import List, Tuple

from .types import (
    EygArray,
    EygBuiltin,
    EygClosure,
    EygNumber,
    EygRecord,
    EygString,
    EygValue,
    EygVariant,
)
from .values import make_bool

_COMPOUND = (EygArray, EygRecord, EygVariant)

def _shapes_match(a: EygValue, b: EygValue, legacy_key_count: bool) -> bool:
    if type(a) is not type(b):
        return False

    match a:
        case EygArray(items=items):
            if legacy_key_count:
                return len(items) <= len(b.items)  # type: ignore[union-attr]
            return len(items) == len(b.items)  # type: ignore[union-attr]
        case EygRecord(slots=slots):
            if legacy_key_count:
                return all(key in b.slots for key in slots)  # type: ignore[union-attr]
            return slots.keys() == b.slots.keys()  # type: ignore[union-attr]
        case EygVariant(family=family, tag=tag):
            return family is b.family and tag == b.tag  # type: ignore[union-attr]

    return False

def _children(a: EygValue, b: EygValue) -> List[Tuple[EygValue, EygValue]]:
    match a:
        case EygArray(items=items):
            return list(zip(items, b.items))  # type: ignore[union-attr]
        case EygRecord(slots=slots):
            return [(val, b.slots[key]) for key, val in slots.items()]  # type: ignore[union-attr]
        case EygVariant(payload=payload):
            return [(payload, b.payload)]  # type: ignore[union-attr]

    return []

def _leaf_equal(a: EygValue, b: EygValue) -> bool:
    match (a, b):
        case (EygNumber(value=x), EygNumber(value=y)):
            return x == y
        case (EygString(value=x), EygString(value=y)):
            return x == y
        case (EygClosure() | EygBuiltin(), _):
            return a is b

    return False

def structurally_equal(a: EygValue, b: EygValue, *, legacy_key_count: bool = False) -> bool:
    # explicit stack: cons lists nest one level per element
    pending: List[Tuple[EygValue, EygValue]] = [(a, b)]

    while pending:
        left, right = pending.pop()

        if left is right:
            continue

        if isinstance(left, _COMPOUND) and isinstance(right, _COMPOUND):
            if not _shapes_match(left, right, legacy_key_count):
                return False

            pending.extend(_children(left, right))
            continue

        if not _leaf_equal(left, right):
            return False

    return True

def equal(a: EygValue, b: EygValue, *, legacy_key_count: bool = False) -> EygVariant:
    return make_bool(structurally_equal(a, b, legacy_key_count=legacy_key_count))
