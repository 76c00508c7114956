"""Canonical encodings for booleans and cons lists.

Inside Python the harness inspects variants through their ``tag``. The
invoke-with-handler convention that compiled code relies on lives only in
``dispatch_variant``, which the evaluator uses when a variant is called.
"""
from __future__ import annotations

from typing import Callable, List

from .types import (
    EygArray,
    EygClosure,
    EygRecord,
    EygValue,
    EygVariant,
    Family,
    MarshalError,
    UNIT,
)

TRUE = EygVariant(Family.BOOLEAN, "True", UNIT)
FALSE = EygVariant(Family.BOOLEAN, "False", UNIT)
EMPTY = EygVariant(Family.LIST, "Empty", UNIT)

CallFunc = Callable[[EygValue, List[EygValue]], EygValue]

def make_bool(flag: bool) -> EygVariant:
    return TRUE if flag else FALSE

def is_boolean(value: EygValue) -> bool:
    return isinstance(value, EygVariant) and value.family is Family.BOOLEAN

def is_true(value: EygValue) -> bool:
    if not is_boolean(value):
        raise MarshalError(f"Expected a boolean variant, got {value!r}")

    return value.tag == "True"  # type: ignore[union-attr]

def is_list(value: EygValue) -> bool:
    return isinstance(value, EygVariant) and value.family is Family.LIST

def head(element: EygValue, rest: EygVariant) -> EygVariant:
    if not is_list(rest):
        raise MarshalError(f"List tail must be a list, got {rest!r}")

    return EygVariant(Family.LIST, "Head", EygArray((element, rest)))

def _select_branch(variant: EygVariant, handler: EygValue) -> EygValue:
    branches = variant.family.branches

    match handler:
        case EygRecord(slots=slots):
            if set(slots) != set(branches):
                expected = ", ".join(branches)
                got = ", ".join(slots) or "no branches"
                raise MarshalError(f"{variant.tag} expects a handler with branches {expected}; got {got}")

            return slots[variant.tag]
        case EygArray(items=items):
            if len(items) != len(branches):
                raise MarshalError(f"{variant.tag} expects {len(branches)} positional branches; got {len(items)}")

            return items[branches.index(variant.tag)]
        case _:
            raise MarshalError(f"Cannot dispatch {variant.tag} on {type(handler).__name__}")

def dispatch_variant(variant: EygVariant, args: List[EygValue], call: CallFunc) -> EygValue:
    """Invoke a variant the way compiled code does: ``variant(handler)``."""
    if len(args) != 1:
        raise MarshalError(f"{variant.tag} expects exactly one handler argument; got {len(args)}")

    branch = _select_branch(variant, args[0])

    # unit payloads may be dropped by nullary branches, e.g. `True: () => ...`
    if isinstance(branch, EygClosure) and not branch.params and variant.payload == UNIT:
        return call(branch, [])

    return call(branch, [variant.payload])
