from __future__ import annotations

import importlib
from typing import List, Optional

from .types import (
    EygArray,
    EygArityError,
    EygBuiltin,
    EygClosure,
    EygNumber,
    EygRecord,
    EygReturnSignal,
    EygString,
    EygTypeError,
    EygValue,
    EygVariant,
    Frame,
    IntrinsicFn,
    Intrinsics,
    SandboxContext,
    UNIT,
    is_eyg_value,
)
from .values import dispatch_variant

_INTRINSICS_INITIALIZED = False

def init_intrinsics() -> None:
    """Load the intrinsics module (idempotent) so register_intrinsic hooks run."""
    global _INTRINSICS_INITIALIZED

    if _INTRINSICS_INITIALIZED:
        return

    importlib.import_module("eyg_harness.intrinsics")
    _INTRINSICS_INITIALIZED = True

def register_intrinsic(name: str, *, arity: Optional[int] = None):
    def dec(fn: IntrinsicFn):
        Intrinsics.table[name] = EygBuiltin(name=name, fn=fn, arity=arity)
        return fn

    return dec

def root_frame(source: Optional[str]=None, context: Optional[SandboxContext]=None) -> Frame:
    """Fresh top-level scope with the intrinsics table bound."""
    init_intrinsics()
    frame = Frame(source=source, context=context)
    frame.define('harness', EygRecord(dict(Intrinsics.table)))
    frame.define('equal', Intrinsics.table['equal'])
    return frame

def _ensure_eyg_value(value: object) -> EygValue:
    if value is None:
        return UNIT
    if is_eyg_value(value):
        return value
    raise EygTypeError(f"Unexpected value type {type(value).__name__}")

def call_value(cal: EygValue, args: List[EygValue], frame: Frame) -> EygValue:
    match cal:
        case EygClosure():
            return call_closure(cal, args, frame)
        case EygBuiltin(fn=fn, arity=arity, name=name):
            if arity is not None and len(args) != arity:
                raise EygArityError(f"{name} expects {arity} args; got {len(args)}")
            return _ensure_eyg_value(fn(frame, args))
        case EygVariant():
            return dispatch_variant(cal, args, lambda branch, branch_args: call_value(branch, branch_args, frame))
        case _:
            raise EygTypeError(f"{_describe(cal)} is not a function")

def call_closure(fn: EygClosure, positional: List[EygValue], caller_frame: Frame) -> EygValue:
    _ = caller_frame
    from .eval.patterns import bind_pattern  # local import to avoid cycle
    from .evaluator import eval_node
    from .tree import tree_label

    if len(positional) != len(fn.params):
        label = fn.name or "Function"
        raise EygArityError(f"{label} expects {len(fn.params)} args; got {len(positional)}")

    callee_frame = Frame(parent=fn.frame)
    callee_frame.mark_function_frame()

    for pattern, val in zip(fn.params, positional):
        bind_pattern(pattern, val, callee_frame)

    if tree_label(fn.body) != 'block':
        return _ensure_eyg_value(eval_node(fn.body, callee_frame))

    try:
        eval_node(fn.body, callee_frame)
    except EygReturnSignal as signal:
        return signal.value

    return UNIT

def _describe(value: EygValue) -> str:
    match value:
        case EygNumber() | EygString():
            return repr(value)
        case EygArray():
            return "array"
        case EygRecord():
            return "record"
        case _:
            return type(value).__name__
