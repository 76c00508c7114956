"""Intrinsics bound into the sandbox scope, registered via eyg_harness.runtime."""

from __future__ import annotations

import logging
from typing import List, Tuple

from .convert import from_array
from .equality import equal
from .runtime import register_intrinsic
from .types import EygArray, EygRuntimeError, EygString, EygTypeError, EygValue, Frame

logger = logging.getLogger(__name__)

def _pair(name: str, args: List[EygValue]) -> Tuple[EygValue, EygValue]:
    arg = args[0]

    if not isinstance(arg, EygArray) or len(arg.items) != 2:
        raise EygTypeError(f"{name} expects a [left, right] pair")

    left, right = arg.items
    return left, right

@register_intrinsic("split", arity=1)
def intrinsic_split(_frame: Frame, args: List[EygValue]) -> EygValue:
    text, separator = _pair("split", args)

    if not isinstance(text, EygString) or not isinstance(separator, EygString):
        raise EygTypeError("split expects a string and a string separator")

    if separator.value == "":
        parts = list(text.value)
    else:
        parts = text.value.split(separator.value)

    return from_array([EygString(part) for part in parts])

@register_intrinsic("debug", arity=1)
def intrinsic_debug(frame: Frame, args: List[EygValue]) -> EygValue:
    item = args[0]
    observer = frame.context.observer

    if observer is not None:
        try:
            observer(item)
        except Exception as exc:
            raise EygRuntimeError(f"debug observer failed: {exc}") from exc
    else:
        logger.info("debug: %r", item)

    return item

@register_intrinsic("equal", arity=1)
def intrinsic_equal(frame: Frame, args: List[EygValue]) -> EygValue:
    left, right = _pair("equal", args)
    return equal(left, right, legacy_key_count=frame.context.legacy_key_count)
