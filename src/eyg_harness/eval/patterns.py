from __future__ import annotations

from typing import Any

from ..types import EygArray, EygKeyError, EygRecord, EygRuntimeError, EygTypeError, EygValue, Frame
from ..tree import tree_children, tree_label
from .common import key_name

def bind_pattern(pattern: Any, value: EygValue, frame: Frame) -> None:
    """Destructure `value` against a parameter/declaration pattern into `frame`."""
    match tree_label(pattern):
        case 'bind_name':
            name = tree_children(pattern)[0]
            frame.define(str(name), value)
        case 'array_pattern':
            subpatterns = tree_children(pattern)

            if not isinstance(value, EygArray):
                raise EygTypeError(f"Cannot destructure {value!r} as an array")

            # extra items are ignored, missing ones are an error
            if len(value.items) < len(subpatterns):
                raise EygTypeError(f"Expected at least {len(subpatterns)} items to destructure; got {len(value.items)}")

            for sub, item in zip(subpatterns, value.items):
                bind_pattern(sub, item, frame)
        case 'object_pattern':
            if not isinstance(value, EygRecord):
                raise EygTypeError(f"Cannot destructure {value!r} as a record")

            for field in tree_children(pattern):
                key_node, sub = tree_children(field)
                key = key_name(key_node)

                if key not in value.slots:
                    raise EygKeyError(key)

                bind_pattern(sub, value.slots[key], frame)
        case label:
            raise EygRuntimeError(f"Unsupported pattern {label}")
