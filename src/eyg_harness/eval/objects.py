from __future__ import annotations

from typing import Callable, Dict

from lark import Tree

from ..types import (
    EygArray,
    EygIndexError,
    EygKeyError,
    EygNumber,
    EygRecord,
    EygString,
    EygTypeError,
    EygValue,
    Frame,
)
from ..tree import Node, tree_children
from .common import key_name

EvalFunc = Callable[[Node, Frame], EygValue]

def eval_array(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygArray:
    return EygArray(tuple(eval_func(ch, frame) for ch in n.children))

def eval_object(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygRecord:
    slots: Dict[str, EygValue] = {}

    for field in tree_children(n):
        key_node, value_node = tree_children(field)
        # later fields win, like object literals in the generated code's host
        slots[key_name(key_node)] = eval_func(value_node, frame)

    return EygRecord(slots)

def get_field(recv: EygValue, name: str) -> EygValue:
    match recv:
        case EygRecord(slots=slots):
            if name not in slots:
                raise EygKeyError(name)
            return slots[name]
        case EygArray(items=items) if name == 'length':
            return EygNumber(float(len(items)))
        case EygString(value=s) if name == 'length':
            return EygNumber(float(len(s)))
        case _:
            raise EygTypeError(f"Cannot read property '{name}' of {recv!r}")

def eval_member(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    recv_node, name = n.children
    return get_field(eval_func(recv_node, frame), str(name))

def _array_position(index: EygValue, length: int) -> int:
    if not isinstance(index, EygNumber) or not float(index.value).is_integer():
        raise EygTypeError(f"Array index must be an integer, got {index!r}")

    pos = int(index.value)
    if pos < 0 or pos >= length:
        raise EygIndexError(f"Index {pos} out of bounds for length {length}")

    return pos

def eval_index(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    recv_node, index_node = n.children
    recv = eval_func(recv_node, frame)
    index = eval_func(index_node, frame)

    match recv:
        case EygArray(items=items):
            return items[_array_position(index, len(items))]
        case EygString(value=s):
            return EygString(s[_array_position(index, len(s))])
        case EygRecord():
            if not isinstance(index, EygString):
                raise EygTypeError(f"Record key must be a string, got {index!r}")
            return get_field(recv, index.value)
        case _:
            raise EygTypeError(f"Cannot index {recv!r}")
