from __future__ import annotations

from typing import Callable, List, Optional

from lark import Tree

from ..types import (
    EygReturnSignal,
    EygRuntimeError,
    EygThrow,
    EygValue,
    Frame,
    UNIT,
)
from ..tree import Node, tree_children, tree_label
from .common import condition
from .fn import make_function_decl
from .patterns import bind_pattern

EvalFunc = Callable[[Node, Frame], EygValue]

def current_function_frame(frame: Frame) -> Optional[Frame]:
    """Walk parents to find the nearest function-call frame marker."""
    cur: Optional[Frame] = frame

    while cur is not None:
        if cur.is_function_frame():
            return cur

        cur = cur.parent

    return None

def hoist_functions(statements: List[Node], frame: Frame) -> None:
    for stmt in statements:
        if tree_label(stmt) == 'function_decl':
            closure = make_function_decl(stmt, frame)
            frame.define(closure.name or "", closure)

def eval_statements(statements: List[Node], frame: Frame, eval_func: EvalFunc) -> EygValue:
    """Run statements in order; the result is the last expression statement's value."""
    hoist_functions(statements, frame)
    result: EygValue = UNIT

    for stmt in statements:
        value = eval_func(stmt, frame)

        if tree_label(stmt) == 'expr_stmt':
            result = value

    return result

def eval_program(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    return eval_statements(tree_children(n), frame, eval_func)

def eval_block(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    return eval_statements(tree_children(n), Frame(parent=frame), eval_func)

def eval_declaration(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    pattern, value_node = n.children
    bind_pattern(pattern, eval_func(value_node, frame), frame)
    return UNIT

def eval_return_stmt(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    if current_function_frame(frame) is None:
        raise EygRuntimeError("Illegal return statement")

    value = eval_func(n.children[0], frame) if n.children else UNIT
    raise EygReturnSignal(value)

def eval_throw_stmt(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    raise EygThrow(eval_func(n.children[0], frame))

def eval_if_stmt(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    cond_node, then_block, *rest = n.children

    if condition(eval_func(cond_node, frame), "if"):
        return eval_func(then_block, frame)

    if rest:
        return eval_func(rest[0], frame)

    return UNIT
