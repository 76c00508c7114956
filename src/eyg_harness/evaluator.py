from __future__ import annotations

from types import SimpleNamespace
from typing import Callable, Optional

from lark import Token, Tree

from .runtime import init_intrinsics, root_frame
from .types import EygRuntimeError, EygValue, Frame, UNIT
from .tree import Node, is_token, token_position
from .values import FALSE, TRUE

from .eval.blocks import (
    eval_block,
    eval_declaration,
    eval_if_stmt,
    eval_program,
    eval_return_stmt,
    eval_throw_stmt,
)
from .eval.common import token_number, token_string
from .eval.expr import eval_binary, eval_compare, eval_logical, eval_ternary, eval_unary
from .eval.fn import eval_arrow, eval_call, eval_function_expr
from .eval.objects import eval_array, eval_index, eval_member, eval_object

def _maybe_attach_location(exc: EygRuntimeError, node: Node) -> None:
    if getattr(exc, "_augmented", False):
        return

    position = token_position(node)
    if position is None:
        return

    line, col = position
    exc.eyg_meta = SimpleNamespace(line=line, column=col)
    exc._augmented = True  # type: ignore[attr-defined]

# ---------------- Public API ----------------

def eval_expr(ast: Node, frame: Optional[Frame]=None, source: Optional[str]=None) -> EygValue:
    init_intrinsics()

    if frame is None:
        frame = root_frame(source=source)
    elif source is not None:
        frame.source = source

    return eval_node(ast, frame)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, frame: Frame) -> EygValue:
    try:
        return _eval_node_inner(n, frame)
    except EygRuntimeError as e:
        # innermost node with a position wins
        _maybe_attach_location(e, n)
        raise

def _eval_node_inner(n: Node, frame: Frame) -> EygValue:
    if is_token(n):
        raise EygRuntimeError(f"Unhandled token {n.type}:{n.value}")

    handler = _NODE_DISPATCH.get(n.data)
    if handler is not None:
        return handler(n, frame)

    match n.data:
        case 'expr_stmt':
            return eval_node(n.children[0], frame)
        case 'function_decl':
            # bound when its enclosing block was entered
            return UNIT
        case 'and_expr':
            return eval_logical('&&', n.children, frame, eval_node)
        case 'or_expr':
            return eval_logical('||', n.children, frame, eval_node)
        case 'true':
            return TRUE
        case 'false':
            return FALSE
        case _:
            raise EygRuntimeError(f"Unknown node: {n.data}")

def _eval_var(n: Tree, frame: Frame) -> EygValue:
    name: Token = n.children[0]
    return frame.get(str(name))

_NODE_DISPATCH: dict[str, Callable[[Tree, Frame], EygValue]] = {
    'program': lambda n, frame: eval_program(n, frame, eval_node),
    'block': lambda n, frame: eval_block(n, frame, eval_node),
    'declaration': lambda n, frame: eval_declaration(n, frame, eval_node),
    'return_stmt': lambda n, frame: eval_return_stmt(n, frame, eval_node),
    'throw_stmt': lambda n, frame: eval_throw_stmt(n, frame, eval_node),
    'if_stmt': lambda n, frame: eval_if_stmt(n, frame, eval_node),
    'number': lambda n, _: token_number(n.children[0]),
    'string': lambda n, _: token_string(n.children[0]),
    'var': _eval_var,
    'array': lambda n, frame: eval_array(n, frame, eval_node),
    'object': lambda n, frame: eval_object(n, frame, eval_node),
    'arrow': eval_arrow,
    'function_expr': eval_function_expr,
    'call': lambda n, frame: eval_call(n, frame, eval_node),
    'member': lambda n, frame: eval_member(n, frame, eval_node),
    'index': lambda n, frame: eval_index(n, frame, eval_node),
    'unary': lambda n, frame: eval_unary(n.children, frame, eval_node),
    'binary': lambda n, frame: eval_binary(n.children, frame, eval_node),
    'compare': lambda n, frame: eval_compare(n.children, frame, eval_node),
    'ternary': lambda n, frame: eval_ternary(n.children, frame, eval_node),
}
