from __future__ import annotations

from typing import Callable

from lark import Tree

from ..runtime import call_value
from ..types import EygClosure, EygValue, Frame
from ..tree import Node, tree_children

EvalFunc = Callable[[Node, Frame], EygValue]

def _param_patterns(params_node: Node) -> list[Node]:
    return tree_children(params_node)

def eval_arrow(n: Tree, frame: Frame) -> EygClosure:
    params_node, body = n.children
    return EygClosure(params=_param_patterns(params_node), body=body, frame=frame)

def eval_function_expr(n: Tree, frame: Frame) -> EygClosure:
    params_node, body = n.children
    return EygClosure(params=_param_patterns(params_node), body=body, frame=frame, kind="function")

def make_function_decl(n: Tree, frame: Frame) -> EygClosure:
    name, params_node, body = n.children
    return EygClosure(
        params=_param_patterns(params_node),
        body=body,
        frame=frame,
        name=str(name),
        kind="function",
    )

def eval_call(n: Tree, frame: Frame, eval_func: EvalFunc) -> EygValue:
    callee_node, *arg_nodes = n.children
    callee = eval_func(callee_node, frame)
    args = [eval_func(arg, frame) for arg in arg_nodes]
    return call_value(callee, args, frame)
