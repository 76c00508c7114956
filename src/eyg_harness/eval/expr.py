from __future__ import annotations

import math
from typing import Callable, List

from lark import Token

from ..types import (
    EygNumber,
    EygRuntimeError,
    EygString,
    EygTypeError,
    EygValue,
    Frame,
)
from ..tree import Node
from ..values import make_bool
from .common import condition, require_number

EvalFunc = Callable[[Node, Frame], EygValue]

def eval_unary(children: List[Node], frame: Frame, eval_func: EvalFunc) -> EygValue:
    op, operand_node = children
    operand = eval_func(operand_node, frame)

    match op:
        case Token(type='BANG'):
            return make_bool(not condition(operand, "!"))
        case Token(type='MINUS'):
            return EygNumber(-require_number(operand, "unary -"))
        case _:
            raise EygRuntimeError(f"Unsupported unary op {op}")

def eval_binary(children: List[Node], frame: Frame, eval_func: EvalFunc) -> EygValue:
    lhs_node, op, rhs_node = children
    lhs = eval_func(lhs_node, frame)
    rhs = eval_func(rhs_node, frame)
    return apply_binary_operator(str(op), lhs, rhs)

def apply_binary_operator(op: str, lhs: EygValue, rhs: EygValue) -> EygValue:
    if op == '+':
        match (lhs, rhs):
            case (EygNumber(value=a), EygNumber(value=b)):
                return EygNumber(a + b)
            case (EygString(value=a), EygString(value=b)):
                return EygString(a + b)
            case _:
                raise EygTypeError(f"Cannot add {lhs!r} and {rhs!r}")

    a = require_number(lhs, op)
    b = require_number(rhs, op)

    match op:
        case '-':
            return EygNumber(a - b)
        case '*':
            return EygNumber(a * b)
        case '/':
            if b == 0:
                raise EygRuntimeError("Division by zero")
            return EygNumber(a / b)
        case '%':
            if b == 0:
                raise EygRuntimeError("Modulo by zero")
            # sign follows the dividend, like the generated code's host
            return EygNumber(math.fmod(a, b))
        case _:
            raise EygRuntimeError(f"Unknown operator {op}")

def strict_equals(lhs: EygValue, rhs: EygValue) -> bool:
    match (lhs, rhs):
        case (EygNumber(value=a), EygNumber(value=b)):
            return a == b
        case (EygString(value=a), EygString(value=b)):
            return a == b

    # everything else compares by reference
    return lhs is rhs

def eval_compare(children: List[Node], frame: Frame, eval_func: EvalFunc) -> EygValue:
    lhs_node, op, rhs_node = children
    lhs = eval_func(lhs_node, frame)
    rhs = eval_func(rhs_node, frame)
    op_value = str(op)

    if op_value in ('===', '=='):
        return make_bool(strict_equals(lhs, rhs))

    if op_value in ('!==', '!='):
        return make_bool(not strict_equals(lhs, rhs))

    match (lhs, rhs):
        case (EygNumber(value=a), EygNumber(value=b)) | (EygString(value=a), EygString(value=b)):
            pass
        case _:
            raise EygTypeError(f"Cannot compare {lhs!r} {op_value} {rhs!r}")

    match op_value:
        case '<':
            return make_bool(a < b)
        case '<=':
            return make_bool(a <= b)
        case '>':
            return make_bool(a > b)
        case '>=':
            return make_bool(a >= b)
        case _:
            raise EygRuntimeError(f"Unknown comparison {op_value}")

def eval_logical(kind: str, children: List[Node], frame: Frame, eval_func: EvalFunc) -> EygValue:
    lhs_node, rhs_node = children
    lhs = eval_func(lhs_node, frame)
    lhs_true = condition(lhs, kind)

    if kind == '&&' and not lhs_true:
        return lhs

    if kind == '||' and lhs_true:
        return lhs

    rhs = eval_func(rhs_node, frame)
    condition(rhs, kind)
    return rhs

def eval_ternary(children: List[Node], frame: Frame, eval_func: EvalFunc) -> EygValue:
    cond_node, then_node, else_node = children

    if condition(eval_func(cond_node, frame), "?:"):
        return eval_func(then_node, frame)

    return eval_func(else_node, frame)
