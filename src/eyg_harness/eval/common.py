from __future__ import annotations

import json
from typing import Any

from lark import Token

from ..types import EygNumber, EygRuntimeError, EygString, EygTypeError, EygValue
from ..tree import is_token, tree_children, tree_label
from ..values import is_boolean, is_true

def token_kind(node: Any) -> str | None:
    if not is_token(node):
        return None
    return str(node.type)

def token_number(token: Token) -> EygNumber:
    return EygNumber(float(token.value))

def decode_string(raw: str) -> str:
    # generated code emits JSON-compatible string literals
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise EygRuntimeError(f"Invalid string literal {raw}") from exc

def token_string(token: Token) -> EygString:
    return EygString(decode_string(token.value))

def key_name(node: Any) -> str:
    """Name of a `key` node: a bare identifier or a string literal."""
    if tree_label(node) == 'key':
        node = tree_children(node)[0]

    if token_kind(node) == 'STRING':
        return decode_string(node.value)

    if token_kind(node) == 'NAME':
        return str(node.value)

    raise EygRuntimeError(f"Malformed key {node!r}")

def require_number(value: EygValue, context: str) -> float:
    if not isinstance(value, EygNumber):
        raise EygTypeError(f"{context} expects numbers, got {value!r}")
    return value.value

def condition(value: EygValue, context: str) -> bool:
    if not is_boolean(value):
        raise EygTypeError(f"{context} expects a boolean, got {value!r}")
    return is_true(value)
