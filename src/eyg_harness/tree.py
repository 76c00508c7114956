"""Shared helpers for working with lark Tree/Token nodes across the project."""
from __future__ import annotations

from typing import Any, List, Optional

from lark import Token, Tree
from typing_extensions import TypeAlias, TypeGuard

Node: TypeAlias = Tree | Token


def is_tree(node: Any) -> TypeGuard[Tree]:
    return isinstance(node, Tree)

def is_token(node: Any) -> TypeGuard[Token]:
    return isinstance(node, Token)

def tree_label(node: Any) -> Optional[str]:
    return node.data if is_tree(node) else None

def tree_children(node: Any) -> List[Node]:
    if not is_tree(node):
        return []

    children = getattr(node, "children", None)
    if children is None:
        return []

    return list(children)

def node_meta(node: Any) -> Optional[Any]:
    if not is_tree(node):
        return None

    meta = node.meta
    # lark hands out an empty Meta when positions were not propagated
    if getattr(meta, "empty", True):
        return None

    return meta

def token_position(node: Any) -> Optional[tuple[int, int]]:
    if is_token(node) and node.line is not None:
        return node.line, node.column

    meta = node_meta(node)
    if meta is None:
        return None

    return meta.line, meta.column
