"""Evaluator helper modules for the harness interpreter."""

__all__ = [
    "blocks",
    "common",
    "expr",
    "fn",
    "objects",
    "patterns",
]
