from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from lark import Lark, Token, Transformer, Tree
from lark.visitors import v_args

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

def _read_grammar(grammar_path: Optional[str]) -> str:
    if grammar_path:
        p = Path(grammar_path)
        if p.exists():
            return p.read_text(encoding="utf-8")

    if GRAMMAR_PATH.exists():
        return GRAMMAR_PATH.read_text(encoding="utf-8")

    raise FileNotFoundError("grammar.lark not found. pass an explicit path")

@lru_cache(maxsize=4)
def make_parser(grammar_path: Optional[str]=None) -> Lark:
    return Lark(
        _read_grammar(grammar_path),
        parser="earley",
        lexer="basic",
        start="start",
        maybe_placeholders=False,
        propagate_positions=True,
    )

class Normalize(Transformer):
    """Canonicalize shorthand forms so the evaluator sees one shape per construct."""

    @v_args(meta=True)
    def arrow(self, meta, c):
        params, body = c
        if params.data == 'single_param':
            name = params.children[0]
            params = Tree('params', [Tree('bind_name', [name], params.meta)], params.meta)
        return Tree('arrow', [params, body], meta)

    @v_args(meta=True)
    def shorthand_field(self, meta, c):
        name: Token = c[0]
        return Tree('field', [Tree('key', [name]), Tree('var', [name], meta)], meta)

    @v_args(meta=True)
    def pattern_shorthand(self, meta, c):
        name: Token = c[0]
        return Tree('pattern_field', [Tree('key', [name]), Tree('bind_name', [name], meta)], meta)

    @v_args(meta=True)
    def start(self, meta, c):
        return Tree('program', c, meta)

def parse_source(src: str, grammar_path: Optional[str]=None) -> Tree:
    """Parse generated code into a normalized tree; lark errors propagate."""
    tree = make_parser(grammar_path).parse(src)
    return Normalize().transform(tree)
