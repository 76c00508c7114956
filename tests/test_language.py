from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    EygArityError,
    EygIndexError,
    EygKeyError,
    EygNameError,
    EygRuntimeError,
    EygThrow,
    EygTypeError,
    LarkError,
    MarshalError,
    run_runtime_case,
)

SCENARIOS = [
    pytest.param("1 + 2", ("number", 3), None, id="add-numbers"),
    pytest.param('"a" + "b"', ("string", "ab"), None, id="concat-strings"),
    pytest.param("const x = 2; x * 3", ("number", 6), None, id="const-binding"),
    pytest.param("-7 % 3", ("number", -1), None, id="modulo-follows-dividend"),
    pytest.param("7 / 2", ("number", 3.5), None, id="true-division"),
    pytest.param("", ("unit", None), None, id="empty-program"),
    pytest.param("const x = 1", ("unit", None), None, id="declaration-completes-unit"),
    pytest.param(
        "const f = (a, b) => a - b; f(5, 2)",
        ("number", 3),
        None,
        id="arrow-two-params",
    ),
    pytest.param(
        "const inc = x => x + 1; inc(inc(1))",
        ("number", 3),
        None,
        id="arrow-single-param",
    ),
    pytest.param(
        "const mk = x => y => x + y; mk(1)(2)",
        ("number", 3),
        None,
        id="curried-closure",
    ),
    pytest.param(
        "const f = function (a) { return a * 10 }; f(2)",
        ("number", 20),
        None,
        id="function-expression",
    ),
    pytest.param(
        dedent(
            """\
            f(2);
            function f(n) {
              return n * 2
            }
        """
        ),
        ("number", 4),
        None,
        id="function-declaration-hoisted",
    ),
    pytest.param(
        "const f = () => { const a = 1 }; f()",
        ("unit", None),
        None,
        id="block-without-return-is-unit",
    ),
    pytest.param("true", ("bool", True), None, id="true-literal"),
    pytest.param("1 < 2", ("bool", True), None, id="less-than"),
    pytest.param('"b" >= "a"', ("bool", True), None, id="string-comparison"),
    pytest.param("1 === 1", ("bool", True), None, id="strict-equal-numbers"),
    pytest.param('"a" !== "a"', ("bool", False), None, id="strict-not-equal-strings"),
    pytest.param("[1] === [1]", ("bool", False), None, id="arrays-compare-by-identity"),
    pytest.param("const a = [1]; a === a", ("bool", True), None, id="same-array-identity"),
    pytest.param("true && false", ("bool", False), None, id="and"),
    pytest.param("false || true", ("bool", True), None, id="or"),
    pytest.param("!true", ("bool", False), None, id="not"),
    pytest.param("false && missing", ("bool", False), None, id="and-short-circuits"),
    pytest.param('1 > 2 ? "a" : "b"', ("string", "b"), None, id="ternary"),
    pytest.param("[1, 2, 3].length", ("number", 3), None, id="array-length"),
    pytest.param('"hello".length', ("number", 5), None, id="string-length"),
    pytest.param("[10, 20][1]", ("number", 20), None, id="array-index"),
    pytest.param('"abc"[2]', ("string", "c"), None, id="string-index"),
    pytest.param(
        'const r = {a: 1, "b c": 2}; r["b c"] + r.a',
        ("number", 3),
        None,
        id="record-member-and-index",
    ),
    pytest.param(
        "const a = 1; const r = {a}; r.a",
        ("number", 1),
        None,
        id="record-shorthand-field",
    ),
    pytest.param(
        "({a: 1, b: [1, 2], a: 3})",
        ("record", {"a": 3, "b": [1, 2]}),
        None,
        id="record-later-field-wins",
    ),
    pytest.param('["a", 1]', ("array", ["a", 1]), None, id="array-literal"),
    pytest.param(
        "const [x, y] = [1, 2, 3]; x + y",
        ("number", 3),
        None,
        id="array-pattern-ignores-extra",
    ),
    pytest.param(
        "const {a, b: c} = {a: 1, b: 2}; a + c",
        ("number", 3),
        None,
        id="object-pattern",
    ),
    pytest.param(
        dedent(
            """\
            const sign = n => {
              if (n < 0) {
                return "neg"
              } else if (n === 0) {
                return "zero"
              }
              return "pos"
            };
            sign(0) + sign(-1) + sign(4)
        """
        ),
        ("string", "zeronegpos"),
        None,
        id="if-else-chain",
    ),
    pytest.param(
        "// leading\n1 /* inline */ + 1",
        ("number", 2),
        None,
        id="comments-ignored",
    ),
    pytest.param(
        "true({True: () => 1, False: () => 2})",
        ("number", 1),
        None,
        id="boolean-dispatch-record",
    ),
    pytest.param(
        "false([() => 1, () => 2])",
        ("number", 2),
        None,
        id="boolean-dispatch-positional",
    ),
    pytest.param(
        "(1 < 2)({True: _ => \"yes\", False: _ => \"no\"})",
        ("string", "yes"),
        None,
        id="branch-receives-unit",
    ),
    pytest.param(
        'equal([{a: 1}, {a: 1}])({True: _ => "same", False: _ => "different"})',
        ("string", "same"),
        None,
        id="equal-result-dispatches",
    ),
    pytest.param(
        "equal([[1, 2], [1, 2]])",
        ("bool", True),
        None,
        id="equal-arrays",
    ),
    pytest.param(
        "harness.equal([{a: 1}, {b: 1}])",
        ("bool", False),
        None,
        id="equal-via-harness-record",
    ),
    pytest.param(
        'harness.split(["a,b,c", ","])',
        ("list", ["a", "b", "c"]),
        None,
        id="split",
    ),
    pytest.param(
        'harness.split(["abc", ""])',
        ("list", ["a", "b", "c"]),
        None,
        id="split-empty-separator",
    ),
    pytest.param(
        'harness.split(["x,y", ","])({Empty: () => "none", Head: ([first, rest]) => first})',
        ("string", "x"),
        None,
        id="list-head-dispatch",
    ),
    pytest.param(
        dedent(
            """\
            function len(xs) {
              return xs({Empty: () => 0, Head: ([_, rest]) => 1 + len(rest)})
            }
            len(harness.split(["a,b,c,d", ","]))
        """
        ),
        ("number", 4),
        None,
        id="list-recursive-walk",
    ),
    pytest.param("harness.debug(5) + 1", ("number", 6), None, id="debug-is-identity"),
    pytest.param("missing", None, EygNameError, id="unbound-name"),
    pytest.param("print", None, EygNameError, id="no-host-builtins"),
    pytest.param("const x = 1; const x = 2", None, EygRuntimeError, id="redeclare"),
    pytest.param("const f = (a) => a; f(1, 2)", None, EygArityError, id="closure-arity"),
    pytest.param("harness.debug(1, 2)", None, EygArityError, id="intrinsic-arity"),
    pytest.param("1 / 0", None, EygRuntimeError, id="division-by-zero"),
    pytest.param("1 % 0", None, EygRuntimeError, id="modulo-by-zero"),
    pytest.param('1 + "a"', None, EygTypeError, id="mixed-add"),
    pytest.param("if (1) { 2 }", None, EygTypeError, id="non-boolean-condition"),
    pytest.param("1 && true", None, EygTypeError, id="non-boolean-and"),
    pytest.param("5(1)", None, EygTypeError, id="call-non-function"),
    pytest.param("true({True: () => 1})", None, MarshalError, id="handler-missing-branch"),
    pytest.param(
        "true({True: () => 1, False: () => 2, Maybe: () => 3})",
        None,
        MarshalError,
        id="handler-extra-branch",
    ),
    pytest.param("true(1)", None, MarshalError, id="handler-not-record"),
    pytest.param("true()", None, MarshalError, id="handler-missing"),
    pytest.param('throw "boom"', None, EygThrow, id="throw"),
    pytest.param("return 1", None, EygRuntimeError, id="return-outside-function"),
    pytest.param("({a: 1}).b", None, EygKeyError, id="missing-field"),
    pytest.param("[1][3]", None, EygIndexError, id="index-out-of-bounds"),
    pytest.param("[1][0.5]", None, EygTypeError, id="fractional-index"),
    pytest.param('harness.split("a")', None, EygTypeError, id="split-needs-pair"),
    pytest.param("const [a, b] = [1]", None, EygTypeError, id="array-pattern-too-short"),
    pytest.param("const {a} = {b: 1}", None, EygKeyError, id="object-pattern-missing-key"),
    pytest.param("this is not valid code", None, LarkError, id="syntax-error"),
    pytest.param(
        "function f(n) { return f(n) } f(1)",
        None,
        RecursionError,
        id="unbounded-recursion",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_language(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
