from __future__ import annotations

import pytest

from eyg_harness.convert import from_array
from eyg_harness.types import EygArray, EygNumber, EygRecord, EygString, EygVariant, Family, MarshalError, UNIT
from eyg_harness.values import (
    EMPTY,
    FALSE,
    TRUE,
    dispatch_variant,
    head,
    is_boolean,
    is_list,
    is_true,
    make_bool,
)


def _record_call(branch, args):
    return branch, args


def test_boolean_singletons() -> None:
    assert make_bool(True) is TRUE
    assert make_bool(False) is FALSE
    assert is_true(TRUE)
    assert not is_true(FALSE)
    assert repr(TRUE) == "True"
    assert repr(FALSE) == "False"


def test_is_true_rejects_non_boolean() -> None:
    with pytest.raises(MarshalError):
        is_true(EMPTY)


def test_family_predicates() -> None:
    assert is_boolean(TRUE)
    assert not is_boolean(EMPTY)
    assert is_list(EMPTY)
    assert is_list(head(EygNumber(1), EMPTY))
    assert not is_list(EygArray(()))


def test_variant_tag_must_belong_to_family() -> None:
    with pytest.raises(MarshalError):
        EygVariant(Family.BOOLEAN, "Head", UNIT)


def test_head_requires_list_tail() -> None:
    with pytest.raises(MarshalError):
        head(EygNumber(1), TRUE)


def test_list_repr_walks_chain() -> None:
    assert repr(from_array([1, "b"])) == 'list[1, "b"]'
    assert repr(EMPTY) == "list[]"


def test_dispatch_record_handler_passes_payload() -> None:
    handler = EygRecord({"True": EygString("t"), "False": EygString("f")})

    assert dispatch_variant(TRUE, [handler], _record_call) == (EygString("t"), [UNIT])
    assert dispatch_variant(FALSE, [handler], _record_call) == (EygString("f"), [UNIT])


def test_dispatch_positional_handler_uses_family_order() -> None:
    cell = head(EygNumber(1), EMPTY)
    handler = EygArray((EygString("empty"), EygString("head")))

    branch, args = dispatch_variant(cell, [handler], _record_call)

    assert branch == EygString("head")
    assert args == [EygArray((EygNumber(1), EMPTY))]


@pytest.mark.parametrize(
    "handler",
    [
        pytest.param(EygRecord({"True": EygString("t")}), id="missing-branch"),
        pytest.param(
            EygRecord({"True": EygString("t"), "False": EygString("f"), "Other": EygString("o")}),
            id="extra-branch",
        ),
        pytest.param(EygRecord({"Empty": EygString("e"), "Head": EygString("h")}), id="wrong-family"),
        pytest.param(EygArray((EygString("t"),)), id="short-positional"),
        pytest.param(EygString("t"), id="not-a-handler"),
    ],
)
def test_dispatch_rejects_mismatched_handler(handler) -> None:
    with pytest.raises(MarshalError):
        dispatch_variant(TRUE, [handler], _record_call)


def test_dispatch_requires_single_handler() -> None:
    handler = EygRecord({"True": EygString("t"), "False": EygString("f")})

    with pytest.raises(MarshalError):
        dispatch_variant(TRUE, [handler, handler], _record_call)
