from typing import ForwardRef

import pytest

from fixed_literal import (
    ElementKind, Literal, LiteralCategory, LiteralTypeError, Shape, classify,
    is_literal, is_literal_char, is_literal_string, is_literal_undefined, is_literal_value,
)
from fixed_literal.semantics.classify import UNDEFINED_SHAPE


@pytest.mark.parametrize(
    "kind, capacity, category",
    [
        (ElementKind.UNSUPPORTED, 0, LiteralCategory.UNDEFINED),
        (ElementKind.F64, 0, LiteralCategory.VALUE),
        (ElementKind.BOOL, 0, LiteralCategory.VALUE),
        (ElementKind.CHAR, 0, LiteralCategory.VALUE),
        (ElementKind.CHAR, 1, LiteralCategory.STRING),
        (ElementKind.CHAR32, 64, LiteralCategory.STRING),
        (ElementKind.WCHAR, 8, LiteralCategory.STRING),
    ],
)
def test_category_follows_shape(kind, capacity, category):
    shape = Shape(kind, capacity)
    assert classify(shape) is category
    assert shape.category is category
    assert Literal(kind, capacity).category is category


def test_exactly_one_category_holds():
    samples = [Literal(), Literal.value(3), Literal.value("x"), Literal.string("abc")]
    for lit in samples:
        flags = [is_literal_undefined(lit), is_literal_value(lit), is_literal_string(lit)]
        assert flags.count(True) == 1


def test_shape_rejects_non_power_of_two_capacity():
    with pytest.raises(LiteralTypeError) as info:
        Shape(ElementKind.CHAR, 3)
    assert info.value.code == "LE0001"


def test_shape_rejects_numeric_strings():
    with pytest.raises(LiteralTypeError) as info:
        Shape(ElementKind.I32, 4)
    assert info.value.code == "LE0002"


def test_shape_rejects_sized_sentinel():
    with pytest.raises(LiteralTypeError) as info:
        Shape(ElementKind.UNSUPPORTED, 2)
    assert info.value.code == "LE0003"


@pytest.mark.parametrize("kind", ["char", "bogus", None, 8])
def test_shape_rejects_unknown_kinds(kind):
    with pytest.raises(LiteralTypeError) as info:
        Shape(kind, 0)
    assert info.value.code == "LE0010"
    with pytest.raises(LiteralTypeError):
        Literal(kind=kind, capacity=0)


def test_shape_str():
    assert str(Shape(ElementKind.CHAR16, 8)) == "literal<char16_t, 8>"
    assert str(UNDEFINED_SHAPE) == "literal<~, 0>"


def test_predicates_need_every_operand_to_match():
    s1 = Literal.string("a")
    s2 = Literal.string("bcd", kind=ElementKind.CHAR16)
    assert is_literal_string(s1, s2)
    assert not is_literal_string(s1, Literal.value(1))
    assert is_literal(s1, Literal(), Literal.value(2.0))
    assert not is_literal(s1, "plain str")
    assert is_literal_value(Shape(ElementKind.U8, 0))


def test_predicates_reject_empty_operand_list():
    for predicate in (is_literal, is_literal_string, is_literal_value, is_literal_undefined, is_literal_char):
        with pytest.raises(LiteralTypeError) as info:
            predicate()
        assert info.value.code == "LE0004"


def test_predicates_reject_incomplete_operands():
    with pytest.raises(LiteralTypeError) as info:
        is_literal_string(Literal.string("x"), ForwardRef("Pending"))
    assert info.value.code == "LE0005"


def test_is_literal_char():
    assert is_literal_char(ElementKind.CHAR, ElementKind.CHAR8, ElementKind.WCHAR)
    assert not is_literal_char(ElementKind.CHAR, ElementKind.F32)
    assert not is_literal_char("char")
