import pytest
from llvmlite import ir

from fixed_literal import ElementKind, Literal, LiteralTable
from fixed_literal.backend.constants import (
    LiteralConstantManager, build_module, element_type, literal_constant, literal_type, verify_module,
)
from fixed_literal.semantics.classify import Shape


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ElementKind.CHAR, "i8"),
        (ElementKind.CHAR16, "i16"),
        (ElementKind.WCHAR, "i32"),
        (ElementKind.I64, "i64"),
        (ElementKind.BOOL, "i1"),
        (ElementKind.F32, "float"),
        (ElementKind.F64, "double"),
        (ElementKind.UNSUPPORTED, "{}"),
    ],
)
def test_element_types(kind, expected):
    assert str(element_type(kind)) == expected


def test_string_type_holds_terminator_slot():
    assert str(literal_type(Shape(ElementKind.CHAR16, 8))) == "[9 x i16]"
    assert str(literal_type(Shape(ElementKind.F32, 0))) == "float"


def test_string_constant_holds_full_storage():
    const = literal_constant(Literal.string("hi"))
    text = str(const)
    assert text.startswith("[5 x i8]")
    assert "i8 104" in text and "i8 105" in text


def test_manager_deduplicates_by_content():
    module = ir.Module(name="t")
    manager = LiteralConstantManager(module)
    a = manager.get_or_create(Literal.string("same"))
    b = manager.get_or_create(Literal.string("same"))
    c = manager.get_or_create(Literal.string("same", capacity=16))
    d = manager.get_or_create(Literal.string("other"))
    assert a is b
    assert a is not c
    assert a is not d
    assert manager.stats == {"unique_literals": 3}
    assert a.linkage == "private"
    assert a.global_constant


def test_values_with_same_kind_do_not_collide():
    module = ir.Module(name="t")
    manager = LiteralConstantManager(module)
    one = manager.get_or_create(Literal.value(1))
    two = manager.get_or_create(Literal.value(2))
    assert one is not two
    assert one.name != two.name


def test_build_module_declares_every_name():
    table = LiteralTable()
    table.add("greeting", Literal.string("Hello"))
    table.add("again", Literal.string("Hello"))
    table.add("pi", Literal.value(3.5, kind=ElementKind.F32))
    table.add("flag", Literal.value(True))
    table.add("neg", Literal.value(-3, kind=ElementKind.I8))
    table.add("wide", Literal.string("日本"))
    table.add("nothing", Literal())

    module = build_module(table, name="decls")
    for name in table:
        assert name in module.globals
    # Both greetings point at one shared constant
    assert module.globals["greeting"].initializer is module.globals["again"].initializer
    verify_module(module)
