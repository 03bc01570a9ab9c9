import copy

import pytest

from fixed_literal import (
    UNSUPPORTED, ElementKind, Literal, LiteralCategory, LiteralTypeError, OutOfRangeError, swap,
)


class TestConstruction:
    def test_default_is_undefined(self):
        lit = Literal()
        assert lit.category is LiteralCategory.UNDEFINED
        assert lit.kind is ElementKind.UNSUPPORTED
        assert lit.capacity == 0
        assert lit.size() == 0
        assert lit.empty()
        assert not lit
        assert lit.scalar is UNSUPPORTED

    def test_value_truthiness_follows_slot_zero(self):
        assert not Literal.value(0)
        assert not Literal.value(0.0)
        assert not Literal.value(False)
        assert not Literal.value("\0")
        assert Literal.value(5.5, kind=ElementKind.F32)
        assert Literal.value("a")
        assert Literal.value(True)
        assert Literal.value(-1, kind=ElementKind.I8)

    def test_string_from_text(self):
        lit = Literal.string("Test String")
        assert lit.category is LiteralCategory.STRING
        assert lit.kind is ElementKind.CHAR
        assert lit.capacity == 16
        assert lit.size() == 11
        assert len(lit) == 11
        assert lit
        assert lit.view() == "Test String"
        assert str(lit) == "Test String"

    def test_empty_string_has_capacity_one(self):
        lit = Literal.string("")
        assert lit.category is LiteralCategory.STRING
        assert lit.capacity == 1
        assert lit.size() == 0
        assert lit.empty()
        assert not lit

    def test_embedded_terminators_end_the_content(self):
        lit = Literal.string("\0\0\0")
        assert lit.capacity == 4
        assert lit.size() == 0
        assert lit.empty()

        lit = Literal.string("ab\0cd")
        assert lit.capacity == 8
        assert lit.size() == 2
        assert lit.view() == "ab"

    def test_string_from_character_sequence(self):
        lit = Literal.string(["h", "i"])
        assert lit.capacity == 4
        assert lit.view() == "hi"

    def test_wide_text_picks_a_wide_kind(self):
        assert Literal.string("naïve").kind is ElementKind.CHAR
        assert Literal.string("日本").kind is ElementKind.CHAR32

    def test_explicit_kind_checks_every_element(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.string("日本", kind=ElementKind.CHAR)
        assert info.value.code == "LE0020"

    def test_explicit_capacity_truncates(self):
        lit = Literal.string("abcdef", capacity=4)
        assert lit.capacity == 4
        assert lit.view() == "abcd"
        assert lit.at(4) == "\0"

    def test_explicit_capacity_must_be_valid(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.string("abc", capacity=3)
        assert info.value.code == "LE0001"
        with pytest.raises(LiteralTypeError) as info:
            Literal.string("abc", capacity=0)
        assert info.value.code == "LE0009"

    @pytest.mark.parametrize(
        "value, kind",
        [(5.5, ElementKind.F64), (42, ElementKind.I64), (True, ElementKind.BOOL), ("a", ElementKind.CHAR)],
    )
    def test_value_infers_kind(self, value, kind):
        lit = Literal.value(value)
        assert lit.category is LiteralCategory.VALUE
        assert lit.kind is kind
        assert lit.capacity == 0
        assert lit.scalar == value

    def test_value_with_explicit_kind(self):
        lit = Literal.value(1.1, kind=ElementKind.F32)
        assert lit.kind is ElementKind.F32
        assert lit.scalar == pytest.approx(1.1, rel=1e-6)
        assert lit.scalar != 1.1

    def test_value_out_of_range(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.value(300, kind=ElementKind.U8)
        assert info.value.code == "LE0021"

    def test_value_of_sentinel_is_undefined(self):
        assert Literal.value(UNSUPPORTED).category is LiteralCategory.UNDEFINED

    def test_value_cannot_infer(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.value(object())
        assert info.value.code == "LE0023"

    def test_of_picks_the_category(self):
        assert Literal.of("abc").category is LiteralCategory.STRING
        assert Literal.of(3).category is LiteralCategory.VALUE
        assert Literal.of(None).category is LiteralCategory.UNDEFINED
        original = Literal.string("x")
        clone = Literal.of(original)
        assert clone == original and clone is not original

    def test_widening_copy(self):
        lit = Literal.string("abc")
        wide = Literal.string(lit, kind=ElementKind.CHAR32, capacity=16)
        assert wide.kind is ElementKind.CHAR32
        assert wide.capacity == 16
        assert wide == lit
        assert lit.widened(32).capacity == 32

    def test_widening_to_smaller_capacity_is_rejected(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.string(Literal.string("abcdefg"), capacity=4)
        assert info.value.code == "LE0007"

    def test_resized_truncates(self):
        lit = Literal.string("abcdefghij")
        assert lit.resized(3).view() == "abcd"
        assert lit.resized(3).capacity == 4
        assert lit.resized(100).view() == "abcdefghij"

    def test_copy_is_independent(self):
        lit = Literal.string("abc")
        other = copy.copy(lit)
        other[0] = "z"
        assert lit.view() == "abc"
        assert other.view() == "zbc"


class TestAccess:
    def test_front_back_and_iteration(self):
        lit = Literal.string("hello")
        assert lit.front() == "h"
        assert lit.back() == "o"
        assert list(lit) == list("hello")
        assert list(reversed(lit)) == list("olleh")

    def test_data_exposes_all_slots(self):
        lit = Literal.string("ab")
        assert lit.data() == ("a", "b", "\0", "\0", "\0")

    def test_value_subscript_reads_slot_zero(self):
        lit = Literal.value(7)
        assert lit[0] == 7
        assert lit[5] == 7
        assert lit.front() == 7

    def test_setitem_coerces(self):
        lit = Literal.string("abc")
        lit[1] = ord("X")
        assert lit.view() == "aXc"
        with pytest.raises(LiteralTypeError):
            lit[1] = 2.5

    def test_writing_a_terminator_shortens_the_string(self):
        lit = Literal.string("abcd")
        lit[2] = "\0"
        assert lit.size() == 2

    def test_subscript_at_size_raises_in_safe_mode(self, safe_mode):
        lit = Literal.string("Test String")
        with pytest.raises(OutOfRangeError) as info:
            lit[lit.size()]
        assert info.value.code == "LE0040"
        assert isinstance(info.value, IndexError)
        # The instance stays usable
        assert lit[0] == "T"

    def test_subscript_write_is_checked_in_safe_mode(self, safe_mode):
        lit = Literal.string("ab")
        with pytest.raises(OutOfRangeError):
            lit[-1] = "x"
        assert lit.view() == "ab"

    def test_subscript_at_size_unchecked_without_safe_mode(self, unsafe_mode):
        lit = Literal.string("Test String")
        assert lit[lit.size()] == "\0"

    def test_at_is_always_checked(self, unsafe_mode):
        lit = Literal.string("abc")
        assert lit.at(4) == "\0"
        with pytest.raises(OutOfRangeError) as info:
            lit.at(5)
        assert info.value.code == "LE0041"
        with pytest.raises(OutOfRangeError):
            lit.at(-1)

    def test_value_only_operations(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.string("abc").scalar
        assert info.value.code == "LE0024"
        with pytest.raises(LiteralTypeError):
            Literal.value(1).view()

    def test_str_and_repr(self):
        assert str(Literal.value(5.5)) == "5.5"
        assert str(Literal()) == ""
        assert repr(Literal.string("hi")) == "Literal<char, 4>('hi')"
        assert repr(Literal()) == "Literal<~, 0>()"


class TestMutation:
    def test_assign_keeps_capacity(self):
        lit = Literal.string("abcdefg")
        lit.assign("xy")
        assert lit.view() == "xy"
        assert lit.capacity == 8
        lit.assign("0123456789")
        assert lit.view() == "01234567"

    def test_substr(self):
        lit = Literal.string("Test String")
        part = lit.substr(5, 3)
        assert part.view() == "Str"
        assert part.shape == lit.shape
        assert lit.substr(5).view() == "String"
        assert lit.substr(50).empty()

    def test_substr_negative_position(self):
        lit = Literal.string("abcabc")
        with pytest.raises(OutOfRangeError) as info:
            lit.substr(-2)
        assert info.value.code == "LE0043"
        assert lit.view() == "abcabc"

    def test_substr_whole_is_equal(self):
        for text in ("", "a", "Test String", "0123456789abcdef"):
            s = Literal.string(text)
            assert s == s.substr(0, s.size())

    def test_swap_same_shape(self):
        a = Literal.string("abc")
        b = Literal.string("xyz")
        swap(a, b)
        assert a.view() == "xyz"
        assert b.view() == "abc"

    def test_swap_different_shapes_is_rejected(self):
        with pytest.raises(LiteralTypeError) as info:
            Literal.string("abc").swap(Literal.string("abcdefgh"))
        assert info.value.code == "LE0008"

    def test_literals_are_unhashable(self):
        with pytest.raises(TypeError):
            hash(Literal.string("abc"))
