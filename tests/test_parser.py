import pytest

from fixed_literal import ElementKind, Literal, LiteralCategory
from fixed_literal.frontend.escapes import process_escapes, split_quoted
from fixed_literal.frontend.parser import parse_declarations
from fixed_literal.internals.report import Reporter


def parse(src):
    reporter = Reporter(source=src, filename="decls.lit")
    return parse_declarations(src, reporter), reporter


class TestEscapes:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (r"a\nb", "a\nb"),
            (r"tab\there", "tab\there"),
            (r"\\", "\\"),
            (r"\"q\"", '"q"'),
            (r"\x41\x42", "AB"),
            (r"é", "é"),
            (r"nul\0", "nul\0"),
            (r"\q", "\\q"),
            (r"\x4", "\\x4"),
        ],
    )
    def test_process_escapes(self, raw, expected):
        assert process_escapes(raw) == expected

    @pytest.mark.parametrize(
        "token, kind, body",
        [
            ('"plain"', ElementKind.CHAR, "plain"),
            ('u8"x"', ElementKind.CHAR8, "x"),
            ('u"x"', ElementKind.CHAR16, "x"),
            ('U"x"', ElementKind.CHAR32, "x"),
            ('L"x"', ElementKind.WCHAR, "x"),
            ("'\"'", ElementKind.CHAR, '"'),
            ("U'z'", ElementKind.CHAR32, "z"),
        ],
    )
    def test_split_quoted(self, token, kind, body):
        assert split_quoted(token) == (kind, body)


class TestDeclarations:
    def test_all_literal_forms(self):
        table, reporter = parse(
            '# sample\n'
            'greeting = "Hello";\n'
            'wide = U"wide text";\n'
            'pi = 3.14f;  answer = 42;  big = 7u;  yes = true;  no = false;\n'
            "letter = 'a';\n"
            'nothing = undefined;\n'
        )
        assert not reporter.items
        assert table.names() == ["greeting", "wide", "pi", "answer", "big", "yes", "no", "letter", "nothing"]

        assert table["greeting"] == "Hello"
        assert table["greeting"].capacity == 8
        assert table["wide"].kind is ElementKind.CHAR32
        assert table["pi"].kind is ElementKind.F32
        assert table["pi"].scalar == pytest.approx(3.14, rel=1e-6)
        assert table["answer"].kind is ElementKind.I64
        assert table["big"].kind is ElementKind.U64
        assert table["yes"].scalar is True
        assert table["no"].scalar is False
        assert table["letter"] == Literal.value("a")
        assert table["nothing"].category is LiteralCategory.UNDEFINED

    def test_concatenation_and_references(self):
        table, reporter = parse('greeting = "Hello";\ntag[32] = "id" + "_" + greeting;\n')
        assert not reporter.items
        assert table["tag"].view() == "id_Hello"
        assert table["tag"].capacity == 32

    def test_parenthesized_expression(self):
        table, reporter = parse('x = ("a" + "b") + "c";\n')
        assert not reporter.has_errors
        assert table["x"].view() == "abc"

    def test_escapes_and_floats(self):
        table, reporter = parse('s = "a\\tb";\nd = 2.5;\ne = 1e3;\nneg = -4;\n')
        assert not reporter.items
        assert table["s"].view() == "a\tb"
        assert table["d"].kind is ElementKind.F64
        assert table["e"].scalar == 1000.0
        assert table["neg"].scalar == -4

    def test_references_are_copies(self):
        table, _ = parse('a = "x";\nb = a;\n')
        assert table["a"] == table["b"]
        assert table["a"] is not table["b"]

    def test_syntax_error(self):
        table, reporter = parse('a = "x"\nb = ;\n')
        assert reporter.codes == ["LE0100"]
        assert len(table) == 0
        assert reporter.items[0].span is not None

    def test_duplicate_name(self):
        table, reporter = parse('a = "x";\na = "y";\n')
        assert reporter.codes == ["LE0101"]
        assert table["a"].view() == "x"

    def test_unknown_name(self):
        table, reporter = parse('a = b + "x";\n')
        assert reporter.codes == ["LE0102"]
        assert "a" not in table

    def test_concatenating_values(self):
        _, reporter = parse('a = "x" + 1;\n')
        assert reporter.codes == ["LE0103"]

    def test_single_characters_join_strings(self):
        table, reporter = parse('a = "ab" + \'c\';\nb = U\'x\' + "yz";\n')
        assert not reporter.items
        assert table["a"].view() == "abc"
        assert table["a"].capacity == 8
        assert table["b"].view() == "xyz"
        assert table["b"].kind is ElementKind.CHAR32

    def test_two_characters_do_not_concatenate(self):
        _, reporter = parse("a = 'x' + 'y';\n")
        assert reporter.codes == ["LE0103"]
        assert "character" in reporter.items[0].message

    @pytest.mark.parametrize("capacity", ["3", "0", "4u", "-4"])
    def test_invalid_capacity(self, capacity):
        _, reporter = parse(f'a[{capacity}] = "x";\n')
        assert reporter.codes == ["LE0104"]

    def test_capacity_on_a_value(self):
        _, reporter = parse('a[4] = 3;\n')
        assert reporter.codes == ["LE0104"]

    def test_out_of_range_elements(self):
        _, reporter = parse('a = "日本";\nb = 99999999999999999999;\nc = -1u;\nd = \'ab\';\n')
        assert reporter.codes == ["LE0105", "LE0105", "LE0105", "LE0105"]

    def test_truncation_warns(self):
        table, reporter = parse('a[4] = "abcdefgh";\n')
        assert reporter.codes == ["LE0106"]
        assert not reporter.has_errors
        assert reporter.has_warnings
        assert table["a"].view() == "abcd"

    def test_diagnostics_render_with_source_line(self):
        _, reporter = parse('a = "x";\na = "y";\n')
        lines = reporter.format(use_color=False).splitlines()
        assert lines == [
            "decls.lit:2:1: error[LE0101]: literal 'a' is already declared",
            '   2 | a = "y";',
            "     | ^",
        ]

    def test_diagnostics_underline_the_whole_expression(self):
        _, reporter = parse('a = "x" + 1;\n')
        lines = reporter.format(use_color=False).splitlines()
        assert lines[1] == '   1 | a = "x" + 1;'
        assert lines[2] == "     |     ^~~~~~~"

    def test_summary_and_plain_output(self, capsys):
        _, reporter = parse('a[4] = "abcdefgh";\nb = c;\n')
        assert reporter.summary() == "1 error, 1 warning in decls.lit"
        reporter.print()
        err = capsys.readouterr().err
        assert "\x1b[" not in err
        assert err.rstrip().endswith("1 error, 1 warning in decls.lit")
