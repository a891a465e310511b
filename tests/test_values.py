import pytest

from protowrite.indent import IndentContext
from protowrite.models import MessageLiteral, MessageLiteralField
from protowrite.values import format_value, quote


def _ctx(depth: int = 0) -> IndentContext:
    ctx = IndentContext(unit="    ")
    for _ in range(depth):
        ctx = ctx.deepen()
    return ctx


class TestFormatValue:
    def test_scalars(self):
        assert format_value(42, _ctx()) == "42"
        assert format_value(-7, _ctx()) == "-7"
        assert format_value(True, _ctx()) == "true"
        assert format_value(False, _ctx()) == "false"
        assert format_value(1.5, _ctx()) == "1.5"

    def test_non_finite_floats(self):
        assert format_value(float("inf"), _ctx()) == "inf"
        assert format_value(float("-inf"), _ctx()) == "-inf"
        assert format_value(float("nan"), _ctx()) == "nan"

    def test_strings_are_verbatim(self):
        assert format_value("SPEED", _ctx()) == "SPEED"
        assert format_value('"already quoted"', _ctx()) == '"already quoted"'

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            format_value(None, _ctx())
        with pytest.raises(TypeError):
            format_value({"a": 1}, _ctx())

    def test_literal_uses_context_depth(self):
        literal = MessageLiteral([MessageLiteralField("a", 1), MessageLiteralField("b", 2)])
        assert format_value(literal, _ctx(1)) == "{\n        a: 1\n        b: 2\n    }"

    def test_single_line_literal(self):
        literal = MessageLiteral([MessageLiteralField("a", 1), MessageLiteralField("b", 2)], single_line=True)
        assert format_value(literal, _ctx(3)) == "{a: 1 b: 2}"

    def test_nested_literal(self):
        inner = MessageLiteral([MessageLiteralField("id", 42)])
        outer = MessageLiteral([MessageLiteralField("inner", inner)])
        assert format_value(outer, _ctx()) == "{\n    inner: {\n        id: 42\n    }\n}"

    def test_single_line_inside_multi_line(self):
        inner = MessageLiteral([MessageLiteralField("x", 1), MessageLiteralField("y", 2)], single_line=True)
        outer = MessageLiteral([MessageLiteralField("point", inner)])
        assert format_value(outer, _ctx()) == "{\n    point: {x: 1 y: 2}\n}"

    def test_empty_literals(self):
        assert format_value(MessageLiteral(single_line=True), _ctx()) == "{}"
        assert format_value(MessageLiteral(), _ctx(1)) == "{\n    }"


class TestQuote:
    def test_plain(self):
        assert quote("buzz") == '"buzz"'

    def test_escapes(self):
        assert quote('say "hi"') == '"say \\"hi\\""'
        assert quote("a\\b") == '"a\\\\b"'
        assert quote("line\nbreak\t") == '"line\\nbreak\\t"'
        assert quote("\x01") == '"\\x01"'

    def test_unicode_kept(self):
        assert quote("héllo") == '"héllo"'
