"""Tests for component prop lexing and binding."""
from __future__ import annotations

from modx.core.compiler.report import CompilationReport
from modx.core.compiler.transformers import PropLexer, PropToken, RenderScope, bind_props
from modx.core.compiler.transformers.props import backend_string_literal, find_directive_end


def _scope(**data) -> RenderScope:
    return RenderScope(template_name="page", report=CompilationReport("page"), data=data)


class TestPropLexer:
    def test_literal_bound_and_spaced_pairs(self) -> None:
        result = PropLexer("title=\"Hello > world\" :user=\"current\" size = 'lg'").lex()

        assert result.tokens == [
            PropToken("title", "Hello > world"),
            PropToken("user", "current", bound=True),
            PropToken("size", "lg"),
        ]
        assert result.dropped == []

    def test_value_may_hold_the_other_quote_and_whitespace(self) -> None:
        result = PropLexer("q=\"it's here\" r='say \"hi\"'").lex()
        assert [t.value for t in result.tokens] == ["it's here", 'say "hi"']

    def test_empty_value(self) -> None:
        assert PropLexer('alt=""').lex().tokens == [PropToken("alt", "")]

    def test_fragment_without_value_is_dropped(self) -> None:
        result = PropLexer('broken next="x"').lex()

        assert result.tokens == [PropToken("next", "x")]
        assert result.dropped == ["broken"]

    def test_unquoted_value_is_dropped(self) -> None:
        result = PropLexer('size=lg title="ok"').lex()

        assert result.tokens == [PropToken("title", "ok")]
        assert result.dropped == ["size=lg"]

    def test_unterminated_quote_drops_rest(self) -> None:
        result = PropLexer('ok="1" bad="never closed').lex()

        assert result.tokens == [PropToken("ok", "1")]
        assert result.dropped == ['bad="never closed']

    def test_empty_text(self) -> None:
        result = PropLexer("   ").lex()
        assert result.tokens == [] and result.dropped == []


class TestFindDirectiveEnd:
    def test_skips_gt_inside_quotes(self) -> None:
        text = '<: component c t="a>b" >tail'
        end = find_directive_end(text, len("<: component"))
        assert text[end:] == ">tail"

    def test_unterminated_returns_minus_one(self) -> None:
        assert find_directive_end('<: component c t="a>b', 0) == -1


class TestBackendStringLiteral:
    def test_safe_characters_pass_through(self) -> None:
        assert backend_string_literal("Hello, world-1_2.3") == '"Hello, world-1_2.3"'

    def test_unsafe_characters_are_hex_escaped(self) -> None:
        assert backend_string_literal('a"b') == r'"a\x22b"'
        assert backend_string_literal("<: x :>") == r'"\x3c\x3a x \x3a\x3e"'
        assert backend_string_literal("#") == r'"\x23"'

    def test_non_ascii_escapes_by_width(self) -> None:
        assert backend_string_literal("é") == r'"\xe9"'
        assert backend_string_literal("€") == r'"\u20ac"'
        assert backend_string_literal("\U0001f600") == r'"\U0001f600"'


class TestBindProps:
    def test_literal_prop(self) -> None:
        values, expressions = bind_props([PropToken("title", "Hi there")], _scope())

        assert values == {"title": "Hi there"}
        assert expressions == {"title": '"Hi there"'}

    def test_literal_prop_restores_protected_braces(self) -> None:
        values, expressions = bind_props([PropToken("t", "{{ __lb }}x}")], _scope())

        assert values == {"t": "{x}"}
        assert expressions == {"t": r'"\x7bx\x7d"'}

    def test_bound_prop_references_caller_name(self) -> None:
        values, expressions = bind_props([PropToken("user", "current", bound=True)], _scope(current="Ann"))

        assert values == {"user": "Ann"}
        assert expressions == {"user": "current"}

    def test_bound_prop_to_loop_name(self) -> None:
        scope = _scope()
        scope.bind_loop_names("row")
        values, expressions = bind_props([PropToken("r", "row", bound=True)], scope)

        assert values == {"r": None}
        assert expressions == {"r": "row"}

    def test_bound_prop_to_unknown_name_binds_none(self) -> None:
        values, expressions = bind_props([PropToken("user", "ghost", bound=True)], _scope())

        assert values == {"user": None}
        assert expressions == {"user": "none"}

    def test_reserved_key_is_dropped(self) -> None:
        scope = _scope()
        values, expressions = bind_props([PropToken("none", "x")], scope)

        assert values == {} and expressions == {}
        assert scope.report.warnings
