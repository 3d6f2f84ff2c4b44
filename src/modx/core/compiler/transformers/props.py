"""Component prop lexing and binding.

Prop text is the part of a component directive after the name, e.g.
``title="Hello > world" :user="current" size = 'lg'``. Lexing and binding
are separate steps: the lexer only knows quoting rules, the binder knows
the calling scope.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from modx.core.environment.locator import restore_braces

from .base import RenderScope, is_renderable_name

logger = logging.getLogger(__name__)

QUOTES = "\"'"
BIND_MARKER = ":"


@dataclass(frozen=True)
class PropToken:
    key: str
    value: str
    bound: bool = False


@dataclass
class LexResult:
    tokens: List[PropToken] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)


def find_directive_end(text: str, start: int) -> int:
    """Index of the first ``>`` at or after ``start`` outside quotes, or -1."""
    quote = ""
    for i in range(start, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in QUOTES:
            quote = ch
        elif ch == ">":
            return i
    return -1


class PropLexer:
    """Tokenize ``[:]key = "value"`` pairs.

    States: between props, reading a key, expecting ``=``, expecting an
    opening quote, inside a quoted value. Whitespace separates props only
    outside quotes; a value ends at the quote character that opened it,
    so it may contain the other quote character, whitespace, or ``>``.
    Fragments that do not form a pair are dropped and reported.
    """

    KEY_PATTERN = re.compile(r"\w+")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def lex(self) -> LexResult:
        result = LexResult()
        while True:
            self._skip_space()
            if self.pos >= len(self.text):
                return result
            start = self.pos
            token = self._read_pair()
            if token is None:
                self.pos = start
                self._skip_fragment()
                result.dropped.append(self.text[start:self.pos])
            else:
                result.tokens.append(token)

    def _skip_space(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _skip_fragment(self) -> None:
        """Advance past the current malformed fragment, honoring quotes."""
        quote = ""
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if quote:
                if ch == quote:
                    quote = ""
            elif ch in QUOTES:
                quote = ch
            elif ch.isspace():
                return
            self.pos += 1

    def _read_pair(self) -> PropToken | None:
        text = self.text
        bound = text.startswith(BIND_MARKER, self.pos)
        if bound:
            self.pos += 1

        key = self.KEY_PATTERN.match(text, self.pos)
        if key is None:
            return None
        self.pos = key.end()

        self._skip_space()
        if not text.startswith("=", self.pos):
            return None
        self.pos += 1

        self._skip_space()
        if self.pos >= len(text) or text[self.pos] not in QUOTES:
            return None
        quote = text[self.pos]
        close = text.find(quote, self.pos + 1)
        if close == -1:
            return None
        value = text[self.pos + 1:close]
        self.pos = close + 1
        return PropToken(key=key.group(0), value=value, bound=bound)


_LITERAL_SAFE = re.compile(r"[A-Za-z0-9 _.,-]")


def backend_string_literal(value: str) -> str:
    """Quote ``value`` as a backend string literal.

    Every character outside a small safe set is written as a hex escape,
    so the literal never contains quotes, backslashes, ``#`` or directive
    openers that a later pass could pick up.
    """
    out: List[str] = []
    for ch in value:
        if _LITERAL_SAFE.fullmatch(ch):
            out.append(ch)
            continue
        cp = ord(ch)
        if cp <= 0xFF:
            out.append(f"\\x{cp:02x}")
        elif cp <= 0xFFFF:
            out.append(f"\\u{cp:04x}")
        else:
            out.append(f"\\U{cp:08x}")
    return '"' + "".join(out) + '"'


def bind_props(tokens: List[PropToken], scope: RenderScope) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Resolve tokens against the calling ``scope``.

    Returns:
        ``(values, expressions)``: compile-time values overlaid on the
        component scope, and backend expressions bound around the body.
        Literal props are plain strings. Bound props reference the named
        caller variable; an unknown name binds ``None``.
    """
    values: Dict[str, Any] = {}
    expressions: Dict[str, str] = {}
    for token in tokens:
        if not is_renderable_name(token.key):
            logger.warning("Dropping prop '%s': not a renderable name", token.key)
            scope.report.add_warning(f"Prop '{token.key}' dropped")
            continue

        if not token.bound:
            literal = restore_braces(token.value)
            values[token.key] = literal
            expressions[token.key] = backend_string_literal(literal)
            continue

        source = token.value.strip()
        if is_renderable_name(source) and scope.is_bound(source):
            values[token.key] = scope.data.get(source)
            expressions[token.key] = source
        else:
            logger.warning(
                "Bound prop '%s' refers to unknown name '%s'; binding None",
                token.key,
                source,
            )
            values[token.key] = None
            expressions[token.key] = "none"
    return values, expressions


__all__ = [
    "PropToken",
    "LexResult",
    "PropLexer",
    "find_directive_end",
    "backend_string_literal",
    "bind_props",
]
