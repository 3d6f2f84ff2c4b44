"""Component transformer.

Handles ``<: component name prop="literal" :prop="bound" >`` (a ``:>``
terminator works too). The directive end is found with a quote-aware
scan because prop values may contain ``>``. Each component body is run
through the full fixed-point expansion under its own child scope before
it is spliced in.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List

from modx.core.environment.locator import TemplateKind, TemplateLocator

from .base import ContentTransformer, RenderScope
from .props import PropLexer, bind_props, find_directive_end

logger = logging.getLogger(__name__)

Expander = Callable[[str, RenderScope], str]


def recursion_marker(name: str) -> str:
    return f"<!-- Component {name} already processed (avoiding recursion) -->"


class ComponentResolver(ContentTransformer):
    """Inline component directives, guarding against self-inclusion.

    A component already being expanded somewhere up the current chain is
    replaced by a recursion marker instead of being loaded again. Sibling
    uses of one component each expand normally.
    """

    OPENER_PATTERN = re.compile(r"<:\s*component\b")
    HEAD_PATTERN = re.compile(r"\s+([\w./-]+)(?:\s+(.*))?\s*\Z", re.DOTALL)

    def __init__(self, locator: TemplateLocator, expand: Expander) -> None:
        self.locator = locator
        self.expand = expand

    def transform(self, content: str, scope: RenderScope) -> str:
        out: List[str] = []
        pos = 0
        while True:
            opener = self.OPENER_PATTERN.search(content, pos)
            if opener is None:
                out.append(content[pos:])
                break

            end = find_directive_end(content, opener.end())
            if end == -1:
                # Unterminated: the rest of the document stays literal.
                out.append(content[pos:])
                break

            inner = content[opener.end():end]
            if inner.endswith(":"):
                inner = inner[:-1]
            head = self.HEAD_PATTERN.match(inner)
            if head is None:
                out.append(content[pos:end + 1])
                pos = end + 1
                continue

            out.append(content[pos:opener.start()])
            out.append(self._include(head.group(1), head.group(2) or "", scope))
            pos = end + 1
        return "".join(out)

    def _include(self, name: str, props_text: str, scope: RenderScope) -> str:
        if name in scope.processed_components:
            logger.warning("Component '%s' includes itself; skipping nested use", name)
            scope.report.components_skipped.append(name)
            return recursion_marker(name)

        _, source = self.locator.load(name, TemplateKind.COMPONENT)

        lexed = PropLexer(props_text).lex()
        for fragment in lexed.dropped:
            logger.warning("Component '%s': ignoring malformed prop %r", name, fragment)
            scope.report.add_warning(f"Component '{name}': malformed prop {fragment!r}")
        values, expressions = bind_props(lexed.tokens, scope)

        child = scope.child(name, values)
        body = self.expand(source, child)
        scope.report.components_included.append(name)
        return self._wrap(body, expressions)

    def _wrap(self, body: str, expressions: Dict[str, str]) -> str:
        if not expressions:
            return body
        bindings = ", ".join(f"{key}={expr}" for key, expr in expressions.items())
        return f"{{% with {bindings} %}}{body}{{% endwith %}}"


__all__ = ["ComponentResolver", "recursion_marker"]
