"""Variable transformer.

``<: name :>`` becomes an escaped echo of ``name`` when it is bound in the
current scope (a loop-bound name or a data key), else an inline
diagnostic comment. Missing variables never fail a render.
"""
from __future__ import annotations

import logging
import re

from .base import ContentTransformer, RenderScope, is_renderable_name

logger = logging.getLogger(__name__)


class VariableSubstitutor(ContentTransformer):
    """Substitute ``<: name :>`` placeholders.

    Examples:
        Data: {"title": "Hi"}
        Template: <h1><: title :></h1>
        Output:   <h1>{{ title|display }}</h1>

        Data: {}
        Template: <: title :>
        Output:   <!-- Variable title not found -->
    """

    VARIABLE_PATTERN = re.compile(r"<:\s*(\w+)\s*:>")

    # Structural keyword of the loop grammar; an orphan stays literal.
    KEYWORDS = frozenset({"endfor"})

    def transform(self, content: str, scope: RenderScope) -> str:
        def replacer(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in self.KEYWORDS:
                return match.group(0)

            if not scope.is_bound(name):
                scope.record_variable(name, resolved=False)
                logger.warning("Variable '%s' not found while rendering '%s'", name, scope.template_name)
                return f"<!-- Variable {name} not found -->"

            if not is_renderable_name(name):
                scope.record_variable(name, resolved=False)
                scope.report.add_warning(f"Variable '{name}' is reserved")
                return f"<!-- Variable {name} is reserved -->"

            scope.record_variable(name, resolved=True)
            return f"{{{{ {name}|display }}}}"

        return self.VARIABLE_PATTERN.sub(replacer, content)


__all__ = ["VariableSubstitutor"]
