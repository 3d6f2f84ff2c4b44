"""Jinja2 execution sink for compiled template source.

Compiled source only ever contains the constructs the compiler emits:
``{% for i, x in coll|entries %}``, ``{% with k=v %}``,
``{{ name|display }}`` and the brace token. Everything else is text.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Tuple

from jinja2 import Environment, StrictUndefined, TemplateError, Undefined
from markupsafe import escape

from modx.core.exceptions import RenderExecutionError

logger = logging.getLogger(__name__)

BRACE_GLOBAL = "__lb"


def entries(value: Any) -> List[Tuple[Any, Any]]:
    """Pairs iterated by loop directives.

    Mappings yield ``(key, value)``, sequences ``(position, value)`` and
    ``None`` nothing. An undefined collection raises.
    """
    if value is None:
        return []
    if isinstance(value, Mapping):
        return list(value.items())
    return list(enumerate(value))


def display(value: Any) -> str:
    """HTML-escape ``value`` unconditionally; ``None`` and undefined render empty."""
    if value is None or isinstance(value, Undefined):
        return ""
    # str() drops any Markup subclass so pre-escaped values are escaped too.
    return str(escape(str(value)))


class JinjaExecutor:
    """Render compiled source with a context.

    Example:
        executor = JinjaExecutor()
        executor.execute("{{ name|display }}", {"name": "<b>"})
        # '&lt;b&gt;'
    """

    def __init__(self) -> None:
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.env.filters["entries"] = entries
        self.env.filters["display"] = display
        self.env.globals[BRACE_GLOBAL] = "{"

    def execute(self, source: str, context: Mapping[str, Any], *, name: Optional[str] = None) -> str:
        """Execute ``source`` and return the output.

        Raises:
            RenderExecutionError: any backend failure, e.g. a loop over a
                missing collection or a non-iterable value
        """
        label = name or "<string>"
        data = dict(self._context_items(context))
        try:
            template = self.env.from_string(source)
            return template.render(data)
        except (TemplateError, TypeError) as exc:
            raise RenderExecutionError(
                f"Failed to execute template '{label}': {exc}",
                context={"template": label, "error": type(exc).__name__},
            ) from exc

    def _context_items(self, context: Mapping[str, Any]) -> Iterable[Tuple[str, Any]]:
        for key, value in context.items():
            if key == BRACE_GLOBAL:
                logger.warning("Ignoring context key '%s': reserved by the executor", key)
                continue
            yield key, value


__all__ = ["JinjaExecutor", "entries", "display"]
