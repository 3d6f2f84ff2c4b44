"""Loop transformer.

Handles ``<: for item[, index] in collection :> ... <: endfor :>``.

Only innermost loops match (the body may not contain another loop
opener), and matching repeats until nothing changes, so nested loops
expand inside-out in a single call. The collection is not evaluated
here: the emitted tag iterates ``collection|entries`` at execution time,
which yields ``(key, value)`` pairs for mappings and ``(position, value)``
pairs for sequences.
"""
from __future__ import annotations

import logging
import re

from .base import ContentTransformer, RenderScope, is_renderable_name

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "__index"


class LoopExpander(ContentTransformer):
    """Expand loop directives into backend for-blocks.

    Example:
        Template: <: for item in items :><li><: item :></li><: endfor :>
        Output:   {% for __index, item in items|entries %}<li><: item :></li>{% endfor %}

    ``item`` and ``__index`` are registered as loop-bound names so the
    variable substitutor treats them as in scope.
    """

    LOOP_PATTERN = re.compile(
        r"<:\s*for\s+(\w+)\s*(?:,\s*(\w+)\s*)?\s+in\s+(\w+)\s*:>"
        r"((?:(?!<:\s*for\s).)*?)"
        r"<:\s*endfor\s*:>",
        re.DOTALL,
    )

    def transform(self, content: str, scope: RenderScope) -> str:
        result = content
        while True:
            expanded = self.LOOP_PATTERN.sub(lambda m: self._expand(m, scope), result)
            if expanded == result:
                return result
            result = expanded

    def _expand(self, match: re.Match[str], scope: RenderScope) -> str:
        item, index, collection, body = match.groups()
        index = index or DEFAULT_INDEX_NAME

        names = (item, index, collection)
        if not all(is_renderable_name(n) for n in names) or item == index:
            logger.warning("Loop over '%s' uses an unusable name; left as text", collection)
            scope.report.add_warning(f"Loop over '{collection}' left unexpanded")
            return match.group(0)

        scope.bind_loop_names(item, index)
        scope.report.loops_expanded += 1
        return f"{{% for {index}, {item} in {collection}|entries %}}{body}{{% endfor %}}"


__all__ = ["LoopExpander", "DEFAULT_INDEX_NAME"]
