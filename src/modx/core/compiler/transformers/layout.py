"""Layout composition.

A template opts into a layout with ``<: layout "name" :>``; everything
after the directive becomes the body spliced into each ``<: content :>``
placeholder of the layout. Runs once per top-level compile, before the
fixed-point loop.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from modx.core.environment.locator import TemplateKind, TemplateLocator

from .base import ContentTransformer, RenderScope

logger = logging.getLogger(__name__)


class LayoutComposer(ContentTransformer):
    """Merge a template body into its declared (or default) layout."""

    LAYOUT_PATTERN = re.compile(
        r"<:\s*layout\s*(['\"])([\w./-]+)\1\s*:>(.*)",
        re.DOTALL,
    )
    CONTENT_PATTERN = re.compile(r"<:\s*content\s*:>")

    def __init__(self, locator: TemplateLocator) -> None:
        self.locator = locator

    def transform(self, content: str, scope: RenderScope) -> str:
        return self.compose(content, scope, default_layout=scope.layout)

    def compose(self, content: str, scope: RenderScope, default_layout: Optional[str] = None) -> str:
        """Splice ``content`` into its layout.

        ``default_layout`` applies only when the template declares none.

        Raises:
            TemplateNotFoundError: the layout file does not exist
        """
        match = self.LAYOUT_PATTERN.search(content)
        if match:
            name = match.group(2)
            prefix = content[: match.start()]
            body = match.group(3)
        elif default_layout:
            name = default_layout
            prefix = ""
            body = content
        else:
            return content

        _, layout_source = self.locator.load(name, TemplateKind.LAYOUT)
        scope.report.layout = name
        logger.debug("Composing '%s' into layout '%s'", scope.template_name, name)

        # Lambda replacement keeps backslashes in the body literal.
        return prefix + self.CONTENT_PATTERN.sub(lambda _m: body, layout_source)


__all__ = ["LayoutComposer"]
