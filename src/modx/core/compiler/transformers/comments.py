"""Comment transformer.

``# text #`` becomes a passthrough markup comment ``<!-- text -->``. The
markers are consumed, so re-running on converted output is a no-op.
"""
from __future__ import annotations

import re

from .base import ContentTransformer, RenderScope


class CommentStripper(ContentTransformer):
    """Convert ``# text #`` pairs into ``<!-- text -->``.

    Markers pair left to right and the comment text may span lines.
    """

    COMMENT_PATTERN = re.compile(r"#\s*(.*?)\s*#", re.DOTALL)

    def transform(self, content: str, scope: RenderScope) -> str:
        result, count = self.COMMENT_PATTERN.subn(lambda m: f"<!-- {m.group(1)} -->", content)
        scope.report.comments_converted += count
        return result


__all__ = ["CommentStripper"]
