"""Base classes for the directive-expansion transformers.

The TemplateCompiler runs the layout composer once, then repeats this
pipeline until a pass changes nothing:

1. LOOPS       - <: for item[, index] in collection :> ... <: endfor :>
2. COMMENTS    - # text #
3. COMPONENTS  - <: component name prop="v" :prop="bound" >
4. VARIABLES   - <: name :>

Every transformer emits Jinja2 source for the executor; all per-render
state travels in a RenderScope so transformers stay stateless.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Set

from ..report import CompilationReport

logger = logging.getLogger(__name__)

# Words the execution backend treats as operators or constants, the names
# it binds itself inside loops, macros and templates, and the brace token
# global. They can never be emitted as variable references.
RESERVED_NAMES = frozenset(
    {
        "and", "or", "not", "in", "is", "if", "else",
        "true", "false", "none", "True", "False", "None",
        "loop", "caller", "varargs", "kwargs", "self",
        "__lb",
    }
)


def is_renderable_name(name: str) -> bool:
    """True when ``name`` can be emitted as a bare backend identifier."""
    return name.isidentifier() and name not in RESERVED_NAMES


@dataclass
class RenderScope:
    """Call-scoped state for one template or component body.

    Component expansion builds a child scope; the caller's scope is never
    mutated by anything a component does.
    """

    template_name: str
    report: CompilationReport
    data: Dict[str, Any] = field(default_factory=dict)
    loop_names: Set[str] = field(default_factory=set)
    processed_components: FrozenSet[str] = frozenset()
    depth: int = 0
    layout: Optional[str] = None

    def is_bound(self, name: str) -> bool:
        return name in self.loop_names or name in self.data

    def bind_loop_names(self, *names: str) -> None:
        self.loop_names.update(names)

    def child(self, component: str, props: Dict[str, Any]) -> "RenderScope":
        """Scope for the body of ``component`` invoked with resolved ``props``."""
        return RenderScope(
            template_name=self.template_name,
            report=self.report,
            data={**self.data, **props},
            loop_names=set(self.loop_names),
            processed_components=self.processed_components | {component},
            depth=self.depth + 1,
        )

    def record_variable(self, name: str, resolved: bool) -> None:
        if resolved:
            self.report.variables_substituted.add(name)
        else:
            self.report.variables_missing.add(name)


class ContentTransformer(ABC):
    """Abstract base class for content transformers.

    Example:
        class UpperTransformer(ContentTransformer):
            def transform(self, content: str, scope: RenderScope) -> str:
                return content.upper()
    """

    @abstractmethod
    def transform(self, content: str, scope: RenderScope) -> str:
        """Return ``content`` with this transformer's directives rewritten."""
        ...

    def get_name(self) -> str:
        """Get transformer name for logging/debugging."""
        return self.__class__.__name__


class TransformerPipeline:
    """Execute a sequence of transformers on content, in order."""

    def __init__(self, transformers: List[ContentTransformer]) -> None:
        self.transformers = transformers

    def execute(self, content: str, scope: RenderScope) -> str:
        result = content
        for transformer in self.transformers:
            updated = transformer.transform(result, scope)
            if updated != result:
                logger.debug("%s rewrote '%s' at depth %d", transformer.get_name(), scope.template_name, scope.depth)
            result = updated
        return result

    def add_transformer(self, transformer: ContentTransformer) -> None:
        """Add a transformer to the end of the pipeline."""
        self.transformers.append(transformer)


__all__ = [
    "RESERVED_NAMES",
    "is_renderable_name",
    "RenderScope",
    "ContentTransformer",
    "TransformerPipeline",
]
