"""Fixed-point template compiler.

Compilation turns a named template plus a data context into backend
source text:

1. load the template (braces protected)
2. compose it into its layout, once
3. repeat LOOPS -> COMMENTS -> COMPONENTS -> VARIABLES until a pass
   changes nothing, failing with ExpansionLimitError at the cap

Compilation is pure: it reads template files and never executes
anything. The runtime executor turns the result into output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from modx.core.environment.locator import TemplateKind, TemplateLocator
from modx.core.exceptions import ExpansionLimitError

from .report import CompilationReport
from .transformers.base import RenderScope, TransformerPipeline
from .transformers.comments import CommentStripper
from .transformers.components import ComponentResolver
from .transformers.layout import LayoutComposer
from .transformers.loops import LoopExpander
from .transformers.variables import VariableSubstitutor

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 100


@dataclass
class CompiledTemplate:
    name: str
    path: Path
    source: str
    report: CompilationReport


class TemplateCompiler:
    """Expand directives to a fixed point.

    Usage:
        compiler = TemplateCompiler(TemplateLocator([Path("templates")]))
        compiled = compiler.compile("page", {"title": "Hi"})
        print(compiled.source)
    """

    def __init__(self, locator: TemplateLocator, *, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.locator = locator
        self.max_iterations = max_iterations
        self.layout_composer = LayoutComposer(locator)
        self.pipeline = self._build_pipeline()

    def _build_pipeline(self) -> TransformerPipeline:
        return TransformerPipeline([
            LoopExpander(),
            CommentStripper(),
            ComponentResolver(self.locator, self.expand),
            VariableSubstitutor(),
        ])

    def compile(
        self,
        name: str,
        data: Optional[Mapping[str, Any]] = None,
        layout: Optional[str] = None,
    ) -> CompiledTemplate:
        """Compile template ``name`` against ``data``.

        Args:
            name: Template name relative to the search directories
            data: Data context (copied; never mutated)
            layout: Layout used when the template declares none

        Raises:
            TemplateNotFoundError: template, layout or component missing
            ExpansionLimitError: expansion did not settle within the cap
        """
        path, source = self.locator.load(name, TemplateKind.TEMPLATE)
        report = CompilationReport(template_name=name, template_path=path)
        scope = RenderScope(
            template_name=name,
            report=report,
            data=dict(data or {}),
            layout=layout,
        )

        composed = self.layout_composer.transform(source, scope)
        text = self.expand(composed, scope)

        for missing in sorted(report.variables_missing):
            report.add_warning(f"Unresolved variable: {missing}")
        logger.debug("Compiled %s", report.summary())
        return CompiledTemplate(name=name, path=path, source=text, report=report)

    def expand(self, content: str, scope: RenderScope) -> str:
        """Run the pipeline on ``content`` until it stops changing."""
        current = content
        for iteration in range(1, self.max_iterations + 1):
            result = self.pipeline.execute(current, scope)
            scope.report.passes += 1
            if result == current:
                logger.debug(
                    "Expansion of '%s' settled after %d pass(es) at depth %d",
                    scope.template_name,
                    iteration,
                    scope.depth,
                )
                return result
            current = result

        raise ExpansionLimitError(
            f"Template '{scope.template_name}' did not reach a fixed point after "
            f"{self.max_iterations} passes; a directive is likely regenerating itself",
            context={
                "template": scope.template_name,
                "max_iterations": self.max_iterations,
                "depth": scope.depth,
            },
        )


__all__ = ["CompiledTemplate", "TemplateCompiler", "DEFAULT_MAX_ITERATIONS"]
