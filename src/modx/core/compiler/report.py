"""Compilation reporting dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set


@dataclass
class CompilationReport:
    """Report from expanding one top-level template.

    Shared by every scope of a render so nested components add to the
    same counters.
    """

    template_name: str
    template_path: Optional[Path] = None
    layout: Optional[str] = None

    # Processing stats
    passes: int = 0
    loops_expanded: int = 0
    comments_converted: int = 0
    components_included: List[str] = field(default_factory=list)
    components_skipped: List[str] = field(default_factory=list)
    variables_substituted: Set[str] = field(default_factory=set)
    variables_missing: Set[str] = field(default_factory=set)

    warnings: List[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.warnings or self.variables_missing or self.components_skipped)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def summary(self) -> str:
        """One-line human summary used by the CLI."""
        parts = [
            f"passes={self.passes}",
            f"loops={self.loops_expanded}",
            f"comments={self.comments_converted}",
            f"components={len(self.components_included)}",
            f"variables={len(self.variables_substituted)}",
        ]
        if self.variables_missing:
            parts.append(f"missing={','.join(sorted(self.variables_missing))}")
        if self.components_skipped:
            parts.append(f"skipped={','.join(self.components_skipped)}")
        return f"{self.template_name}: " + " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template_name": self.template_name,
            "template_path": str(self.template_path) if self.template_path else None,
            "layout": self.layout,
            "passes": self.passes,
            "loops_expanded": self.loops_expanded,
            "comments_converted": self.comments_converted,
            "components_included": list(self.components_included),
            "components_skipped": list(self.components_skipped),
            "variables_substituted": sorted(self.variables_substituted),
            "variables_missing": sorted(self.variables_missing),
            "warnings": list(self.warnings),
        }


__all__ = ["CompilationReport"]
