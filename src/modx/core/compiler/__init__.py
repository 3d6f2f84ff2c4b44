"""Directive expansion: template text in, backend source out."""
from __future__ import annotations

from .engine import CompiledTemplate, TemplateCompiler
from .report import CompilationReport

__all__ = ["CompiledTemplate", "CompilationReport", "TemplateCompiler"]
