"""Directive-expansion transformers."""
from __future__ import annotations

from .base import ContentTransformer, RenderScope, TransformerPipeline
from .comments import CommentStripper
from .components import ComponentResolver
from .layout import LayoutComposer
from .loops import LoopExpander
from .props import PropLexer, PropToken, bind_props
from .variables import VariableSubstitutor

__all__ = [
    "ContentTransformer",
    "RenderScope",
    "TransformerPipeline",
    "CommentStripper",
    "ComponentResolver",
    "LayoutComposer",
    "LoopExpander",
    "PropLexer",
    "PropToken",
    "bind_props",
    "VariableSubstitutor",
]
