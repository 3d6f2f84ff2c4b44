"""Template lookup across configured directories."""
from __future__ import annotations

from .locator import TemplateKind, TemplateLocator

__all__ = ["TemplateKind", "TemplateLocator"]
