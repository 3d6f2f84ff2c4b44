"""Execution of compiled template source."""
from __future__ import annotations

from .executor import JinjaExecutor

__all__ = ["JinjaExecutor"]
