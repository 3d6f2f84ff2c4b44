"""Render cache maintenance commands."""
