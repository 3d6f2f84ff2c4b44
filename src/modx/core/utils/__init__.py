"""Shared utilities for modx (merge, layered YAML, I/O, logging, paths)."""
