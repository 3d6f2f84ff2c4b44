"""
modx - directive-expanding template engine

Compiles layouts, loops, components, comments and variables into
renderable output and memoizes rendered output by data fingerprint.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
