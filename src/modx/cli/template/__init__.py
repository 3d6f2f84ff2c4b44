"""Template rendering and compilation commands."""
