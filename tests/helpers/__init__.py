"""Shared helpers for the modx test suite."""
