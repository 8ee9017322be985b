"""Packaged data resources (default settings)."""
