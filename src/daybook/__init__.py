"""Daybook — calendar navigation and entry filtering for a mood journal."""

__version__ = "0.1.0"
