"""Keyword Scout - keyword opportunity scoring and trend analysis."""

__version__ = "1.0.0"
