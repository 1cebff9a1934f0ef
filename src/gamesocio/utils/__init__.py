"""Utility functions and helpers"""

from gamesocio.utils.tags import normalize_tags

__all__ = ["normalize_tags"]
