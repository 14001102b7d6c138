"""Utility functions."""

from .datetime import now_utc
from .slug import slugify

__all__ = ["now_utc", "slugify"]
