"""Utility functions for nbtcodec.

This module provides size calculations over tag trees.
"""

from __future__ import annotations

from .sizing import encoded_size, field_sizes, root_size

__all__ = [
    "encoded_size",
    "root_size",
    "field_sizes",
]
