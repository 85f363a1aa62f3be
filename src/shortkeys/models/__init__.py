"""Pydantic output modeling for shortkeys.

This module provides the OutputSchema base class for describing structured
output with Pydantic.
"""

from __future__ import annotations

from .base import OutputSchema

__all__ = [
    "OutputSchema",
]
