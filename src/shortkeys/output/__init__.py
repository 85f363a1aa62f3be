"""JSON Schema output for shortkeys.

This module builds the structured-output envelope sent to model APIs, from
either a raw property tree or a Pydantic model, and decodes responses back
into models.
"""

from __future__ import annotations

from .json_output import build_json_schema, decode, model_json_schema

__all__ = [
    "build_json_schema",
    "model_json_schema",
    "decode",
]
