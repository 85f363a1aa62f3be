"""shortkeys: Token-efficient structured-output schemas

A Python library that shortens the field names of structured-output schemas
sent to language models, and restores the model's responses to the original
names. Every field is renamed to a one- or two-character code; a field map
records how to undo it.

Key Features:
- Deterministic, collision-free short codes
- Objects, arrays, unions (anyOf/oneOf), $defs/$ref and arbitrary nesting
- Original names kept in field descriptions, so the model keeps the meaning
- Lenient expansion of imperfect model output
- Pydantic integration

Quick Start:
    >>> from shortkeys import compress, expand
    >>> result = compress(
    ...     {"first_name": {"type": "string"}, "age": {"type": "integer"}},
    ...     required=["first_name", "age"],
    ... )
    >>> list(result.properties)
    ['f', 'a']
    >>> expand({"f": "John", "a": 30}, result.field_map)
    {'first_name': 'John', 'age': 30}
"""

from __future__ import annotations

import logging

from .compression import (
    CompressedSchema,
    FieldLeaf,
    FieldMap,
    FieldMapExpander,
    FieldMapping,
    FieldNode,
    NodeKind,
    SchemaCompressor,
    ShortNameAllocator,
    compress,
    expand,
    node_kind,
    short_name_for,
)
from .exceptions import (
    DecodeError,
    ExpandError,
    FieldMapError,
    SchemaError,
    ShortkeysError,
    UnresolvedReferenceError,
)
from .models import OutputSchema
from .output import build_json_schema, decode, model_json_schema

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core API
    "compress",
    "expand",
    "CompressedSchema",
    "SchemaCompressor",
    "FieldMapExpander",
    # Naming
    "ShortNameAllocator",
    "short_name_for",
    # Field map
    "FieldMap",
    "FieldMapping",
    "FieldLeaf",
    "FieldNode",
    # Schema nodes
    "NodeKind",
    "node_kind",
    # Exceptions
    "ShortkeysError",
    "SchemaError",
    "FieldMapError",
    "ExpandError",
    "UnresolvedReferenceError",
    "DecodeError",
    # Output
    "build_json_schema",
    "model_json_schema",
    "decode",
    "OutputSchema",
    # Version
    "__version__",
]
