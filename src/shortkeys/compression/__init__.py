"""Field name compression for structured-output schemas.

This module provides compression of schema field names into short codes and
expansion of payloads back to the original names.
"""

from __future__ import annotations

from .allocator import ShortNameAllocator, short_name_for
from .compressor import CompressedSchema, SchemaCompressor, compress
from .expander import FieldMapExpander, expand
from .field_map import FieldLeaf, FieldMap, FieldMapping, FieldNode
from .schema import NodeKind, node_kind

__all__ = [
    "compress",
    "expand",
    "CompressedSchema",
    "SchemaCompressor",
    "FieldMapExpander",
    "ShortNameAllocator",
    "short_name_for",
    "FieldMap",
    "FieldMapping",
    "FieldLeaf",
    "FieldNode",
    "NodeKind",
    "node_kind",
]
