"""Schema compressor.

This module provides the compress() function that rewrites a schema's field
names into short codes and records a FieldMap to undo the renaming.

The main property tree shares one naming scope across all nesting depths, so a
nested ``city`` can end up as ``ci`` because ``c`` was taken by ``company`` at
the top. Every definition in ``$defs`` is compressed with its own scope.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..exceptions import SchemaError
from .allocator import ShortNameAllocator
from .field_map import FieldEntry, FieldLeaf, FieldMap, FieldMapping, FieldNode
from .schema import (
    NodeKind,
    has_properties,
    node_kind,
    ref_name,
    required_names,
    union_keyword,
    union_variants,
    with_description,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressedSchema:
    """Result of compress().

    Attributes:
        properties: Properties keyed by short code, with rewritten descriptions
        required: Short codes of required properties, in property order
        field_map: Field map for expand()
        definitions: Compressed definitions, or None if none were given
    """

    properties: dict[str, Any]
    required: list[str]
    field_map: FieldMap
    definitions: dict[str, Any] | None = None


def compress(
    properties: Mapping[str, Any],
    required: Iterable[str] = (),
    definitions: Mapping[str, Any] | None = None,
) -> CompressedSchema:
    """Compress a schema's property names to short codes.

    Args:
        properties: Ordered mapping of field name -> schema node
        required: Names of required top-level fields
        definitions: Optional named definitions (``$defs``)

    Returns:
        CompressedSchema with the compressed tree and its field map

    Raises:
        SchemaError: If the schema tree is malformed or nested too deeply

    Example:
        >>> result = compress(
        ...     {"summary": {"type": "string"}, "samples": {"type": "string"}},
        ...     required=["summary"],
        ... )
        >>> list(result.properties)
        ['s', 'sa']
        >>> result.field_map.to_dict()
        {'s': 'summary', 'sa': 'samples'}
    """
    try:
        # Definitions first; each gets its own naming scope
        compressed_defs: dict[str, Any] = {}
        defs_mappings: dict[str, FieldMapping] = {}
        for def_name, def_schema in (definitions or {}).items():
            compressed_def, def_mapping = SchemaCompressor().compress_schema(def_schema)
            compressed_defs[def_name] = compressed_def
            defs_mappings[def_name] = def_mapping
            logger.debug("Compressed definition %r (%d fields)", def_name, len(def_mapping.fields))

        compressed_props, compressed_required, root = SchemaCompressor().compress_properties(
            properties, required
        )
    except RecursionError as e:
        raise SchemaError(f"Schema nesting too deep to compress: {e}") from e

    return CompressedSchema(
        properties=compressed_props,
        required=compressed_required,
        field_map=FieldMap(root=root, defs=defs_mappings),
        definitions=compressed_defs if definitions else None,
    )


class SchemaCompressor:
    """Compresses property trees within a single naming scope.

    One instance is one scope: every field compressed through it, at any depth,
    draws from the same allocator.
    """

    def __init__(self) -> None:
        """Initialize with a fresh naming scope."""
        self.allocator = ShortNameAllocator()

    def compress_schema(self, schema: Mapping[str, Any]) -> tuple[Any, FieldMapping]:
        """Compress a complete schema, as used for a definition.

        Objects with properties are compressed; anything else passes through
        unchanged with an empty mapping.
        """
        if node_kind(schema) is NodeKind.OBJECT and has_properties(schema):
            compressed, mapping = self._compress_object_properties(schema)
            return compressed, mapping
        return schema, FieldMapping()

    def compress_properties(
        self, properties: Mapping[str, Any], required: Iterable[str] = ()
    ) -> tuple[dict[str, Any], list[str], FieldMapping]:
        """Compress a properties mapping.

        Args:
            properties: Field name -> schema node
            required: Required field names

        Returns:
            Tuple of (compressed properties, compressed required, field mapping)
        """
        if not isinstance(properties, Mapping):
            raise SchemaError(f"properties must be a mapping, got {type(properties).__name__}")

        required_set = set(required)
        compressed_props: dict[str, Any] = {}
        compressed_required: list[str] = []
        fields: dict[str, FieldEntry] = {}

        for name, node in properties.items():
            code = self.allocator.allocate(name)
            if name in required_set:
                compressed_required.append(code)

            compressed_props[code], fields[code] = self._compress_field(name, node)

        return compressed_props, compressed_required, FieldMapping(fields=fields)

    def _compress_field(self, name: str, node: Any) -> tuple[dict[str, Any], FieldEntry]:
        """Compress one named field and build its field map entry."""
        kind = node_kind(node)

        if kind is NodeKind.REFERENCE:
            return with_description(node, name), FieldNode(name, FieldMapping(ref=ref_name(node)))

        if kind is NodeKind.OBJECT:
            if not has_properties(node):
                return with_description(node, name), FieldLeaf(name)
            compressed, mapping = self._compress_object_properties(node)
            entry: FieldEntry = FieldNode(name, mapping) if mapping.fields else FieldLeaf(name)
            return with_description(compressed, name), entry

        if kind is NodeKind.ARRAY:
            compressed = with_description(node, name)
            if node.get("items") is None:
                return compressed, FieldLeaf(name)
            compressed["items"], shape = self._compress_items(node["items"])
            if shape is None or shape.is_empty():
                return compressed, FieldLeaf(name)
            return compressed, FieldNode(name, shape)

        if kind is NodeKind.UNION:
            compressed, mapping = self._compress_union(node)
            return with_description(compressed, name), FieldNode(name, mapping)

        if kind is NodeKind.PRIMITIVE:
            return with_description(node, name), FieldLeaf(name)

        raise SchemaError(f"Field {name}: unhandled node kind {kind}")

    def _compress_object_properties(self, node: Mapping[str, Any]) -> tuple[dict[str, Any], FieldMapping]:
        """Compress an object node's properties within this scope."""
        properties, required, mapping = self.compress_properties(
            node["properties"], required_names(node)
        )
        compressed = dict(node)
        compressed["properties"] = properties
        if required:
            compressed["required"] = required
        else:
            compressed.pop("required", None)
        return compressed, mapping

    def _compress_items(self, items: Any) -> tuple[Any, FieldMapping | None]:
        """Compress an array's item shape.

        Returns:
            Tuple of (compressed items, mapping or None). The mapping already
            carries the ``items`` wrapper, except for references, which apply
            to each element directly.
        """
        kind = node_kind(items)

        if kind is NodeKind.OBJECT:
            if not has_properties(items):
                return items, None
            compressed, mapping = self._compress_object_properties(items)
            return compressed, FieldMapping(items=mapping)

        if kind is NodeKind.UNION:
            compressed, mapping = self._compress_union(items)
            return compressed, FieldMapping(items=mapping)

        if kind is NodeKind.REFERENCE:
            return items, FieldMapping(ref=ref_name(items))

        if kind is NodeKind.ARRAY:
            if items.get("items") is None:
                return items, None
            inner, shape = self._compress_items(items["items"])
            compressed = dict(items)
            compressed["items"] = inner
            if shape is None:
                return compressed, None
            return compressed, FieldMapping(items=shape)

        if kind is NodeKind.PRIMITIVE:
            return items, None

        raise SchemaError(f"Unhandled array item kind {kind}")

    def _compress_union(self, node: Mapping[str, Any]) -> tuple[dict[str, Any], FieldMapping]:
        """Compress every variant of an anyOf/oneOf node, keeping their order."""
        keyword = union_keyword(node)
        if keyword is None:
            raise SchemaError("Union node has neither anyOf nor oneOf")

        compressed_variants = []
        variant_mappings = []
        for variant in union_variants(node, keyword):
            compressed_variant, variant_mapping = self._compress_variant(variant)
            compressed_variants.append(compressed_variant)
            variant_mappings.append(variant_mapping)

        compressed = dict(node)
        compressed[keyword] = compressed_variants
        return compressed, FieldMapping(variants=tuple(variant_mappings))

    def _compress_variant(self, variant: Any) -> tuple[Any, FieldMapping]:
        """Compress a single union variant.

        Variants that carry nothing to rename (primitives, the null branch)
        map to an empty FieldMapping.
        """
        kind = node_kind(variant)

        if kind is NodeKind.OBJECT and has_properties(variant):
            return self._compress_object_properties(variant)

        if kind is NodeKind.ARRAY and variant.get("items") is not None:
            compressed = dict(variant)
            compressed["items"], shape = self._compress_items(variant["items"])
            return compressed, shape or FieldMapping()

        if kind is NodeKind.REFERENCE:
            return variant, FieldMapping(ref=ref_name(variant))

        return variant, FieldMapping()
