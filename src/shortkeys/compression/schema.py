"""Schema node introspection.

This module classifies JSON-Schema-shaped nodes into the handful of shapes the
compressor cares about. Types and constraints are not interpreted beyond that.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from ..exceptions import SchemaError

UNION_KEYWORDS = ("anyOf", "oneOf")


class NodeKind(enum.Enum):
    """Shape of a schema node."""

    REFERENCE = "reference"
    UNION = "union"
    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"


def node_kind(node: Any) -> NodeKind:
    """Classify a schema node.

    Checks run in a fixed order so that a node carrying several keywords
    (e.g. ``$ref`` with a ``type``) always lands in the same kind.

    Args:
        node: Schema node mapping

    Returns:
        NodeKind of the node

    Raises:
        SchemaError: If the node is not a mapping
    """
    if not isinstance(node, Mapping):
        raise SchemaError(f"Schema node must be a mapping, got {type(node).__name__}")

    if "$ref" in node or _wrapped_ref(node) is not None:
        return NodeKind.REFERENCE
    if union_keyword(node) is not None:
        return NodeKind.UNION
    if node.get("type") == "object":
        return NodeKind.OBJECT
    if node.get("type") == "array":
        return NodeKind.ARRAY
    return NodeKind.PRIMITIVE


def union_keyword(node: Mapping[str, Any]) -> str | None:
    """Return ``"anyOf"`` or ``"oneOf"`` if the node is a union, else None."""
    for keyword in UNION_KEYWORDS:
        if keyword in node:
            return keyword
    return None


def union_variants(node: Mapping[str, Any], keyword: str) -> list[Any]:
    """Return the variant list of a union node.

    Raises:
        SchemaError: If the keyword's value is not a list
    """
    variants = node[keyword]
    if not isinstance(variants, (list, tuple)):
        raise SchemaError(f"{keyword} must be a list, got {type(variants).__name__}")
    return list(variants)


def has_properties(node: Mapping[str, Any]) -> bool:
    """Whether an object node declares a ``properties`` mapping (possibly empty)."""
    properties = node.get("properties")
    if properties is None:
        return False
    if not isinstance(properties, Mapping):
        raise SchemaError(f"properties must be a mapping, got {type(properties).__name__}")
    return True


def required_names(node: Mapping[str, Any]) -> list[str]:
    """Return the required field names of an object node."""
    return list(node.get("required") or [])


def _wrapped_ref(node: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Return the target of an ``allOf`` holding a single ``$ref``, else None.

    Older Pydantic releases wrap a described model reference this way:
    ``{"allOf": [{"$ref": "#/$defs/Person"}], "description": "..."}``.
    """
    wrapped = node.get("allOf")
    if isinstance(wrapped, (list, tuple)) and len(wrapped) == 1:
        target = wrapped[0]
        if isinstance(target, Mapping) and "$ref" in target:
            return target
    return None


def ref_name(node: Mapping[str, Any]) -> str:
    """Extract the definition name from a ``$ref`` target.

    Example:
        >>> ref_name({"$ref": "#/$defs/person"})
        'person'
        >>> ref_name({"allOf": [{"$ref": "#/$defs/person"}]})
        'person'
    """
    target = node if "$ref" in node else _wrapped_ref(node)
    if target is None:
        raise SchemaError(f"Node has no $ref: {dict(node)!r}")
    return str(target["$ref"]).rsplit("/", 1)[-1]


def with_description(node: Mapping[str, Any], original_name: str) -> dict[str, Any]:
    """Copy a node and prefix its description with the original field name.

    A node described as ``"User's age"`` under field ``age`` becomes
    ``"age: User's age"``; a node without a description becomes ``"age"``.
    """
    described = dict(node)
    description = node.get("description")
    if description is not None:
        described["description"] = f"{original_name}: {description}"
    else:
        described["description"] = str(original_name)
    return described
