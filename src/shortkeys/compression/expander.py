"""Field map expander.

This module provides the expand() function that restores a payload written with
short codes (typically a model's structured output) to its original field names.

Expansion is lenient about the payload: a value whose shape does not match the
field map (a scalar where a list was expected, a missing or null field) is
passed through unchanged. It is strict about the field map: an unknown
definition reference raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..exceptions import ExpandError, FieldMapError
from .field_map import FieldLeaf, FieldMap, FieldMapping, FieldNode

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"\W")


def expand(
    payload: Mapping[str, Any],
    field_map: FieldMap | Mapping[str, Any],
    symbolize: bool = False,
) -> dict[Any, Any]:
    """Expand short codes in a payload back to original field names.

    Args:
        payload: Object produced against the compressed schema
        field_map: FieldMap from compress(), or its ``to_dict()`` form
        symbolize: If True, rewrite every restored key into a valid Python
            identifier (``zip-code`` -> ``zip_code``), at every nesting level

    Returns:
        New payload keyed by original field names. Keys absent from the
        field map are copied verbatim.

    Raises:
        FieldMapError: If the field map is malformed
        UnresolvedReferenceError: If the field map references an unknown definition
        ExpandError: If the payload is nested too deeply to walk

    Note:
        An object value of a union field is expanded with the first variant
        (in declaration order) that shares at least one short code with it.
        Variants whose codes overlap, such as two models that both start with
        a ``kind`` discriminator, always resolve to the first of them; give
        such variants distinct leading field names.

    Example:
        >>> expand({"f": "John", "a": 30}, {"f": "first_name", "a": "age"})
        {'first_name': 'John', 'age': 30}
    """
    try:
        expander = FieldMapExpander(FieldMap.coerce(field_map), symbolize=symbolize)
        return expander.expand_object(payload, expander.field_map.root)
    except RecursionError as e:
        raise ExpandError(f"Payload nesting too deep to expand: {e}") from e


def to_identifier(name: str) -> str:
    """Turn a field name into a valid Python identifier.

    Example:
        >>> to_identifier("zip-code")
        'zip_code'
        >>> to_identifier("2nd_line")
        '_2nd_line'
    """
    identifier = _NON_IDENTIFIER.sub("_", name) or "_"
    if identifier[0].isdigit():
        identifier = "_" + identifier
    return identifier


class FieldMapExpander:
    """Walks a payload alongside a FieldMap.

    Attributes:
        field_map: Field map being applied (definitions are resolved from it)
        symbolize: Whether restored keys are rewritten into identifiers
    """

    def __init__(self, field_map: FieldMap, symbolize: bool = False) -> None:
        self.field_map = field_map
        self.symbolize = symbolize

    def _key(self, original: str) -> str:
        return to_identifier(original) if self.symbolize else original

    def expand_object(self, payload: Any, mapping: FieldMapping) -> Any:
        """Expand the keys of one object against a mapping's fields."""
        if not isinstance(payload, Mapping):
            if payload is not None:
                logger.debug("Expected an object, passing through %s", type(payload).__name__)
            return payload

        expanded: dict[Any, Any] = {}
        for key, value in payload.items():
            entry = mapping.fields.get(key)

            if entry is None:
                expanded[key] = value
            elif isinstance(entry, FieldLeaf):
                expanded[self._key(entry.original)] = value
            elif isinstance(entry, FieldNode):
                expanded[self._key(entry.original)] = self.expand_value(value, entry.mapping)
            else:
                raise FieldMapError(f"Unrecognized field map entry for {key!r}: {entry!r}")

        return expanded

    def expand_value(self, value: Any, mapping: FieldMapping) -> Any:
        """Expand a field value according to its nested mapping.

        Checks run in order: reference, variants, items, plain object.
        """
        if mapping.ref is not None:
            definition = self.field_map.definition(mapping.ref)
            if isinstance(value, list):
                return [self.expand_object(element, definition) for element in value]
            return self.expand_object(value, definition)

        if mapping.variants is not None:
            return self._expand_variants(value, mapping.variants)

        if mapping.items is not None:
            if not isinstance(value, list):
                if value is not None:
                    logger.debug("Expected a list, passing through %s", type(value).__name__)
                return value
            return [self.expand_value(element, mapping.items) for element in value]

        return self.expand_object(value, mapping)

    def _expand_variants(self, value: Any, variants: tuple[FieldMapping, ...]) -> Any:
        """Pick the union variant matching the value's shape and expand with it."""
        if value is None:
            return None

        if isinstance(value, list):
            for variant in variants:
                if variant.items is not None or variant.ref is not None:
                    return self.expand_value(value, variant)
            logger.debug("No array variant for list value, passing through")
            return value

        if isinstance(value, Mapping):
            present = set(value)
            for variant in variants:
                if present & self._variant_codes(variant):
                    return self.expand_value(value, variant)
            logger.debug("No variant matches keys %s, passing through", sorted(map(str, present)))
            return value

        return value

    def _variant_codes(self, variant: FieldMapping) -> set[str]:
        """Short codes an object value of this variant would carry."""
        if variant.ref is not None:
            return set(self.field_map.definition(variant.ref).fields)
        return set(variant.fields)
