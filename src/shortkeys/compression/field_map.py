"""Field map types.

A field map records how to turn short codes back into original field names.
It is a tree of immutable records:

- FieldLeaf: a renamed field with no nested structure
- FieldNode: a renamed field whose value has nested structure (see FieldMapping)
- FieldMapping: the nested structure itself (object fields, array items,
  union variants, or a definition reference)
- FieldMap: the root mapping plus one mapping per named definition

The plain-mapping form (``to_dict``/``from_dict``) is what gets stored or
shipped next to the compressed schema::

    {
        "n": "name",
        "a": {"_original": "address", "s": "street", "c": "city"},
        "t": {"_original": "tags", "_items": {...}},
        "c": {"_original": "contact", "_variants": [{...}, {}]},
        "f": {"_original": "founder", "_ref": "person"},
        "_defs": {"person": {"n": "name", "a": "age"}},
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from ..exceptions import FieldMapError, UnresolvedReferenceError

ORIGINAL_KEY = "_original"
ITEMS_KEY = "_items"
VARIANTS_KEY = "_variants"
REF_KEY = "_ref"
DEFS_KEY = "_defs"

RESERVED_KEYS = frozenset({ORIGINAL_KEY, ITEMS_KEY, VARIANTS_KEY, REF_KEY, DEFS_KEY})


@dataclass(frozen=True)
class FieldLeaf:
    """A renamed field whose value needs no further expansion.

    Attributes:
        original: Original field name
    """

    original: str

    def to_dict(self) -> str:
        return self.original


@dataclass(frozen=True)
class FieldMapping:
    """Nested structure of a value: object fields, array items, variants or a reference.

    Several parts may be set at once only where compress() produces them that way;
    expansion checks ``ref``, then ``variants``, then ``items``, then ``fields``.

    Attributes:
        fields: Short code -> entry for the object's own fields
        items: Mapping applied to every element of an array value
        variants: One mapping per union variant, in declaration order
        ref: Name of the definition whose mapping applies
    """

    fields: Mapping[str, FieldEntry] = field(default_factory=dict)
    items: FieldMapping | None = None
    variants: tuple[FieldMapping, ...] | None = None
    ref: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        if self.variants is not None:
            object.__setattr__(self, "variants", tuple(self.variants))

    def is_empty(self) -> bool:
        """Whether this mapping carries nothing to expand."""
        return not self.fields and self.items is None and self.variants is None and self.ref is None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {code: entry.to_dict() for code, entry in self.fields.items()}
        if self.items is not None:
            result[ITEMS_KEY] = self.items.to_dict()
        if self.variants is not None:
            result[VARIANTS_KEY] = [variant.to_dict() for variant in self.variants]
        if self.ref is not None:
            result[REF_KEY] = self.ref
        return result

    @classmethod
    def from_dict(cls, data: Any) -> FieldMapping:
        """Parse the plain-mapping form of a nested mapping.

        Raises:
            FieldMapError: If the mapping has an unrecognized shape
        """
        if not isinstance(data, Mapping):
            raise FieldMapError(f"Expected a mapping, got {type(data).__name__}")

        fields: dict[str, FieldEntry] = {}
        items = None
        variants = None
        ref = None

        for key, value in data.items():
            if key == ITEMS_KEY:
                items = cls.from_dict(value)
            elif key == VARIANTS_KEY:
                if not isinstance(value, (list, tuple)):
                    raise FieldMapError(f"{VARIANTS_KEY} must be a list, got {type(value).__name__}")
                variants = tuple(cls.from_dict(variant) for variant in value)
            elif key == REF_KEY:
                if not isinstance(value, str):
                    raise FieldMapError(f"{REF_KEY} must be a string, got {type(value).__name__}")
                ref = value
            elif key in RESERVED_KEYS:
                raise FieldMapError(f"{key} is not allowed here")
            else:
                fields[key] = entry_from_dict(value)

        return cls(fields=fields, items=items, variants=variants, ref=ref)


@dataclass(frozen=True)
class FieldNode:
    """A renamed field whose value has nested structure.

    Attributes:
        original: Original field name
        mapping: How to expand the field's value
    """

    original: str
    mapping: FieldMapping

    def to_dict(self) -> dict[str, Any]:
        return {ORIGINAL_KEY: self.original, **self.mapping.to_dict()}


FieldEntry = Union[FieldLeaf, FieldNode]


def entry_from_dict(value: Any) -> FieldEntry:
    """Parse one field entry from its plain form.

    Raises:
        FieldMapError: If the entry is neither a name nor a mapping with ``_original``
    """
    if isinstance(value, str):
        return FieldLeaf(value)

    if isinstance(value, Mapping):
        original = value.get(ORIGINAL_KEY)
        if not isinstance(original, str):
            raise FieldMapError(f"Nested field entry needs a string {ORIGINAL_KEY}: {value!r}")
        rest = {key: item for key, item in value.items() if key != ORIGINAL_KEY}
        return FieldNode(original, FieldMapping.from_dict(rest))

    raise FieldMapError(f"Field entry must be a name or a mapping, got {type(value).__name__}")


@dataclass(frozen=True)
class FieldMap:
    """Complete field map produced by compress().

    Attributes:
        root: Mapping for the top-level properties
        defs: Definition name -> mapping for that definition's properties
    """

    root: FieldMapping = field(default_factory=FieldMapping)
    defs: Mapping[str, FieldMapping] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "defs", MappingProxyType(dict(self.defs)))

    def definition(self, name: str) -> FieldMapping:
        """Look up a definition's mapping.

        Raises:
            UnresolvedReferenceError: If no definition has that name
        """
        try:
            return self.defs[name]
        except KeyError:
            raise UnresolvedReferenceError(
                f"Reference to unknown definition {name!r} "
                f"(known: {', '.join(sorted(self.defs)) or 'none'})"
            ) from None

    def to_dict(self) -> dict[str, Any]:
        result = self.root.to_dict()
        if self.defs:
            result[DEFS_KEY] = {name: mapping.to_dict() for name, mapping in self.defs.items()}
        return result

    @classmethod
    def from_dict(cls, data: Any) -> FieldMap:
        """Parse the plain-mapping form of a field map.

        Raises:
            FieldMapError: If the map has an unrecognized shape
        """
        if not isinstance(data, Mapping):
            raise FieldMapError(f"Field map must be a mapping, got {type(data).__name__}")

        raw_defs = data.get(DEFS_KEY) or {}
        if not isinstance(raw_defs, Mapping):
            raise FieldMapError(f"{DEFS_KEY} must be a mapping, got {type(raw_defs).__name__}")

        root = FieldMapping.from_dict({key: value for key, value in data.items() if key != DEFS_KEY})
        defs = {name: FieldMapping.from_dict(mapping) for name, mapping in raw_defs.items()}
        return cls(root=root, defs=defs)

    @classmethod
    def coerce(cls, field_map: FieldMap | Mapping[str, Any]) -> FieldMap:
        """Return ``field_map`` as a FieldMap, parsing the plain form if needed."""
        if isinstance(field_map, FieldMap):
            return field_map
        return cls.from_dict(field_map)
