"""Structured-output envelope generation and model decoding.

This module builds the ``{"name", "description", "schema"}`` envelope that
structured-output APIs expect, optionally with compressed field names and the
field map needed to undo them. Pydantic models can be used directly as the
schema source, and responses can be decoded straight back into the model.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..compression import compressor
from ..compression.expander import expand
from ..compression.field_map import FieldMap
from ..exceptions import DecodeError, SchemaError

T = TypeVar("T", bound=BaseModel)


def build_json_schema(
    name: str,
    properties: Mapping[str, Any],
    required: Iterable[str] = (),
    definitions: Mapping[str, Any] | None = None,
    *,
    description: str | None = None,
    additional_properties: bool = False,
    strict: bool = True,
    compress: bool = False,
) -> dict[str, Any]:
    """Build a structured-output schema envelope.

    Args:
        name: Schema name reported to the API
        properties: Field name -> schema node
        required: Required field names
        definitions: Optional named definitions, emitted as ``$defs``
        description: Optional schema description
        additional_properties: Value of ``additionalProperties`` on the root object
        strict: Value of ``strict`` on the root object
        compress: If True, shorten field names and include ``field_map``

    Returns:
        Envelope dict; with ``compress=True`` it also carries ``field_map`` in
        plain form, ready for expand()

    Raises:
        SchemaError: If the property tree is malformed

    Example:
        >>> envelope = build_json_schema(
        ...     "Person", {"name": {"type": "string"}}, required=["name"], compress=True
        ... )
        >>> envelope["schema"]["properties"]
        {'n': {'type': 'string', 'description': 'name'}}
        >>> envelope["field_map"]
        {'n': 'name'}
    """
    field_map: FieldMap | None = None

    if compress:
        result = compressor.compress(properties, required=required, definitions=definitions)
        schema_properties: dict[str, Any] = result.properties
        schema_required = result.required
        schema_definitions = result.definitions
        field_map = result.field_map
    else:
        schema_properties = dict(properties)
        schema_required = list(required)
        schema_definitions = dict(definitions) if definitions else None

    schema: dict[str, Any] = {
        "type": "object",
        "properties": schema_properties,
        "required": schema_required,
        "additionalProperties": additional_properties,
        "strict": strict,
    }

    # Only include $defs if there are definitions
    if schema_definitions:
        schema["$defs"] = schema_definitions

    envelope: dict[str, Any] = {
        "name": name,
        "description": description,
        "schema": schema,
    }
    if field_map is not None:
        envelope["field_map"] = field_map.to_dict()
    return envelope


def model_json_schema(
    model_class: type[BaseModel],
    *,
    name: str | None = None,
    description: str | None = None,
    strict: bool = True,
    compress: bool = False,
) -> dict[str, Any]:
    """Build a structured-output schema envelope from a Pydantic model.

    Args:
        model_class: Pydantic model class describing the output
        name: Schema name (defaults to the class name)
        description: Schema description (defaults to the model's docstring)
        strict: Value of ``strict`` on the root object
        compress: If True, shorten field names and include ``field_map``

    Returns:
        Envelope dict, see build_json_schema()

    Raises:
        SchemaError: If the model does not produce an object schema
    """
    json_schema = model_class.model_json_schema()

    if json_schema.get("type") != "object" or "properties" not in json_schema:
        raise SchemaError(f"{model_class.__name__} does not produce an object schema")

    return build_json_schema(
        name or model_class.__name__,
        json_schema["properties"],
        required=json_schema.get("required", []),
        definitions=json_schema.get("$defs"),
        description=description or json_schema.get("description"),
        additional_properties=json_schema.get("additionalProperties", True),
        strict=strict,
        compress=compress,
    )


def decode(
    model_class: type[T],
    payload: Mapping[str, Any],
    field_map: FieldMap | Mapping[str, Any],
) -> T:
    """Expand a compressed payload and validate it into a Pydantic model.

    Args:
        model_class: Pydantic model class the schema was built from
        payload: Model output written with short codes
        field_map: Field map from the compressed envelope

    Returns:
        Validated model instance

    Raises:
        FieldMapError: If the field map is malformed
        UnresolvedReferenceError: If the field map references an unknown definition
        DecodeError: If the expanded payload does not validate

    Example:
        >>> envelope = model_json_schema(Person, compress=True)
        >>> decode(Person, {"n": "Jane", "a": 45}, envelope["field_map"])
        Person(name='Jane', age=45)
    """
    expanded = expand(payload, field_map)

    try:
        return model_class.model_validate(expanded)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {model_class.__name__}: {e}") from e
