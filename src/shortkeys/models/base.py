"""Base output class and shortkeys-specific Pydantic configuration.

This module provides the OutputSchema class that structured-output models can
inherit from to get compressed schema generation and decoding as classmethods.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from ..compression.field_map import FieldMap
from ..output.json_output import decode, model_json_schema


class OutputSchema(BaseModel):
    """Base class for structured-output models.

    Fields are declared with Pydantic as usual. The class docstring becomes the
    schema description. shortkeys-specific options are ClassVar attributes:

    Example:
        >>> from typing import ClassVar, Optional
        >>> from pydantic import Field
        >>> class UserProfile(OutputSchema):
        ...     first_name: str = Field(description="User's first name")
        ...     age: int
        ...
        ...     shortkeys_name: ClassVar[Optional[str]] = "user_profile"
        >>> envelope = UserProfile.to_json_schema(compress=True)
        >>> sorted(envelope["schema"]["properties"])
        ['a', 'f']

    Attributes:
        shortkeys_name: Schema name reported to the API (defaults to the class name)
        shortkeys_strict: Value of ``strict`` in the generated schema
    """

    # Structured-output APIs reject schemas that allow extra keys
    model_config = ConfigDict(extra="forbid")

    shortkeys_name: ClassVar[str | None] = None
    shortkeys_strict: ClassVar[bool] = True

    @classmethod
    def to_json_schema(cls, *, compress: bool = False) -> dict[str, Any]:
        """Generate the structured-output envelope for this model.

        Args:
            compress: If True, shorten field names and include ``field_map``

        Returns:
            Envelope dict, see shortkeys.output.build_json_schema()
        """
        return model_json_schema(
            cls,
            name=cls.shortkeys_name,
            strict=cls.shortkeys_strict,
            compress=compress,
        )

    @classmethod
    def from_compressed(
        cls, payload: Mapping[str, Any], field_map: FieldMap | Mapping[str, Any]
    ) -> OutputSchema:
        """Decode a response written with short codes into an instance.

        Args:
            payload: Model output written with short codes
            field_map: ``field_map`` from to_json_schema(compress=True)

        Returns:
            Validated instance of this class

        Raises:
            DecodeError: If the expanded payload does not validate
        """
        return decode(cls, payload, field_map)
