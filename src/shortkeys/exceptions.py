"""Exception hierarchy for shortkeys.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ShortkeysError for easy catching of any shortkeys-specific error.
"""

from __future__ import annotations


class ShortkeysError(Exception):
    """Base exception for all shortkeys errors."""

    pass


class SchemaError(ShortkeysError):
    """Raised when a schema tree cannot be compressed.

    Examples:
        - A node that is not a mapping
        - ``properties`` that is not a mapping
        - ``anyOf``/``oneOf`` that is not a list
        - Nesting too deep to walk
    """

    pass


class FieldMapError(ShortkeysError):
    """Raised when a field map does not have a recognized shape.

    Field maps produced by compress() never trigger this; it signals a map that
    was hand-edited or corrupted in storage.

    Examples:
        - Nested entry without ``_original``
        - Entry that is neither a name nor a mapping
        - ``_variants`` that is not a list
    """

    pass


class ExpandError(ShortkeysError):
    """Raised when expanding a payload fails.

    Payload shape mismatches never raise; they are passed through unchanged.
    """

    pass


class UnresolvedReferenceError(ExpandError):
    """Raised when a ``_ref`` names a definition missing from ``_defs``.

    This means the schema and the field map are out of sync.
    """

    pass


class DecodeError(ShortkeysError):
    """Raised when an expanded payload does not validate into its model."""

    pass
