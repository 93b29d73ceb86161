#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tag definition schema and registry."""

from bbfilter.schema.definitions import (
    DEFAULT_DEFINITION,
    OVERRIDE_FIELDS,
    ByDialect,
    DialectValue,
    ElementKind,
    Scalar,
    TagDefinition,
    TagOverride,
    coerce_dialect_value,
    coerce_override,
    merge_definition,
)
from bbfilter.schema.registry import TagSchemaRegistry

__all__ = [
    "DEFAULT_DEFINITION",
    "OVERRIDE_FIELDS",
    "ByDialect",
    "DialectValue",
    "ElementKind",
    "Scalar",
    "TagDefinition",
    "TagOverride",
    "TagSchemaRegistry",
    "coerce_dialect_value",
    "coerce_override",
    "merge_definition",
]
