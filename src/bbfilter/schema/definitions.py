#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbfilter/schema/definitions.py
"""Tag definition model.

A :class:`TagDefinition` describes how one markup tag key is turned into
output markup: which element to emit, which attributes to rename, escape or
append, whether a template renders it instead, and which structural
constraints an upstream tree-walker must enforce around it.

Definitions are never written out in full. Filters register *overrides*,
plain mappings naming only the fields that differ from the default record,
and :func:`merge_definition` produces the complete, immutable definition.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from bbfilter.constants import (
    DEFAULT_CONVERT_LINE_BREAKS,
    DEFAULT_ESCAPE_ATTRIBUTE_VALUES,
    DEFAULT_ESCAPE_CONTENT,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PRESERVE_NESTED_MARKUP,
    DEFAULT_SELF_CLOSING,
    OutputDialect,
)
from bbfilter.exceptions import ValidationError


class ElementKind(IntEnum):
    """Structural classification of a tag.

    ``BOTH`` is the union of ``INLINE`` and ``BLOCK``, so kinds can be
    tested with bitwise and.
    """

    NONE = 0
    INLINE = 1
    BLOCK = 2
    BOTH = 3

    @classmethod
    def coerce(cls, value: Any) -> ElementKind:
        """Convert an enum member, its integer value, or its name to a member."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown element kind {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise ValueError(f"element kind must be a name or integer, got {type(value).__name__}")


@dataclass(frozen=True)
class Scalar:
    """Output tag name shared by every dialect."""

    value: str

    def resolve_for(self, dialect: OutputDialect) -> str:
        return self.value


@dataclass(frozen=True)
class ByDialect:
    """Output tag name chosen per output dialect."""

    html: str
    xhtml: str

    def resolve_for(self, dialect: OutputDialect) -> str:
        return self.xhtml if dialect == "xhtml" else self.html


DialectValue = Union[Scalar, ByDialect]


def coerce_dialect_value(raw: Any) -> DialectValue:
    """Convert override input into a :data:`DialectValue`.

    Accepts an existing variant, a plain string, or a mapping with ``html``
    and ``xhtml`` keys.

    Raises
    ------
    ValueError
        If the value has none of the accepted shapes.

    """
    if isinstance(raw, (Scalar, ByDialect)):
        return raw
    if isinstance(raw, str):
        return Scalar(raw)
    if isinstance(raw, Mapping):
        missing = {"html", "xhtml"} - set(raw)
        if missing:
            raise ValueError(f"dialect mapping is missing {sorted(missing)}")
        return ByDialect(html=str(raw["html"]), xhtml=str(raw["xhtml"]))
    raise ValueError(f"expected a tag name or an html/xhtml mapping, got {type(raw).__name__}")


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class TagDefinition:
    """Fully resolved rendering schema for one tag key.

    Parameters
    ----------
    key : str
        Tag key this definition belongs to
    output_tag : Scalar or ByDialect
        Element emitted by direct synthesis. An empty name means the content
        is passed through without a wrapper.
    template : str or None
        Template rendered instead of direct synthesis, when set
    validation_pattern : re.Pattern or None
        Pattern the ``default`` attribute (or, without one, the body) must
        match; on mismatch the body is returned unwrapped
    element_kind : ElementKind
        Structural kind of this tag, for upstream nesting checks
    allowed_child_kinds : ElementKind
        Kinds of element that may nest inside this tag
    attribute_spec : Mapping[str, re.Pattern or None]
        Recognized attribute names, each with an optional value pattern
    attribute_rename : Mapping[str, str]
        Parsed attribute name to output attribute (or template variable) name
    fixed_attributes : Mapping[str, str]
        Attributes always added to synthesized output; they win over parsed
        attributes with the same output name
    convert_line_breaks : bool
        Insert line-break markup before newlines in the body
    self_closing : bool
        Emit a void element and discard the content
    preserve_nested_markup : bool
        Nested markup inside this tag should be left unparsed upstream
    escape_content : bool
        Entity-escape the body content
    escape_attribute_values : bool
        Entity-escape parsed attribute values during synthesis
    max_nesting_depth : int
        Maximum nesting of this tag inside itself, -1 for unbounded
    required_parent_keys : frozenset[str]
        If non-empty, the only tags this tag may be a direct child of
    required_child_keys : frozenset[str]
        If non-empty, the only tags allowed as direct children

    """

    key: str = ""
    output_tag: DialectValue = Scalar("")
    template: Optional[str] = None
    validation_pattern: Optional[re.Pattern[str]] = None
    element_kind: ElementKind = ElementKind.BLOCK
    allowed_child_kinds: ElementKind = ElementKind.BOTH
    attribute_spec: Mapping[str, Optional[re.Pattern[str]]] = field(default_factory=_empty_mapping)
    attribute_rename: Mapping[str, str] = field(default_factory=_empty_mapping)
    fixed_attributes: Mapping[str, str] = field(default_factory=_empty_mapping)
    convert_line_breaks: bool = DEFAULT_CONVERT_LINE_BREAKS
    self_closing: bool = DEFAULT_SELF_CLOSING
    preserve_nested_markup: bool = DEFAULT_PRESERVE_NESTED_MARKUP
    escape_content: bool = DEFAULT_ESCAPE_CONTENT
    escape_attribute_values: bool = DEFAULT_ESCAPE_ATTRIBUTE_VALUES
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    required_parent_keys: frozenset[str] = frozenset()
    required_child_keys: frozenset[str] = frozenset()

    def accepts_attribute(self, name: str, value: str) -> bool:
        """Return True if ``name`` is recognized and ``value`` fits its pattern."""
        if name not in self.attribute_spec:
            return False
        pattern = self.attribute_spec[name]
        return pattern is None or pattern.search(value) is not None

    def accepts_child_kind(self, kind: ElementKind) -> bool:
        """Return True if an element of ``kind`` may nest directly inside this tag.

        Elements of kind ``NONE`` carry no structural role and nest anywhere.
        """
        return kind == ElementKind.NONE or bool(self.allowed_child_kinds & kind)

    def accepts_parent(self, parent_key: str) -> bool:
        return not self.required_parent_keys or parent_key in self.required_parent_keys

    def accepts_child(self, child_key: str) -> bool:
        return not self.required_child_keys or child_key in self.required_child_keys


DEFAULT_DEFINITION = TagDefinition()

TagOverride = Mapping[str, Any]


# Override value coercion
# =============================================================================


def _coerce_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def _coerce_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return value or None


def _compile(value: Any) -> Optional[re.Pattern[str]]:
    if value is None or value == "":
        return None
    if isinstance(value, re.Pattern):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a regular expression, got {type(value).__name__}")
    try:
        return re.compile(value)
    except re.error as e:
        raise ValueError(f"invalid regular expression {value!r}: {e}") from e


def _coerce_pattern_mapping(value: Any) -> Mapping[str, Optional[re.Pattern[str]]]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValueError(f"expected a mapping of attribute names to patterns, got {type(value).__name__}")
    if not isinstance(value, Mapping):
        # A bare list of names recognizes each name with any value
        value = dict.fromkeys(value)
    return MappingProxyType({str(name): _compile(pattern) for name, pattern in value.items()})


def _coerce_str_mapping(value: Any) -> Mapping[str, str]:
    if not isinstance(value, Mapping):
        raise ValueError(f"expected a mapping, got {type(value).__name__}")
    return MappingProxyType({str(name): str(item) for name, item in value.items()})


def _coerce_keys(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        return frozenset({value})
    if not isinstance(value, Iterable):
        raise ValueError(f"expected a list of tag keys, got {type(value).__name__}")
    return frozenset(str(key) for key in value)


def _coerce_depth(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    if value < -1:
        raise ValueError(f"must be -1 (unbounded) or a non-negative integer, got {value}")
    return value


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "output_tag": coerce_dialect_value,
    "template": _coerce_optional_str,
    "validation_pattern": _compile,
    "element_kind": ElementKind.coerce,
    "allowed_child_kinds": ElementKind.coerce,
    "attribute_spec": _coerce_pattern_mapping,
    "attribute_rename": _coerce_str_mapping,
    "fixed_attributes": _coerce_str_mapping,
    "convert_line_breaks": _coerce_bool,
    "self_closing": _coerce_bool,
    "preserve_nested_markup": _coerce_bool,
    "escape_content": _coerce_bool,
    "escape_attribute_values": _coerce_bool,
    "max_nesting_depth": _coerce_depth,
    "required_parent_keys": _coerce_keys,
    "required_child_keys": _coerce_keys,
}

OVERRIDE_FIELDS = frozenset(_COERCERS)


def coerce_override(override: TagOverride, tag_key: str | None = None) -> dict[str, Any]:
    """Validate an override and convert its values to definition field types.

    Parameters
    ----------
    override : Mapping[str, Any]
        Partial definition keyed by :class:`TagDefinition` field names
    tag_key : str, optional
        Tag the override belongs to, used in error messages

    Returns
    -------
    dict[str, Any]
        Field values ready for :func:`dataclasses.replace`

    Raises
    ------
    ValidationError
        If the override names an unknown field or a value cannot be coerced

    """
    where = f" for [{tag_key}]" if tag_key else ""
    coerced: dict[str, Any] = {}

    for name, value in override.items():
        coercer = _COERCERS.get(name)
        if coercer is None:
            if name == "key":
                message = f"Override{where} may not set 'key'; the registration key is used"
            else:
                message = f"Unknown tag definition field {name!r}{where}"
            raise ValidationError(message, parameter_name=name, parameter_value=value)

        try:
            coerced[name] = coercer(value)
        except ValueError as e:
            raise ValidationError(
                f"Invalid value for {name!r}{where}: {e}", parameter_name=name, parameter_value=value, original_error=e
            ) from e

    return coerced


def merge_definition(defaults: TagDefinition, override: TagOverride, key: str) -> TagDefinition:
    """Merge a partial override over a default record.

    Each field named in ``override`` replaces the default field whole;
    mapping fields are not merged key by key.

    Parameters
    ----------
    defaults : TagDefinition
        Record supplying every field the override leaves out
    override : Mapping[str, Any]
        Partial definition, possibly empty
    key : str
        Tag key of the resulting definition

    Returns
    -------
    TagDefinition
        Fully populated definition

    Examples
    --------
        >>> definition = merge_definition(DEFAULT_DEFINITION, {"output_tag": "b"}, "b")
        >>> definition.output_tag.resolve_for("html"), definition.convert_line_breaks
        ('b', True)

    """
    return replace(defaults, key=key, **coerce_override(override, key))
