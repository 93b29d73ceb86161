#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsed tag node handed to filters by an upstream parser."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional

from bbfilter.constants import DEFAULT_ATTRIBUTE


@dataclass(frozen=True)
class TagNode:
    """One parsed tag, with its children already rendered into the body.

    Parameters
    ----------
    tag_key : str
        Key of the tag (e.g. ``"url"`` for ``[url=...]``)
    attributes : Mapping[str, str]
        Parsed attribute values, already unescaped from the source markup.
        The positional value of ``[tag=value]`` is stored under ``"default"``.
    body_content : str
        Text between the opening and closing tag, nested tags rendered
    content : str, optional
        Pre-rendered content used instead of the body when non-empty

    Examples
    --------
        >>> node = TagNode("url", {"default": "http://example.com"}, "Example")
        >>> node.default_attribute
        'http://example.com'

    """

    tag_key: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    body_content: str = ""
    content: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def default_attribute(self) -> Optional[str]:
        """Return the positional ``default`` attribute, or None when unset or empty."""
        return self.attributes.get(DEFAULT_ATTRIBUTE) or None

    def with_attributes(self, **attributes: str) -> TagNode:
        """Return a copy with ``attributes`` added to (or replacing) the parsed ones."""
        return replace(self, attributes={**self.attributes, **attributes})
