#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Hyperlink and e-mail tags."""

from __future__ import annotations

from bbfilter.constants import DEFAULT_ATTRIBUTE
from bbfilter.filters.base import BaseFilter
from bbfilter.nodes import TagNode
from bbfilter.schema.definitions import ElementKind, TagDefinition

URL_PATTERN = r"(?i)^(?:(?:https?|ftps?|irc|file|telnet)://|/|#)[^\s\"'<>]*$"
EMAIL_PATTERN = r"(?i)^mailto:[-\w.+]+@[-\w]+(?:\.[-\w]+)*\.[a-z]{2,}$"

_LINK = {
    "output_tag": "a",
    "element_kind": ElementKind.INLINE,
    "allowed_child_kinds": ElementKind.INLINE,
    "attribute_rename": {DEFAULT_ATTRIBUTE: "href"},
}


class UrlFilter(BaseFilter):
    """``[url]`` and ``[email]`` links.

    The target comes from the positional value (``[url=http://...]text``) or,
    without one, from the body (``[url]http://...[/url]``). Targets with an
    unsupported scheme (``javascript:`` and friends) fail validation and the
    body is returned as plain content.
    """

    NAME = "url"
    TAGS = {
        "url": {
            **_LINK,
            "validation_pattern": URL_PATTERN,
            "attribute_spec": {DEFAULT_ATTRIBUTE: URL_PATTERN},
        },
        "email": {
            **_LINK,
            "validation_pattern": EMAIL_PATTERN,
            "attribute_spec": {DEFAULT_ATTRIBUTE: None},
        },
    }

    def prepare_node(self, node: TagNode, definition: TagDefinition) -> TagNode:
        """Fill in the link target from the body and add ``mailto:`` to addresses."""
        target = (node.default_attribute or node.body_content).strip()

        if node.tag_key == "email" and not target.lower().startswith("mailto:"):
            target = f"mailto:{target}"

        return node.with_attributes(**{DEFAULT_ATTRIBUTE: target})
