#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Image tag."""

from __future__ import annotations

import re
from dataclasses import replace

from bbfilter.constants import DEFAULT_ATTRIBUTE
from bbfilter.filters.base import BaseFilter
from bbfilter.nodes import TagNode
from bbfilter.schema.definitions import ElementKind, TagDefinition

IMAGE_PATTERN = r"(?i)^(?:https?://|/)[^\s\"'<>]+\.(?:jpe?g|png|gif|bmp|webp|svg)(?:\?[^\s\"'<>]*)?$"

_SIZE_PATTERN = re.compile(r"^(\d+)x(\d+)$", re.IGNORECASE)


class ImageFilter(BaseFilter):
    """``[img]`` tags rendered as void ``<img>`` elements.

    The body holds the image URL. Sizes may be given as attributes
    (``[img width="200"]``) or positionally (``[img=200x100]``).
    Attributes outside ``attribute_spec`` are dropped.
    """

    NAME = "image"
    TAGS = {
        "img": {
            "output_tag": "img",
            "self_closing": True,
            "validation_pattern": IMAGE_PATTERN,
            "element_kind": ElementKind.INLINE,
            "allowed_child_kinds": ElementKind.NONE,
            "attribute_spec": {
                "src": IMAGE_PATTERN,
                "alt": None,
                "width": r"^\d+%?$",
                "height": r"^\d+%?$",
            },
        },
    }

    def prepare_node(self, node: TagNode, definition: TagDefinition) -> TagNode:
        """Move the URL into ``src`` and split ``WIDTHxHEIGHT`` into sizes."""
        attributes = {"src": node.body_content.strip(), "alt": node.attributes.get("alt", "")}

        size = _SIZE_PATTERN.match(node.default_attribute or "")
        if size:
            attributes["width"], attributes["height"] = size.groups()

        for name, value in node.attributes.items():
            if name not in (DEFAULT_ATTRIBUTE, "src", "alt") and definition.accepts_attribute(name, value):
                attributes[name] = value

        # Validation runs against the body once the positional size is gone
        return replace(node, attributes=attributes)
