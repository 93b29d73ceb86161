#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Block-level layout tags: alignment, headings, hidden text and spoilers."""

from __future__ import annotations

from typing import Any, Mapping

from bbfilter.filters.base import BaseFilter
from bbfilter.nodes import TagNode
from bbfilter.schema.definitions import ElementKind, TagDefinition

_ALIGNMENTS = ("left", "center", "right", "justify")


def _aligned(alignment: str) -> dict[str, Any]:
    return {"output_tag": "div", "fixed_attributes": {"class": f"align-{alignment}"}}


def _heading(level: int) -> dict[str, Any]:
    return {
        "output_tag": f"h{level}",
        "allowed_child_kinds": ElementKind.INLINE,
        "convert_line_breaks": False,
    }


class BlockFilter(BaseFilter):
    """Alignment containers, headings, hidden text and spoilers.

    ``[align=right]`` becomes ``<div class="align-right">``; an unknown
    alignment leaves the content unwrapped. ``[spoiler]`` renders through the
    ``spoiler`` template with localized toggle labels.
    """

    NAME = "block"
    TAGS = {
        "align": {
            "output_tag": "div",
            "validation_pattern": r"(?i)^(?:left|center|right|justify)$",
            "attribute_spec": {"default": r"(?i)^(?:left|center|right|justify)$"},
        },
        **{alignment: _aligned(alignment) for alignment in _ALIGNMENTS},
        **{f"h{level}": _heading(level) for level in range(1, 7)},
        "hide": {
            "output_tag": "span",
            "fixed_attributes": {"style": "display: none"},
            "element_kind": ElementKind.BOTH,
        },
        "spoiler": {
            "template": "spoiler",
        },
    }

    def prepare_node(self, node: TagNode, definition: TagDefinition) -> TagNode:
        """Turn the ``[align=...]`` value into an alignment class."""
        if node.tag_key == "align" and node.default_attribute:
            return node.with_attributes(**{"class": f"align-{node.default_attribute.strip().lower()}"})
        return node

    def template_variables(self, node: TagNode, definition: TagDefinition) -> Mapping[str, Any]:
        if node.tag_key != "spoiler":
            return {}
        return {
            "label": self.message("spoiler"),
            "show": self.message("show"),
            "hide": self.message("hide"),
        }
