#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Ordered and unordered list tags."""

from __future__ import annotations

from bbfilter.constants import DEFAULT_ATTRIBUTE
from bbfilter.filters.base import BaseFilter
from bbfilter.schema.definitions import ElementKind

_CONTAINER = {
    "allowed_child_kinds": ElementKind.BLOCK,
    "convert_line_breaks": False,
    "required_child_keys": ["li"],
}


class ListFilter(BaseFilter):
    """``[list]``, ``[olist]`` and their ``[li]`` items.

    ``[olist=a]`` selects the numbering style through the ``type``
    attribute.
    """

    NAME = "list"
    TAGS = {
        "list": {"output_tag": "ul", **_CONTAINER},
        "olist": {
            "output_tag": "ol",
            "attribute_spec": {DEFAULT_ATTRIBUTE: r"^[1aAiI]$"},
            "attribute_rename": {DEFAULT_ATTRIBUTE: "type"},
            **_CONTAINER,
        },
        "li": {
            "output_tag": "li",
            "required_parent_keys": ["list", "olist"],
        },
    }
