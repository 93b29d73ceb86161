#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Quotation tag."""

from __future__ import annotations

from typing import Any, Mapping

from bbfilter.constants import DEFAULT_ATTRIBUTE
from bbfilter.filters.base import BaseFilter
from bbfilter.nodes import TagNode
from bbfilter.schema.definitions import TagDefinition


class QuoteFilter(BaseFilter):
    """``[quote]`` blocks rendered through the ``quote`` template.

    ``[quote="Ann"]`` names the author, shown in a localized heading.
    """

    NAME = "quote"
    TAGS = {
        "quote": {
            "template": "quote",
            "attribute_spec": {DEFAULT_ATTRIBUTE: r"^[^\[\]]+$", "date": r"^[-\w:/ ,.]+$"},
            "attribute_rename": {DEFAULT_ATTRIBUTE: "author"},
            "max_nesting_depth": 3,
        },
    }

    def template_variables(self, node: TagNode, definition: TagDefinition) -> Mapping[str, Any]:
        author = node.default_attribute
        if not author:
            return {}
        return {"heading": self.message("quoteBy", {"author": author})}
