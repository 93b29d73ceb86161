#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Table tags."""

from __future__ import annotations

from typing import Any

from bbfilter.filters.base import BaseFilter
from bbfilter.schema.definitions import ElementKind

_SPAN = r"^\d+$"


def _structural(tag: str, parents: list[str], children: list[str]) -> dict[str, Any]:
    # Whitespace between rows and cells must not turn into <br> markup
    return {
        "output_tag": tag,
        "allowed_child_kinds": ElementKind.BLOCK,
        "convert_line_breaks": False,
        "required_parent_keys": parents,
        "required_child_keys": children,
    }


def _cell(tag: str) -> dict[str, Any]:
    return {
        "output_tag": tag,
        "attribute_spec": {"colspan": _SPAN, "rowspan": _SPAN},
        "required_parent_keys": ["tr"],
    }


class TableFilter(BaseFilter):
    """``[table]`` with ``[thead]``, ``[tbody]``, ``[tr]``, ``[th]`` and ``[td]``."""

    NAME = "table"
    TAGS = {
        "table": {
            "output_tag": "table",
            "fixed_attributes": {"class": "bb-table"},
            "allowed_child_kinds": ElementKind.BLOCK,
            "convert_line_breaks": False,
            "required_child_keys": ["thead", "tbody", "tr"],
        },
        "thead": _structural("thead", ["table"], ["tr"]),
        "tbody": _structural("tbody", ["table"], ["tr"]),
        "tr": _structural("tr", ["table", "thead", "tbody"], ["th", "td"]),
        "th": _cell("th"),
        "td": _cell("td"),
    }
