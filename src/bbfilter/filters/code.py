#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Code tags."""

from __future__ import annotations

from bbfilter.constants import DEFAULT_ATTRIBUTE
from bbfilter.filters.base import BaseFilter
from bbfilter.schema.definitions import ElementKind


class CodeFilter(BaseFilter):
    """``[code]`` blocks and inline ``[var]`` spans.

    Code content is entity-escaped, keeps its newlines without ``<br>``
    markup, and nested markup inside it is left unparsed. ``[code=python]``
    passes the language to the template as ``lang``.
    """

    NAME = "code"
    TAGS = {
        "code": {
            "template": "code",
            "attribute_spec": {DEFAULT_ATTRIBUTE: r"^[-\w+#]+$"},
            "attribute_rename": {DEFAULT_ATTRIBUTE: "lang"},
            "allowed_child_kinds": ElementKind.NONE,
            "convert_line_breaks": False,
            "preserve_nested_markup": True,
            "escape_content": True,
        },
        "var": {
            "output_tag": "var",
            "element_kind": ElementKind.INLINE,
            "allowed_child_kinds": ElementKind.INLINE,
        },
    }
