#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Basic text formatting tags."""

from __future__ import annotations

from bbfilter.filters.base import BaseFilter
from bbfilter.schema.definitions import ElementKind

_INLINE = {"element_kind": ElementKind.INLINE, "allowed_child_kinds": ElementKind.INLINE}


class DefaultFilter(BaseFilter):
    """Bold, italic, underline, strike-through, sub/superscript and breaks.

    ``[abbr=Title]text[/abbr]`` puts the positional value in a ``title``
    attribute. ``[br]`` and ``[hr]`` are void elements.
    """

    NAME = "default"
    TAGS = {
        "b": {"output_tag": "b", **_INLINE},
        "i": {"output_tag": "i", **_INLINE},
        "u": {"output_tag": "u", **_INLINE},
        "s": {"output_tag": "del", **_INLINE},
        "sub": {"output_tag": "sub", **_INLINE},
        "sup": {"output_tag": "sup", **_INLINE},
        "abbr": {
            "output_tag": "abbr",
            "attribute_spec": {"default": r"^[^\[\]]+$"},
            "attribute_rename": {"default": "title"},
            **_INLINE,
        },
        "br": {
            "output_tag": {"html": "br", "xhtml": "br"},
            "self_closing": True,
            "element_kind": ElementKind.NONE,
            "allowed_child_kinds": ElementKind.NONE,
        },
        "hr": {
            "output_tag": "hr",
            "self_closing": True,
            "element_kind": ElementKind.BLOCK,
            "allowed_child_kinds": ElementKind.NONE,
        },
    }
