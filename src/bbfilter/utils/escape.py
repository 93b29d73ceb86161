#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbfilter/utils/escape.py
"""HTML escaping and line-break utilities.

These helpers transform tag content and attribute values before they are
placed in generated markup.

"""

from __future__ import annotations

import re
from html.entities import codepoint2name

from bbfilter.constants import LINE_BREAK_MARKUP, OutputDialect

_NEWLINE_PATTERN = re.compile(r"\r\n|\n\r|\n|\r")

# Every character with a named HTML 4 entity, plus the single quote.
_ENTITY_TABLE: dict[int, str] = {codepoint: f"&{name};" for codepoint, name in codepoint2name.items()}
_ENTITY_TABLE[ord("'")] = "&#039;"


def escape_html_entities(text: str) -> str:
    """Convert every character that has an HTML entity into that entity.

    Unlike :func:`html.escape`, this also converts non-ASCII characters that
    have a named entity (``é`` becomes ``&eacute;``), and quotes are always
    escaped, so the result is safe both as element content and inside a
    double- or single-quoted attribute value.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Text with HTML entities

    Examples
    --------
        >>> escape_html_entities("<a href='x'>café & co</a>")
        '&lt;a href=&#039;x&#039;&gt;caf&eacute; &amp; co&lt;/a&gt;'

    """
    if not text:
        return text

    return text.translate(_ENTITY_TABLE)


def convert_line_breaks(text: str, dialect: OutputDialect = "html") -> str:
    r"""Insert a line-break element before every newline sequence.

    The newline characters themselves are kept, so the source line
    structure survives in the output. ``\r\n``, ``\n\r``, ``\n`` and ``\r``
    each count as one newline.

    Parameters
    ----------
    text : str
        Text to transform
    dialect : {"html", "xhtml"}, default "html"
        Output dialect selecting ``<br>`` or ``<br/>``

    Returns
    -------
    str
        Text with line-break markup inserted

    Examples
    --------
        >>> convert_line_breaks("one\ntwo", "xhtml")
        'one<br/>\ntwo'

    """
    if not text:
        return text

    markup = LINE_BREAK_MARKUP[dialect]
    return _NEWLINE_PATTERN.sub(lambda match: markup + match.group(0), text)


def strip_newlines(text: str) -> str:
    r"""Remove every ``\n`` and ``\r`` character from text."""
    return text.replace("\n", "").replace("\r", "")


def format_attributes(attributes: dict[str, str]) -> str:
    """Serialize an attribute mapping as `` name="value"`` pairs.

    Values are written as given; escaping is the caller's decision.

    Examples
    --------
        >>> format_attributes({"href": "/a", "class": "x"})
        ' href="/a" class="x"'

    """
    return "".join(f' {name}="{value}"' for name, value in attributes.items())
