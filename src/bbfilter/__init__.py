"""bbfilter - render BBCode-style tags to HTML from declarative tag definitions.

Each tag key maps to a :class:`~bbfilter.schema.TagDefinition` built by
merging a partial override over a fixed default record. A filter resolves
the definition for a parsed :class:`~bbfilter.nodes.TagNode` and renders it,
either by synthesizing an element or through a Jinja2 template.

Rendering works on one node at a time: the parser that builds the tag tree
renders children first and hands each parent its already-rendered body.

Examples
--------
Render with a built-in filter:

    >>> from bbfilter import TagNode, UrlFilter
    >>> UrlFilter().render(TagNode("url", {"default": "http://example.com"}, "Example"))
    '<a href="http://example.com">Example</a>'

Define tags of your own:

    >>> from bbfilter import BaseFilter
    >>> class MarkFilter(BaseFilter):
    ...     NAME = "mark"
    ...     TAGS = {"mark": {"output_tag": "mark", "element_kind": "inline"}}
    >>> MarkFilter().render(TagNode("mark", body_content="a\\nb"), dialect="xhtml")
    '<mark>a<br/>\\nb</mark>'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "bbfilter requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from bbfilter.exceptions import (  # noqa: E402
    BBFilterError,
    ConfigError,
    DependencyError,
    RenderingError,
    TemplateNotFoundError,
    UndefinedTagError,
    ValidationError,
)
from bbfilter.filters import (  # noqa: E402
    DEFAULT_FILTERS,
    BaseFilter,
    BlockFilter,
    CodeFilter,
    DefaultFilter,
    ImageFilter,
    ListFilter,
    QuoteFilter,
    TableFilter,
    UrlFilter,
    find_filter,
)
from bbfilter.messages import MessageCatalog, MessageLookup  # noqa: E402
from bbfilter.nodes import TagNode  # noqa: E402
from bbfilter.options import FilterOptions  # noqa: E402
from bbfilter.renderers import JinjaTemplateAdapter, TemplateAdapter, render_node  # noqa: E402
from bbfilter.schema import (  # noqa: E402
    ByDialect,
    ElementKind,
    Scalar,
    TagDefinition,
    TagSchemaRegistry,
    merge_definition,
)

__all__ = [
    "__version__",
    # Filters
    "BaseFilter",
    "BlockFilter",
    "CodeFilter",
    "DEFAULT_FILTERS",
    "DefaultFilter",
    "ImageFilter",
    "ListFilter",
    "QuoteFilter",
    "TableFilter",
    "UrlFilter",
    "find_filter",
    # Schema
    "ByDialect",
    "ElementKind",
    "Scalar",
    "TagDefinition",
    "TagSchemaRegistry",
    "merge_definition",
    # Rendering
    "JinjaTemplateAdapter",
    "TagNode",
    "TemplateAdapter",
    "render_node",
    # Messages and options
    "FilterOptions",
    "MessageCatalog",
    "MessageLookup",
    # Exceptions
    "BBFilterError",
    "ConfigError",
    "DependencyError",
    "RenderingError",
    "TemplateNotFoundError",
    "UndefinedTagError",
    "ValidationError",
]
