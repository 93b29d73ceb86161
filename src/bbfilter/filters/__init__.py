#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Built-in tag filters.

Each filter owns a group of related tag keys. ``DEFAULT_FILTERS`` lists the
built-in filter classes in lookup order.
"""

from bbfilter.filters.base import BaseFilter, find_filter
from bbfilter.filters.block import BlockFilter
from bbfilter.filters.code import CodeFilter
from bbfilter.filters.default import DefaultFilter
from bbfilter.filters.image import ImageFilter
from bbfilter.filters.lists import ListFilter
from bbfilter.filters.quote import QuoteFilter
from bbfilter.filters.table import TableFilter
from bbfilter.filters.url import UrlFilter

DEFAULT_FILTERS: tuple[type[BaseFilter], ...] = (
    DefaultFilter,
    BlockFilter,
    UrlFilter,
    ImageFilter,
    QuoteFilter,
    CodeFilter,
    ListFilter,
    TableFilter,
)

__all__ = [
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
]
