#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for bbfilter."""

from bbfilter.options.base import CloneFrozenMixin
from bbfilter.options.filter import FilterOptions

__all__ = ["CloneFrozenMixin", "FilterOptions"]
