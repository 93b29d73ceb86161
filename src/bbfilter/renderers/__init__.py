#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Node rendering and template adapters."""

from bbfilter.renderers.tag import render_node
from bbfilter.renderers.templates import JinjaTemplateAdapter, TemplateAdapter

__all__ = ["JinjaTemplateAdapter", "TemplateAdapter", "render_node"]
