#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and type definitions shared across bbfilter.

This module contains:

1. Type Definitions - Literal types and type aliases
2. Tag Definition Defaults - values every resolved definition starts from
3. Rendering Constants - dialect-specific markup fragments
4. Configuration Defaults - options, config discovery, dependencies
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OutputDialect = Literal["html", "xhtml"]
OUTPUT_DIALECTS: tuple[OutputDialect, ...] = ("html", "xhtml")

# =============================================================================
# Tag Definition Defaults
# =============================================================================

# Positional pseudo-attribute, e.g. the URL in [url=http://example.com]
DEFAULT_ATTRIBUTE = "default"

# Template variable holding the transformed body content
CONTENT_VARIABLE = "content"

DEFAULT_CONVERT_LINE_BREAKS = True
DEFAULT_SELF_CLOSING = False
DEFAULT_PRESERVE_NESTED_MARKUP = False
DEFAULT_ESCAPE_CONTENT = False
DEFAULT_ESCAPE_ATTRIBUTE_VALUES = True
DEFAULT_MAX_NESTING_DEPTH = -1

# =============================================================================
# Rendering Constants
# =============================================================================

LINE_BREAK_MARKUP: dict[OutputDialect, str] = {
    "html": "<br>",
    "xhtml": "<br/>",
}

# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULT_OUTPUT_DIALECT: OutputDialect = "html"
DEFAULT_LOCALE = "en-us"
DEFAULT_TEMPLATE_SUFFIX = ".html"
DEFAULT_STRICT_UNDEFINED = False

CONFIG_ENV_VAR = "BBFILTER_CONFIG"
CONFIG_FILENAMES = [".bbfilter.toml", ".bbfilter.yaml", ".bbfilter.yml", ".bbfilter.json"]
PYPROJECT_TOOL_SECTION = "bbfilter"

# (install_name, import_name, version_spec)
DEPS_JINJA = [("jinja2", "jinja2", ">=3.1.0")]
