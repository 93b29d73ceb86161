#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbfilter/options/filter.py
"""Configuration options for tag filters.

This module defines the options shared by every filter instance: the output
dialect, message locale, template lookup, and per-tag overrides loaded from
configuration files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from bbfilter.constants import (
    DEFAULT_LOCALE,
    DEFAULT_OUTPUT_DIALECT,
    DEFAULT_STRICT_UNDEFINED,
    DEFAULT_TEMPLATE_SUFFIX,
    OUTPUT_DIALECTS,
    OutputDialect,
)
from bbfilter.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class FilterOptions(CloneFrozenMixin):
    """Configuration options for a filter instance.

    Parameters
    ----------
    output_dialect : {"html", "xhtml"}, default "html"
        Markup dialect used when a render call does not name one. Controls
        self-closing syntax, the line-break element, and dialect-keyed tags.
    locale : str, default "en-us"
        Locale used for message lookups (quote headings, spoiler labels).
    template_dir : str or None, default None
        Directory holding tag templates. None uses the templates bundled
        with bbfilter.
    template_suffix : str, default ".html"
        Suffix appended to a tag's template name to form the file name.
    strict_undefined : bool, default False
        Raise on undefined template variables instead of rendering them
        empty. Templates testing optional attributes need this off.
    tag_overrides : Mapping[str, Mapping[str, Any]], default empty
        Extra per-tag overrides, merged field by field over the filter's own
        overrides for tags the filter owns.

    Examples
    --------
        >>> options = FilterOptions(output_dialect="xhtml")
        >>> options.create_updated(locale="de-de").locale
        'de-de'

    """

    output_dialect: OutputDialect = field(
        default=DEFAULT_OUTPUT_DIALECT,
        metadata={"help": "Output dialect: html or xhtml", "choices": list(OUTPUT_DIALECTS)},
    )
    locale: str = field(
        default=DEFAULT_LOCALE,
        metadata={"help": "Locale for localized messages"},
    )
    template_dir: str | None = field(
        default=None,
        metadata={"help": "Directory containing tag templates (defaults to bundled templates)"},
    )
    template_suffix: str = field(
        default=DEFAULT_TEMPLATE_SUFFIX,
        metadata={"help": "File suffix appended to template names"},
    )
    strict_undefined: bool = field(
        default=DEFAULT_STRICT_UNDEFINED,
        metadata={"help": "Raise errors for undefined template variables"},
    )
    tag_overrides: Mapping[str, Mapping[str, Any]] = field(
        default_factory=dict,
        metadata={"help": "Per-tag definition overrides keyed by tag"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.output_dialect not in OUTPUT_DIALECTS:
            raise ValueError(f"output_dialect must be one of {OUTPUT_DIALECTS}, got {self.output_dialect!r}")

        if not self.locale:
            raise ValueError("locale must be a non-empty string")

        if not isinstance(self.tag_overrides, Mapping):
            raise ValueError(f"tag_overrides must be a mapping, got {type(self.tag_overrides).__name__}")

        for key, override in self.tag_overrides.items():
            if not isinstance(override, Mapping):
                raise ValueError(f"tag_overrides[{key!r}] must be a mapping, got {type(override).__name__}")

        # Freeze the overrides so a shared options instance cannot be altered
        object.__setattr__(
            self,
            "tag_overrides",
            MappingProxyType({key: MappingProxyType(dict(value)) for key, value in self.tag_overrides.items()}),
        )
