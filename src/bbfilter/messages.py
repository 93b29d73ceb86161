#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Localized message lookup for filters.

Filters use messages for user-facing text they add around content, such as
the "Quote by" heading of a quote block or spoiler toggle labels.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol

from bbfilter.constants import DEFAULT_LOCALE
from bbfilter.exceptions import ConfigError

logger = logging.getLogger(__name__)

BUNDLED_MESSAGES = Path(__file__).parent / "messages.json"


class MessageLookup(Protocol):
    """Return the localized text for a message key."""

    def message(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str: ...


class MessageCatalog:
    """Message lookup backed by a locale -> key -> text mapping.

    Lookups fall back from the requested locale to ``en-us``. Placeholders
    of the form ``{name}`` are replaced with the matching variable; other
    braces are left alone. Missing keys produce an empty string and a
    warning.

    Parameters
    ----------
    messages : Mapping[str, Mapping[str, str]]
        Message texts keyed by locale, then by message key
    locale : str, default "en-us"
        Preferred locale

    Examples
    --------
        >>> catalog = MessageCatalog({"en-us": {"quoteBy": "Quote by {author}"}})
        >>> catalog.message("quoteBy", {"author": "Ann"})
        'Quote by Ann'

    """

    def __init__(self, messages: Mapping[str, Mapping[str, str]], locale: str = DEFAULT_LOCALE):
        """Initialize the catalog with message texts and a locale."""
        self.messages = {loc.lower(): dict(texts) for loc, texts in messages.items()}
        self.locale = locale.lower()

        if self.locale not in self.messages:
            logger.warning("No messages for locale %s, falling back to %s", locale, DEFAULT_LOCALE)

    @classmethod
    def load(cls, path: str | Path | None = None, locale: str = DEFAULT_LOCALE) -> MessageCatalog:
        """Load a catalog from a JSON file (the bundled catalog by default).

        Raises
        ------
        ConfigError
            If the file cannot be read or is not a JSON object of objects

        """
        path = Path(path) if path else BUNDLED_MESSAGES
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load messages from {path}: {e}", config_path=str(path), original_error=e) from e

        if not isinstance(data, dict) or not all(isinstance(texts, dict) for texts in data.values()):
            raise ConfigError(f"Messages file {path} must map locales to objects", config_path=str(path))

        return cls(data, locale=locale)

    @property
    def locales(self) -> list[str]:
        return sorted(self.messages)

    def message(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        """Return the text for ``key`` with placeholders filled in."""
        text = self.messages.get(self.locale, {}).get(key)
        if text is None:
            text = self.messages.get(DEFAULT_LOCALE, {}).get(key)
        if text is None:
            logger.warning("Missing message %r for locale %s", key, self.locale)
            return ""

        for name, value in (variables or {}).items():
            text = text.replace("{" + name + "}", str(value))

        return text
