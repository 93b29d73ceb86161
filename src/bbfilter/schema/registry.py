#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbfilter/schema/registry.py
"""Registry resolving tag keys into complete tag definitions.

"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Iterator, Mapping

from bbfilter.schema.definitions import (
    DEFAULT_DEFINITION,
    TagDefinition,
    TagOverride,
    coerce_override,
    merge_definition,
)

logger = logging.getLogger(__name__)


class TagSchemaRegistry:
    """Map tag keys to overrides and resolve them into definitions.

    Overrides are validated when registered, so ``resolve`` never fails.
    Definitions of registered keys are cached until the key is registered
    again; a definition merged from an override that was replaced during the
    merge is returned but not cached. Unknown keys are merged on every call.

    Parameters
    ----------
    overrides : Mapping[str, Mapping[str, Any]], optional
        Initial overrides keyed by tag key
    defaults : TagDefinition, optional
        Record every override is merged over

    Examples
    --------
        >>> registry = TagSchemaRegistry({"b": {"output_tag": "strong"}})
        >>> registry.resolve("b").output_tag.resolve_for("html")
        'strong'
        >>> registry.resolve("unknown").key
        'unknown'

    """

    def __init__(
        self,
        overrides: Mapping[str, TagOverride] | None = None,
        defaults: TagDefinition = DEFAULT_DEFINITION,
    ):
        """Initialize the registry and validate the initial overrides."""
        self._defaults = defaults
        self._overrides: dict[str, Mapping] = {}
        self._resolved: dict[str, TagDefinition] = {}
        self._lock = threading.Lock()

        for key, override in (overrides or {}).items():
            self.register(key, override)

    def register(self, key: str, override: TagOverride) -> None:
        """Add or replace the override for ``key``.

        Raises
        ------
        ValidationError
            If the override names an unknown field or holds an invalid value

        """
        coerce_override(override, key)
        with self._lock:
            self._overrides[key] = MappingProxyType(dict(override))
            self._resolved.pop(key, None)

    def resolve(self, key: str) -> TagDefinition:
        """Return the complete definition for ``key``.

        Unknown keys resolve to the default record with ``key`` filled in and
        are not cached.
        """
        with self._lock:
            definition = self._resolved.get(key)
            override = self._overrides.get(key)

        if definition is not None:
            return definition

        if override is None:
            logger.debug("No override registered for [%s], using defaults", key)
            return merge_definition(self._defaults, {}, key)

        definition = merge_definition(self._defaults, override, key)
        with self._lock:
            # A register() during the merge has replaced the override
            if self._overrides.get(key) is not override:
                return definition
            return self._resolved.setdefault(key, definition)

    def list_definitions(self) -> dict[str, TagDefinition]:
        """Return resolved definitions for every registered key."""
        return {key: self.resolve(key) for key in list(self._overrides)}

    def overrides(self) -> Mapping[str, Mapping]:
        """Return a read-only view of the registered overrides."""
        return MappingProxyType(self._overrides)

    def __contains__(self, key: object) -> bool:
        return key in self._overrides

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._overrides))

    def __len__(self) -> int:
        return len(self._overrides)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({sorted(self._overrides)!r})"
