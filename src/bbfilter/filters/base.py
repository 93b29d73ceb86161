#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbfilter/filters/base.py
"""Base class for tag filters.

A filter owns a set of tag keys. Subclasses declare the tags they handle as
partial overrides in ``TAGS``; every field left out takes the default value
of :class:`~bbfilter.schema.TagDefinition`:

    >>> class TextFilter(BaseFilter):
    ...     NAME = "text"
    ...     TAGS = {
    ...         "b": {"output_tag": "b", "element_kind": "inline", "allowed_child_kinds": "inline"},
    ...         "sup": {"output_tag": "sup", "element_kind": "inline"},
    ...     }
    >>> TextFilter().render(TagNode("b", body_content="bold"))
    '<b>bold</b>'

"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, Mapping, Optional

from bbfilter.constants import OUTPUT_DIALECTS, OutputDialect
from bbfilter.exceptions import UndefinedTagError, ValidationError
from bbfilter.messages import MessageCatalog, MessageLookup
from bbfilter.nodes import TagNode
from bbfilter.options.filter import FilterOptions
from bbfilter.renderers.tag import render_node
from bbfilter.renderers.templates import JinjaTemplateAdapter, TemplateAdapter
from bbfilter.schema.definitions import TagDefinition, TagOverride
from bbfilter.schema.registry import TagSchemaRegistry

logger = logging.getLogger(__name__)


class BaseFilter:
    """Resolve and render the tags a filter owns.

    Parameters
    ----------
    options : FilterOptions or None, default None
        Filter configuration; defaults are used when None
    messages : MessageLookup or None, default None
        Message lookup; the bundled catalog for ``options.locale`` when None
    template_adapter : TemplateAdapter or None, default None
        Adapter for templated tags; a :class:`JinjaTemplateAdapter` built
        from ``options`` when None

    Attributes
    ----------
    NAME : str
        Short name of the filter, used by the command line
    TAGS : dict[str, dict[str, Any]]
        Partial tag definitions keyed by tag key

    """

    NAME: ClassVar[str] = "base"
    TAGS: ClassVar[dict[str, dict[str, Any]]] = {}

    def __init__(
        self,
        options: FilterOptions | None = None,
        messages: MessageLookup | None = None,
        template_adapter: TemplateAdapter | None = None,
    ):
        """Initialize the filter and validate its tag overrides."""
        if options is not None and not isinstance(options, FilterOptions):
            raise ValidationError(
                f"{type(self).__name__} expected options of type 'FilterOptions' "
                f"but received '{type(options).__name__}'",
                parameter_name="options",
                parameter_value=type(options),
            )

        self.options: FilterOptions = options or FilterOptions()
        self.messages: MessageLookup = (
            messages if messages is not None else MessageCatalog.load(locale=self.options.locale)
        )
        self.template_adapter: TemplateAdapter = (
            template_adapter if template_adapter is not None else JinjaTemplateAdapter.from_options(self.options)
        )
        self.registry = TagSchemaRegistry(self._collect_overrides())

    def _collect_overrides(self) -> dict[str, TagOverride]:
        """Merge configured overrides field by field over the class overrides.

        Configured overrides for tags this filter does not own are ignored;
        they belong to other filters.
        """
        overrides: dict[str, dict[str, Any]] = {key: dict(override) for key, override in self.TAGS.items()}

        for key, extra in self.options.tag_overrides.items():
            if key in overrides:
                logger.debug("Applying configured override for [%s] in %s filter", key, self.NAME)
                overrides[key].update(extra)

        return overrides

    # Schema
    # ---------------------------------------------------------------------

    def resolve(self, key: str) -> TagDefinition:
        """Return the complete definition for ``key`` (defaults if not owned)."""
        return self.registry.resolve(key)

    tag = resolve

    def list_definitions(self) -> dict[str, TagDefinition]:
        """Return resolved definitions for every tag this filter owns."""
        return self.registry.list_definitions()

    tags = list_definitions

    def owns(self, key: str) -> bool:
        return key in self.registry

    # Messages
    # ---------------------------------------------------------------------

    def message(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        """Return a localized message from the filter's message lookup."""
        return self.messages.message(key, variables or {})

    # Rendering
    # ---------------------------------------------------------------------

    def prepare_node(self, node: TagNode, definition: TagDefinition) -> TagNode:
        """Return the node to render; subclasses derive attributes here."""
        return node

    def template_variables(self, node: TagNode, definition: TagDefinition) -> Mapping[str, Any]:
        """Return extra variables for templated tags, none by default."""
        return {}

    def render(self, node: TagNode, dialect: Optional[OutputDialect] = None) -> str:
        """Render a tag node owned by this filter.

        Parameters
        ----------
        node : TagNode
            Node to render, with nested tags already rendered
        dialect : {"html", "xhtml"}, optional
            Output dialect; ``options.output_dialect`` when None

        Returns
        -------
        str
            Rendered markup, or the node's body when validation fails

        Raises
        ------
        ValidationError
            If ``dialect`` is not a known output dialect
        UndefinedTagError
            If no definition could be resolved for the node
        TemplateNotFoundError
            If the tag's template cannot be located

        """
        dialect = dialect or self.options.output_dialect
        if dialect not in OUTPUT_DIALECTS:
            raise ValidationError(
                f"Unknown output dialect {dialect!r}; expected one of {OUTPUT_DIALECTS}",
                parameter_name="dialect",
                parameter_value=dialect,
            )

        definition = self.resolve(node.tag_key)
        if definition is None:
            raise UndefinedTagError(node.tag_key)

        node = self.prepare_node(node, definition)
        extra_variables = self.template_variables(node, definition) if definition.template else None

        return render_node(definition, node, dialect, self.template_adapter, extra_variables)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tags={sorted(self.TAGS)!r})"


def find_filter(key: str, filters: Iterable[BaseFilter]) -> BaseFilter | None:
    """Return the first filter owning ``key``, or None."""
    for candidate in filters:
        if candidate.owns(key):
            return candidate
    return None
