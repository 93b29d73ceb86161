#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbfilter/renderers/tag.py
"""Render a single tag node into output markup.

:func:`render_node` applies a resolved :class:`TagDefinition` to a
:class:`TagNode`. It is a pure function of its arguments: nested tags are
expected to be rendered already, and nothing outside the call is modified.

Rendering steps, in order:

1. Validation - a definition with a ``validation_pattern`` checks the node's
   ``default`` attribute (or its body); on mismatch the body is returned
   without a wrapper.
2. Content transformation - entity escaping and line-break insertion.
3. Template dispatch - a definition with a ``template`` hands renamed
   attributes plus the content to the template adapter.
4. Direct synthesis - otherwise an element is built from the output tag,
   the renamed and escaped attributes, and the fixed attributes.

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bbfilter.constants import CONTENT_VARIABLE, DEFAULT_ATTRIBUTE, OutputDialect
from bbfilter.exceptions import TemplateNotFoundError, UndefinedTagError
from bbfilter.nodes import TagNode
from bbfilter.renderers.templates import TemplateAdapter
from bbfilter.schema.definitions import TagDefinition
from bbfilter.utils.escape import (
    convert_line_breaks,
    escape_html_entities,
    format_attributes,
    strip_newlines,
)

logger = logging.getLogger(__name__)


def passes_validation(definition: TagDefinition, node: TagNode) -> bool:
    """Return True if the node satisfies the definition's validation pattern.

    The subject is the non-empty ``default`` attribute when present,
    otherwise the body content. Definitions without a pattern always pass.
    """
    if definition.validation_pattern is None:
        return True

    subject = node.default_attribute
    if subject is None:
        subject = node.body_content

    return definition.validation_pattern.search(subject) is not None


def transform_content(definition: TagDefinition, content: str, dialect: OutputDialect) -> str:
    """Apply the definition's escaping and line-break settings to body content.

    Escaping runs first so the inserted line-break markup is not escaped.
    """
    # Escape first: escaping after conversion would turn the inserted <br> into text
    if definition.escape_content:
        content = escape_html_entities(content)

    if definition.convert_line_breaks:
        content = convert_line_breaks(content, dialect)

    return content


def rename_attribute(definition: TagDefinition, name: str) -> str:
    return definition.attribute_rename.get(name, name)


def build_template_variables(
    definition: TagDefinition,
    node: TagNode,
    content: str,
    extra_variables: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Build the variable mapping passed to a tag template.

    Every parsed attribute is included under its renamed name (``default``
    too, unless renamed), values unescaped. ``extra_variables`` are added
    next. The transformed content is bound to ``content`` last and shadows
    any other variable of that name.
    """
    variables: dict[str, Any] = {
        rename_attribute(definition, name): value for name, value in node.attributes.items()
    }
    if extra_variables:
        variables.update(extra_variables)
    variables[CONTENT_VARIABLE] = content
    return variables


def build_output_attributes(definition: TagDefinition, node: TagNode) -> dict[str, str]:
    """Build the attributes of a synthesized element.

    Parsed attributes are renamed, the ``default`` pseudo-attribute is
    dropped (checked after renaming), and values are escaped when the
    definition asks for it. Fixed attributes are applied last and replace a
    parsed attribute with the same output name.
    """
    attributes: dict[str, str] = {}

    for name, value in node.attributes.items():
        name = rename_attribute(definition, name)
        if name == DEFAULT_ATTRIBUTE:
            continue

        attributes[name] = escape_html_entities(value) if definition.escape_attribute_values else value

    attributes.update(definition.fixed_attributes)
    return attributes


def render_template(
    definition: TagDefinition,
    node: TagNode,
    content: str,
    template_adapter: Optional[TemplateAdapter],
    extra_variables: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render a node through the definition's template.

    Parameters
    ----------
    definition : TagDefinition
        Definition with ``template`` set
    node : TagNode
        Node being rendered
    content : str
        Transformed body content
    template_adapter : TemplateAdapter or None
        Adapter executing the template
    extra_variables : Mapping, optional
        Filter-supplied variables added to the attribute variables

    Raises
    ------
    TemplateNotFoundError
        If no adapter is configured or the adapter cannot find the template

    """
    template = definition.template or ""

    if template_adapter is None:
        raise TemplateNotFoundError(
            template, tag_key=definition.key, message=f"No template adapter configured to render {template}"
        )

    variables = build_template_variables(definition, node, content, extra_variables)

    try:
        output = template_adapter.render(template, variables)
    except TemplateNotFoundError as e:
        if e.tag_key is None:
            e.tag_key = definition.key
        raise

    if definition.convert_line_breaks:
        # Templates produce their own line structure
        output = strip_newlines(output)

    return output


def synthesize_element(definition: TagDefinition, node: TagNode, content: str, dialect: OutputDialect) -> str:
    """Build the output element for a node without a template.

    An empty output tag returns the content unwrapped.
    """
    tag = definition.output_tag.resolve_for(dialect)
    if not tag:
        return content

    attributes = format_attributes(build_output_attributes(definition, node))

    if definition.self_closing:
        return f"<{tag}{attributes}/>" if dialect == "xhtml" else f"<{tag}{attributes}>"

    inner = node.content if node.content else content
    return f"<{tag}{attributes}>{inner}</{tag}>"


def render_node(
    definition: Optional[TagDefinition],
    node: TagNode,
    dialect: OutputDialect = "html",
    template_adapter: Optional[TemplateAdapter] = None,
    extra_variables: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render one tag node according to its definition.

    Parameters
    ----------
    definition : TagDefinition or None
        Resolved definition for ``node.tag_key``
    node : TagNode
        Node to render; never modified
    dialect : {"html", "xhtml"}, default "html"
        Output dialect
    template_adapter : TemplateAdapter, optional
        Adapter used when the definition names a template
    extra_variables : Mapping, optional
        Additional template variables supplied by the calling filter

    Returns
    -------
    str
        Rendered markup, or the unmodified body when validation fails

    Raises
    ------
    UndefinedTagError
        If ``definition`` is None
    TemplateNotFoundError
        If the definition's template cannot be rendered

    Examples
    --------
        >>> from bbfilter.schema import TagSchemaRegistry
        >>> registry = TagSchemaRegistry({"b": {"output_tag": "strong"}})
        >>> render_node(registry.resolve("b"), TagNode("b", body_content="hi"))
        '<strong>hi</strong>'

    """
    if definition is None:
        raise UndefinedTagError(node.tag_key)

    if not passes_validation(definition, node):
        logger.debug("Content of [%s] does not match its pattern, passing through", node.tag_key)
        return node.body_content

    content = transform_content(definition, node.body_content, dialect)

    if definition.template:
        return render_template(definition, node, content, template_adapter, extra_variables)

    return synthesize_element(definition, node, content, dialect)
