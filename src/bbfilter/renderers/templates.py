#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Template adapters used by tags that render through a template.

A template adapter turns a template reference plus an explicit variable
mapping into text. The bundled :class:`JinjaTemplateAdapter` uses Jinja2;
any object with a matching ``render`` method can stand in for it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Protocol

from bbfilter.constants import DEFAULT_STRICT_UNDEFINED, DEFAULT_TEMPLATE_SUFFIX, DEPS_JINJA
from bbfilter.exceptions import RenderingError, TemplateNotFoundError
from bbfilter.utils.decorators import debug_timer, requires_dependencies

if TYPE_CHECKING:
    from jinja2 import Environment

    from bbfilter.options.filter import FilterOptions

logger = logging.getLogger(__name__)

BUNDLED_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class TemplateAdapter(Protocol):
    """Render a named template against an explicit variable mapping."""

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        """Return the rendered text.

        Raises
        ------
        TemplateNotFoundError
            If ``template`` cannot be located

        """
        ...


class JinjaTemplateAdapter:
    """Render tag templates with Jinja2.

    Templates see only the variables passed to :meth:`render`: the
    environment has no globals and no extra context. Autoescaping is off
    because the ``content`` variable holds already-rendered markup;
    templates escape attribute variables themselves with ``|e``.

    Parameters
    ----------
    template_dir : str or Path, optional
        Directory to load ``<template><suffix>`` files from. Defaults to the
        templates bundled with bbfilter.
    suffix : str, default ".html"
        Suffix appended to template references
    templates : Mapping[str, str], optional
        In-memory template sources keyed by template reference. When given,
        ``template_dir`` is ignored.
    strict_undefined : bool, default False
        Raise on undefined variables instead of rendering them empty

    Examples
    --------
        >>> adapter = JinjaTemplateAdapter(templates={"hello": "Hi {{ name|e }}"})
        >>> adapter.render("hello", {"name": "<you>"})
        'Hi &lt;you&gt;'

    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        suffix: str = DEFAULT_TEMPLATE_SUFFIX,
        templates: Mapping[str, str] | None = None,
        strict_undefined: bool = DEFAULT_STRICT_UNDEFINED,
    ):
        """Initialize the adapter; the Jinja2 environment is created on first use."""
        self.template_dir = Path(template_dir) if template_dir else BUNDLED_TEMPLATE_DIR
        self.suffix = suffix
        self.templates = dict(templates) if templates is not None else None
        self.strict_undefined = strict_undefined
        self._env: Environment | None = None

    @classmethod
    def from_options(cls, options: FilterOptions) -> JinjaTemplateAdapter:
        """Build an adapter from filter options."""
        return cls(
            template_dir=options.template_dir,
            suffix=options.template_suffix,
            strict_undefined=options.strict_undefined,
        )

    def template_name(self, template: str) -> str:
        """Return the loader name for a template reference."""
        if self.templates is not None:
            return template
        return f"{template}{self.suffix}"

    def _get_environment(self) -> Environment:
        if self._env is not None:
            return self._env

        from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined, Undefined

        if self.templates is not None:
            loader: Any = DictLoader(self.templates)
        else:
            loader = FileSystemLoader(str(self.template_dir))

        # Content is pre-rendered markup; attribute escaping is done in templates.
        # nosemgrep: python.flask.security.xss.audit.direct-use-of-jinja2.direct-use-of-jinja2
        env = Environment(  # nosec B701
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined if self.strict_undefined else Undefined,
        )
        env.globals.clear()
        self._env = env
        return env

    @requires_dependencies("jinja", DEPS_JINJA)
    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        """Render ``template`` with exactly ``variables`` in scope.

        Raises
        ------
        TemplateNotFoundError
            If the template file (or in-memory entry) does not exist
        RenderingError
            If the template fails while rendering

        """
        from jinja2 import TemplateError, TemplateNotFound

        env = self._get_environment()
        name = self.template_name(template)

        try:
            compiled = env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(template, original_error=e) from e

        logger.debug("Rendering template %s", name)
        with debug_timer(logger, f"Template {name}"):
            try:
                return compiled.render(dict(variables))
            except TemplateNotFound as e:
                # Raised by {% include %} or {% extends %} inside the template
                raise TemplateNotFoundError(e.name or template, original_error=e) from e
            except TemplateError as e:
                raise RenderingError(
                    f"Template {template} failed to render: {e}", rendering_stage="template", original_error=e
                ) from e
