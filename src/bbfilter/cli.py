#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Command-line interface for bbfilter.

Examples
--------
List the built-in tags::

    $ bbfilter tags
    $ bbfilter tags --filter url --rich

Render one tag::

    $ bbfilter render b --content "bold"
    <b>bold</b>

    $ bbfilter render url --attr default=http://example.com --content Example
    <a href="http://example.com">Example</a>

    $ echo "Quoted text" | bbfilter render quote --attr default=Ann --xhtml

Options are read from ``--config``, the file named by ``BBFILTER_CONFIG``, or
a ``.bbfilter.toml`` (``.yaml``, ``.yml``, ``.json``) or ``pyproject.toml``
found from the working directory upwards. Command-line flags win over the
configuration file.

"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional, Sequence

from bbfilter import __version__
from bbfilter.config import load_config_with_priority, options_from_config
from bbfilter.constants import DEFAULT_ATTRIBUTE
from bbfilter.exceptions import BBFilterError, ConfigError, DependencyError, RenderingError, ValidationError
from bbfilter.filters import DEFAULT_FILTERS, BaseFilter, find_filter
from bbfilter.logging_utils import configure_logging
from bbfilter.nodes import TagNode
from bbfilter.options.filter import FilterOptions
from bbfilter.schema.definitions import ElementKind, TagDefinition

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_RENDERING_ERROR = 1
EXIT_USAGE_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with the ``tags`` and ``render`` commands."""
    parser = argparse.ArgumentParser(
        prog="bbfilter",
        description="Render BBCode-style tags to HTML using declarative tag definitions.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    tags_parser = subparsers.add_parser("tags", help="List the tags each filter defines")
    tags_parser.add_argument("--filter", dest="filter_name", help="Only list tags of this filter")
    tags_parser.add_argument("--rich", action="store_true", help="Use rich terminal output")

    render_parser = subparsers.add_parser("render", help="Render a single tag")
    render_parser.add_argument("key", help="Tag key, e.g. 'b' or 'url'")
    render_parser.add_argument(
        "--attr",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help=f"Tag attribute; use '{DEFAULT_ATTRIBUTE}' for the [tag=value] form (repeatable)",
    )
    render_parser.add_argument("--content", help="Body content (read from stdin when omitted)")
    render_parser.add_argument("--xhtml", action="store_true", help="Render XHTML instead of HTML")
    render_parser.add_argument("--template-dir", help="Directory with tag templates")
    render_parser.add_argument("--locale", help="Locale for localized messages")

    for command_parser in (tags_parser, render_parser):
        command_parser.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")

    return parser


def _parse_attributes(values: Sequence[str]) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise ValidationError(f"Attributes must be given as NAME=VALUE, got {item!r}", "attr", item)
        attributes[name.strip()] = value
    return attributes


def _build_options(parsed: argparse.Namespace) -> FilterOptions:
    """Load configuration and apply command-line overrides on top of it."""
    options = options_from_config(load_config_with_priority(parsed.config))

    updates: dict[str, Any] = {}
    if getattr(parsed, "xhtml", False):
        updates["output_dialect"] = "xhtml"
    if getattr(parsed, "template_dir", None):
        updates["template_dir"] = parsed.template_dir
    if getattr(parsed, "locale", None):
        updates["locale"] = parsed.locale

    return options.create_updated(**updates) if updates else options


def _build_filters(options: FilterOptions) -> list[BaseFilter]:
    return [filter_class(options) for filter_class in DEFAULT_FILTERS]


def _describe_kind(kind: ElementKind) -> str:
    return kind.name.lower()


def _describe_flags(definition: TagDefinition) -> str:
    flags = []
    if definition.self_closing:
        flags.append("self-closing")
    if definition.escape_content:
        flags.append("escape")
    if not definition.convert_line_breaks:
        flags.append("no-br")
    if definition.preserve_nested_markup:
        flags.append("raw")
    if definition.validation_pattern is not None:
        flags.append("validated")
    return ", ".join(flags)


def _gather_tag_rows(filters: Sequence[BaseFilter]) -> list[dict[str, str]]:
    rows = []
    for tag_filter in filters:
        for key, definition in tag_filter.list_definitions().items():
            output = definition.output_tag
            html_tag, xhtml_tag = output.resolve_for("html"), output.resolve_for("xhtml")
            rows.append(
                {
                    "tag": key,
                    "filter": tag_filter.NAME,
                    "output": html_tag if html_tag == xhtml_tag else f"{html_tag} / {xhtml_tag}",
                    "template": definition.template or "",
                    "kind": _describe_kind(definition.element_kind),
                    "children": _describe_kind(definition.allowed_child_kinds),
                    "flags": _describe_flags(definition),
                }
            )
    return rows


def _render_rich_tags(rows: list[dict[str, str]]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"bbfilter tags ({len(rows)} tags)")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Filter", style="blue")
    table.add_column("Output", style="green")
    table.add_column("Template", style="magenta")
    table.add_column("Kind", style="yellow")
    table.add_column("Children", style="yellow")
    table.add_column("Flags", style="white")

    for row in rows:
        table.add_row(
            row["tag"], row["filter"], row["output"], row["template"], row["kind"], row["children"], row["flags"]
        )

    Console().print(table)


def _render_plain_tags(rows: list[dict[str, str]]) -> None:
    print(f"{'Tag':<10} {'Filter':<9} {'Output':<10} {'Template':<10} {'Kind':<7} {'Children':<9} Flags")
    print("-" * 80)
    for row in rows:
        print(
            f"{row['tag']:<10} {row['filter']:<9} {row['output']:<10} {row['template']:<10} "
            f"{row['kind']:<7} {row['children']:<9} {row['flags']}"
        )
    print(f"\nTotal: {len(rows)} tags")


def handle_tags_command(parsed: argparse.Namespace) -> int:
    """List resolved tag definitions.

    Returns
    -------
    int
        Exit code

    """
    filters = _build_filters(_build_options(parsed))

    if parsed.filter_name:
        filters = [f for f in filters if f.NAME == parsed.filter_name]
        if not filters:
            names = ", ".join(filter_class.NAME for filter_class in DEFAULT_FILTERS)
            print(f"Error: Filter '{parsed.filter_name}' not found", file=sys.stderr)
            print(f"Available filters: {names}", file=sys.stderr)
            return EXIT_USAGE_ERROR

    rows = _gather_tag_rows(filters)
    if parsed.rich:
        _render_rich_tags(rows)
    else:
        _render_plain_tags(rows)

    return EXIT_SUCCESS


def handle_render_command(parsed: argparse.Namespace) -> int:
    """Render one tag with the filter that owns it.

    Returns
    -------
    int
        Exit code

    """
    options = _build_options(parsed)
    attributes = _parse_attributes(parsed.attr)

    tag_filter = find_filter(parsed.key, _build_filters(options))
    if tag_filter is None:
        print(f"Error: No filter defines the tag [{parsed.key}]", file=sys.stderr)
        return EXIT_USAGE_ERROR

    body = parsed.content if parsed.content is not None else sys.stdin.read()
    node = TagNode(parsed.key, attributes, body)

    logger.debug("Rendering [%s] with the %s filter", parsed.key, tag_filter.NAME)
    print(tag_filter.render(node))
    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line.

    Parameters
    ----------
    argv : Sequence[str], optional
        Arguments without the program name; ``sys.argv[1:]`` when None

    Returns
    -------
    int
        0 on success, 1 when rendering fails, 2 for usage or configuration
        errors

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_USAGE_ERROR

    configure_logging(
        logging.DEBUG if parsed.trace else parsed.log_level,
        log_file=parsed.log_file,
        trace_mode=parsed.trace,
    )

    handlers = {"tags": handle_tags_command, "render": handle_render_command}

    try:
        return handlers[parsed.command](parsed)
    except (ConfigError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except (RenderingError, DependencyError) as e:
        logger.debug("Rendering failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RENDERING_ERROR
    except BBFilterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RENDERING_ERROR


if __name__ == "__main__":
    sys.exit(main())
