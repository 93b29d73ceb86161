#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the tag sets of the built-in filters."""

import pytest

from bbfilter.filters import (
    DEFAULT_FILTERS,
    BlockFilter,
    CodeFilter,
    DefaultFilter,
    ImageFilter,
    ListFilter,
    QuoteFilter,
    TableFilter,
    UrlFilter,
)
from bbfilter.nodes import TagNode
from bbfilter.schema import ElementKind


def render(filter_class, key, attributes=None, body="", dialect=None, **kwargs):
    return filter_class(**kwargs).render(TagNode(key, attributes or {}, body), dialect=dialect)


@pytest.mark.unit
class TestBuiltinFilterSet:
    """Test the filter list as a whole."""

    def test_names_are_unique(self):
        names = [filter_class.NAME for filter_class in DEFAULT_FILTERS]
        assert len(names) == len(set(names))

    def test_tag_keys_are_unique(self):
        keys = [key for filter_class in DEFAULT_FILTERS for key in filter_class.TAGS]
        assert len(keys) == len(set(keys))

    @pytest.mark.parametrize("filter_class", DEFAULT_FILTERS)
    def test_definitions_resolve(self, filter_class):
        """Every built-in override passes validation."""
        definitions = filter_class().list_definitions()
        assert set(definitions) == set(filter_class.TAGS)


@pytest.mark.unit
class TestDefaultFilter:
    """Test basic text formatting tags."""

    @pytest.mark.parametrize(
        "key,tag", [("b", "b"), ("i", "i"), ("u", "u"), ("s", "del"), ("sub", "sub"), ("sup", "sup")]
    )
    def test_inline_tags(self, key, tag):
        assert render(DefaultFilter, key, body="x") == f"<{tag}>x</{tag}>"

    def test_inline_kinds(self):
        definition = DefaultFilter().resolve("b")
        assert definition.element_kind is ElementKind.INLINE
        assert not definition.accepts_child_kind(ElementKind.BLOCK)

    def test_abbr_title(self):
        html = render(DefaultFilter, "abbr", {"default": "Hyper Text Markup Language"}, "HTML")
        assert html == '<abbr title="Hyper Text Markup Language">HTML</abbr>'

    def test_br(self):
        assert render(DefaultFilter, "br", dialect="html") == "<br>"
        assert render(DefaultFilter, "br", dialect="xhtml") == "<br/>"

    def test_hr(self):
        assert render(DefaultFilter, "hr", body="ignored", dialect="xhtml") == "<hr/>"

    def test_line_breaks(self):
        assert render(DefaultFilter, "b", body="a\nb") == "<b>a<br>\nb</b>"


@pytest.mark.unit
class TestBlockFilter:
    """Test alignment, heading and hidden-content tags."""

    @pytest.mark.parametrize("value", ["right", "RIGHT", "Right"])
    def test_align(self, value):
        assert render(BlockFilter, "align", {"default": value}, "x") == '<div class="align-right">x</div>'

    @pytest.mark.parametrize("value", ["top", 'right" onclick="x', ""])
    def test_align_invalid_passes_content(self, value):
        assert render(BlockFilter, "align", {"default": value}, "x") == "x"

    @pytest.mark.parametrize("key", ["left", "center", "right", "justify"])
    def test_alignment_shortcuts(self, key):
        assert render(BlockFilter, key, body="x") == f'<div class="align-{key}">x</div>'

    def test_shortcut_class_cannot_be_replaced(self):
        assert render(BlockFilter, "center", {"class": "evil"}, "x") == '<div class="align-center">x</div>'

    @pytest.mark.parametrize("level", range(1, 7))
    def test_headings(self, level):
        assert render(BlockFilter, f"h{level}", body="a\nb") == f"<h{level}>a\nb</h{level}>"

    def test_hide(self):
        assert render(BlockFilter, "hide", body="x") == '<span style="display: none">x</span>'

    def test_spoiler_variables(self, recording_adapter):
        render(BlockFilter, "spoiler", body="x", template_adapter=recording_adapter)
        assert recording_adapter.calls == [
            ("spoiler", {"label": "Spoiler", "show": "Show", "hide": "Hide", "content": "x"})
        ]


@pytest.mark.unit
class TestUrlFilter:
    """Test link and e-mail tags."""

    def test_url_with_target(self):
        html = render(UrlFilter, "url", {"default": "http://example.com"}, "Example")
        assert html == '<a href="http://example.com">Example</a>'

    def test_url_from_body(self):
        html = render(UrlFilter, "url", body=" https://example.com/a ")
        assert html == '<a href="https://example.com/a"> https://example.com/a </a>'

    def test_url_query_is_escaped(self):
        html = render(UrlFilter, "url", {"default": "http://x.com/?a=1&b=2"}, "x")
        assert html == '<a href="http://x.com/?a=1&amp;b=2">x</a>'

    @pytest.mark.parametrize("target", ["relative/path", "/local", "#top", "ftp://files.example.com/a"])
    def test_url_allowed_targets(self, target):
        expected_ok = target != "relative/path"
        html = render(UrlFilter, "url", {"default": target}, "x")
        assert (html == f'<a href="{target}">x</a>') is expected_ok

    @pytest.mark.parametrize(
        "target", ["javascript:alert(1)", "data:text/html,x", 'http://x.com/" onclick="alert(1)', "vbscript:x"]
    )
    def test_url_rejected_targets(self, target):
        assert render(UrlFilter, "url", {"default": target}, "click") == "click"

    def test_email_from_body(self):
        html = render(UrlFilter, "email", body="me@example.com")
        assert html == '<a href="mailto:me@example.com">me@example.com</a>'

    def test_email_with_target(self):
        html = render(UrlFilter, "email", {"default": "mailto:me@example.co.uk"}, "Mail me")
        assert html == '<a href="mailto:me@example.co.uk">Mail me</a>'

    @pytest.mark.parametrize("address", ["not an email", "me@localhost", "me@@example.com"])
    def test_email_invalid(self, address):
        assert render(UrlFilter, "email", body=address) == address


@pytest.mark.unit
class TestImageFilter:
    """Test the image tag."""

    def test_image(self):
        html = render(ImageFilter, "img", body="http://example.com/a.png", dialect="xhtml")
        assert html == '<img src="http://example.com/a.png" alt=""/>'

    def test_image_html(self):
        assert render(ImageFilter, "img", body="/a.png", dialect="html") == '<img src="/a.png" alt="">'

    def test_positional_size(self):
        html = render(ImageFilter, "img", {"default": "200x100"}, "/a.png")
        assert html == '<img src="/a.png" alt="" width="200" height="100">'

    def test_size_attributes(self):
        html = render(ImageFilter, "img", {"width": "50%", "height": "tall", "onerror": "x"}, "/a.png")
        assert html == '<img src="/a.png" alt="" width="50%">'

    def test_alt_is_escaped(self):
        html = render(ImageFilter, "img", {"alt": 'a "b"'}, "/a.png")
        assert html == '<img src="/a.png" alt="a &quot;b&quot;">'

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "http://example.com/a.exe", "a.png"])
    def test_invalid_url(self, url):
        assert render(ImageFilter, "img", body=url) == url


@pytest.mark.unit
class TestQuoteAndCodeFilters:
    """Test the templated quote and code tags."""

    def test_quote_with_author(self, recording_adapter):
        render(QuoteFilter, "quote", {"default": "Ann"}, "hi", template_adapter=recording_adapter)
        assert recording_adapter.calls == [
            ("quote", {"author": "Ann", "heading": "Quote by Ann", "content": "hi"})
        ]

    def test_quote_without_author(self, recording_adapter):
        render(QuoteFilter, "quote", body="hi", template_adapter=recording_adapter)
        assert recording_adapter.calls == [("quote", {"content": "hi"})]

    def test_quote_depth(self):
        assert QuoteFilter().resolve("quote").max_nesting_depth == 3

    def test_code_variables(self, recording_adapter):
        render(CodeFilter, "code", {"default": "python"}, "<b>\nx", template_adapter=recording_adapter)
        assert recording_adapter.calls == [("code", {"lang": "python", "content": "&lt;b&gt;\nx"})]

    def test_code_definition(self):
        definition = CodeFilter().resolve("code")
        assert definition.preserve_nested_markup is True
        assert definition.allowed_child_kinds is ElementKind.NONE

    def test_var(self):
        assert render(CodeFilter, "var", body="x") == "<var>x</var>"


@pytest.mark.unit
class TestListAndTableFilters:
    """Test list and table structure tags."""

    def test_list(self):
        assert render(ListFilter, "list", body="\n<li>a</li>\n") == "<ul>\n<li>a</li>\n</ul>"

    def test_olist_type(self):
        assert render(ListFilter, "olist", {"default": "a"}, "x") == '<ol type="a">x</ol>'

    def test_li(self):
        assert render(ListFilter, "li", body="a") == "<li>a</li>"

    def test_list_structure(self):
        definitions = ListFilter().list_definitions()
        assert definitions["li"].accepts_parent("olist")
        assert not definitions["li"].accepts_parent("table")
        assert definitions["list"].accepts_child("li")
        assert not definitions["list"].accepts_child("b")

    def test_table(self):
        assert render(TableFilter, "table", body="\n<tr></tr>\n") == '<table class="bb-table">\n<tr></tr>\n</table>'

    def test_cell_span(self):
        assert render(TableFilter, "td", {"colspan": "2"}, "x") == '<td colspan="2">x</td>'

    def test_table_structure(self):
        definitions = TableFilter().list_definitions()
        assert definitions["tr"].accepts_parent("tbody")
        assert definitions["tr"].accepts_child("th")
        assert not definitions["td"].accepts_parent("table")
        assert definitions["td"].accepts_attribute("rowspan", "3")
        assert not definitions["td"].accepts_attribute("rowspan", "many")
