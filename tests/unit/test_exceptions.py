#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the exception hierarchy and dependency checks."""

from unittest.mock import patch

import pytest

from bbfilter.exceptions import (
    BBFilterError,
    ConfigError,
    DependencyError,
    RenderingError,
    TemplateNotFoundError,
    UndefinedTagError,
    ValidationError,
)
from bbfilter.utils.decorators import requires_dependencies


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test exception types and their attributes."""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            RenderingError("bad"),
            TemplateNotFoundError("quote"),
            UndefinedTagError("b"),
            ConfigError("bad"),
            DependencyError("jinja", [("jinja2", ">=3.1.0")]),
        ],
    )
    def test_all_derive_from_base(self, error):
        assert isinstance(error, BBFilterError)

    def test_template_not_found_is_rendering_error(self):
        error = TemplateNotFoundError("quote", tag_key="quote")
        assert isinstance(error, RenderingError)
        assert str(error) == "Template file quote does not exist."
        assert error.rendering_stage == "template"

    def test_original_error_kept(self):
        cause = OSError("disk")
        error = ConfigError("failed", config_path="x.toml", original_error=cause)
        assert error.original_error is cause
        assert error.config_path == "x.toml"

    def test_dependency_message(self):
        error = DependencyError("jinja", [("jinja2", ">=3.1.0")])
        assert "jinja support requires the following packages: 'jinja2>=3.1.0'" in str(error)
        assert 'pip install --upgrade "jinja2>=3.1.0"' in str(error)

    def test_dependency_version_mismatch_message(self):
        error = DependencyError("jinja", [], version_mismatches=[("jinja2", ">=3.1.0", "2.11.3")])
        assert "requires >=3.1.0, but 2.11.3 is installed" in str(error)


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the dependency-checking decorator."""

    def test_available_dependency(self):
        @requires_dependencies("test", [("pytest", "pytest", "")])
        def run():
            return "ran"

        assert run() == "ran"

    def test_missing_dependency(self):
        @requires_dependencies("test", [("not-a-real-package", "not_a_real_package", ">=1.0")])
        def run():
            return "ran"

        with pytest.raises(DependencyError) as exc_info:
            run()
        assert exc_info.value.missing_packages == [("not-a-real-package", ">=1.0")]
        assert isinstance(exc_info.value.original_import_error, ImportError)

    def test_version_mismatch(self):
        @requires_dependencies("test", [("pytest", "pytest", ">=999.0")])
        def run():
            return "ran"

        with pytest.raises(DependencyError) as exc_info:
            run()
        assert exc_info.value.version_mismatches[0][:2] == ("pytest", ">=999.0")

    def test_version_check_uses_installed_metadata(self):
        @requires_dependencies("test", [("pytest", "pytest", ">=1.0")])
        def run():
            return "ran"

        with patch("bbfilter.utils.decorators.check_version_requirement", return_value=(False, "0.1")):
            with pytest.raises(DependencyError, match="0.1 is installed"):
                run()
