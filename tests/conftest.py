"""Pytest configuration and shared fixtures for the bbfilter test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from bbfilter.logging_utils import PACKAGE_LOGGER
from bbfilter.messages import MessageCatalog
from bbfilter.options import FilterOptions
from bbfilter.renderers.templates import JinjaTemplateAdapter

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20, suppress_health_check=[HealthCheck.function_scoped_fixture])
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "property: Hypothesis property-based tests")


class RecordingTemplateAdapter:
    """Template adapter that records calls and returns a fixed string."""

    def __init__(self, output: str = "<rendered/>"):
        self.output = output
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        self.calls.append((template, dict(variables)))
        return self.output


@pytest.fixture
def recording_adapter() -> RecordingTemplateAdapter:
    """Provide a template adapter that records the variables it receives."""
    return RecordingTemplateAdapter()


@pytest.fixture
def english_messages() -> MessageCatalog:
    """Provide the bundled message catalog in English."""
    return MessageCatalog.load(locale="en-us")


@pytest.fixture
def bundled_adapter() -> JinjaTemplateAdapter:
    """Provide a Jinja adapter over the bundled templates."""
    return JinjaTemplateAdapter()


@pytest.fixture
def xhtml_options() -> FilterOptions:
    return FilterOptions(output_dialect="xhtml")


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no configuration in scope.

    Returns
    -------
    Path
        The temporary working directory

    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BBFILTER_CONFIG", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers the CLI installs on the package logger."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
