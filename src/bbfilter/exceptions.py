#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbfilter library.

This module defines specialized exception classes for the error conditions
that can occur while resolving tag definitions and rendering tag nodes.

Exception Hierarchy
-------------------
- BBFilterError (base exception)

  - ValidationError (invalid tag overrides or options)

  - RenderingError (output generation failures)
    - TemplateNotFoundError (template asset cannot be located)
    - UndefinedTagError (no definition could be resolved for a tag)

  - ConfigError (configuration file loading failures)

  - DependencyError (missing/incompatible packages)

Pattern mismatches and unknown tag keys are not errors: they fall back to
passing the content through unchanged.

"""

from __future__ import annotations

from typing import Any


class BBFilterError(Exception):
    """Base exception class for all bbfilter-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(BBFilterError):
    """Exception raised for invalid tag overrides or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter (e.g. an override field name)
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class RenderingError(BBFilterError):
    """Exception raised when rendering a tag node fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    tag_key : str, optional
        Key of the tag being rendered
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    Attributes
    ----------
    tag_key : str or None
        The tag whose rendering failed
    rendering_stage : str or None
        Where in the rendering process the error occurred

    """

    def __init__(
        self,
        message: str,
        tag_key: str | None = None,
        rendering_stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.tag_key = tag_key
        self.rendering_stage = rendering_stage


class TemplateNotFoundError(RenderingError):
    """Exception raised when a tag's template cannot be located.

    This is fatal to the render call that raised it. Callers decide the
    fallback, e.g. substituting the raw markup for the affected node.

    Parameters
    ----------
    template : str
        The template reference that could not be resolved
    tag_key : str, optional
        Key of the tag being rendered
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        template: str,
        tag_key: str | None = None,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the template not found error."""
        if message is None:
            message = f"Template file {template} does not exist."
        super().__init__(message, tag_key=tag_key, rendering_stage="template", original_error=original_error)
        self.template = template


class UndefinedTagError(RenderingError):
    """Exception raised when no tag definition could be resolved.

    Resolution never fails for unknown keys, so this signals a broken
    registry rather than bad input.

    Parameters
    ----------
    tag_key : str
        Key of the tag that has no definition
    message : str, optional
        Custom error message. If not provided, uses default message

    """

    def __init__(self, tag_key: str, message: str | None = None):
        """Initialize the undefined tag error."""
        if message is None:
            message = f"No tag definition could be resolved for [{tag_key}]"
        super().__init__(message, tag_key=tag_key, rendering_stage="resolve")


class ConfigError(BBFilterError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path to the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the config error with path and message."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class DependencyError(BBFilterError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name} support requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name} support has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
