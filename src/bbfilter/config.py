#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading.

Filter options can be kept in a dedicated file (``.bbfilter.toml``,
``.bbfilter.yaml``, ``.bbfilter.yml`` or ``.bbfilter.json``) or in the
``[tool.bbfilter]`` table of ``pyproject.toml``. A configuration looks like::

    output_dialect = "xhtml"
    locale = "de-de"

    [tags.url]
    fixed_attributes = { rel = "nofollow" }

Top-level keys are :class:`~bbfilter.options.FilterOptions` fields; the
``tags`` table holds per-tag overrides.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from bbfilter.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from bbfilter.exceptions import ConfigError
from bbfilter.options.filter import FilterOptions

logger = logging.getLogger(__name__)

TAGS_SECTION = "tags"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.bbfilter]`` table from a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict when the file has none

    Raises
    ------
    ConfigError
        If the file is not valid TOML or the section is not a table

    """
    data = _load_toml_config(pyproject_path)

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or any of its parents.

    Each directory is checked for the dedicated config files in order, then
    for a ``pyproject.toml`` with a ``[tool.bbfilter]`` table. Unreadable
    pyproject files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from, the working directory by default

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                logger.debug("Skipping %s: %s", pyproject_path, e)

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load a configuration file, picking the format from its name.

    Parameters
    ----------
    config_path : Path or str
        A ``.toml``, ``.yaml``/``.yml`` or ``.json`` file, or a
        ``pyproject.toml``

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, malformed, or of an unknown type

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise ConfigError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    ext = config_path.suffix.lower()

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)
    elif ext == ".toml":
        return _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    elif ext == ".json":
        return _load_json_config(config_path)

    raise ConfigError(
        f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", config_path=str(config_path)
    )


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}", config_path=str(config_path), original_error=e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}", config_path=str(config_path), original_error=e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"JSON config file must contain an object, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}", config_path=str(config_path), original_error=e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {config_path}: {e}", config_path=str(config_path), original_error=e) from e

    # An empty YAML document is an empty configuration
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from the highest-priority source available.

    Priority order (highest to lowest):

    1. ``explicit_path`` (the ``--config`` flag)
    2. The file named by the ``BBFILTER_CONFIG`` environment variable
    3. A file discovered from the working directory upwards

    Returns
    -------
    dict
        Loaded configuration, empty when no file was found

    Raises
    ------
    ConfigError
        If a named or discovered file cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        logger.debug("Using configuration from %s=%s", CONFIG_ENV_VAR, env_path)
        return load_config_file(env_path)

    discovered = find_config_in_parents()
    if discovered:
        logger.debug("Discovered configuration file %s", discovered)
        return load_config_file(discovered)

    return {}


def options_from_config(config: Mapping[str, Any], base: Optional[FilterOptions] = None) -> FilterOptions:
    """Build filter options from a configuration mapping.

    Parameters
    ----------
    config : Mapping[str, Any]
        Configuration as returned by :func:`load_config_file`
    base : FilterOptions, optional
        Options the configuration is applied over

    Returns
    -------
    FilterOptions
        New options instance

    Raises
    ------
    ConfigError
        If the configuration has unknown keys or invalid values

    Examples
    --------
        >>> options = options_from_config({"output_dialect": "xhtml", "tags": {"b": {"output_tag": "strong"}}})
        >>> options.tag_overrides["b"]["output_tag"]
        'strong'

    """
    option_names = {f.name for f in fields(FilterOptions)} - {"tag_overrides"}
    unknown = set(config) - option_names - {TAGS_SECTION}
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    updates: dict[str, Any] = {name: value for name, value in config.items() if name in option_names}
    if TAGS_SECTION in config:
        updates["tag_overrides"] = config[TAGS_SECTION]

    try:
        return (base or FilterOptions()).create_updated(**updates)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}", original_error=e) from e
