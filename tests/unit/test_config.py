#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for configuration discovery and loading."""

import json

import pytest

from bbfilter.config import (
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    options_from_config,
)
from bbfilter.exceptions import ConfigError
from bbfilter.options import FilterOptions


@pytest.mark.unit
class TestLoadConfigFile:
    """Test loading each supported file format."""

    def test_toml(self, tmp_path):
        path = tmp_path / ".bbfilter.toml"
        path.write_text('output_dialect = "xhtml"\n\n[tags.url]\nfixed_attributes = { rel = "nofollow" }\n')
        config = load_config_file(path)
        assert config == {"output_dialect": "xhtml", "tags": {"url": {"fixed_attributes": {"rel": "nofollow"}}}}

    def test_yaml(self, tmp_path):
        path = tmp_path / ".bbfilter.yaml"
        path.write_text("locale: de-de\ntags:\n  b:\n    output_tag: strong\n")
        assert load_config_file(path) == {"locale": "de-de", "tags": {"b": {"output_tag": "strong"}}}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / ".bbfilter.yml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / ".bbfilter.json"
        path.write_text(json.dumps({"strict_undefined": True}))
        assert load_config_file(path) == {"strict_undefined": True}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.bbfilter]\nlocale = "fr-fr"\n')
        assert load_config_file(path) == {"locale": "fr-fr"}

    def test_pyproject_without_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[x]")
        with pytest.raises(ConfigError, match="Unsupported config file format: .ini"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "output_dialect = "),
            ("bad.json", "{"),
            ("bad.yaml", "a: [1, 2"),
        ],
    )
    def test_malformed(self, tmp_path, filename, content):
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(ConfigError, match="Invalid") as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)
        assert exc_info.value.original_error is not None

    @pytest.mark.parametrize("filename,content", [("list.json", "[1, 2]"), ("list.yaml", "- 1\n- 2\n")])
    def test_not_a_mapping(self, tmp_path, filename, content):
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(ConfigError, match="must contain"):
            load_config_file(path)


@pytest.mark.unit
class TestConfigDiscovery:
    """Test finding configuration files and choosing between sources."""

    def test_finds_in_parent(self, tmp_path):
        (tmp_path / ".bbfilter.json").write_text("{}")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == (tmp_path / ".bbfilter.json").resolve()

    def test_dedicated_file_preferred(self, tmp_path):
        (tmp_path / ".bbfilter.yaml").write_text("{}")
        (tmp_path / ".bbfilter.toml").write_text("")
        assert find_config_in_parents(tmp_path).name == ".bbfilter.toml"

    def test_pyproject_needs_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        nested = tmp_path / "pkg"
        nested.mkdir()
        found = find_config_in_parents(nested)
        assert found is None or not str(found).startswith(str(tmp_path.resolve()))

    def test_pyproject_with_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.bbfilter]\nlocale = "de-de"\n')
        assert find_config_in_parents(tmp_path) == (tmp_path / "pyproject.toml").resolve()

    def test_explicit_path_wins(self, isolated_cwd, monkeypatch):
        explicit = isolated_cwd / "explicit.json"
        explicit.write_text(json.dumps({"locale": "fr-fr"}))
        env = isolated_cwd / "env.json"
        env.write_text(json.dumps({"locale": "de-de"}))
        monkeypatch.setenv("BBFILTER_CONFIG", str(env))
        assert load_config_with_priority(str(explicit)) == {"locale": "fr-fr"}

    def test_env_var(self, isolated_cwd, monkeypatch):
        (isolated_cwd / ".bbfilter.json").write_text(json.dumps({"locale": "es-mx"}))
        env = isolated_cwd / "env.json"
        env.write_text(json.dumps({"locale": "de-de"}))
        monkeypatch.setenv("BBFILTER_CONFIG", str(env))
        assert load_config_with_priority() == {"locale": "de-de"}

    def test_discovered(self, isolated_cwd):
        (isolated_cwd / ".bbfilter.json").write_text(json.dumps({"locale": "es-mx"}))
        assert load_config_with_priority() == {"locale": "es-mx"}


@pytest.mark.unit
class TestOptionsFromConfig:
    """Test turning configuration mappings into FilterOptions."""

    def test_empty(self):
        assert options_from_config({}) == FilterOptions()

    def test_fields_and_tags(self):
        options = options_from_config({"output_dialect": "xhtml", "tags": {"b": {"output_tag": "strong"}}})
        assert options.output_dialect == "xhtml"
        assert options.tag_overrides["b"]["output_tag"] == "strong"

    def test_base_options(self):
        base = FilterOptions(locale="de-de")
        assert options_from_config({"strict_undefined": True}, base).locale == "de-de"

    def test_unknown_keys(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour, tag_overrides"):
            options_from_config({"colour": "red", "tag_overrides": {}})

    def test_invalid_value(self):
        with pytest.raises(ConfigError, match="Invalid configuration: output_dialect") as exc_info:
            options_from_config({"output_dialect": "sgml"})
        assert isinstance(exc_info.value.original_error, ValueError)
