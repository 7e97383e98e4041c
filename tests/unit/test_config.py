"""Unit tests for configuration system."""

from pathlib import Path

import pytest
import yaml

from viewrender.config import (
    EngineConfig,
    ViewConfig,
    build_renderer,
    create_default_config,
    find_config_file,
    load_config,
    load_config_from_dict,
    substitute_env_vars,
)
from viewrender.evaluators import Jinja2Evaluator, StringTemplateEvaluator


class TestSubstituteEnvVars:
    """Tests for environment variable substitution."""

    def test_substitute_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test substituting env var in string."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        result = substitute_env_vars("prefix_${TEST_VAR}_suffix")

        assert result == "prefix_test_value_suffix"

    def test_substitute_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test substituting env vars in nested dicts and lists."""
        monkeypatch.setenv("THEME_DIR", "/srv/theme")

        data = {"templates": {"paths": ["templates", "${THEME_DIR}"]}, "other": 1}
        result = substitute_env_vars(data)

        assert result == {"templates": {"paths": ["templates", "/srv/theme"]}, "other": 1}

    def test_missing_env_var_raises(self) -> None:
        """Test that missing env var raises ValueError."""
        with pytest.raises(ValueError, match="Environment variable not set"):
            substitute_env_vars("${VIEWRENDER_NONEXISTENT_VAR}")

    def test_passthrough_non_string(self) -> None:
        """Test that non-string values pass through unchanged."""
        assert substitute_env_vars(123) == 123
        assert substitute_env_vars(True) is True
        assert substitute_env_vars(None) is None


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_find_dir_config(self, tmp_path: Path) -> None:
        """Test finding .viewrender/config.yaml."""
        config_dir = tmp_path / ".viewrender"
        config_dir.mkdir()
        config_file = config_dir / "config.yaml"
        config_file.write_text("templates:\n  paths: [views]")

        assert find_config_file(tmp_path) == config_file

    def test_find_root_config(self, tmp_path: Path) -> None:
        """Test finding viewrender.yaml at root."""
        config_file = tmp_path / "viewrender.yaml"
        config_file.write_text("templates:\n  paths: [views]")

        assert find_config_file(tmp_path) == config_file

    def test_prefer_dir_over_root(self, tmp_path: Path) -> None:
        """Test .viewrender/config.yaml is preferred over viewrender.yaml."""
        config_dir = tmp_path / ".viewrender"
        config_dir.mkdir()
        preferred = config_dir / "config.yaml"
        preferred.write_text("# preferred")
        (tmp_path / "viewrender.yaml").write_text("# fallback")

        assert find_config_file(tmp_path) == preferred

    def test_no_config_returns_none(self, tmp_path: Path) -> None:
        """Test returns None when no config found."""
        assert find_config_file(tmp_path) is None


class TestLoadConfigFromDict:
    """Tests for loading config from dictionary."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = load_config_from_dict({})

        assert config.templates.paths == ["templates"]
        assert config.engine.name == "jinja2"
        assert config.engine.autoescape is False
        assert config.attributes == {}

    def test_templates_paths(self) -> None:
        """Test loading search paths."""
        config = load_config_from_dict({"templates": {"paths": ["views", "themes/dark"]}})

        assert config.templates.paths == ["views", "themes/dark"]

    def test_single_path_string(self) -> None:
        """Test a single path string becomes a list."""
        config = load_config_from_dict({"templates": {"paths": "views"}})

        assert config.templates.paths == ["views"]

    def test_engine(self) -> None:
        """Test loading engine options."""
        config = load_config_from_dict({
            "engine": {"name": "jinja2", "autoescape": ["html"], "strict": True},
        })

        assert config.engine.autoescape == ["html"]
        assert config.engine.strict is True

    def test_invalid_engine(self) -> None:
        """Test unknown engines are rejected."""
        with pytest.raises(ValueError, match="Invalid template engine"):
            load_config_from_dict({"engine": {"name": "mako"}})

    def test_attributes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading default attributes with env substitution."""
        monkeypatch.setenv("SITE_NAME", "Example")

        config = load_config_from_dict({"attributes": {"site_name": "${SITE_NAME}", "year": 2024}})

        assert config.attributes == {"site_name": "Example", "year": 2024}

    def test_empty_attributes(self) -> None:
        """Test an attributes key with no entries."""
        config = load_config_from_dict({"attributes": None})

        assert config.attributes == {}

    def test_attributes_must_be_mapping(self) -> None:
        """Test non-mapping attributes are rejected."""
        with pytest.raises(ValueError, match="attributes must be a mapping"):
            load_config_from_dict({"attributes": ["a", "b"]})

    def test_attributes_reject_template_key(self) -> None:
        """Test the reserved "template" key is rejected in attributes."""
        with pytest.raises(ValueError, match="reserved key"):
            load_config_from_dict({"attributes": {"template": "page.html"}})

    def test_engine_autoescape_single_extension(self, tmp_path: Path) -> None:
        """Test a single autoescape extension from YAML escapes that extension."""
        config = load_config_from_dict(yaml.safe_load("engine:\n  autoescape: html\n"))
        renderer = build_renderer(config, extra_paths=[str(tmp_path)])
        (tmp_path / "t.html").write_text("{{ s }}")

        assert config.engine.autoescape == "html"
        assert renderer.fetch("t.html", {"s": "<b>"}) == "&lt;b&gt;"


class TestLoadConfig:
    """Tests for loading config from files."""

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        """Test an explicit missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_explicit_file(self, tmp_path: Path) -> None:
        """Test loading an explicit config file."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("templates:\n  paths: [views]\nattributes:\n  x: 1\n")

        config = load_config(config_file)

        assert config.templates.paths == ["views"]
        assert config.attributes == {"x": 1}
        assert config.config_path == config_file

    def test_auto_discover(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test discovery from the working directory."""
        (tmp_path / "viewrender.yaml").write_text("attributes:\n  y: 2\n")
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.attributes == {"y": 2}

    def test_no_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults when nothing is found."""
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.config_path is None
        assert config.templates.paths == ["templates"]

    def test_default_config_is_loadable(self) -> None:
        """Test the generated default config parses to the defaults."""
        data = yaml.safe_load(create_default_config())

        config = load_config_from_dict(data)

        assert config.templates.paths == ["templates"]
        assert config.engine.name == "jinja2"
        assert config.attributes == {}


class TestBuildRenderer:
    """Tests for building a renderer from config."""

    def test_paths_and_attributes(self) -> None:
        """Test configured paths come first, then extra paths."""
        config = ViewConfig()
        config.templates.paths = ["views", "themes/dark"]
        config.attributes = {"site": "Example"}

        renderer = build_renderer(config, extra_paths=["overrides"])

        assert renderer.get_template_paths() == ["views/", "themes/dark/", "overrides/"]
        assert renderer.get_attributes() == {"site": "Example"}

    def test_attributes_are_not_shared(self) -> None:
        """Test renderer attribute changes do not leak into the config."""
        config = ViewConfig(attributes={"site": "Example"})

        renderer = build_renderer(config)
        renderer.add_attribute("extra", 1)

        assert config.attributes == {"site": "Example"}

    def test_jinja2_engine(self) -> None:
        """Test the Jinja2 evaluator is built with config options."""
        config = ViewConfig(engine=EngineConfig(strict=True))

        renderer = build_renderer(config)

        assert isinstance(renderer.evaluator, Jinja2Evaluator)
        assert renderer.evaluator.strict is True

    def test_string_engine(self) -> None:
        """Test the string evaluator is built with config options."""
        config = ViewConfig(engine=EngineConfig(name="string", safe=True))

        renderer = build_renderer(config)

        assert isinstance(renderer.evaluator, StringTemplateEvaluator)
        assert renderer.evaluator.safe is True
