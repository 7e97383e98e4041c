"""viewrender configuration system.

Configuration is YAML-based with CLI overrides for search paths and data.
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.viewrender/config.yaml
3. ./viewrender.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from viewrender.errors import RESERVED_KEY
from viewrender.evaluators import EVALUATORS, TemplateEvaluator, get_evaluator
from viewrender.renderer import TemplateRenderer

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class TemplatesConfig:
    """Template search path configuration.

    Attributes:
        paths: Search paths in resolution order (later paths override earlier)
    """

    paths: list[str] = field(default_factory=lambda: ["templates"])


@dataclass
class EngineConfig:
    """Template engine configuration.

    Attributes:
        name: Engine to use (jinja2, string)
        autoescape: Jinja2 autoescaping, bool, extension or list of extensions
        trim_blocks: Jinja2 trim_blocks
        lstrip_blocks: Jinja2 lstrip_blocks
        strict: Jinja2: fail on undefined variables
        safe: string engine: leave unknown placeholders untouched
    """

    name: str = "jinja2"
    autoescape: bool | str | list[str] = False
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    strict: bool = False
    safe: bool = False

    def __post_init__(self) -> None:
        """Validate engine configuration."""
        if self.name not in EVALUATORS:
            raise ValueError(f"Invalid template engine: {self.name}. Valid: {sorted(EVALUATORS)}")

    def create_evaluator(self) -> TemplateEvaluator:
        """Build the evaluator described by this configuration."""
        if self.name == "string":
            return get_evaluator(self.name, safe=self.safe)
        return get_evaluator(
            self.name,
            autoescape=self.autoescape,
            trim_blocks=self.trim_blocks,
            lstrip_blocks=self.lstrip_blocks,
            strict=self.strict,
        )


@dataclass
class ViewConfig:
    """Top-level viewrender configuration.

    Attributes:
        templates: Search paths
        engine: Template engine settings
        attributes: Default attributes merged into every render
    """

    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    attributes: dict[str, Any] = field(default_factory=dict)

    # Set by load_config
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax, recursively through dicts and lists.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_RE.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.viewrender/config.yaml
    2. ./viewrender.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".viewrender" / "config.yaml",
        start_path / "viewrender.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> ViewConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        ViewConfig instance

    Raises:
        ValueError: If a value is invalid
    """
    data = substitute_env_vars(data)

    config = ViewConfig()

    if "templates" in data:
        templates_data = data["templates"] or {}
        paths = templates_data.get("paths", config.templates.paths)
        if isinstance(paths, str):
            paths = [paths]
        config.templates = TemplatesConfig(paths=[str(p) for p in paths])

    if "engine" in data:
        engine_data = data["engine"] or {}
        config.engine = EngineConfig(
            name=engine_data.get("name", "jinja2"),
            autoescape=engine_data.get("autoescape", False),
            trim_blocks=engine_data.get("trim_blocks", False),
            lstrip_blocks=engine_data.get("lstrip_blocks", False),
            strict=engine_data.get("strict", False),
            safe=engine_data.get("safe", False),
        )

    if "attributes" in data:
        attributes = data["attributes"] or {}
        if not isinstance(attributes, dict):
            raise ValueError("attributes must be a mapping")
        if RESERVED_KEY in attributes:
            raise ValueError(f"attributes must not contain the reserved key '{RESERVED_KEY}'")
        config.attributes = dict(attributes)

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> ViewConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        ViewConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = ViewConfig()

    return config


def build_renderer(
    config: ViewConfig,
    extra_paths: list[str] | None = None,
) -> TemplateRenderer:
    """Create a renderer from configuration.

    Args:
        config: Loaded configuration
        extra_paths: Search paths appended after the configured ones

    Returns:
        Configured TemplateRenderer
    """
    paths = list(config.templates.paths) + list(extra_paths or [])
    return TemplateRenderer(
        paths,
        attributes=config.attributes,
        evaluator=config.engine.create_evaluator(),
    )


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# viewrender configuration

# Template search paths. Every path is searched; when a template exists in
# several of them, the LAST path wins (later paths override earlier ones).
templates:
  paths:
    - "templates"
    # - "themes/custom"

# Template engine
engine:
  name: "jinja2"        # jinja2, string
  autoescape: false     # true, false, or a list of extensions like ["html", "xml"]
  trim_blocks: false
  lstrip_blocks: false
  strict: false         # fail on undefined variables

# Default attributes available in every template (call data overrides them)
attributes:
  # site_name: "Example"
  # api_base: "${API_BASE}"
'''
