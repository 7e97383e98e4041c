"""viewrender CLI interface.

Commands:
- render: Render a template to stdout or a file
- which: Show which file a template name resolves to
- paths: List template search paths in resolution order
- init: Create a default configuration file
- validate: Validate a Jinja2 template

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from viewrender import __version__
from viewrender.config import ViewConfig, build_renderer, create_default_config, load_config
from viewrender.errors import ViewError
from viewrender.renderer import TemplateRenderer
from viewrender.response import Response
from viewrender.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="viewrender",
    help="Render view templates from layered search paths",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: ViewConfig | None = None
_logger = get_logger()

PathOption = Annotated[
    list[str] | None,
    typer.Option(
        "--path",
        "-p",
        help="Extra template search path (repeatable, appended after configured paths)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"viewrender {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """viewrender - render view templates from layered search paths."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _get_renderer(paths: list[str] | None) -> TemplateRenderer:
    """Build a renderer from the loaded config plus CLI search paths."""
    return build_renderer(_config or ViewConfig(), extra_paths=paths)


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """Parse KEY=VALUE pairs from the command line.

    Values are parsed as YAML scalars, so numbers and booleans keep their
    type ("count=3" gives 3, "debug=true" gives True).

    Raises:
        ValueError: If an item has no "=" or an empty key
    """
    data: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got: {item}")
        value = yaml.safe_load(raw) if raw else ""
        data[key] = value
    return data


def load_data_file(path: Path) -> dict[str, Any]:
    """Load template data from a YAML (or JSON) file.

    Raises:
        ValueError: If the file does not contain a mapping
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Data file must contain a mapping: {path}")
    return data


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    template: Annotated[str, typer.Argument(help="Template name relative to the search paths")],
    path: PathOption = None,
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", "-s", help="Template variable as KEY=VALUE (repeatable)"),
    ] = None,
    data_file: Annotated[
        Path | None,
        typer.Option(
            "--data",
            "-d",
            help="YAML/JSON file with template variables",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file instead of stdout"),
    ] = None,
) -> None:
    """Render a template.

    Variables come from configured attributes, then the --data file, then
    --set pairs (later sources win).

    Exit codes:
        0: Rendered
        1: Template missing, invalid data, or evaluation error
    """
    renderer = _get_renderer(path)

    try:
        data = load_data_file(data_file) if data_file else {}
        data.update(parse_assignments(assignments or []))
    except (ValueError, yaml.YAMLError) as e:
        _logger.error(f"Invalid template data: {e}")
        raise typer.Exit(1)

    try:
        response = renderer.render(Response.text(), template, data)
    except ViewError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Template rendering failed: {e}")
        raise typer.Exit(1)

    _logger.structured(
        logging.DEBUG,
        f"Rendered {template}",
        template=template,
        characters=len(response.body),
    )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(response.body, encoding="utf-8")
        _logger.info(f"Wrote {template} to {output}")
    else:
        typer.echo(response.body, nl=False)


# =============================================================================
# which / paths commands
# =============================================================================


@app.command()
def which(
    template: Annotated[str, typer.Argument(help="Template name relative to the search paths")],
    path: PathOption = None,
) -> None:
    """Show the file a template name resolves to (the last matching path wins)."""
    renderer = _get_renderer(path)

    try:
        typer.echo(renderer.resolve(template))
    except ViewError as e:
        _logger.error(str(e))
        raise typer.Exit(1)


@app.command()
def paths(path: PathOption = None) -> None:
    """List template search paths in resolution order."""
    renderer = _get_renderer(path)

    for template_path in renderer.get_template_paths():
        marker = "" if Path(template_path).is_dir() else "  (missing)"
        typer.echo(f"{template_path}{marker}")


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    directory: Annotated[
        Path,
        typer.Option("--dir", help="Directory to create viewrender.yaml in", file_okay=False),
    ] = Path("."),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file"),
    ] = False,
) -> None:
    """Create a default viewrender.yaml."""
    config_path = directory / "viewrender.yaml"

    if config_path.exists() and not force:
        _logger.error(f"Config file already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(1)

    directory.mkdir(parents=True, exist_ok=True)
    config_path.write_text(create_default_config(), encoding="utf-8")
    typer.echo(f"Created {config_path}")


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to Jinja2 template to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate a Jinja2 template's syntax."""
    from jinja2 import TemplateSyntaxError

    from viewrender.evaluators import Jinja2Evaluator

    _logger.info(f"Validating template: {template}")

    try:
        Jinja2Evaluator().validate(template.read_text(encoding="utf-8"))
    except TemplateSyntaxError as e:
        _logger.error(f"Template syntax error: {e.message}")
        typer.echo(f"Template syntax error at line {e.lineno}: {e.message}")
        raise typer.Exit(1)

    typer.echo(f"Template is valid: {template}")


if __name__ == "__main__":
    app()
