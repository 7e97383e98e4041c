"""Jinja2 template evaluator.

Templates are loaded by absolute file path, not by name relative to a loader
root, so the renderer stays in charge of search-path resolution. Relative
includes and extends inside a template are looked up in the directory of
the template being evaluated.

Template caching is disabled: every evaluation reads and compiles the file
again, so edits on disk are picked up on the next render.
"""

import logging
import os
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    FunctionLoader,
    StrictUndefined,
    Undefined,
    select_autoescape,
)
from jinja2.nodes import Template as TemplateNode

from viewrender.evaluators.base import TemplateEvaluator
from viewrender.evaluators.filters import DEFAULT_FILTERS

logger = logging.getLogger(__name__)


def _load_file(name: str) -> tuple[str, str, None] | None:
    """Load template source from an absolute path (FunctionLoader callback)."""
    if not os.path.isabs(name):
        return None

    path = Path(name)
    if not path.is_file():
        return None

    # No uptodate callback: templates are never cached
    return path.read_text(encoding="utf-8"), str(path.resolve()), None


class Jinja2Evaluator(TemplateEvaluator):
    """Evaluates template files with Jinja2.

    Usage:
        evaluator = Jinja2Evaluator(autoescape=["html"])
        html = evaluator.evaluate("templates/page.html", {"title": "Home"})
    """

    name = "jinja2"

    def __init__(
        self,
        autoescape: bool | str | Sequence[str] = False,
        trim_blocks: bool = False,
        lstrip_blocks: bool = False,
        keep_trailing_newline: bool = True,
        strict: bool = False,
        filters: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        """Initialize the Jinja2 environment.

        Args:
            autoescape: True/False, or one or more file extensions to autoescape
            trim_blocks: Remove first newline after a block tag
            lstrip_blocks: Strip whitespace before a block tag
            keep_trailing_newline: Keep the template's final newline
            strict: Raise on undefined variables instead of rendering ""
            filters: Extra filters registered next to the defaults
        """
        if isinstance(autoescape, str):
            autoescape = [autoescape]

        if isinstance(autoescape, bool):
            escape: bool | Callable[[str | None], bool] = autoescape
        else:
            escape = select_autoescape(list(autoescape))

        self.strict = strict
        self._env = Environment(
            loader=FunctionLoader(_load_file),
            autoescape=escape,
            trim_blocks=trim_blocks,
            lstrip_blocks=lstrip_blocks,
            keep_trailing_newline=keep_trailing_newline,
            undefined=StrictUndefined if strict else Undefined,
            cache_size=0,
        )

        self._env.filters.update(DEFAULT_FILTERS)
        if filters:
            self._env.filters.update(filters)

    @property
    def environment(self) -> Environment:
        """The underlying Jinja2 environment (for registering globals/tests)."""
        return self._env

    def evaluate(self, path: str, context: Mapping[str, Any]) -> str:
        """Render a template file.

        Args:
            path: Path to the template file
            context: Template variables

        Returns:
            Rendered text

        Raises:
            jinja2.TemplateNotFound: If the file vanished after resolution
            jinja2.TemplateSyntaxError: If the template is malformed
            jinja2.UndefinedError: If strict and a variable is missing
        """
        path = os.path.abspath(path)
        env = self._env.overlay(
            loader=ChoiceLoader([
                FunctionLoader(_load_file),
                FileSystemLoader(os.path.dirname(path)),
            ]),
        )
        template = env.get_template(path)

        # generate() yields chunks; a failure mid-way leaves nothing behind
        output = "".join(template.generate(dict(context)))
        logger.debug("Evaluated %s (%d characters)", path, len(output))
        return output

    def validate(self, source: str) -> TemplateNode:
        """Parse template source without rendering it.

        Args:
            source: Template source text

        Returns:
            Parsed template AST

        Raises:
            jinja2.TemplateSyntaxError: If the source is malformed
        """
        return self._env.parse(source)
