"""Test fixtures for viewrender.

Template trees:
- templates/base: layout, page, partials and plain-text templates
- templates/theme: overrides page.html, layout.html and the header partial
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from viewrender.evaluators.base import TemplateEvaluator

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Template trees
TEMPLATES_DIR = FIXTURES_DIR / "templates"
BASE_TEMPLATES = TEMPLATES_DIR / "base"
THEME_TEMPLATES = TEMPLATES_DIR / "theme"


class RecordingEvaluator(TemplateEvaluator):
    """Evaluator that records its calls and returns a fixed output."""

    name = "recording"

    def __init__(self, output: str = "rendered") -> None:
        self.output = output
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def evaluate(self, path: str, context: Mapping[str, Any]) -> str:
        self.calls.append((path, dict(context)))
        return self.output

    @property
    def last_path(self) -> str:
        return self.calls[-1][0]

    @property
    def last_context(self) -> dict[str, Any]:
        return self.calls[-1][1]
