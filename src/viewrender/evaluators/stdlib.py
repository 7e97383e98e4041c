"""string.Template evaluator.

For plain-text templates that only need ``$name`` / ``${name}``
substitution and no control flow.
"""

from collections.abc import Mapping
from pathlib import Path
from string import Template
from typing import Any

from viewrender.evaluators.base import TemplateEvaluator


class StringTemplateEvaluator(TemplateEvaluator):
    """Evaluates template files with ``string.Template``.

    Attributes:
        safe: Leave unknown placeholders in place instead of raising KeyError
    """

    name = "string"

    def __init__(self, safe: bool = False) -> None:
        self.safe = safe

    def evaluate(self, path: str, context: Mapping[str, Any]) -> str:
        template = Template(Path(path).read_text(encoding="utf-8"))
        if self.safe:
            return template.safe_substitute(context)
        return template.substitute(context)
