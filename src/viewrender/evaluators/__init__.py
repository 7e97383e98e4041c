"""Template evaluators (pluggable engines).

- jinja2: Jinja2 templates (default)
- string: string.Template ``$name`` substitution
"""

from typing import Any

from viewrender.evaluators.base import TemplateEvaluator
from viewrender.evaluators.jinja import Jinja2Evaluator
from viewrender.evaluators.stdlib import StringTemplateEvaluator

EVALUATORS: dict[str, type[TemplateEvaluator]] = {
    "jinja2": Jinja2Evaluator,
    "string": StringTemplateEvaluator,
}


def get_evaluator(name: str = "jinja2", **options: Any) -> TemplateEvaluator:
    """Create an evaluator by engine name.

    Args:
        name: Engine name ("jinja2" or "string")
        **options: Keyword arguments for the evaluator constructor

    Returns:
        Evaluator instance

    Raises:
        ValueError: If the engine name is unknown
    """
    if name not in EVALUATORS:
        raise ValueError(f"Unknown template engine: {name}. Valid: {sorted(EVALUATORS)}")
    return EVALUATORS[name](**options)


__all__ = [
    "EVALUATORS",
    "Jinja2Evaluator",
    "StringTemplateEvaluator",
    "TemplateEvaluator",
    "get_evaluator",
]
