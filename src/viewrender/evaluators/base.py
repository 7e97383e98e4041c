"""Abstract base class for template evaluators.

An evaluator executes one template file against a context mapping and
returns the produced text. Every key in the mapping MUST be referenceable by
name inside the template. Evaluators:
1. Read the template file themselves (the renderer never opens it)
2. Return the complete output as a single string
3. Let their own errors propagate (the renderer does not translate them)
4. Do not cache templates between calls
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class TemplateEvaluator(ABC):
    """Abstract interface for pluggable template engines.

    Attributes:
        name: Engine identifier (e.g., "jinja2", "string")
    """

    name: str = "base"

    @abstractmethod
    def evaluate(self, path: str, context: Mapping[str, Any]) -> str:
        """Execute a template file and return its output.

        Output is only returned once evaluation completes; if evaluation
        fails partway, nothing is returned and the error propagates.

        Args:
            path: Path to the template file
            context: Variables exposed to the template by name

        Returns:
            Rendered text
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
