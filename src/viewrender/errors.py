"""Exceptions raised by the template renderer.

Two failure kinds are raised by the renderer itself:
- DuplicateTemplateKeyError: call data uses the reserved "template" key
- TemplateNotFoundError: no search path holds the requested template

Errors raised by a template evaluator (syntax errors, undefined variables)
are never wrapped and reach the caller unchanged.
"""

from collections.abc import Sequence

RESERVED_KEY = "template"


class ViewError(Exception):
    """Base class for renderer errors."""


class DuplicateTemplateKeyError(ViewError, ValueError):
    """Raised when call data contains the reserved "template" key."""

    def __init__(self, key: str = RESERVED_KEY) -> None:
        self.key = key
        self.message = "Duplicate template key found"
        super().__init__(self.message)


class TemplateNotFoundError(ViewError, LookupError):
    """Raised when a template does not exist in any search path."""

    def __init__(self, template: str, search_paths: Sequence[str] = ()) -> None:
        self.template = template
        self.search_paths = list(search_paths)
        self.message = (
            f"View cannot render `{template}` because the template does not exist"
        )
        super().__init__(self.message)
