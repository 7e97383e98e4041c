"""viewrender - Render view templates into HTTP response bodies.

A small adapter between a web handler and a template engine:
- Templates are located across an ordered list of search paths
- Renderer-level default attributes are merged with per-call data
- Output is captured as text and written into a response body

The template language itself is pluggable (Jinja2 by default).
"""

from viewrender.errors import DuplicateTemplateKeyError, TemplateNotFoundError, ViewError
from viewrender.renderer import TemplateRenderer
from viewrender.response import Response, ResponseSink

__version__ = "0.1.0"
__author__ = "viewrender Contributors"

__all__ = [
    "DuplicateTemplateKeyError",
    "Response",
    "ResponseSink",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "ViewError",
]
