"""Template renderer: search paths, default attributes, response output.

Renders view templates into a response body. The renderer owns:
- An ordered list of template search paths
- A dictionary of default attributes merged into every render

Template execution is delegated to a TemplateEvaluator (Jinja2 by default).
Nothing is cached: each call re-resolves the file and re-evaluates it.
"""

import logging
import os
import threading
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, TypeVar

from viewrender.errors import RESERVED_KEY, DuplicateTemplateKeyError, TemplateNotFoundError
from viewrender.evaluators.base import TemplateEvaluator
from viewrender.evaluators.jinja import Jinja2Evaluator
from viewrender.response import ResponseSink

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=ResponseSink)

_SEPARATORS = ("/", os.sep)


def normalize_path(path: str | Path) -> str:
    """Ensure a search path ends with a separator.

    Idempotent: an already-suffixed path is returned unchanged. An empty
    string becomes "/".

    Args:
        path: Directory path

    Returns:
        Path string ending with a separator
    """
    path = str(path)
    if not path.endswith(_SEPARATORS):
        path += "/"
    return path


def _join(directory: str, template: str) -> str:
    """Concatenate a search path and a template name."""
    if not directory:
        return template
    if directory.endswith(_SEPARATORS):
        return directory + template
    # Paths added with set_template_path are stored as given
    return f"{directory}/{template}"


def _is_readable_file(candidate: str) -> bool:
    return os.path.isfile(candidate) and os.access(candidate, os.R_OK)


def _check_attributes(attributes: Mapping[str, Any]) -> None:
    if RESERVED_KEY in attributes:
        raise DuplicateTemplateKeyError()


class TemplateRenderer:
    """Renders templates from layered search paths into responses.

    When a template exists in several search paths, the one found in the
    path registered last wins, so later paths override earlier ones.

    Usage:
        renderer = TemplateRenderer(["templates", "themes/dark"], {"site": "Example"})
        html = renderer.fetch("page.html", {"title": "Home"})
        response = renderer.render(Response.html(), "page.html", {"title": "Home"})
    """

    def __init__(
        self,
        template_paths: str | Path | Sequence[str | Path] = "",
        attributes: Mapping[str, Any] | None = None,
        evaluator: TemplateEvaluator | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            template_paths: One search path or an ordered list of them
            attributes: Default attributes available to every template
            evaluator: Template engine (defaults to Jinja2Evaluator)

        Raises:
            DuplicateTemplateKeyError: If attributes contain the "template" key
        """
        if isinstance(template_paths, (str, Path)):
            template_paths = [template_paths]

        attributes = attributes or {}
        _check_attributes(attributes)

        self._template_paths: list[str] = [normalize_path(p) for p in template_paths]
        self._attributes: dict[str, Any] = dict(attributes)
        self.evaluator = evaluator or Jinja2Evaluator()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(template_paths={self._template_paths!r}, "
            f"evaluator={self.evaluator!r})"
        )

    # =========================================================================
    # Attributes
    # =========================================================================

    def get_attributes(self) -> dict[str, Any]:
        """Get a copy of the default attributes."""
        with self._lock:
            return dict(self._attributes)

    def set_attributes(self, attributes: Mapping[str, Any]) -> None:
        """Replace all default attributes."""
        _check_attributes(attributes)
        with self._lock:
            self._attributes = dict(attributes)

    def add_attribute(self, key: str, value: Any) -> None:
        """Add or overwrite one default attribute."""
        if key == RESERVED_KEY:
            raise DuplicateTemplateKeyError()
        with self._lock:
            self._attributes[key] = value

    def get_attribute(self, key: str, default: Any = None) -> Any:
        """Retrieve a default attribute.

        Args:
            key: Attribute name
            default: Returned when the attribute is not set

        Returns:
            Attribute value, or default if absent
        """
        with self._lock:
            return self._attributes.get(key, default)

    # =========================================================================
    # Search paths
    # =========================================================================

    def get_template_path(self) -> str:
        """Get the first search path. Use get_template_paths() for all of them.

        Raises:
            IndexError: If there are no search paths
        """
        with self._lock:
            return self._template_paths[0]

    def get_template_paths(self) -> list[str]:
        """Get all search paths in resolution order."""
        with self._lock:
            return list(self._template_paths)

    def set_template_path(self, template_path: str | Path) -> None:
        """Append a search path.

        Despite the name this does not replace existing paths: the new path
        is added last and therefore takes precedence during resolution.
        The path is stored as given.
        """
        with self._lock:
            self._template_paths.append(str(template_path))

    add_template_path = set_template_path

    # =========================================================================
    # Rendering
    # =========================================================================

    def resolve(self, template: str) -> str:
        """Find the file a template name refers to.

        Every search path is checked; the last one holding the template wins.

        Args:
            template: Template name relative to the search paths

        Returns:
            Path of the template file

        Raises:
            TemplateNotFoundError: If no search path holds the template
        """
        search_paths = self.get_template_paths()

        found_path: str | None = None
        for template_path in search_paths:
            candidate = _join(template_path, template)
            if _is_readable_file(candidate):
                logger.debug("Template %s found in %s", template, template_path)
                found_path = candidate

        if found_path is None:
            raise TemplateNotFoundError(template, search_paths)

        return found_path

    def fetch(self, template: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a template and return the output.

        Args:
            template: Template name relative to the search paths
            data: Template variables; override default attributes

        Returns:
            Rendered text

        Raises:
            DuplicateTemplateKeyError: If data contains the "template" key
            TemplateNotFoundError: If the template does not exist
        """
        data = data or {}
        if RESERVED_KEY in data:
            raise DuplicateTemplateKeyError()

        found_path = self.resolve(template)

        context = {**self.get_attributes(), **data}
        logger.debug("Evaluating %s with %d variables", found_path, len(context))

        output = self.evaluator.evaluate(found_path, context)
        logger.info("Rendered %s (%d characters)", template, len(output))
        return output

    def render(self, response: R, template: str, data: Mapping[str, Any] | None = None) -> R:
        """Render a template into a response body.

        Args:
            response: Sink with a write(text) method
            template: Template name relative to the search paths
            data: Template variables; override default attributes

        Returns:
            The same response, with the output appended to its body

        Raises:
            DuplicateTemplateKeyError: If data contains the "template" key
            TemplateNotFoundError: If the template does not exist
        """
        output = self.fetch(template, data)
        response.write(output)
        return response
