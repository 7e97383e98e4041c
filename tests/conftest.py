"""Shared pytest fixtures for viewrender tests.

Fixtures are organized by category:
- Template directory fixtures: layered search paths built in tmp_path
- Renderer fixtures: renderers wired to real or recording evaluators
"""

import logging
from pathlib import Path

import pytest

from tests.fixtures import RecordingEvaluator
from viewrender.renderer import TemplateRenderer

# =============================================================================
# Template Directory Fixtures
# =============================================================================


@pytest.fixture
def layer_a(tmp_path: Path) -> Path:
    """First template layer with t.tpl and only_a.tpl."""
    layer = tmp_path / "a"
    layer.mkdir()
    (layer / "t.tpl").write_text("from a: {{ name }}")
    (layer / "only_a.tpl").write_text("only in a")
    return layer


@pytest.fixture
def layer_b(tmp_path: Path) -> Path:
    """Second template layer that overrides t.tpl."""
    layer = tmp_path / "b"
    layer.mkdir()
    (layer / "t.tpl").write_text("from b: {{ name }}")
    return layer


# =============================================================================
# Renderer Fixtures
# =============================================================================


@pytest.fixture
def recorder() -> RecordingEvaluator:
    """Evaluator that records paths and contexts."""
    return RecordingEvaluator()


@pytest.fixture
def layered_renderer(layer_a: Path, layer_b: Path) -> TemplateRenderer:
    """Jinja2 renderer over layers a then b."""
    return TemplateRenderer([str(layer_a), str(layer_b)])


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by CLI invocations between tests."""
    yield
    logger = logging.getLogger("viewrender")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
