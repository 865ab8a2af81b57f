"""Shared pytest fixtures for the storegen test suite.

Provides reusable fixtures for:
- A configuration rooted in a temporary output directory
- A template renderer and JavaScript printer
- Sample store requests (plain and authenticated)
- Scripted prompt answers standing in for the interactive console
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

import pytest

from storegen.config import Config
from storegen.scaffolder.js_ir import JsPrinter
from storegen.scaffolder.models import StoreRequest
from storegen.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Paths & Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Temporary output root for generated files (auto-cleanup)."""
    root = tmp_path / "project"
    root.mkdir()
    yield root


@pytest.fixture
def config(output_dir: Path) -> Config:
    """Default configuration writing under the temporary output root."""
    return Config(output_dir=output_dir)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def printer() -> JsPrinter:
    return JsPrinter()


@pytest.fixture
def fixed_now() -> datetime:
    """Deterministic generation timestamp for the store guide."""
    return datetime(2024, 3, 5, 14, 30)


# ---------------------------------------------------------------------------
# Store requests
# ---------------------------------------------------------------------------

@pytest.fixture
def shop_request() -> StoreRequest:
    """Two plain collections, no authentication."""
    return StoreRequest.build("shop", ["products", "orders"])


@pytest.fixture
def auth_request() -> StoreRequest:
    """An auth collection plus a plain one, with roles and activity logging."""
    return StoreRequest.build(
        "appStore",
        ["users", "products"],
        roles=["admin", "editor"],
        add_activity_logging=True,
    )


# ---------------------------------------------------------------------------
# Scripted prompts
# ---------------------------------------------------------------------------

class ScriptedAsk:
    """Callable replacing ``read_line``: returns queued answers in order.

    Every prompt shown is recorded in ``prompts`` so tests can assert on the
    question sequence.  Running out of answers fails the test loudly.
    """

    def __init__(self, answers: Iterable[str]) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self.answers.pop(0)

    @property
    def exhausted(self) -> bool:
        return not self.answers


@pytest.fixture
def scripted():
    """Factory building a :class:`ScriptedAsk` from a list of answers."""
    return ScriptedAsk
