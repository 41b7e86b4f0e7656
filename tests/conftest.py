"""Configuration file for pytest."""

from pathlib import Path
from typing import List, Optional, Set

import pytest
from shared.errors import RenderError
from src.components.asset_generator import AssetProducer

SAMPLE_SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "coffee_shop.txt"


class FakeProducer(AssetProducer):
    """
    Offline producer that returns predictable image handles.
    Backgrounds or character names listed in ``fail_on`` raise RenderError.
    """

    def __init__(self, fail_on: Optional[Set[str]] = None):
        self.fail_on = fail_on or set()
        self.calls: List[str] = []

    async def render_background(self, description: str) -> str:
        self.calls.append(f"background:{description}")
        if description in self.fail_on:
            raise RenderError("background", "quota exceeded")
        return f"bg://{description}"

    async def render_portrait(self, name: str, description: str, emotion: str) -> str:
        self.calls.append(f"portrait:{name}:{emotion}")
        if name in self.fail_on:
            raise RenderError(f"portrait of {name} ({emotion})", "safety filter")
        return f"sprite://{name}/{emotion}"


@pytest.fixture
def fake_producer():
    return FakeProducer()


@pytest.fixture
def failing_producer():
    """Build a FakeProducer that fails on the given backgrounds or names."""
    return lambda *fail_on: FakeProducer(fail_on=set(fail_on))


@pytest.fixture
def sample_script_text():
    return SAMPLE_SCRIPT_PATH.read_text(encoding="utf-8")


@pytest.fixture
def sample_script_path():
    return SAMPLE_SCRIPT_PATH
