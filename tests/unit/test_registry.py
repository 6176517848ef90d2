"""Tests for the tool registry."""

from __future__ import annotations

import inspect
from typing import Any

import pytest

from gerber_quote.tools import TOOL_REGISTRY, registry


def _handler(bundle_path: str) -> dict[str, Any]:
    """Return the path back."""
    return {"bundle_path": bundle_path}


@pytest.fixture
def empty_registry(monkeypatch: pytest.MonkeyPatch) -> dict[str, registry.ToolSpec]:
    fresh: dict[str, registry.ToolSpec] = {}
    monkeypatch.setattr(registry, "TOOL_REGISTRY", fresh)
    return fresh


class TestRegisterTool:
    def test_returns_and_stores_spec(self, empty_registry: dict[str, registry.ToolSpec]) -> None:
        spec = registry.register_tool("echo", "Echo a path.", _handler, category="analysis")
        assert empty_registry == {"echo": spec}
        assert spec.handler(bundle_path="a.zip") == {"bundle_path": "a.zip"}

    def test_same_name_replaces(self, empty_registry: dict[str, registry.ToolSpec]) -> None:
        registry.register_tool("echo", "First.", _handler)
        registry.register_tool("echo", "Second.", _handler)
        assert len(empty_registry) == 1
        assert empty_registry["echo"].description == "Second."

    def test_categories_keep_order(self, empty_registry: dict[str, registry.ToolSpec]) -> None:
        registry.register_tool("b", "B.", _handler, category="x")
        registry.register_tool("a", "A.", _handler, category="x")
        registry.register_tool("c", "C.", _handler)
        categories = registry.get_categories()
        assert [t.name for t in categories["x"]] == ["b", "a"]
        assert [t.name for t in categories["general"]] == ["c"]


class TestRegisteredHandlers:
    def test_handlers_are_documented(self) -> None:
        # FastMCP builds the tool schema from the handler itself
        for spec in TOOL_REGISTRY.values():
            assert inspect.getdoc(spec.handler), spec.name

    def test_parameter_names(self) -> None:
        params = {
            name: list(inspect.signature(spec.handler).parameters)
            for name, spec in TOOL_REGISTRY.items()
        }
        assert params["check_manufacturability"] == ["bundle_path", "preset_name"]
        assert params["list_manufacturer_presets"] == []
        assert params["analyze_gerber_text"] == ["file_name", "content"]
