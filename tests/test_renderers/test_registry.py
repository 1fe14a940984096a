"""Tests for clientgen.renderers.registry."""

from __future__ import annotations

import importlib.metadata
import logging

import pytest

from clientgen.exceptions import RendererError
from clientgen.models import GeneratorInput, RenderOutput
from clientgen.renderers.base import NoopRenderer, Renderer
from clientgen.renderers.functions import FunctionsRenderer
from clientgen.renderers.registry import ENTRY_POINT_GROUP, RendererRegistry


class _StaticRenderer(Renderer):
    id = "static"

    def render(self, input: GeneratorInput) -> RenderOutput:
        return RenderOutput()


class _FakeEntryPoint:
    def __init__(self, name: str, target=None, error: Exception | None = None) -> None:
        self.name = name
        self._target = target
        self._error = error

    def load(self):
        if self._error is not None:
            raise self._error
        return self._target


class _FakeEntryPoints:
    def __init__(self, eps: list[_FakeEntryPoint]) -> None:
        self._eps = eps
        self.groups: list[str] = []

    def select(self, group: str) -> list[_FakeEntryPoint]:
        self.groups.append(group)
        return self._eps


class TestBuiltins:
    def test_ids(self) -> None:
        assert RendererRegistry.with_builtins().ids() == [
            "axios-js",
            "axios-ts",
            "functions",
            "react-query",
            "uniapp",
            "vue-query",
        ]

    def test_create_returns_new_instances(self) -> None:
        registry = RendererRegistry.with_builtins()
        first = registry.create("functions")
        assert isinstance(first, FunctionsRenderer)
        assert registry.create("functions") is not first

    def test_unknown_id(self) -> None:
        with pytest.raises(RendererError, match="Unknown renderer 'nope'"):
            RendererRegistry.with_builtins().create("nope")

    def test_empty_registry_lists_none(self) -> None:
        with pytest.raises(RendererError, match="Available: none"):
            RendererRegistry().create("functions")


class TestRegister:
    def test_register_and_contains(self) -> None:
        registry = RendererRegistry()
        registry.register("static", _StaticRenderer)
        assert "static" in registry
        assert "other" not in registry
        assert isinstance(registry.create("static"), _StaticRenderer)

    def test_register_replaces(self) -> None:
        registry = RendererRegistry()
        registry.register("x", _StaticRenderer)
        registry.register("x", NoopRenderer)
        assert isinstance(registry.create("x"), NoopRenderer)
        assert registry.ids() == ["x"]


class TestDiscover:
    def test_loads_entry_points(self, monkeypatch: pytest.MonkeyPatch) -> None:
        eps = _FakeEntryPoints([_FakeEntryPoint("static", _StaticRenderer)])
        monkeypatch.setattr(importlib.metadata, "entry_points", lambda: eps)

        registry = RendererRegistry.with_builtins()
        assert registry.discover() == ["static"]
        assert eps.groups == [ENTRY_POINT_GROUP]
        assert isinstance(registry.create("static"), _StaticRenderer)

    def test_failing_entry_point_is_skipped(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        eps = _FakeEntryPoints([
            _FakeEntryPoint("broken", error=ImportError("no module named broken")),
            _FakeEntryPoint("static", _StaticRenderer),
        ])
        monkeypatch.setattr(importlib.metadata, "entry_points", lambda: eps)

        registry = RendererRegistry()
        with caplog.at_level(logging.WARNING, logger="clientgen"):
            loaded = registry.discover()

        assert loaded == ["static"]
        assert "broken" not in registry
        assert "Failed to load renderer 'broken'" in caplog.text
