"""Tests for the drain() and walk() helpers."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from depgraph.core import DependencyGraph, drain, walk
from depgraph.exceptions import CycleError


@dataclass(frozen=True)
class _Item:
    name: str
    needs: tuple[str, ...] = ()

    def dependencies(self) -> tuple[str, ...]:
        return self.needs

    def matches(self, dependency: str) -> bool:
        return dependency == self.name


def _chain() -> list[_Item]:
    return [_Item("app", ("lib", "ext")), _Item("lib", ("core",)), _Item("core")]


class TestDrain:
    """drain() collects the full outcome of a graph."""

    def test_complete_drain(self) -> None:
        result = drain(DependencyGraph(_chain()))
        assert result.complete
        assert [i.name for i in result.builds] == ["core", "lib", "app"]
        assert result.lookups == ["ext"]
        assert len(result.steps) == 4
        result.raise_for_residual()

    def test_cycle_leaves_residual(self) -> None:
        result = drain(DependencyGraph([_Item("a", ("b",)), _Item("b", ("a",))]))
        assert not result.complete
        assert result.steps == []
        with pytest.raises(CycleError):
            result.raise_for_residual()

    def test_empty_graph(self) -> None:
        result = drain(DependencyGraph([]))
        assert result.complete
        assert result.builds == []


class TestWalk:
    """walk() hands each step to the matching callback, in order."""

    def test_callbacks_follow_drain_order(self) -> None:
        calls: list[str] = []
        walk(
            _chain(),
            build=lambda item: calls.append(f"build:{item.name}"),
            lookup=lambda dep: calls.append(f"lookup:{dep}"),
        )
        assert calls.index("lookup:ext") < calls.index("build:app")
        assert calls.index("build:core") < calls.index("build:lib")
        assert calls.index("build:lib") < calls.index("build:app")
        assert len(calls) == 4

    def test_lookup_is_optional(self) -> None:
        built: list[str] = []
        result = walk(_chain(), build=lambda item: built.append(item.name))
        assert built == ["core", "lib", "app"]
        assert result.lookups == ["ext"]

    def test_callback_errors_propagate(self) -> None:
        def fail(item: _Item) -> None:
            if item.name == "lib":
                raise RuntimeError("build failed")

        with pytest.raises(RuntimeError, match="build failed"):
            walk(_chain(), build=fail)

    def test_strict_raises_on_cycle(self) -> None:
        items = [_Item("a", ("b",)), _Item("b", ("a",))]
        with pytest.raises(CycleError) as excinfo:
            walk(items, build=lambda item: None, strict=True)
        assert len(excinfo.value.residual) == 2

    def test_non_strict_returns_residual(self) -> None:
        items = [_Item("a", ("b",)), _Item("b", ("a",)), _Item("c")]
        result = walk(items, build=lambda item: None)
        assert [i.name for i in result.builds] == ["c"]
        assert len(result.residual) == 2
