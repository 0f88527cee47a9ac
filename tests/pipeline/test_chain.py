"""Tests specific to the chained decoration strategy."""

from __future__ import annotations

from typing import Any

from patchbay.domain.types import PassValue
from patchbay.pipeline import ChainedPipeline
from patchbay.pipeline.chain import CoreLink, HandlerLink, decorate, unwind


class TestDecorate:
    def test_each_link_wraps_previous(self) -> None:
        core = CoreLink("op", lambda p: p + 1)
        first = decorate(core, lambda v: None, name="first")
        second = decorate(first, lambda v: None, name="second")
        assert second.inner is first
        assert first.inner is core
        assert [link.name for link in second.links()] == ["first", "second"]
        assert second.operation == "op"

    def test_link_call_returns_core_output(self) -> None:
        seen: list[Any] = []
        chain = decorate(CoreLink("op", lambda p: p + 1), seen.append, name="s")
        output, invoked, diagnostics = chain(1)
        assert output == 2
        assert invoked == ["s"]
        assert diagnostics == []
        assert seen == [2]

    def test_payload_mode_link(self) -> None:
        seen: list[Any] = []
        link = decorate(
            CoreLink("op", lambda p: p + 1), seen.append, name="s", pass_value=PassValue.PAYLOAD
        )
        link(1)
        assert seen == [1]


class TestChainedPipeline:
    def test_register_builds_new_outer_link(self) -> None:
        pipeline = ChainedPipeline(lambda p: p)
        before = pipeline.chain
        assert isinstance(before, CoreLink)
        pipeline.register(lambda v: None, name="a")
        after = pipeline.chain
        assert isinstance(after, HandlerLink)
        assert after.inner is before

    def test_unregister_rebuilds_without_touching_old_chain(self) -> None:
        pipeline = ChainedPipeline(lambda p: p)
        pipeline.register(lambda v: None, name="a")
        pipeline.register(lambda v: None, name="b")
        snapshot = pipeline.chain
        pipeline.unregister("a")
        # A run holding the old chain still sees both handlers
        assert [link.name for link in snapshot.links()] == ["a", "b"]
        assert pipeline.handler_names() == ["b"]
        assert isinstance(pipeline.chain, HandlerLink)
        assert isinstance(pipeline.chain.inner, CoreLink)

    def test_unregister_all_returns_core(self) -> None:
        pipeline = ChainedPipeline(lambda p: p, operation="noop")
        pipeline.register(lambda v: None, name="only")
        pipeline.unregister("only")
        assert isinstance(pipeline.chain, CoreLink)
        assert pipeline.operation == "noop"

    def test_deep_chain_runs_without_recursion(self) -> None:
        calls: list[int] = []
        pipeline = ChainedPipeline(lambda p: p)
        for i in range(3000):
            pipeline.register(lambda v, i=i: calls.append(i), name=f"h{i}")
        assert len(pipeline.handler_names()) == 3000

        outcome = pipeline.execute(1)
        assert calls == list(range(3000))
        assert len(outcome.invoked) == 3000

        assert pipeline.unregister("h0") is True
        assert pipeline.handler_names()[0] == "h1"
        assert pipeline.chain.operation == "execute"


class TestUnwind:
    def test_core_and_links_innermost_first(self) -> None:
        core = CoreLink("op", lambda p: p)
        chain = decorate(decorate(core, lambda v: None, name="a"), lambda v: None, name="b")
        found_core, links = unwind(chain)
        assert found_core is core
        assert [link.name for link in links] == ["a", "b"]

    def test_bare_core(self) -> None:
        core = CoreLink("op", lambda p: p)
        assert unwind(core) == (core, [])
