"""Tests for RequestRegistry."""

import asyncio

import pytest

from gobath_sdk._internal.dispatch.parallelism import RequestRegistry


class Operation:
    """Counts invocations and blocks until released."""

    def __init__(self, result="done", error: Exception | None = None):
        self.calls = 0
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self._result = result
        self._error = error

    async def __call__(self):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        if self._error is not None:
            raise self._error
        return self._result


class TestCoalescing:
    """Tests for coalesced runs."""

    @pytest.mark.asyncio
    async def test_identical_calls_share_one_invocation(self):
        """Should invoke the operation once for concurrent equal keys."""
        registry = RequestRegistry()
        op = Operation(result={"user_id": 1})

        first = asyncio.ensure_future(registry.run("GET profile", True, op))
        second = asyncio.ensure_future(registry.run("GET profile", True, op))
        await op.started.wait()
        assert "GET profile" in registry
        assert len(registry) == 1

        op.release.set()
        results = await asyncio.gather(first, second)

        assert op.calls == 1
        assert results[0] == results[1] == {"user_id": 1}
        assert results[0] is results[1]

    @pytest.mark.asyncio
    async def test_identical_calls_share_the_same_error(self):
        """Should deliver the same exception instance to every waiter."""
        registry = RequestRegistry()
        op = Operation(error=RuntimeError("boom"))

        first = asyncio.ensure_future(registry.run("k", True, op))
        second = asyncio.ensure_future(registry.run("k", True, op))
        await op.started.wait()
        op.release.set()
        results = await asyncio.gather(first, second, return_exceptions=True)

        assert op.calls == 1
        assert isinstance(results[0], RuntimeError)
        assert results[0] is results[1]

    @pytest.mark.asyncio
    async def test_entry_removed_after_success(self):
        """Should start a fresh invocation once the previous one settled."""
        registry = RequestRegistry()
        op = Operation()
        op.release.set()

        await registry.run("k", True, op)
        assert "k" not in registry
        await registry.run("k", True, op)

        assert op.calls == 2
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_entry_removed_after_failure(self):
        """Should not reuse a failed operation."""
        registry = RequestRegistry()
        op = Operation(error=ValueError("bad"))
        op.release.set()

        with pytest.raises(ValueError):
            await registry.run("k", True, op)
        assert "k" not in registry

        with pytest.raises(ValueError):
            await registry.run("k", True, op)
        assert op.calls == 2

    @pytest.mark.asyncio
    async def test_different_keys_run_separately(self):
        """Should not coalesce calls with different keys."""
        registry = RequestRegistry()
        op = Operation()

        first = asyncio.ensure_future(registry.run("a", True, op))
        second = asyncio.ensure_future(registry.run("b", True, op))
        while op.calls < 2:
            await asyncio.sleep(0)
        assert sorted(registry.keys()) == ["a", "b"]

        op.release.set()
        await asyncio.gather(first, second)
        assert op.calls == 2

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_operation(self):
        """Should keep the shared operation running when one waiter is cancelled."""
        registry = RequestRegistry()
        op = Operation(result=7)

        first = asyncio.ensure_future(registry.run("k", True, op))
        second = asyncio.ensure_future(registry.run("k", True, op))
        await op.started.wait()

        first.cancel()
        op.release.set()

        assert await second == 7
        assert first.cancelled()
        assert op.calls == 1


class TestWithoutCoalescing:
    """Tests for runs with coalescing disabled."""

    @pytest.mark.asyncio
    async def test_always_invokes(self):
        """Should invoke the operation for every call."""
        registry = RequestRegistry()
        op = Operation()

        first = asyncio.ensure_future(registry.run("k", False, op))
        second = asyncio.ensure_future(registry.run("k", False, op))
        while op.calls < 2:
            await asyncio.sleep(0)
        assert len(registry) == 0

        op.release.set()
        assert await asyncio.gather(first, second) == ["done", "done"]
        assert op.calls == 2
