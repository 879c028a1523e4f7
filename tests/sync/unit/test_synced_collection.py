"""
Unit Tests: SyncedCollection

Optimistic and pessimistic mutations, rollback, custom error handling and
serialization of overlapping mutations.
"""

import asyncio

import pytest

from enums.sync_strategy import SyncStrategy
from exceptions.api import ServerRejectionException
from services.sync import SyncedCollection, SyncOperation


def append(value):
    return lambda snapshot: snapshot + (value,)


async def ok_remote():
    return {"ok": True}


async def failing_remote():
    raise ServerRejectionException(500, "boom")


class TestPessimistic:

    @pytest.mark.asyncio
    async def test_applies_after_success(self):
        collection = SyncedCollection("items", ())
        seen_during_request = []

        async def remote():
            seen_during_request.append(collection.snapshot)

        result = await collection.mutate(SyncOperation("add", remote, SyncStrategy.PESSIMISTIC, apply_local=append("a")))

        assert result.ok
        assert seen_during_request == [()]
        assert collection.snapshot == ("a",)

    @pytest.mark.asyncio
    async def test_failure_leaves_snapshot_unchanged(self):
        collection = SyncedCollection("items", ("x",))

        result = await collection.mutate(SyncOperation("add", failing_remote, apply_local=append("a")))

        assert not result.ok
        assert isinstance(result.error, ServerRejectionException)
        assert result.snapshot == ("x",)
        assert collection.snapshot == ("x",)

    @pytest.mark.asyncio
    async def test_reconcile_builds_from_response(self):
        collection = SyncedCollection("items", ())

        async def reconcile(snapshot, response):
            return snapshot + (response["ok"],)

        result = await collection.mutate(SyncOperation("fetch", ok_remote, reconcile=reconcile))

        assert result.snapshot == (True,)


class TestOptimistic:

    @pytest.mark.asyncio
    async def test_applies_before_request(self):
        collection = SyncedCollection("items", ())
        seen_during_request = []

        async def remote():
            seen_during_request.append(collection.snapshot)

        await collection.mutate(SyncOperation("add", remote, SyncStrategy.OPTIMISTIC, apply_local=append("a")))

        assert seen_during_request == [("a",)]
        assert collection.snapshot == ("a",)

    @pytest.mark.asyncio
    async def test_rolls_back_exactly(self):
        before = ("x", "y")
        collection = SyncedCollection("items", before)

        result = await collection.mutate(
            SyncOperation("add", failing_remote, SyncStrategy.OPTIMISTIC, apply_local=append("a"))
        )

        assert result.error is not None
        assert collection.snapshot is before

    @pytest.mark.asyncio
    async def test_on_error_can_keep_local_change(self):
        collection = SyncedCollection("items", ())

        result = await collection.mutate(SyncOperation(
            "add",
            failing_remote,
            SyncStrategy.OPTIMISTIC,
            apply_local=append("a"),
            on_error=lambda before, current, error: (current, None),
        ))

        assert result.ok
        assert collection.snapshot == ("a",)


class TestLocalOnly:

    @pytest.mark.asyncio
    async def test_no_remote(self):
        collection = SyncedCollection("items", ())
        result = await collection.mutate(SyncOperation("tag", None, apply_local=append("t")))
        assert result.ok
        assert collection.snapshot == ("t",)

    def test_replace(self):
        collection = SyncedCollection("items", ())
        collection.replace(("z",))
        assert collection.snapshot == ("z",)


class TestErrors:

    @pytest.mark.asyncio
    async def test_non_domain_errors_propagate(self):
        collection = SyncedCollection("items", ())

        async def broken():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await collection.mutate(SyncOperation("add", broken, apply_local=append("a")))
        assert not collection.is_busy

    @pytest.mark.asyncio
    async def test_non_domain_error_rolls_back_optimistic_change(self):
        before = ("x",)
        collection = SyncedCollection("items", before)

        async def broken():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await collection.mutate(SyncOperation("add", broken, SyncStrategy.OPTIMISTIC, apply_local=append("a")))
        assert collection.snapshot is before

    @pytest.mark.asyncio
    async def test_cancelled_optimistic_mutation_rolls_back(self):
        before = ("x",)
        collection = SyncedCollection("items", before)
        started = asyncio.Event()

        async def hanging():
            started.set()
            await asyncio.Event().wait()

        task = asyncio.create_task(
            collection.mutate(SyncOperation("add", hanging, SyncStrategy.OPTIMISTIC, apply_local=append("a")))
        )
        await started.wait()
        assert collection.snapshot == ("x", "a")

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert collection.snapshot is before
        assert not collection.is_busy


class TestSerialization:

    @pytest.mark.asyncio
    async def test_overlapping_mutations_run_one_after_another(self):
        collection = SyncedCollection("items", ())
        events = []
        release_first = asyncio.Event()

        async def first():
            events.append("first:start")
            await release_first.wait()
            events.append("first:end")

        async def second():
            events.append("second:start")

        first_task = asyncio.create_task(
            collection.mutate(SyncOperation("first", first, apply_local=append(1)))
        )
        await asyncio.sleep(0)
        assert collection.is_busy

        second_task = asyncio.create_task(
            collection.mutate(SyncOperation("second", second, apply_local=append(2)))
        )
        await asyncio.sleep(0)
        assert events == ["first:start"]

        release_first.set()
        await asyncio.gather(first_task, second_task)

        assert events == ["first:start", "first:end", "second:start"]
        assert collection.snapshot == (1, 2)
        assert not collection.is_busy
