"""
Tests for View Aggregation

Tests for parallel() fan-out/fan-in and the genre checked-state annotation.
"""

import asyncio
from types import SimpleNamespace

import pytest

from catalog.services.aggregation import mark_checked, parallel


async def value_after(delay: float, value):
    await asyncio.sleep(delay)
    return value


async def fail_after(delay: float, exc: Exception):
    await asyncio.sleep(delay)
    raise exc


class TestParallel:
    """Tests for parallel()."""

    @pytest.mark.asyncio
    async def test_results_keyed_by_name(self):
        results = await parallel(
            slow=value_after(0.02, "slow"),
            fast=value_after(0, "fast"),
        )

        assert results == {"slow": "slow", "fast": "fast"}

    @pytest.mark.asyncio
    async def test_queries_run_concurrently(self):
        started = asyncio.get_running_loop().time()

        await parallel(a=value_after(0.1, 1), b=value_after(0.1, 2), c=value_after(0.1, 3))

        assert asyncio.get_running_loop().time() - started < 0.25

    @pytest.mark.asyncio
    async def test_no_queries(self):
        assert await parallel() == {}

    @pytest.mark.asyncio
    async def test_first_error_wins(self):
        """The error that occurs first is raised, not the first one listed."""
        with pytest.raises(KeyError):
            await parallel(
                late=fail_after(0.05, ValueError("late")),
                early=fail_after(0, KeyError("early")),
            )

    @pytest.mark.asyncio
    async def test_error_raised_after_all_finish(self):
        finished = []

        async def slow():
            await asyncio.sleep(0.05)
            finished.append("slow")
            return "done"

        with pytest.raises(ValueError):
            await parallel(bad=fail_after(0, ValueError("boom")), slow=slow())

        assert finished == ["slow"]

    @pytest.mark.asyncio
    async def test_cancellation_cancels_queries(self):
        """Cancelling the caller cancels every query and waits for them to stop."""
        started = asyncio.Event()
        stopped = []

        async def hang(name):
            try:
                started.set()
                await asyncio.sleep(10)
            finally:
                stopped.append(name)

        caller = asyncio.ensure_future(parallel(a=hang("a"), b=hang("b")))
        await started.wait()
        caller.cancel()

        with pytest.raises(asyncio.CancelledError):
            await caller

        assert sorted(stopped) == ["a", "b"]


class TestMarkChecked:
    """Tests for mark_checked()."""

    def test_marks_selected_genres(self):
        genres = [SimpleNamespace(id="g1", name="Fantasy"), SimpleNamespace(id="g2", name="Poetry")]

        choices = mark_checked(genres, ["g2"])

        assert [(choice.name, choice.checked) for choice in choices] == [
            ("Fantasy", False),
            ("Poetry", True),
        ]

    def test_nothing_selected(self):
        genres = [SimpleNamespace(id="g1", name="Fantasy")]

        assert [choice.checked for choice in mark_checked(genres, [])] == [False]

    def test_unknown_ids_ignored(self):
        genres = [SimpleNamespace(id="g1", name="Fantasy")]

        (choice,) = mark_checked(genres, ["missing"])

        assert choice.checked is False
        assert choice.genre is genres[0]
