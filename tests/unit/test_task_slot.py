"""Tests for scene_mapper/services/task_slot.py — Cancel-on-replace task handle."""

import asyncio

from scene_mapper.services.task_slot import TaskSlot


class TestTaskSlot:

    def test_empty_slot(self):
        slot = TaskSlot("empty")
        assert slot.task is None
        assert not slot.active
        assert slot.cancel() is False
        asyncio.run(slot.wait())

    def test_runs_task(self):
        results = []

        async def job():
            results.append("done")

        async def scenario():
            slot = TaskSlot("single")
            slot.replace(job())
            assert slot.active
            await slot.wait()
            assert not slot.active

        asyncio.run(scenario())
        assert results == ["done"]

    def test_replace_cancels_previous(self):
        results = []

        async def job(label, delay):
            await asyncio.sleep(delay)
            results.append(label)

        async def scenario():
            slot = TaskSlot("replace")
            first = slot.replace(job("first", 0.05))
            await asyncio.sleep(0)
            second = slot.replace(job("second", 0.01))
            await slot.wait()
            await asyncio.wait({first})
            return first, second

        first, second = asyncio.run(scenario())
        assert results == ["second"]
        assert first.cancelled()
        assert not second.cancelled()

    def test_cancel_running(self):
        async def scenario():
            slot = TaskSlot("cancel")
            task = slot.replace(asyncio.sleep(1))
            await asyncio.sleep(0)
            assert slot.cancel() is True
            assert slot.task is None
            await asyncio.wait({task})
            return task

        assert asyncio.run(scenario()).cancelled()

    def test_cancel_finished_task(self):
        async def scenario():
            slot = TaskSlot("finished")
            slot.replace(asyncio.sleep(0))
            await slot.wait()
            return slot.cancel()

        assert asyncio.run(scenario()) is False

    def test_wait_does_not_raise_task_errors(self):
        async def failing():
            raise RuntimeError("boom")

        async def scenario():
            slot = TaskSlot("errors")
            task = slot.replace(failing())
            await slot.wait()
            return task

        task = asyncio.run(scenario())
        assert isinstance(task.exception(), RuntimeError)
