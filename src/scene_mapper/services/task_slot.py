"""
Single-slot task handle.

Holds at most one running asyncio task; starting a new one cancels the
previous. Used for phase timers and staged processing, where a newer
request always supersedes the older one.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class TaskSlot:
    """An "active task" handle with cancel-on-replace semantics."""

    def __init__(self, name: str):
        self.name = name
        self._task: asyncio.Task | None = None

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def replace(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """
        Cancel the running task (if any) and start a new one.

        Must be called from a running event loop.
        """
        superseded = self.cancel()
        self._task = asyncio.get_running_loop().create_task(coro)

        logger.debug("task_slot_replaced", slot=self.name, superseded=superseded)
        return self._task

    def cancel(self) -> bool:
        """
        Cancel the running task.

        Returns True if a task was still running and got cancelled.
        """
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            return True
        return False

    async def wait(self) -> None:
        """Wait for the current task to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        await asyncio.wait({task})
