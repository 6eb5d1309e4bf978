import asyncio
from typing import Any, Awaitable

from .logger import logger


class ExecutionContext:
    """Lets a handler schedule work that outlives its response."""

    def __init__(self):
        self._tasks: list[asyncio.Task] = []

    def wait_until(self, awaitable: Awaitable[Any]) -> None:
        self._tasks.append(asyncio.ensure_future(awaitable))

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    async def drain(self) -> None:
        while self._tasks:
            tasks, self._tasks = self._tasks, []
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"background task failed: {result!r}", exc_info=result)
