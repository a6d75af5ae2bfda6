import asyncio
from typing import Awaitable, Callable

from loguru import logger


class TickTimer:
    """Calls ``callback`` every ``interval`` seconds from an asyncio task.

    ``start`` and ``cancel`` are idempotent. Used as an async context
    manager the task is always cancelled on exit.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self._callback = callback
        self.interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        # Must be called from the loop that will own the task
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(f"Tick timer started (every {self.interval}s)")

    def cancel(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.debug("Tick timer cancelled")
        self._task = None

    async def _run(self) -> None:
        while True:
            await self._sleep(self.interval)
            self._callback()

    async def __aenter__(self) -> "TickTimer":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()
