"""Asyncio debouncing helper."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from aws_lambda_powertools import Logger

from core.utils.constants import SEARCH_DEBOUNCE_SECONDS

logger = Logger(UTC=True)


class Debouncer:
    """Run an async callback once the triggers have been quiet for ``delay``.

    Every ``trigger`` cancels the pending call and schedules a new one,
    so only the most recent arguments are ever delivered. Must be used
    from a running event loop.
    """

    def __init__(
        self,
        callback: Callable[..., Awaitable[Any]],
        *,
        delay: float = SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be zero or positive")
        self._callback = callback
        self._delay = delay
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args: Any) -> asyncio.Task[None]:
        """Restart the quiet period with new arguments."""
        self.cancel()
        self._task = asyncio.create_task(self._run(args))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait until the latest scheduled call has finished."""
        while self._task is not None:
            task = self._task
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
            if self._task is task:
                return

    async def _run(self, args: tuple[Any, ...]) -> None:
        await asyncio.sleep(self._delay)
        try:
            await self._callback(*args)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Debounced callback failed", extra={"error": str(exc)})
