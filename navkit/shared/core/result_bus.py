from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, TypeAlias

from .envelopes import ResultEnvelope

ResultHandler: TypeAlias = Callable[[ResultEnvelope], Awaitable[None]]


class ResultBus:
    """Process-wide fan-out channel for navigation results.

    Child screens publish envelopes here instead of calling whoever pushed
    them. Every subscriber sees every envelope; filtering by kind is the
    subscriber's job. Nothing is retained after dispatch.

    Each published envelope is stamped with a monotonically increasing
    ``seq``. Dispatch happens later, in its own task, so subscribers compare
    ``seq`` against ``sequence`` values they recorded earlier to tell which
    envelopes were published before a given point.

    All methods must be called from the loop that owns the subscribers.
    """

    def __init__(self) -> None:
        self._subscribers: List[ResultHandler] = []
        self._logger = logging.getLogger(__name__)
        self._sequence = 0
        # Track pending tasks for deterministic waiting
        self._pending_tasks: set[asyncio.Task] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def sequence(self) -> int:
        """Sequence number of the most recently published envelope (0 before any)."""
        return self._sequence

    async def subscribe(self, handler: ResultHandler) -> None:
        """Register an async handler for every published envelope."""
        if handler not in self._subscribers:
            self._subscribers.append(handler)

    async def unsubscribe(self, handler: ResultHandler) -> None:
        """Remove a handler."""
        if handler in self._subscribers:
            self._subscribers.remove(handler)

    async def publish(self, envelope: ResultEnvelope) -> ResultEnvelope:
        """Stamp and broadcast an envelope; returns the stamped copy."""
        self._sequence += 1
        envelope = envelope.model_copy(update={"seq": self._sequence})

        handlers = list(self._subscribers)
        if not handlers:
            self._logger.debug(f"No subscribers for envelope '{envelope.kind.value}' (seq {envelope.seq})")
            return envelope

        self._logger.debug(
            f"Publishing '{envelope.kind.value}' (seq {envelope.seq}) from {envelope.source or 'unknown'} "
            f"to {len(handlers)} handler(s)"
        )
        for handler in handlers:
            task = asyncio.create_task(self._safe_dispatch(handler, envelope))
            self._pending_tasks.add(task)
            task.add_done_callback(self._pending_tasks.discard)
        return envelope

    async def wait_until_idle(self, timeout: float = 60.0) -> bool:
        """Wait for all pending handler dispatches to complete.

        Args:
            timeout: Maximum time to wait in seconds

        Returns:
            True if all tasks completed, False if timeout reached
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        # Handlers may publish again, so loop until nothing is left
        while True:
            pending = {task for task in self._pending_tasks if not task.done()}
            if not pending:
                return True
            remaining = deadline - loop.time()
            if remaining <= 0:
                self._logger.warning(f"ResultBus: Timeout reached while waiting for {len(pending)} tasks")
                return False
            await asyncio.wait(pending, timeout=remaining)

    async def _safe_dispatch(self, handler: ResultHandler, envelope: ResultEnvelope) -> None:
        """Dispatch wrapper to keep one handler failure from stopping the bus."""
        handler_name = getattr(handler, "__qualname__", str(handler))
        try:
            await handler(envelope)
        except Exception as exc:
            self._logger.exception(
                f"ResultBus handler error in '{handler_name}' for '{envelope.kind.value}'",
                exc_info=exc,
            )

    def clear(self) -> None:
        """Remove all subscriptions."""
        self._subscribers.clear()
