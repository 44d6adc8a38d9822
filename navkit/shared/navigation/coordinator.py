"""Navigation coordinator: push a result-producing screen and await its answer.

Threading: everything here assumes a single asyncio event loop. Bus
handlers, stack listeners and the awaiting caller all run on that loop, so
``register``, ``resolve`` and ``check_for_external_pop`` never interleave.
Driving a coordinator from several threads requires explicit
synchronization around those three registry calls.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Hashable, Optional

from navkit.shared.core.configuration import NavigationConfig, OverlapPolicy
from navkit.shared.core.envelopes import ResultEnvelope, ResultKind
from navkit.shared.core.errors import CoordinatorNotStartedError
from navkit.shared.core.result_bus import ResultBus

from .registry import WaiterRegistry
from .session import NavigationSession, ResolutionReason, SessionState
from .stack import NavigationStackProtocol, StackSnapshot

logger = logging.getLogger(__name__)


class NavigationCoordinator:
    """Façade for "navigate to a screen and await its result".

    Screens that need a child's answer call ``navigate_and_await`` without
    knowing the child's implementation; the child reports back by publishing
    a ResultEnvelope on the shared bus.

    Usage:
        coordinator = NavigationCoordinator(bus, stack)
        await coordinator.start()
        issue = await coordinator.navigate_and_await(
            Route(destination=NavigationDestination.ISSUES_LIST_PICKER),
            ResultKind.ISSUE_SELECTED,
        )
    """

    def __init__(
        self,
        bus: ResultBus,
        stack: NavigationStackProtocol,
        config: Optional[NavigationConfig] = None,
        name: str = "coordinator",
    ):
        self.bus = bus
        self.stack = stack
        self.config = config or NavigationConfig()
        self.name = name
        self.registry = WaiterRegistry(self.config.overlap_policy, name=name, sequence=lambda: self.bus.sequence)
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def state(self) -> SessionState:
        pending = self.registry.pending
        return pending.state if pending is not None else SessionState.IDLE

    async def start(self) -> None:
        """Subscribe to the result bus and observe the stack."""
        if self._started:
            return
        await self.bus.subscribe(self.handle_envelope)
        self.stack.add_listener(self.handle_stack_changed)
        self._started = True
        logger.info(f"{self.name}: started ({self.config.overlap_policy.value} overlap policy)")

    async def stop(self) -> None:
        """Tear down: wake any pending caller with no result and unsubscribe."""
        self.cancel_pending()
        if not self._started:
            return
        self.stack.remove_listener(self.handle_stack_changed)
        await self.bus.unsubscribe(self.handle_envelope)
        self._started = False
        logger.info(f"{self.name}: stopped")

    def cancel_pending(self) -> bool:
        """Resolve the pending session (if any) to no result."""
        session = self.registry.pending
        if session is None:
            return False
        self.registry.cancel(session, ResolutionReason.TEARDOWN)
        if self.config.restore_stack_on_teardown:
            self._restore_depth(session)
        return True

    async def navigate_and_await(self, destination: Hashable, result_kind: ResultKind) -> Optional[Any]:
        """Push ``destination`` and suspend until it reports ``result_kind``.

        Returns the selected payload, or None when the screen was cancelled,
        popped by the user, superseded or torn down.

        Raises:
            AlreadyPendingError: another session is pending under the REJECT policy
            CoordinatorNotStartedError: start() has not been awaited
        """
        if not self._started:
            raise CoordinatorNotStartedError(self.name)

        if self.config.overlap_policy is OverlapPolicy.CANCEL_AND_REPLACE:
            superseded = self.registry.supersede_pending()
            if superseded is not None:
                self._restore_depth(superseded)

        # Raises before anything is pushed
        session = self.registry.register(result_kind, self.stack.depth + 1, destination)
        self.stack.push(destination)
        logger.info(f"{self.name}: awaiting '{result_kind.value}' from {destination} (session {session.session_id})")

        try:
            result = await session.wait()
        except asyncio.CancelledError:
            if not session.waiter.resolved:
                self.registry.cancel(session, ResolutionReason.TEARDOWN)
                self._restore_depth(session)
            raise

        logger.info(f"{self.name}: session {session.session_id} finished as {session.state.value}")
        return result

    async def handle_envelope(self, envelope: ResultEnvelope) -> None:
        """Bus subscriber: route an envelope to the session that was live when it was published."""
        self.registry.check_for_external_pop(self.stack.depth)

        session = self.registry.route(envelope.kind, envelope.seq)
        if session is None:
            logger.debug(f"{self.name}: ignoring '{envelope.kind.value}' envelope (seq {envelope.seq})")
            return

        if envelope.is_cancellation:
            delivered = self.registry.cancel(session)
        else:
            delivered = self.registry.resolve(session, envelope.payload)

        if delivered:
            self._restore_depth(session)

    def handle_stack_changed(self, snapshot: StackSnapshot) -> None:
        """Stack listener: catch back gestures that produce no envelope."""
        self.registry.check_for_external_pop(snapshot.depth)

    def _restore_depth(self, session: NavigationSession) -> None:
        target = session.expected_depth - 1
        while self.stack.depth > target:
            self.stack.pop()


async def navigate_for_result(
    coordinator: NavigationCoordinator,
    destination: Hashable,
    result_kind: ResultKind,
    timeout: Optional[float] = None,
) -> Optional[Any]:
    """Await a navigation result, giving up after ``timeout`` seconds.

    On timeout the session is torn down like a cancelled caller and None is
    returned.
    """
    if timeout is None:
        return await coordinator.navigate_and_await(destination, result_kind)
    try:
        return await asyncio.wait_for(coordinator.navigate_and_await(destination, result_kind), timeout)
    except asyncio.TimeoutError:
        logger.warning(f"{coordinator.name}: no '{result_kind.value}' within {timeout}s")
        return None
