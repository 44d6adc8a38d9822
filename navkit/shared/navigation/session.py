"""Navigation sessions and the exactly-once waiters that block their callers."""

from __future__ import annotations

import asyncio
import uuid
from enum import Enum
from typing import Any, Hashable, Optional

from navkit.shared.core.envelopes import ResultKind


class SessionState(str, Enum):
    IDLE = "idle"
    AWAITING_RESULT = "awaiting_result"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    SUPERSEDED = "superseded"


class ResolutionReason(str, Enum):
    """Why a waiter was woken."""
    RESULT = "result"
    CANCELLED = "cancelled"
    EXTERNAL_POP = "external_pop"
    SUPERSEDED = "superseded"
    TEARDOWN = "teardown"

    @property
    def session_state(self) -> SessionState:
        if self is ResolutionReason.RESULT:
            return SessionState.RESOLVED
        if self is ResolutionReason.SUPERSEDED:
            return SessionState.SUPERSEDED
        return SessionState.CANCELLED

    @property
    def is_stale(self) -> bool:
        """True when the session was closed by something other than its own screen."""
        return self in (
            ResolutionReason.EXTERNAL_POP,
            ResolutionReason.SUPERSEDED,
            ResolutionReason.TEARDOWN,
        )


class Waiter:
    """Exactly-once handle over an asyncio future.

    The first ``resolve`` wins; later calls return False and deliver nothing.
    Cancelling the awaiting task cancels the future but does not count as a
    resolution, so the registry can still close the session afterwards.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._reason: Optional[ResolutionReason] = None
        self._value: Any = None

    @property
    def resolved(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> Optional[ResolutionReason]:
        return self._reason

    @property
    def value(self) -> Any:
        return self._value

    def resolve(self, value: Any, reason: ResolutionReason = ResolutionReason.RESULT) -> bool:
        if self._reason is not None:
            return False
        self._reason = reason
        self._value = value
        if not self._future.done():
            self._future.set_result(value)
        return True

    async def wait(self) -> Any:
        return await self._future


class NavigationSession:
    """One outstanding "push a screen, await its result" operation.

    Also serves as the handle passed back to the registry when resolving.

    ``registered_seq`` and ``closed_seq`` are result bus sequence numbers:
    an envelope belongs to this session only if it was published after
    registration and no later than the close.
    """

    def __init__(
        self,
        result_kind: ResultKind,
        expected_depth: int,
        destination: Optional[Hashable] = None,
        registered_seq: int = 0,
    ):
        self.session_id = uuid.uuid4().hex[:12]
        self.result_kind = result_kind
        self.expected_depth = expected_depth
        self.destination = destination
        self.registered_seq = registered_seq
        self.closed_seq: Optional[int] = None
        self.waiter = Waiter()

    def owns(self, seq: Optional[int]) -> bool:
        """True if an envelope stamped ``seq`` was published while this session was live."""
        if seq is None:
            return self.closed_seq is None
        if seq <= self.registered_seq:
            return False
        return self.closed_seq is None or seq <= self.closed_seq

    @property
    def state(self) -> SessionState:
        if self.waiter.reason is None:
            return SessionState.AWAITING_RESULT
        return self.waiter.reason.session_state

    @property
    def reason(self) -> Optional[ResolutionReason]:
        return self.waiter.reason

    async def wait(self) -> Any:
        """Suspend until the session resolves; None means no result."""
        return await self.waiter.wait()

    def __repr__(self) -> str:
        return (
            f"NavigationSession(id={self.session_id}, kind={self.result_kind.value}, "
            f"expected_depth={self.expected_depth}, state={self.state.value})"
        )
