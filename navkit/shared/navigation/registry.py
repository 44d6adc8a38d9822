"""Single-flight waiter registry.

Holds at most one pending NavigationSession and guarantees each one is
resolved exactly once. Conditions that indicate a navigation race (a late
result for a closed session, a repeated resolution) are absorbed here:
logged, kept in ``discarded`` (bounded, oldest dropped first) and counted in
``discard_counts``.
"""

from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Any, Callable, Deque, Hashable, Optional

from navkit.shared.core.configuration import OverlapPolicy
from navkit.shared.core.envelopes import ResultKind
from navkit.shared.core.errors import (
    AlreadyPendingError,
    DoubleResolutionAttempt,
    NavigationSignal,
    StaleResolutionDiscarded,
)

from .session import NavigationSession, ResolutionReason

logger = logging.getLogger(__name__)

MAX_DISCARDED = 100


def _no_sequence() -> int:
    return 0


class WaiterRegistry:
    """Owns the single in-flight waiter of one coordinator.

    ``sequence`` returns the current result bus sequence number. It is read
    when a session is registered and when it is closed, so envelopes can be
    attributed to the session that was live when they were published.
    """

    def __init__(
        self,
        policy: OverlapPolicy = OverlapPolicy.REJECT,
        name: str = "default",
        sequence: Optional[Callable[[], int]] = None,
        max_discarded: int = MAX_DISCARDED,
    ):
        self.policy = policy
        self.name = name
        self._sequence = sequence or _no_sequence
        self._pending: Optional[NavigationSession] = None
        self._last_session: Optional[NavigationSession] = None
        self.discarded: Deque[NavigationSignal] = deque(maxlen=max_discarded)
        self.discard_counts: Counter = Counter()

    @property
    def pending(self) -> Optional[NavigationSession]:
        return self._pending

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    @property
    def last_session(self) -> Optional[NavigationSession]:
        """The most recently closed session, kept so late signals can be attributed."""
        return self._last_session

    def register(
        self,
        result_kind: ResultKind,
        expected_depth: int,
        destination: Optional[Hashable] = None,
    ) -> NavigationSession:
        """Store a new waiter for ``result_kind``.

        Raises:
            AlreadyPendingError: a session is pending and the policy is REJECT
        """
        if self._pending is not None:
            if self.policy is OverlapPolicy.REJECT:
                raise AlreadyPendingError(self._pending.session_id, self._pending.result_kind.value)
            self.supersede_pending()

        session = NavigationSession(result_kind, expected_depth, destination, registered_seq=self._sequence())
        self._pending = session
        logger.debug(f"[{self.name}] Registered {session!r}")
        return session

    def route(self, result_kind: ResultKind, seq: Optional[int]) -> Optional[NavigationSession]:
        """Find the session an envelope of ``result_kind`` stamped ``seq`` was meant for.

        That is the pending session if the envelope was published after it
        registered, else the last closed session if the envelope was
        published while it was live. Anything else belongs to nobody here.
        """
        for session in (self._pending, self._last_session):
            if session is not None and session.result_kind == result_kind and session.owns(seq):
                return session
        return None

    def supersede_pending(self) -> Optional[NavigationSession]:
        """Close the pending session with a superseded outcome; returns it."""
        session = self._pending
        if session is None:
            return None
        self._close(session, None, ResolutionReason.SUPERSEDED)
        logger.info(f"[{self.name}] Superseded session {session.session_id}")
        return session

    def resolve(self, handle: NavigationSession, result: Any) -> bool:
        """Deliver ``result`` to the waiter registered under ``handle``."""
        if not self._accepts(handle):
            return False
        self._close(handle, result, ResolutionReason.RESULT)
        logger.debug(f"[{self.name}] Resolved session {handle.session_id}")
        return True

    def cancel(
        self,
        handle: NavigationSession,
        reason: ResolutionReason = ResolutionReason.CANCELLED,
    ) -> bool:
        """Wake the waiter under ``handle`` with no result."""
        if not self._accepts(handle):
            return False
        self._close(handle, None, reason)
        logger.debug(f"[{self.name}] Cancelled session {handle.session_id} ({reason.value})")
        return True

    def check_for_external_pop(self, current_depth: int) -> bool:
        """Cancel the pending session if its screen is no longer on the stack.

        Returns True only when this call performed the cleanup.
        """
        session = self._pending
        if session is None or current_depth >= session.expected_depth:
            return False
        logger.info(
            f"[{self.name}] Stack depth {current_depth} < {session.expected_depth}; "
            f"session {session.session_id} dismissed externally"
        )
        self._close(session, None, ResolutionReason.EXTERNAL_POP)
        return True

    def _accepts(self, handle: NavigationSession) -> bool:
        if handle is self._pending and not handle.waiter.resolved:
            return True

        reason = handle.reason
        if reason is not None and not reason.is_stale:
            self._discard(DoubleResolutionAttempt(handle.session_id))
        else:
            cause = reason.value if reason is not None else "not registered"
            self._discard(StaleResolutionDiscarded(handle.session_id, cause))
        return False

    def _close(self, session: NavigationSession, value: Any, reason: ResolutionReason) -> None:
        session.waiter.resolve(value, reason)
        session.closed_seq = self._sequence()
        if self._pending is session:
            self._pending = None
        self._last_session = session

    def _discard(self, signal: NavigationSignal) -> None:
        self.discarded.append(signal)
        self.discard_counts[type(signal).__name__] += 1
        logger.warning(f"[{self.name}] {signal.message}")
