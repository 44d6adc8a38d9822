# tests/test_registry.py
import pytest

from navkit.shared.core.configuration import OverlapPolicy
from navkit.shared.core.envelopes import ResultKind
from navkit.shared.core.errors import AlreadyPendingError
from navkit.shared.navigation import ResolutionReason, SessionState, WaiterRegistry

KIND = ResultKind.ISSUE_SELECTED


@pytest.mark.asyncio
async def test_resolve_delivers_result_and_clears_slot():
    registry = WaiterRegistry()
    session = registry.register(KIND, expected_depth=3)

    assert registry.resolve(session, "abc")

    assert await session.wait() == "abc"
    assert session.state is SessionState.RESOLVED
    assert registry.pending is None
    assert registry.last_session is session


@pytest.mark.asyncio
async def test_second_resolution_is_absorbed():
    registry = WaiterRegistry()
    session = registry.register(KIND, expected_depth=3)
    registry.resolve(session, "abc")

    assert not registry.resolve(session, "xyz")
    assert not registry.cancel(session)

    assert await session.wait() == "abc"
    assert registry.discard_counts["DoubleResolutionAttempt"] == 2


@pytest.mark.asyncio
async def test_register_while_pending_rejects_and_keeps_existing():
    registry = WaiterRegistry(OverlapPolicy.REJECT)
    first = registry.register(KIND, expected_depth=3)

    with pytest.raises(AlreadyPendingError) as excinfo:
        registry.register(KIND, expected_depth=4)

    assert excinfo.value.session_id == first.session_id
    assert registry.pending is first
    assert first.state is SessionState.AWAITING_RESULT


@pytest.mark.asyncio
async def test_cancel_and_replace_supersedes_prior_waiter():
    registry = WaiterRegistry(OverlapPolicy.CANCEL_AND_REPLACE)
    first = registry.register(KIND, expected_depth=3)

    second = registry.register(KIND, expected_depth=3)

    assert await first.wait() is None
    assert first.state is SessionState.SUPERSEDED
    assert registry.pending is second


@pytest.mark.asyncio
async def test_resolving_superseded_session_is_stale():
    registry = WaiterRegistry(OverlapPolicy.CANCEL_AND_REPLACE)
    first = registry.register(KIND, expected_depth=3)
    second = registry.register(KIND, expected_depth=3)

    assert not registry.resolve(first, "late")

    assert registry.discard_counts["StaleResolutionDiscarded"] == 1
    assert registry.discarded[0].session_id == first.session_id
    assert registry.pending is second


@pytest.mark.asyncio
async def test_cancel_wakes_waiter_with_none():
    registry = WaiterRegistry()
    session = registry.register(KIND, expected_depth=3)

    assert registry.cancel(session)

    assert await session.wait() is None
    assert session.state is SessionState.CANCELLED
    assert session.reason is ResolutionReason.CANCELLED


@pytest.mark.asyncio
async def test_external_pop_cancels_once():
    registry = WaiterRegistry()
    session = registry.register(KIND, expected_depth=3)

    assert not registry.check_for_external_pop(3)
    assert not registry.check_for_external_pop(4)
    assert registry.check_for_external_pop(2)
    assert not registry.check_for_external_pop(2)

    assert await session.wait() is None
    assert session.reason is ResolutionReason.EXTERNAL_POP


@pytest.mark.asyncio
async def test_late_result_after_external_pop_is_discarded():
    registry = WaiterRegistry()
    session = registry.register(KIND, expected_depth=3)
    registry.check_for_external_pop(2)

    assert not registry.resolve(session, "abc")

    assert await session.wait() is None
    assert registry.discard_counts["StaleResolutionDiscarded"] == 1
    assert registry.discard_counts["DoubleResolutionAttempt"] == 0


def test_external_pop_without_pending_session():
    assert not WaiterRegistry().check_for_external_pop(0)


@pytest.mark.asyncio
async def test_foreign_handle_is_stale():
    registry = WaiterRegistry()
    other = WaiterRegistry().register(KIND, expected_depth=2)

    assert not registry.resolve(other, "abc")

    assert registry.discard_counts["StaleResolutionDiscarded"] == 1
    assert other.state is SessionState.AWAITING_RESULT


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operations, expected",
    [
        (["resolve", "resolve"], "first"),
        (["cancel", "resolve"], None),
        (["pop", "resolve", "cancel"], None),
        (["resolve", "pop", "cancel"], "first"),
    ],
)
async def test_waiter_is_resolved_exactly_once(operations, expected):
    registry = WaiterRegistry()
    session = registry.register(KIND, expected_depth=3)
    values = iter(["first", "second", "third"])

    delivered = 0
    for op in operations:
        if op == "resolve":
            delivered += registry.resolve(session, next(values))
        elif op == "cancel":
            delivered += registry.cancel(session)
        else:
            delivered += registry.check_for_external_pop(2)

    assert delivered == 1
    assert await session.wait() == expected
    assert len(registry.discarded) == len(operations) - 1 - operations[1:].count("pop")


class Clock:
    """Stand-in for the bus sequence counter."""

    def __init__(self):
        self.value = 0

    def __call__(self):
        return self.value


@pytest.mark.asyncio
async def test_sessions_record_bus_sequence():
    clock = Clock()
    registry = WaiterRegistry(sequence=clock)
    clock.value = 4
    session = registry.register(KIND, expected_depth=3)
    clock.value = 6

    registry.check_for_external_pop(2)

    assert session.registered_seq == 4
    assert session.closed_seq == 6


@pytest.mark.asyncio
async def test_route_matches_envelopes_published_while_live():
    clock = Clock()
    registry = WaiterRegistry(OverlapPolicy.CANCEL_AND_REPLACE, sequence=clock)
    first = registry.register(KIND, expected_depth=3)
    clock.value = 2
    second = registry.register(KIND, expected_depth=3)

    assert registry.route(KIND, 1) is first
    assert registry.route(KIND, 2) is first
    assert registry.route(KIND, 3) is second
    assert registry.route(KIND, None) is second
    assert registry.route(ResultKind.ASSET_SELECTED, 3) is None


@pytest.mark.asyncio
async def test_route_ignores_envelopes_after_close():
    clock = Clock()
    registry = WaiterRegistry(sequence=clock)
    session = registry.register(KIND, expected_depth=3)
    clock.value = 1
    registry.resolve(session, "abc")

    assert registry.route(KIND, 1) is session
    assert registry.route(KIND, 2) is None
    assert registry.route(KIND, None) is None


@pytest.mark.asyncio
async def test_discarded_signals_are_bounded():
    registry = WaiterRegistry(max_discarded=2)
    session = registry.register(KIND, expected_depth=3)
    registry.resolve(session, "abc")

    for _ in range(5):
        registry.resolve(session, "again")

    assert len(registry.discarded) == 2
    assert registry.discard_counts["DoubleResolutionAttempt"] == 5
