"""
Navigation Module
=================

Cross-module navigation with awaitable results.

- stack: NavigationStack, Route, StackSnapshot
- session: NavigationSession, Waiter, SessionState
- registry: WaiterRegistry (single-flight, exactly-once)
- coordinator: NavigationCoordinator façade
"""

from .stack import (
    NavigationDestination,
    NavigationStack,
    NavigationStackProtocol,
    Route,
    StackSnapshot,
)
from .session import NavigationSession, ResolutionReason, SessionState, Waiter
from .registry import WaiterRegistry
from .coordinator import NavigationCoordinator, navigate_for_result

__all__ = [
    "NavigationDestination",
    "NavigationStack",
    "NavigationStackProtocol",
    "Route",
    "StackSnapshot",
    "NavigationSession",
    "ResolutionReason",
    "SessionState",
    "Waiter",
    "WaiterRegistry",
    "NavigationCoordinator",
    "navigate_for_result",
]
