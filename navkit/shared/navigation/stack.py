"""Navigation stack shared between the UI layer and coordinators."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Hashable, List, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class NavigationDestination(str, Enum):
    """Screens reachable through the stack."""
    ASSETS_LIST = "assets_list"
    ASSET_DETAIL = "asset_detail"
    ISSUES_LIST = "issues_list"
    ISSUES_LIST_PICKER = "issues_list_picker"
    ISSUE_DETAIL = "issue_detail"
    ASSET_FILTERS = "asset_filters"


class Route(BaseModel):
    """A stack entry: a destination plus its optional argument (e.g. an asset id)."""
    model_config = ConfigDict(frozen=True)

    destination: NavigationDestination
    argument: Optional[str] = None

    def __str__(self) -> str:
        if self.argument is None:
            return self.destination.value
        return f"{self.destination.value}({self.argument})"


class StackSnapshot(BaseModel):
    """The observed navigation history at one point in time."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    entries: Tuple[Any, ...] = ()
    version: int = 0

    @property
    def depth(self) -> int:
        return len(self.entries)

    @property
    def top(self) -> Optional[Any]:
        return self.entries[-1] if self.entries else None


StackListener = Callable[[StackSnapshot], None]


class NavigationStackProtocol(Protocol):
    """What a coordinator needs from the stack it drives."""

    @property
    def depth(self) -> int: ...

    def push(self, screen: Hashable) -> None: ...

    def pop(self) -> Optional[Hashable]: ...

    def add_listener(self, listener: StackListener) -> None: ...

    def remove_listener(self, listener: StackListener) -> None: ...


class NavigationStack:
    """In-memory navigation history with synchronous change notification.

    Listeners are called inline after every mutation, on whatever thread or
    loop performed it.
    """

    def __init__(self, root: Optional[Hashable] = None):
        self._entries: List[Hashable] = [root] if root is not None else []
        self._listeners: List[StackListener] = []
        self._version = 0

    @property
    def depth(self) -> int:
        return len(self._entries)

    def current(self) -> Optional[Hashable]:
        """Get the visible screen."""
        return self._entries[-1] if self._entries else None

    def snapshot(self) -> StackSnapshot:
        return StackSnapshot(entries=tuple(self._entries), version=self._version)

    def push(self, screen: Hashable) -> None:
        """Show ``screen`` on top of the history."""
        self._entries.append(screen)
        logger.debug(f"Pushed {screen} (depth {self.depth})")
        self._notify()

    def pop(self) -> Optional[Hashable]:
        """Remove and return the visible screen; None when empty."""
        if not self._entries:
            return None
        screen = self._entries.pop()
        logger.debug(f"Popped {screen} (depth {self.depth})")
        self._notify()
        return screen

    def pop_to_depth(self, depth: int) -> int:
        """Pop until at most ``depth`` entries remain; returns how many were popped."""
        popped = 0
        while self.depth > max(depth, 0):
            self.pop()
            popped += 1
        return popped

    def clear(self) -> None:
        """Drop the whole history (e.g. when jumping home)."""
        if not self._entries:
            return
        self._entries.clear()
        self._notify()

    def add_listener(self, listener: StackListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: StackListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        self._version += 1
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception(f"Stack listener {listener!r} failed")
