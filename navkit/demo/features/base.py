"""Unidirectional state container shared by the demo feature modules."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Action(BaseModel):
    """Base class for feature actions."""
    model_config = ConfigDict(frozen=True)


S = TypeVar("S", bound=BaseModel)
ActionObserver = Callable[[Action], Awaitable[None]]
StateListener = Callable[[Any], None]
Effect = Callable[[], Awaitable[None]]


class Feature(Generic[S]):
    """State container: actions go in, a new immutable state comes out.

    ``reduce`` updates state synchronously and may return an effect. Effects
    run as tasks on the current loop and may send further actions. Observers
    see every action before it is reduced, which lets the app layer bridge a
    feature's actions elsewhere without the feature knowing.
    """

    name = "feature"

    def __init__(self, initial_state: S):
        self.state: S = initial_state
        self._observers: List[ActionObserver] = []
        self._listeners: List[StateListener] = []
        self._effects: set[asyncio.Task] = set()

    def observe_actions(self, observer: ActionObserver) -> "Feature[S]":
        """Attach an observer that sees each action first; returns self for chaining."""
        self._observers.append(observer)
        return self

    def listen(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    async def send(self, action: Action) -> None:
        for observer in list(self._observers):
            await observer(action)

        effect = self.reduce(action)
        if effect is not None:
            task = asyncio.create_task(self._run_effect(action, effect))
            self._effects.add(task)
            task.add_done_callback(self._effects.discard)

    def reduce(self, action: Action) -> Optional[Effect]:
        raise NotImplementedError

    async def wait_for_effects(self) -> None:
        """Wait until every running effect (and any it spawned) has finished."""
        while self._effects:
            await asyncio.gather(*list(self._effects), return_exceptions=True)

    def cancel_effects(self) -> None:
        """Cancel running effects, e.g. when the screen is torn down."""
        for task in list(self._effects):
            task.cancel()

    def _set_state(self, **changes: Any) -> None:
        self.state = self.state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self.state)

    async def _run_effect(self, action: Action, effect: Effect) -> None:
        try:
            await effect()
        except asyncio.CancelledError:
            logger.debug(f"{self.name}: effect for {type(action).__name__} cancelled")
            raise
        except Exception as exc:
            logger.exception(f"{self.name}: effect for {type(action).__name__} failed", exc_info=exc)
