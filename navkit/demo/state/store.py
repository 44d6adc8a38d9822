"""App Store - composition root for one app session.

Builds the shared result bus, navigation stack and coordinator, wires the
navigation controllers to the feature modules, and hands out the feature
instance for whichever route is on the stack.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Dict, Optional

from navkit.demo.controllers import AssetsNavigationController, IssuesNavigationController
from navkit.demo.features import (
    AssetDetailFeature,
    AssetFiltersFeature,
    AssetsListFeature,
    Feature,
    IssueDetailFeature,
    IssuesListFeature,
    IssuesPickerFeature,
)
from navkit.shared.core.configuration import SystemConfig
from navkit.shared.core.result_bus import ResultBus
from navkit.shared.core.service_registry import (
    register_cleanup_handler,
    register_coordinator,
    unregister_cleanup_handler,
    unregister_coordinator,
)
from navkit.shared.domain import (
    InMemoryAssetDetailRepository,
    InMemoryAssetsListRepository,
    InMemoryIssueDetailRepository,
    InMemoryIssuesListRepository,
)
from navkit.shared.navigation import (
    NavigationCoordinator,
    NavigationDestination,
    NavigationStack,
    Route,
    StackSnapshot,
)

logger = logging.getLogger(__name__)

ROOT_ROUTE = Route(destination=NavigationDestination.ASSETS_LIST)


class Store:
    """Explicitly constructed app state.

    Nothing here is a singleton: build one Store per app session (or per
    test) and pass it where it is needed.

    Usage:
        store = Store(config)
        await store.initialize()
        await store.assets_list.send(AssetTapped(asset_id="1"))
        detail = store.current_screen()
        ...
        await store.shutdown()
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        bus: Optional[ResultBus] = None,
        stack: Optional[NavigationStack] = None,
    ) -> None:
        self.config = config or SystemConfig()
        self.bus = bus or ResultBus()
        self.stack = stack or NavigationStack(root=ROOT_ROUTE)

        self.assets_list_repository = InMemoryAssetsListRepository(
            refresh_interval=self.config.demo.assets_refresh_interval
        )
        self.asset_detail_repository = InMemoryAssetDetailRepository()
        self.issues_list_repository = InMemoryIssuesListRepository()
        self.issue_detail_repository = InMemoryIssueDetailRepository()

        self.coordinator = NavigationCoordinator(
            self.bus, self.stack, self.config.navigation, name="assets"
        )
        self.assets_navigation = AssetsNavigationController(self.stack, self.coordinator)
        self.issues_navigation = IssuesNavigationController(self.stack, self.bus)

        self.assets_list = AssetsListFeature(self.assets_list_repository).observe_actions(
            self.assets_navigation.handle
        )
        self._screens: Dict[Route, Feature] = {ROOT_ROUTE: self.assets_list}
        self._started = False
        self._cleanup_registered = False

    async def initialize(self, register_cleanup: bool = True) -> None:
        """Start the coordinator and begin tracking screens.

        Should be called once during application startup before any
        feature sends actions.
        """
        if self._started:
            return
        await self.coordinator.start()
        self.stack.add_listener(self._prune_screens)
        register_coordinator(self.coordinator.name, self.coordinator)
        if register_cleanup:
            register_cleanup_handler(self.coordinator.cancel_pending)
            self._cleanup_registered = True
        self._started = True
        logger.info("Store initialized")

    async def shutdown(self) -> None:
        """Cancel screen effects, stop the coordinator and undo global registrations."""
        for screen in self._screens.values():
            screen.cancel_effects()
        await self.coordinator.stop()
        await self.bus.wait_until_idle(self.config.bus.idle_timeout)
        self.stack.remove_listener(self._prune_screens)
        unregister_coordinator(self.coordinator.name, self.coordinator)
        if self._cleanup_registered:
            unregister_cleanup_handler(self.coordinator.cancel_pending)
            self._cleanup_registered = False
        self._started = False
        logger.info("Store shut down")

    def screen_for(self, route: Route) -> Feature:
        """Get (or build) the feature backing ``route``."""
        screen = self._screens.get(route)
        if screen is not None:
            return screen

        destination = route.destination
        if destination is NavigationDestination.ASSETS_LIST:
            screen = self.assets_list
        elif destination is NavigationDestination.ASSET_DETAIL:
            screen = AssetDetailFeature(
                route.argument or "",
                self.asset_detail_repository,
                self.assets_navigation,
            ).observe_actions(self.assets_navigation.handle)
        elif destination is NavigationDestination.ASSET_FILTERS:
            state = self.assets_list.state
            screen = AssetFiltersFeature(state.status_filter, state.category_filter)
            screen.observe_actions(partial(self.assets_navigation.handle_filters, self.assets_list, screen))
        elif destination is NavigationDestination.ISSUES_LIST:
            screen = IssuesListFeature(self.issues_list_repository).observe_actions(
                self.issues_navigation.handle_list
            )
        elif destination is NavigationDestination.ISSUES_LIST_PICKER:
            screen = IssuesPickerFeature(self.issues_list_repository).observe_actions(
                self.issues_navigation.handle_picker
            )
        elif destination is NavigationDestination.ISSUE_DETAIL:
            screen = IssueDetailFeature(route.argument or "", self.issue_detail_repository)
        else:
            raise ValueError(f"No screen registered for {route!r}")

        self._screens[route] = screen
        return screen

    def current_screen(self) -> Optional[Feature]:
        route = self.stack.current()
        return self.screen_for(route) if isinstance(route, Route) else None

    def _prune_screens(self, snapshot: StackSnapshot) -> None:
        visible = set(snapshot.entries)
        for route in list(self._screens):
            if route not in visible and route != ROOT_ROUTE:
                screen = self._screens.pop(route)
                logger.debug(f"Dropping screen {route}")
                screen.cancel_effects()
