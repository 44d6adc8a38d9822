"""App-level navigation controllers.

These are the only place where feature modules meet: they observe one
module's actions and translate them into stack pushes or bus envelopes.
"""

from __future__ import annotations

import logging
from typing import Optional

from navkit.demo.features import asset_detail, asset_filters, assets_list, issues_list, issues_picker
from navkit.demo.features.base import Action
from navkit.shared.core.envelopes import (
    ResultKind,
    create_cancellation_envelope,
    create_selection_envelope,
)
from navkit.shared.core.result_bus import ResultBus
from navkit.shared.domain.issues import IssueUIModel
from navkit.shared.navigation.coordinator import NavigationCoordinator
from navkit.shared.navigation.stack import NavigationDestination, NavigationStack, Route

logger = logging.getLogger(__name__)

ISSUES_PICKER_ROUTE = Route(destination=NavigationDestination.ISSUES_LIST_PICKER)
ISSUES_LIST_ROUTE = Route(destination=NavigationDestination.ISSUES_LIST)
ASSET_FILTERS_ROUTE = Route(destination=NavigationDestination.ASSET_FILTERS)


def issue_detail_route(issue_id: str) -> Route:
    return Route(destination=NavigationDestination.ISSUE_DETAIL, argument=issue_id)


class AssetsNavigationController:
    """Handles navigation out of the Assets module."""

    def __init__(self, stack: NavigationStack, coordinator: NavigationCoordinator):
        self.stack = stack
        self.coordinator = coordinator

    async def handle(self, action: Action) -> None:
        """Observer for assets screens: fire-and-forget pushes."""
        if isinstance(action, assets_list.AssetTapped):
            self.stack.push(Route(destination=NavigationDestination.ASSET_DETAIL, argument=action.asset_id))
        elif isinstance(action, assets_list.FiltersTapped):
            self.stack.push(ASSET_FILTERS_ROUTE)
        elif isinstance(action, assets_list.BrowseIssuesTapped):
            self.stack.push(ISSUES_LIST_ROUTE)
        elif isinstance(action, asset_detail.LinkedIssueTapped):
            self.stack.push(issue_detail_route(action.issue_id))

    async def handle_filters(
        self,
        assets: assets_list.AssetsListFeature,
        filters: asset_filters.AssetFiltersFeature,
        action: Action,
    ) -> None:
        """Observer for the filters sheet: apply the selection to ``assets`` and close."""
        if isinstance(action, asset_filters.ApplyFilters):
            await assets.send(
                assets_list.FiltersApplied(
                    statuses=filters.state.selected_statuses,
                    categories=filters.state.selected_categories,
                )
            )
            self._close(ASSET_FILTERS_ROUTE)
        elif isinstance(action, asset_filters.Dismiss):
            self._close(ASSET_FILTERS_ROUTE)

    async def navigate_to_issues_picker(self) -> Optional[IssueUIModel]:
        """Push the issue picker and await the selected issue; None if dismissed."""
        return await self.coordinator.navigate_and_await(ISSUES_PICKER_ROUTE, ResultKind.ISSUE_SELECTED)

    def _close(self, route: Route) -> None:
        if self.stack.current() == route:
            self.stack.pop()


class IssuesNavigationController:
    """Handles navigation out of the Issues module.

    Picker outcomes go out on the result bus for whoever awaits them; the
    browse list pushes issue detail directly.
    """

    def __init__(self, stack: NavigationStack, bus: ResultBus):
        self.stack = stack
        self.bus = bus

    async def handle_picker(self, action: Action) -> None:
        if isinstance(action, issues_picker.IssueSelected):
            logger.debug(f"Issue {action.issue.id} selected in picker")
            await self.bus.publish(
                create_selection_envelope(ResultKind.ISSUE_SELECTED, action.issue, source=issues_picker.IssuesPickerFeature.name)
            )
        elif isinstance(action, issues_picker.CancelTapped):
            await self.bus.publish(
                create_cancellation_envelope(ResultKind.ISSUE_SELECTED, source=issues_picker.IssuesPickerFeature.name)
            )

    async def handle_list(self, action: Action) -> None:
        if isinstance(action, issues_list.IssueTapped):
            self.stack.push(issue_detail_route(action.issue_id))
