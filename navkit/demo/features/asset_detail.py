"""Asset detail screen.

Linking an issue needs an answer from the Issues module. This feature only
knows the ``IssuePickerNavigator`` protocol; the app layer injects an
implementation that pushes the picker and awaits its result.
"""

from __future__ import annotations

from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict

from navkit.shared.core.errors import NavigationError
from navkit.shared.domain.assets import AssetDetailRepositoryProtocol, AssetDetailUIModel
from navkit.shared.domain.issues import IssueUIModel

from .base import Action, Effect, Feature


class IssuePickerNavigator(Protocol):
    async def navigate_to_issues_picker(self) -> Optional[IssueUIModel]: ...


class AssetDetailState(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset_id: str
    asset_detail: Optional[AssetDetailUIModel] = None
    is_loading: bool = False
    error_message: Optional[str] = None
    linked_issue: Optional[IssueUIModel] = None
    is_picking_issue: bool = False


class OnAppear(Action):
    pass


class AssetDetailResponse(Action):
    asset_detail: Optional[AssetDetailUIModel] = None


class LinkIssueTapped(Action):
    pass


class IssueLinked(Action):
    issue: IssueUIModel


class IssuePickerDismissed(Action):
    error: Optional[str] = None


class LinkedIssueTapped(Action):
    issue_id: str


class AssetDetailFeature(Feature[AssetDetailState]):
    name = "asset_detail"

    def __init__(
        self,
        asset_id: str,
        repository: AssetDetailRepositoryProtocol,
        navigator: IssuePickerNavigator,
    ):
        super().__init__(AssetDetailState(asset_id=asset_id))
        self.repository = repository
        self.navigator = navigator

    def reduce(self, action: Action) -> Optional[Effect]:
        if isinstance(action, OnAppear):
            self._set_state(is_loading=True, error_message=None)
            asset_id = self.state.asset_id

            async def load() -> None:
                async for detail in self.repository.get_asset_detail(asset_id):
                    await self.send(AssetDetailResponse(asset_detail=detail))

            return load

        if isinstance(action, AssetDetailResponse):
            if action.asset_detail is None:
                self._set_state(is_loading=False, error_message="Asset not found")
            else:
                self._set_state(is_loading=False, asset_detail=action.asset_detail)
            return None

        if isinstance(action, LinkIssueTapped):
            if self.state.is_picking_issue:
                return None
            self._set_state(is_picking_issue=True)

            async def pick() -> None:
                try:
                    issue = await self.navigator.navigate_to_issues_picker()
                except NavigationError as exc:
                    await self.send(IssuePickerDismissed(error=exc.message))
                    return
                if issue is not None:
                    await self.send(IssueLinked(issue=issue))
                else:
                    await self.send(IssuePickerDismissed())

            return pick

        if isinstance(action, IssueLinked):
            self._set_state(linked_issue=action.issue, is_picking_issue=False)
        elif isinstance(action, IssuePickerDismissed):
            self._set_state(is_picking_issue=False, error_message=action.error)
        # LinkedIssueTapped is handled by whoever observes this feature
        return None
