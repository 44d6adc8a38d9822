"""Assets list screen."""

from __future__ import annotations

from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict

from navkit.shared.domain.assets import AssetsListRepositoryProtocol, AssetUIModel

from .base import Action, Effect, Feature


class AssetsListState(BaseModel):
    model_config = ConfigDict(frozen=True)

    assets: List[AssetUIModel] = []
    is_loading: bool = False
    error_message: Optional[str] = None
    status_filter: FrozenSet[str] = frozenset()
    category_filter: FrozenSet[str] = frozenset()

    @property
    def visible_assets(self) -> List[AssetUIModel]:
        """Assets passing the active filters; an empty filter lets everything through."""
        return [
            asset
            for asset in self.assets
            if (not self.status_filter or asset.status in self.status_filter)
            and (not self.category_filter or asset.category.name in self.category_filter)
        ]


class OnAppear(Action):
    pass


class AssetsResponse(Action):
    assets: List[AssetUIModel]


class ErrorOccurred(Action):
    message: str


class AssetTapped(Action):
    asset_id: str


class FiltersTapped(Action):
    pass


class FiltersApplied(Action):
    statuses: FrozenSet[str] = frozenset()
    categories: FrozenSet[str] = frozenset()


class BrowseIssuesTapped(Action):
    pass


class AssetsListFeature(Feature[AssetsListState]):
    name = "assets_list"

    def __init__(self, repository: AssetsListRepositoryProtocol):
        super().__init__(AssetsListState())
        self.repository = repository

    def reduce(self, action: Action) -> Optional[Effect]:
        if isinstance(action, OnAppear):
            self._set_state(is_loading=True, error_message=None)

            async def load() -> None:
                # Periodic repositories keep emitting until the effect is cancelled
                async for assets in self.repository.get_all_assets():
                    await self.send(AssetsResponse(assets=assets))

            return load

        if isinstance(action, AssetsResponse):
            self._set_state(is_loading=False, assets=action.assets)
        elif isinstance(action, ErrorOccurred):
            self._set_state(is_loading=False, error_message=action.message)
        elif isinstance(action, FiltersApplied):
            self._set_state(status_filter=action.statuses, category_filter=action.categories)
        # AssetTapped, FiltersTapped and BrowseIssuesTapped are navigation, handled by observers
        return None
