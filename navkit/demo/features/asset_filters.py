"""Asset filters sheet.

Only edits its own selection. Applying and dismissing are handled by the
app layer, which reads the selection and closes the sheet.
"""

from __future__ import annotations

from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .base import Action, Effect, Feature

AVAILABLE_STATUSES = ("Active", "Inactive", "Maintenance", "Retired")
AVAILABLE_CATEGORIES = ("Category A", "Category B")


class AssetFiltersState(BaseModel):
    model_config = ConfigDict(frozen=True)

    selected_statuses: FrozenSet[str] = frozenset()
    selected_categories: FrozenSet[str] = frozenset()
    available_statuses: Tuple[str, ...] = AVAILABLE_STATUSES
    available_categories: Tuple[str, ...] = AVAILABLE_CATEGORIES


class StatusToggled(Action):
    status: str


class CategoryToggled(Action):
    category: str


class ApplyFilters(Action):
    pass


class ClearFilters(Action):
    pass


class Dismiss(Action):
    pass


class AssetFiltersFeature(Feature[AssetFiltersState]):
    name = "asset_filters"

    def __init__(
        self,
        selected_statuses: FrozenSet[str] = frozenset(),
        selected_categories: FrozenSet[str] = frozenset(),
    ):
        super().__init__(
            AssetFiltersState(
                selected_statuses=selected_statuses,
                selected_categories=selected_categories,
            )
        )

    def reduce(self, action: Action) -> Optional[Effect]:
        if isinstance(action, StatusToggled):
            self._set_state(selected_statuses=self.state.selected_statuses ^ {action.status})
        elif isinstance(action, CategoryToggled):
            self._set_state(selected_categories=self.state.selected_categories ^ {action.category})
        elif isinstance(action, ClearFilters):
            self._set_state(selected_statuses=frozenset(), selected_categories=frozenset())
        # ApplyFilters and Dismiss close the sheet; the observer handles both
        return None
