"""Headless feature modules (state containers) for the demo app.

Feature modules import shared domain models and, at most, features of their
own module. Assets features never reference Issues features or the other
way round.
"""

from .base import Action, Feature
from .assets_list import AssetsListFeature
from .asset_detail import AssetDetailFeature, IssuePickerNavigator
from .asset_filters import AssetFiltersFeature
from .issues_list import IssuesListFeature
from .issues_picker import IssuesPickerFeature
from .issue_detail import IssueDetailFeature

__all__ = [
    "Action",
    "Feature",
    "AssetsListFeature",
    "AssetDetailFeature",
    "AssetFiltersFeature",
    "IssuePickerNavigator",
    "IssuesListFeature",
    "IssuesPickerFeature",
    "IssueDetailFeature",
]
