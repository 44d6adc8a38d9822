"""Issues picker screen.

The issues list in pick mode. Knows nothing about who opened it: selection
and cancellation are plain actions, bridged to the result bus by the app
layer.
"""

from __future__ import annotations

from navkit.shared.domain.issues import IssueUIModel

from .base import Action
from .issues_list import IssuesListFeature, IssuesListState, IssuesResponse, OnAppear

IssuesPickerState = IssuesListState

__all__ = [
    "CancelTapped",
    "IssueSelected",
    "IssuesPickerFeature",
    "IssuesPickerState",
    "IssuesResponse",
    "OnAppear",
]


class IssueSelected(Action):
    issue: IssueUIModel


class CancelTapped(Action):
    pass


class IssuesPickerFeature(IssuesListFeature):
    name = "issues_list_picker"
