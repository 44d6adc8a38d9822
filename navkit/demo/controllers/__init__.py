from .navigation import (
    ASSET_FILTERS_ROUTE,
    ISSUES_LIST_ROUTE,
    ISSUES_PICKER_ROUTE,
    AssetsNavigationController,
    IssuesNavigationController,
    issue_detail_route,
)

__all__ = [
    "ASSET_FILTERS_ROUTE",
    "ISSUES_LIST_ROUTE",
    "ISSUES_PICKER_ROUTE",
    "AssetsNavigationController",
    "IssuesNavigationController",
    "issue_detail_route",
]
