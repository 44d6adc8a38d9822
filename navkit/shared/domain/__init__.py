"""
Domain Module
=============

UI models and mock repositories for the Assets and Issues feature modules.
"""

from .assets import (
    AssetCategory,
    AssetDetailUIModel,
    AssetUIModel,
    InMemoryAssetDetailRepository,
    InMemoryAssetsListRepository,
)
from .issues import (
    InMemoryIssueDetailRepository,
    InMemoryIssuesListRepository,
    IssueDetailUIModel,
    IssueUIModel,
)

__all__ = [
    "AssetCategory",
    "AssetDetailUIModel",
    "AssetUIModel",
    "InMemoryAssetDetailRepository",
    "InMemoryAssetsListRepository",
    "InMemoryIssueDetailRepository",
    "InMemoryIssuesListRepository",
    "IssueDetailUIModel",
    "IssueUIModel",
]
