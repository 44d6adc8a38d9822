# tests/test_domain.py
import asyncio

import pytest

from navkit.shared.domain import (
    InMemoryAssetDetailRepository,
    InMemoryAssetsListRepository,
    InMemoryIssueDetailRepository,
    InMemoryIssuesListRepository,
)


async def _collect(stream):
    return [item async for item in stream]


@pytest.mark.asyncio
async def test_issue_repositories_emit_sample_data():
    [issues] = await _collect(InMemoryIssuesListRepository().get_all_issues())
    [detail] = await _collect(InMemoryIssueDetailRepository().get_issue_detail("3"))

    assert [issue.status for issue in issues] == ["Open", "Closed", "In Progress"]
    assert detail.assignee == "Mike Brown"
    assert await _collect(InMemoryIssueDetailRepository().get_issue_detail("404")) == [None]


@pytest.mark.asyncio
async def test_asset_repositories_emit_sample_data():
    [assets] = await _collect(InMemoryAssetsListRepository().get_all_assets())
    [detail] = await _collect(InMemoryAssetDetailRepository().get_asset_detail("1"))

    assert [asset.name for asset in assets] == ["Asset 1", "Asset 2", "Asset 3"]
    assert detail.name == "Asset 1"
    assert assets[0].category == detail.category


@pytest.mark.asyncio
async def test_repositories_accept_custom_data():
    [issues] = await _collect(InMemoryIssuesListRepository(issues=[]).get_all_issues())

    assert issues == []


@pytest.mark.asyncio
async def test_assets_repository_refreshes_periodically():
    stream = InMemoryAssetsListRepository(refresh_interval=0.01).get_all_assets()

    first = await anext(stream)
    second = await asyncio.wait_for(anext(stream), timeout=1.0)
    await stream.aclose()

    assert first == second
    assert [asset.id for asset in second] == ["1", "2", "3"]
