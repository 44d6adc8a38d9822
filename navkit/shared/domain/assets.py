"""Asset models and the mock repositories that feed the Assets module."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict


class AssetCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class AssetUIModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    status: str
    category: AssetCategory


class AssetDetailUIModel(AssetUIModel):
    description: str
    location: str
    purchase_date: str
    value: str
    manufacturer: str
    serial_number: str


class AssetsListRepositoryProtocol(Protocol):
    def get_all_assets(self) -> AsyncIterator[List[AssetUIModel]]: ...


class AssetDetailRepositoryProtocol(Protocol):
    def get_asset_detail(self, asset_id: str) -> AsyncIterator[Optional[AssetDetailUIModel]]: ...


CATEGORY_A = AssetCategory(id="cat1", name="Category A")
CATEGORY_B = AssetCategory(id="cat2", name="Category B")

SAMPLE_ASSET_DETAILS: List[AssetDetailUIModel] = [
    AssetDetailUIModel(
        id="1",
        name="Asset 1",
        status="Active",
        category=CATEGORY_A,
        description="High-performance industrial equipment for manufacturing operations",
        location="Building A, Floor 2, Room 205",
        purchase_date="2023-01-15",
        value="$25,000.00",
        manufacturer="TechCorp Industries",
        serial_number="TC-2023-001-XYZ",
    ),
    AssetDetailUIModel(
        id="2",
        name="Asset 2",
        status="Inactive",
        category=CATEGORY_B,
        description="Office furniture set including desk and ergonomic chair",
        location="Building B, Floor 1, Office 101",
        purchase_date="2022-08-22",
        value="$1,200.00",
        manufacturer="Office Solutions Inc",
        serial_number="OSI-2022-078-ABC",
    ),
    AssetDetailUIModel(
        id="3",
        name="Asset 3",
        status="Active",
        category=CATEGORY_A,
        description="Mobile computing device for field operations",
        location="Building A, Floor 1, IT Department",
        purchase_date="2024-03-10",
        value="$1,500.00",
        manufacturer="Mobile Tech Co",
        serial_number="MTC-2024-045-DEF",
    ),
]


class InMemoryAssetsListRepository:
    """Emits a static asset list.

    With ``refresh_interval`` set, the list is re-emitted every
    ``refresh_interval`` seconds until the consumer stops iterating (or its
    task is cancelled); otherwise it is emitted once.
    """

    def __init__(
        self,
        assets: Optional[List[AssetUIModel]] = None,
        refresh_interval: Optional[float] = None,
    ):
        if assets is None:
            assets = [
                AssetUIModel(id=d.id, name=d.name, status=d.status, category=d.category)
                for d in SAMPLE_ASSET_DETAILS
            ]
        self._assets = list(assets)
        self.refresh_interval = refresh_interval

    async def get_all_assets(self) -> AsyncIterator[List[AssetUIModel]]:
        yield list(self._assets)
        if self.refresh_interval is None:
            return
        while True:
            await asyncio.sleep(self.refresh_interval)
            yield list(self._assets)


class InMemoryAssetDetailRepository:
    def __init__(self, details: Optional[List[AssetDetailUIModel]] = None):
        self._details = {d.id: d for d in (details if details is not None else SAMPLE_ASSET_DETAILS)}

    async def get_asset_detail(self, asset_id: str) -> AsyncIterator[Optional[AssetDetailUIModel]]:
        yield self._details.get(asset_id)
