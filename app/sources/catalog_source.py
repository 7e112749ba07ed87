"""
Catalog search source: passes listed in the global item catalog.
"""

from typing import List
import logging

from app.schemas.gamepass import PassCandidate
from app.sources.base_source import BaseSource
from app.utils.parsing import parse_int

logger = logging.getLogger(__name__)

# Asset type code the catalog uses for passes
PASS_ASSET_TYPE = 46


class CatalogSource(BaseSource):
    """Search the catalog for pass assets created by the user"""

    name = "catalog"

    def search_url(self) -> str:
        return f"{self.settings.CATALOG_API.rstrip('/')}/v1/search/items/details"

    async def discover(self, user_id: int) -> List[PassCandidate]:
        params = {
            "creatorTargetId": user_id,
            "creatorType": "User",
            "itemType": "Asset",
            "includeNotForSale": "true",
            "sortType": "Updated",
            "limit": 28
        }
        logger.info(f"Searching catalog for user {user_id}")

        items = await self._paginate(
            self.search_url(),
            "data",
            params=params,
            max_pages=self.settings.CATALOG_MAX_PAGES
        )
        if items is None:
            return []

        candidates = []
        for item in items:
            if parse_int(item.get("assetType")) != PASS_ASSET_TYPE:
                continue
            pass_id = parse_int(item.get("id"))
            if pass_id is None:
                continue
            candidates.append(PassCandidate(
                id=pass_id,
                name=str(item.get("name") or ""),
                price=item.get("price")
            ))

        logger.info(f"Catalog returned {len(items)} items, {len(candidates)} passes for user {user_id}")
        return candidates
