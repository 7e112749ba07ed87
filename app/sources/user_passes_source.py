"""
Direct user-passes source: the listing of every pass a user has created.
"""

from typing import Any, Dict, List, Optional
import logging

from app.schemas.gamepass import PassCandidate
from app.sources.base_source import BaseSource
from app.sources.upstream import fetch_json
from app.utils.parsing import first_present, parse_int

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class UserPassesSource(BaseSource):
    """List the user's passes directly, then confirm each with a detail lookup"""

    name = "user_passes"

    def listing_url(self, user_id: int) -> str:
        return f"{self.settings.PASSES_API.rstrip('/')}/game-passes/v1/users/{user_id}/game-passes"

    async def _list_passes(self, user_id: int) -> Optional[List[Dict[str, Any]]]:
        """
        Walk the listing, paginated by the last id of each full page.

        Returns:
            Raw pass records, or None if the first page failed
        """
        url = self.listing_url(user_id)
        records: List[Dict[str, Any]] = []
        start_id = None

        for page in range(1, self.max_pages + 1):
            params: Dict[str, Any] = {"count": PAGE_SIZE}
            if start_id is not None:
                params["exclusiveStartId"] = start_id

            body = (await fetch_json(self.client, url, params=params)).unwrap_or(None)
            page_items = first_present(body, "gamePasses", "data") if body is not None else None
            if not isinstance(page_items, list):
                if body is not None:
                    logger.warning(f"Listing {url} page {page} has no pass list")
                return None if page == 1 else records

            page_records = [item for item in page_items if isinstance(item, dict)]
            records.extend(page_records)

            if len(page_items) < PAGE_SIZE or not page_records:
                return records
            last_id = parse_int(first_present(page_records[-1], "gamePassId", "id"))
            if last_id is None or last_id == start_id:
                return records
            start_id = last_id

        logger.warning(f"Listing {url} stopped at page cap {self.max_pages}")
        return records

    async def discover(self, user_id: int) -> List[PassCandidate]:
        records = await self._list_passes(user_id)
        if records is None:
            logger.warning(f"Source {self.name}: could not list passes for user {user_id}")
            return []

        candidates = []
        for record in records:
            pass_id = parse_int(first_present(record, "gamePassId", "id"))
            if pass_id is None:
                continue
            candidates.append(PassCandidate(
                id=pass_id,
                name=str(record.get("name") or ""),
                price=first_present(record, "price", "priceInRobux")
            ))

        return await self.details.enrich(self._unique(candidates))
