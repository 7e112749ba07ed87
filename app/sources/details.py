"""
Pass detail lookups used to confirm creator and price.
"""

from typing import Any, Dict, List, Optional
import asyncio
import logging

import httpx

from app.config import Settings
from app.schemas.gamepass import PassCandidate, PassDetail
from app.sources.upstream import fetch_json
from app.utils.parsing import first_present, parse_int

logger = logging.getLogger(__name__)


def parse_pass_detail(body: Dict[str, Any]) -> PassDetail:
    """
    Read price and creator id from a detail record.

    The price has been seen as both `PriceInRobux` and `price`; the creator
    is a nested object keyed `Creator` or `creator`.
    """
    price = first_present(body, "PriceInRobux", "price")

    creator_id = None
    creator = first_present(body, "Creator", "creator")
    if isinstance(creator, dict):
        creator_id = parse_int(
            first_present(creator, "CreatorTargetId", "creatorTargetId", "Id", "id")
        )

    return PassDetail(price=price, creator_id=creator_id)


class PassDetailLookup:
    """Fetch detail records for passes with a bounded fan-out"""

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        """
        Initialize lookup.

        Args:
            client: Shared HTTP client
            settings: Application settings (PASSES_API, DETAIL_CONCURRENCY)
        """
        self.client = client
        self.api_base = settings.PASSES_API.rstrip('/')
        self.concurrency = settings.DETAIL_CONCURRENCY

    def detail_url(self, pass_id: int) -> str:
        return f"{self.api_base}/game-passes/v1/game-passes/{pass_id}/product-info"

    async def lookup(self, pass_id: int) -> Optional[PassDetail]:
        """Return the parsed detail record, or None if the call failed"""
        result = await fetch_json(self.client, self.detail_url(pass_id))
        body = result.unwrap_or(None)
        if body is None:
            return None
        return parse_pass_detail(body)

    async def enrich(self, candidates: List[PassCandidate]) -> List[PassCandidate]:
        """
        Apply detail records to candidates, preserving order.

        A failed lookup leaves the candidate as listed. A successful one
        replaces the price, even with null, and sets the creator.

        Args:
            candidates: Passes discovered by a source

        Returns:
            Enriched candidates in the same order
        """
        if not candidates:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)

        async def _bounded(candidate: PassCandidate) -> PassCandidate:
            async with semaphore:
                detail = await self.lookup(candidate.id)
            if detail is None:
                return candidate
            updates: Dict[str, Any] = {
                "creator_id": detail.creator_id,
                "price": detail.price
            }
            return candidate.model_copy(update=updates)

        enriched = await asyncio.gather(*[_bounded(c) for c in candidates])
        logger.debug(f"Enriched {len(enriched)} passes")
        return list(enriched)
