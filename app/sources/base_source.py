"""
Base source abstract class for all gamepass discovery strategies.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import logging

import httpx

from app.config import Settings
from app.schemas.gamepass import Gamepass, PassCandidate
from app.sources.details import PassDetailLookup
from app.sources.pass_filter import PassAccumulator, to_gamepass
from app.sources.upstream import fetch_json

logger = logging.getLogger(__name__)


class BaseSource(ABC):
    """Abstract base class for all gamepass sources"""

    name = "base"

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        details: Optional[PassDetailLookup] = None
    ):
        """
        Initialize source with a shared client and settings.

        Args:
            client: Shared HTTP client
            settings: Application settings
            details: Detail lookup, built from client/settings when omitted
        """
        self.client = client
        self.settings = settings
        self.max_pages = settings.MAX_PAGES
        self.details = details or PassDetailLookup(client, settings)

    @abstractmethod
    async def discover(self, user_id: int) -> List[PassCandidate]:
        """
        Discover candidate passes for a user.

        Args:
            user_id: Requested user id

        Returns:
            Unfiltered candidates in discovery order; empty when the
            source could not list anything
        """
        pass

    async def fetch(self, user_id: int) -> List[Gamepass]:
        """
        Discover, filter and de-duplicate passes for a user.

        Args:
            user_id: Requested user id

        Returns:
            Accepted passes in discovery order
        """
        candidates = await self.discover(user_id)
        accumulator = PassAccumulator()
        for candidate in candidates:
            gamepass = to_gamepass(candidate, user_id)
            if gamepass is not None:
                accumulator.add(gamepass)

        logger.info(
            f"Source {self.name}: accepted {len(accumulator)} of "
            f"{len(candidates)} candidates for user {user_id}"
        )
        return accumulator.passes

    async def _paginate(
        self,
        url: str,
        items_key: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        cursor_key: str = "nextPageCursor",
        cursor_param: str = "cursor",
        max_pages: Optional[int] = None
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Collect every page of a cursor-paginated listing.

        Requests continue with the returned cursor until a page comes back
        without one. A failed later page keeps what was already gathered.

        Args:
            url: Listing endpoint
            items_key: Key holding the page's item list
            params: Base query parameters
            headers: Extra request headers
            cursor_key: Response key holding the next cursor
            cursor_param: Query parameter carrying the cursor
            max_pages: Page cap, defaults to MAX_PAGES

        Returns:
            All items, or None if the first page could not be read
        """
        max_pages = max_pages or self.max_pages
        items: List[Dict[str, Any]] = []
        seen_cursors = set()
        cursor = None

        for page in range(1, max_pages + 1):
            page_params = dict(params or {})
            if cursor:
                page_params[cursor_param] = cursor

            result = await fetch_json(self.client, url, params=page_params, headers=headers)
            body = result.unwrap_or(None)
            page_items = body.get(items_key) if body is not None else None
            if body is not None and not isinstance(page_items, list):
                logger.warning(f"Listing {url} page {page} has no '{items_key}' list")
                page_items = None

            if page_items is None:
                return None if page == 1 else items

            items.extend(item for item in page_items if isinstance(item, dict))

            next_cursor = body.get(cursor_key)
            if not next_cursor or not isinstance(next_cursor, str):
                return items
            if next_cursor in seen_cursors:
                logger.warning(f"Listing {url} repeated cursor {next_cursor!r}, stopping")
                return items
            seen_cursors.add(next_cursor)
            cursor = next_cursor

        logger.warning(f"Listing {url} stopped at page cap {max_pages}")
        return items

    @staticmethod
    def _unique(candidates: List[PassCandidate]) -> List[PassCandidate]:
        """Drop repeated ids before detail lookups"""
        seen = set()
        unique = []
        for candidate in candidates:
            if candidate.id not in seen:
                seen.add(candidate.id)
                unique.append(candidate)
        return unique
