"""
Experiences source: game discovery through the credentialed cloud listing.

Only built when OPEN_CLOUD_API_KEY is set. Pass listing and enrichment are
shared with GameEnumerationSource.
"""

from typing import List, Optional
import logging

from app.sources.game_source import GameEnumerationSource
from app.utils.parsing import first_present, parse_int

logger = logging.getLogger(__name__)


class ExperiencesSource(GameEnumerationSource):
    """Discover games from the privileged experiences listing"""

    name = "experiences"

    def _auth_headers(self) -> dict:
        return {"x-api-key": self.settings.OPEN_CLOUD_API_KEY.strip()}

    @staticmethod
    def _universe_id(record: dict) -> Optional[int]:
        universe_id = parse_int(first_present(record, "id", "universeId"))
        if universe_id is None:
            # Resource paths look like "universes/123"
            path = record.get("path")
            if isinstance(path, str) and "/" in path:
                universe_id = parse_int(path.rsplit("/", 1)[-1])
        return universe_id

    async def list_universes(self, user_id: int) -> Optional[List[int]]:
        if not self.settings.experiences_enabled:
            logger.info(f"Source {self.name}: no API key configured")
            return None

        url = self.settings.EXPERIENCES_URL.format(user_id=user_id)
        records = await self._paginate(
            url,
            "universes",
            params={"maxPageSize": 50},
            headers=self._auth_headers(),
            cursor_key="nextPageToken",
            cursor_param="pageToken"
        )
        if records is None:
            return None

        universes = []
        for record in records:
            universe_id = self._universe_id(record)
            if universe_id is not None and universe_id not in universes:
                universes.append(universe_id)
        return universes
