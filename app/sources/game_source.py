"""
Per-game enumeration source: walk the user's public games and their passes.
"""

from typing import List, Optional
import logging

from app.schemas.gamepass import PassCandidate
from app.sources.base_source import BaseSource
from app.utils.parsing import parse_int

logger = logging.getLogger(__name__)


class GameEnumerationSource(BaseSource):
    """List the user's games, then every pass attached to each game"""

    name = "games"

    async def list_universes(self, user_id: int) -> Optional[List[int]]:
        """
        List the user's public games.

        Args:
            user_id: Requested user id

        Returns:
            Universe ids, or None if the listing failed outright
        """
        url = f"{self.settings.GAMES_API.rstrip('/')}/v2/users/{user_id}/games"
        params = {
            "accessFilter": "Public",
            "sortOrder": "Asc",
            "limit": 50
        }
        games = await self._paginate(url, "data", params=params)
        if games is None:
            return None

        universes = []
        for game in games:
            universe_id = parse_int(game.get("id"))
            if universe_id is not None and universe_id not in universes:
                universes.append(universe_id)
        return universes

    async def list_game_passes(self, universe_id: int) -> List[PassCandidate]:
        """List the passes of one game; empty if the call failed"""
        url = f"{self.settings.GAMES_API.rstrip('/')}/v1/games/{universe_id}/game-passes"
        params = {
            "limit": 100,
            "sortOrder": "Asc"
        }
        passes = await self._paginate(url, "data", params=params)
        if passes is None:
            return []

        candidates = []
        for item in passes:
            pass_id = parse_int(item.get("id"))
            if pass_id is None:
                continue
            candidates.append(PassCandidate(
                id=pass_id,
                name=str(item.get("name") or ""),
                price=item.get("price")
            ))
        return candidates

    async def discover(self, user_id: int) -> List[PassCandidate]:
        universes = await self.list_universes(user_id)
        if universes is None:
            logger.warning(f"Source {self.name}: could not list games for user {user_id}")
            return []

        logger.info(f"Source {self.name}: {len(universes)} games for user {user_id}")

        candidates: List[PassCandidate] = []
        for universe_id in universes:
            candidates.extend(await self.list_game_passes(universe_id))

        return await self.details.enrich(self._unique(candidates))
