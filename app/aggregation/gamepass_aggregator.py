"""
Gamepass Aggregator
Resolves a user's for-sale passes from prioritized sources with fallback.
"""

from typing import List, Optional, Sequence
import logging

import httpx

from app.config import Settings
from app.schemas.gamepass import AggregationResult
from app.sources import SOURCE_CLASSES, BaseSource
from app.sources.details import PassDetailLookup
from app.sources.pass_filter import PassAccumulator

logger = logging.getLogger(__name__)


class GamepassAggregator:
    """Tries sources in order and returns the first non-empty result"""

    def __init__(self, sources: Sequence[BaseSource], sort_by_price: bool = False):
        """
        Initialize aggregator.

        Args:
            sources: Sources in priority order
            sort_by_price: If True, sort the result ascending by price
        """
        self.sources = list(sources)
        self.sort_by_price = sort_by_price

    async def resolve(self, user_id: int) -> AggregationResult:
        """
        Aggregate passes for a user.

        Upstream failures never surface here: a failing source counts as
        empty and the next one is tried. The result is always ok.

        Args:
            user_id: Requested user id

        Returns:
            AggregationResult with de-duplicated, positively priced passes
        """
        logger.info(f"Resolving passes for user {user_id}")
        accumulator = PassAccumulator()

        for source in self.sources:
            try:
                passes = await source.fetch(user_id)
            except Exception as e:
                logger.error(f"Source {source.name} failed for user {user_id}: {e}", exc_info=True)
                continue

            if accumulator.extend(passes):
                logger.info(f"Source {source.name} served {len(accumulator)} passes for user {user_id}")
                break

            logger.info(f"Source {source.name} found nothing for user {user_id}, falling back")
        else:
            logger.info(f"No source found passes for user {user_id}")

        passes = accumulator.passes
        if self.sort_by_price:
            passes.sort(key=lambda gamepass: gamepass.price)

        return AggregationResult(ok=True, user_id=user_id, passes=passes)


def build_sources(
    client: httpx.AsyncClient,
    settings: Settings,
    order: Optional[List[str]] = None
) -> List[BaseSource]:
    """
    Build the configured sources sharing one detail lookup.

    Args:
        client: Shared HTTP client
        settings: Application settings
        order: Source names, defaults to settings.source_order

    Returns:
        Source instances in priority order
    """
    details = PassDetailLookup(client, settings)
    sources = []
    for name in order if order is not None else settings.source_order:
        source_class = SOURCE_CLASSES.get(name)
        if source_class is None:
            logger.warning(f"Unknown source '{name}' ignored")
            continue
        if name == "experiences" and not settings.experiences_enabled:
            logger.debug("Experiences source disabled: OPEN_CLOUD_API_KEY not set")
            continue
        sources.append(source_class(client, settings, details=details))
    return sources


def build_aggregator(client: httpx.AsyncClient, settings: Settings) -> GamepassAggregator:
    """Create an aggregator wired to the configured sources"""
    return GamepassAggregator(
        build_sources(client, settings),
        sort_by_price=settings.SORT_BY_PRICE
    )
