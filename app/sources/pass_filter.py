"""
Shared filter and de-duplication rules applied to every source.
"""

from typing import List, Optional, Set
import logging

from app.schemas.gamepass import Gamepass, PassCandidate
from app.utils.parsing import parse_price

logger = logging.getLogger(__name__)


def to_gamepass(candidate: PassCandidate, user_id: int) -> Optional[Gamepass]:
    """
    Turn a candidate into a Gamepass if it passes the filter.

    A candidate is rejected when a known creator differs from the user, or
    when its price does not decode to a positive integer.

    Args:
        candidate: Unfiltered pass record
        user_id: Requested user id

    Returns:
        Gamepass or None if rejected
    """
    if candidate.id < 0:
        logger.debug(f"Rejecting pass with invalid id {candidate.id}")
        return None

    if candidate.creator_id is not None and candidate.creator_id != user_id:
        logger.debug(
            f"Rejecting pass {candidate.id}: creator {candidate.creator_id} != user {user_id}"
        )
        return None

    price = parse_price(candidate.price)
    if price is None:
        logger.debug(f"Rejecting pass {candidate.id}: price {candidate.price!r} not positive")
        return None

    return Gamepass(id=candidate.id, name=candidate.name, price=price)


class PassAccumulator:
    """Ordered collection of accepted passes with a seen-set on id"""

    def __init__(self):
        self._seen: Set[int] = set()
        self._passes: List[Gamepass] = []

    def add(self, gamepass: Gamepass) -> bool:
        """Add a pass unless its id was already accepted"""
        if gamepass.id in self._seen:
            return False
        self._seen.add(gamepass.id)
        self._passes.append(gamepass)
        return True

    def extend(self, passes: List[Gamepass]) -> int:
        """Add several passes, returning how many were new"""
        return sum(1 for gamepass in passes if self.add(gamepass))

    @property
    def passes(self) -> List[Gamepass]:
        return list(self._passes)

    def __len__(self) -> int:
        return len(self._passes)
