"""
Gamepass sources: strategies for discovering a user's passes upstream.
"""

from app.sources.base_source import BaseSource
from app.sources.catalog_source import CatalogSource
from app.sources.game_source import GameEnumerationSource
from app.sources.experiences_source import ExperiencesSource
from app.sources.user_passes_source import UserPassesSource

SOURCE_CLASSES = {
    CatalogSource.name: CatalogSource,
    GameEnumerationSource.name: GameEnumerationSource,
    UserPassesSource.name: UserPassesSource,
    ExperiencesSource.name: ExperiencesSource,
}

__all__ = [
    "BaseSource",
    "CatalogSource",
    "GameEnumerationSource",
    "ExperiencesSource",
    "UserPassesSource",
    "SOURCE_CLASSES",
]
