"""
Configuration management for Gamepass API
Loads settings from environment variables
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

DEFAULT_PORT = 8080

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

KNOWN_SOURCES = ("catalog", "games", "user_passes", "experiences")


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = DEFAULT_PORT
    PROJECT_NAME: str = "Gamepass API"
    VERSION: str = "1.0.0"

    # Application
    LOG_LEVEL: str = "INFO"

    # Aggregation policy
    SOURCE_ORDER: str = ",".join(KNOWN_SOURCES)
    SORT_BY_PRICE: bool = False
    DETAIL_CONCURRENCY: int = Field(default=8, ge=1, le=50)

    # Upstream HTTP
    HTTP_TIMEOUT: float = Field(default=10.0, gt=0)
    MAX_PAGES: int = Field(default=50, ge=1)
    CATALOG_MAX_PAGES: int = Field(default=1, ge=1)
    USER_AGENT: str = "gamepass-api/1.0"

    CATALOG_API: str = "https://catalog.roblox.com"
    GAMES_API: str = "https://games.roblox.com"
    PASSES_API: str = "https://apis.roblox.com"
    EXPERIENCES_URL: str = "https://apis.roblox.com/cloud/v2/users/{user_id}/universes"

    # Optional credential for the privileged experiences listing
    OPEN_CLOUD_API_KEY: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("PORT", mode="before")
    @classmethod
    def _fallback_port(cls, value):
        """Unparsable or out-of-range ports fall back to the default"""
        try:
            port = int(str(value).strip())
        except (TypeError, ValueError):
            return DEFAULT_PORT
        if not 0 < port < 65536:
            return DEFAULT_PORT
        return port

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Unknown level names fall back to INFO"""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            return "INFO"
        return level

    @property
    def source_order(self) -> List[str]:
        """Parse source order, dropping unknown names and repeats"""
        order = []
        for name in self.SOURCE_ORDER.split(','):
            name = name.strip().lower()
            if name in KNOWN_SOURCES and name not in order:
                order.append(name)
        return order

    @property
    def experiences_enabled(self) -> bool:
        return bool(self.OPEN_CLOUD_API_KEY.strip())


# Global settings instance
settings = Settings()
