"""
Upstream HTTP access for the gamepass sources.

fetch_json performs one GET and returns a FetchResult instead of raising,
so every call site decides locally what "no data" means.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

import httpx

from app.config import Settings
from app.sources.errors import (
    UpstreamError,
    TransportError,
    HttpStatusError,
    DecodeError
)

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Outcome of a single upstream call: decoded JSON or an error"""
    url: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: Any) -> Any:
        """Return the decoded body, or log the error and return default"""
        if self.error is None:
            return self.data
        logger.warning(f"Skipping upstream call: {self.error}")
        return default


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """
    Create the shared AsyncClient for upstream calls.

    Args:
        settings: Application settings

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.HTTP_TIMEOUT),
        headers={
            "Accept": "application/json",
            "User-Agent": settings.USER_AGENT
        },
        limits=httpx.Limits(
            max_keepalive_connections=20,
            max_connections=max(20, settings.DETAIL_CONCURRENCY * 2)
        ),
        follow_redirects=True
    )


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None
) -> FetchResult:
    """
    GET a JSON object from an upstream endpoint.

    Args:
        client: Shared HTTP client
        url: Absolute URL
        params: Query parameters
        headers: Extra request headers

    Returns:
        FetchResult carrying the decoded object or the failure
    """
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.RequestError as e:
        return FetchResult(url=url, error=TransportError(url, f"{type(e).__name__}: {e}"))

    if not response.is_success:
        return FetchResult(
            url=url,
            error=HttpStatusError(url, response.status_code, response.text[:200])
        )

    try:
        body = response.json()
    except ValueError as e:
        return FetchResult(url=url, error=DecodeError(url, f"invalid JSON: {e}"))

    if not isinstance(body, dict):
        return FetchResult(
            url=url,
            error=DecodeError(url, f"expected JSON object, got {type(body).__name__}")
        )

    return FetchResult(url=url, data=body)
