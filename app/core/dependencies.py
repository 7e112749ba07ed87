"""
FastAPI dependencies for upstream access and aggregation
"""
from fastapi import Depends, Request
import httpx

from app.aggregation import GamepassAggregator, build_aggregator
from app.config import Settings, settings


def get_settings() -> Settings:
    """Return the process-wide settings"""
    return settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared upstream client created at startup

    Args:
        request: Incoming request

    Returns:
        httpx.AsyncClient: Client stored on application state
    """
    return request.app.state.http_client


def get_aggregator(
    client: httpx.AsyncClient = Depends(get_http_client),
    app_settings: Settings = Depends(get_settings)
) -> GamepassAggregator:
    """
    Build a per-request aggregator

    Sources are cheap to construct; building them per request keeps the
    seen-set and accumulator confined to one call.
    """
    return build_aggregator(client, app_settings)
