"""
Core functionality for Gamepass API
"""
from app.core.dependencies import get_settings, get_http_client, get_aggregator

__all__ = ["get_settings", "get_http_client", "get_aggregator"]
