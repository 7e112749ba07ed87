"""
Aggregation package for combining passes from multiple sources.
"""

from app.aggregation.gamepass_aggregator import (
    GamepassAggregator,
    build_aggregator,
    build_sources
)

__all__ = ["GamepassAggregator", "build_aggregator", "build_sources"]
