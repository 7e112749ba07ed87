"""
Pydantic schemas for Gamepass API
"""
from app.schemas.gamepass import (
    Gamepass, PassCandidate, PassDetail, AggregationResult
)

__all__ = [
    "Gamepass", "PassCandidate", "PassDetail", "AggregationResult"
]
