"""
Pydantic schemas for gamepass aggregation
"""
from pydantic import BaseModel, Field, model_validator
from typing import Any, List, Optional


class Gamepass(BaseModel):
    """A for-sale gamepass accepted into a result"""
    id: int = Field(..., ge=0, description="Upstream-assigned pass id")
    name: str
    price: int = Field(..., gt=0, description="Price in platform currency")

    model_config = {
        "frozen": True
    }


class PassCandidate(BaseModel):
    """Unfiltered pass record as discovered by a source"""
    id: int
    name: str = ""
    price: Any = None  # raw upstream value, decoded by the pass filter
    creator_id: Optional[int] = None


class PassDetail(BaseModel):
    """Fields read from a pass detail lookup"""
    price: Any = None
    creator_id: Optional[int] = None


class AggregationResult(BaseModel):
    """Response body for GET /user/{userId}/passes"""
    ok: bool = True
    user_id: int = Field(..., alias="userId")
    count: int = 0
    passes: List[Gamepass] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True
    }

    @model_validator(mode="after")
    def _sync_count(self):
        self.count = len(self.passes)
        return self
