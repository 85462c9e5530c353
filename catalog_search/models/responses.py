"""
Response models for catalog search
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from catalog_search.models.candidates import Candidate


class PhaseTimings(BaseModel):
    """Per-phase timing breakdown in milliseconds"""

    tokenize_ms: int = 0
    entity_search_ms: int = 0
    item_search_ms: int = 0


class SearchEnvelope(BaseModel):
    """Response from the universal search"""

    query: str = Field(..., description="Query text as searched (trimmed)")
    results: List[Candidate] = Field(default_factory=list, description="Ranked results")
    total_results: int = Field(..., ge=0, description="Result count before truncation")
    elapsed_ms: int = Field(..., ge=0, description="Total processing time")
    phase_timings: PhaseTimings = Field(default_factory=PhaseTimings)
    round_trip_count: int = Field(..., ge=0, le=2, description="Store round trips performed")

    class Config:
        json_schema_extra = {
            "example": {
                "query": "2022 topps chrome juan soto rookie",
                "results": [
                    {
                        "category": "person",
                        "id": 4211,
                        "name": "Juan Soto",
                        "relevance": 95,
                        "first_name": "Juan",
                        "last_name": "Soto",
                        "slug": "juan-soto",
                        "card_count": 812,
                        "is_hof": False
                    }
                ],
                "total_results": 1,
                "elapsed_ms": 48,
                "phase_timings": {
                    "tokenize_ms": 0,
                    "entity_search_ms": 31,
                    "item_search_ms": 17
                },
                "round_trip_count": 2
            }
        }


class SearchFailureResponse(BaseModel):
    """Structured failure body. Never confused with an empty result."""

    error: str = Field(..., description="Error code")
    message: str
    phase: Optional[str] = Field(None, description="Phase that failed, if any")
    elapsed_ms: int = 0
    phase_timings: PhaseTimings = Field(default_factory=PhaseTimings)
    round_trip_count: int = 0
