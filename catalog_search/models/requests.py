"""
Request models for catalog search
"""
from dataclasses import dataclass
from pydantic import BaseModel, Field


@dataclass(frozen=True)
class SearchOptions:
    """Caller options for a single search"""
    limit: int = 50
    include_items: bool = False


class SearchRequest(BaseModel):
    """Request model for the universal search endpoint"""

    # Length is validated by the orchestrator so short queries report an InputError
    query: str = Field(..., description="Search query text")
    limit: int = Field(default=50, ge=1, le=200, description="Number of results to return")
    include_items: bool = Field(
        default=False,
        description="Run the card drill-down even without card-specific terms"
    )

    def to_options(self) -> SearchOptions:
        return SearchOptions(limit=self.limit, include_items=self.include_items)

    class Config:
        json_schema_extra = {
            "example": {
                "query": "2022 topps chrome juan soto rookie",
                "limit": 50,
                "include_items": False
            }
        }
