"""
Data models for Catalog Search
"""
from .tokens import TokenSet, TypeFlags
from .candidates import (
    Candidate,
    CandidateBase,
    EntityCategory,
    PersonCandidate,
    OrganizationCandidate,
    ReleaseCandidate,
    SeriesCandidate,
    ItemCandidate,
)
from .requests import SearchOptions, SearchRequest
from .responses import PhaseTimings, SearchEnvelope, SearchFailureResponse

__all__ = [
    # Tokens
    "TokenSet",
    "TypeFlags",
    # Candidates
    "Candidate",
    "CandidateBase",
    "EntityCategory",
    "PersonCandidate",
    "OrganizationCandidate",
    "ReleaseCandidate",
    "SeriesCandidate",
    "ItemCandidate",
    # Request/Response
    "SearchOptions",
    "SearchRequest",
    "PhaseTimings",
    "SearchEnvelope",
    "SearchFailureResponse",
]
