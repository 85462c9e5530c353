"""
Search API Router
Handles all search-related endpoints

InputError and SearchFailure are turned into structured responses by the
exception handlers registered in catalog_search.main.
"""
from fastapi import APIRouter, Depends, Query
from functools import lru_cache
from typing import Optional
import logging

from catalog_search.config import settings
from catalog_search.db.catalog_store import CatalogStore
from catalog_search.models.requests import SearchOptions, SearchRequest
from catalog_search.models.responses import SearchEnvelope, SearchFailureResponse
from catalog_search.services.orchestrator import SearchOrchestrator
from catalog_search.services.tokenizer import parse_query_tokens

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])

ERROR_RESPONSES = {
    400: {"model": SearchFailureResponse, "description": "Query missing or too short"},
    503: {"model": SearchFailureResponse, "description": "Catalog store unavailable"},
}


@lru_cache()
def get_orchestrator() -> SearchOrchestrator:
    """Shared orchestrator (stateless per request, safe to reuse)"""
    return SearchOrchestrator(CatalogStore.from_settings(), settings)


@router.get("/universal", response_model=SearchEnvelope, responses=ERROR_RESPONSES)
def universal_search(
    q: Optional[str] = Query(None, description="Search query text"),
    limit: int = Query(settings.default_limit, ge=1, le=settings.max_limit),
    include_items: bool = Query(False, description="Always run the card drill-down"),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """
    Universal search endpoint

    Searches players, teams, sets and series in one round trip, then
    drills down into cards when the query names a card number, a card
    type or a print run (or when include_items is set).
    """
    return orchestrator.search(q, SearchOptions(limit=limit, include_items=include_items))


@router.post("/universal", response_model=SearchEnvelope, responses=ERROR_RESPONSES)
def universal_search_post(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Universal search with a JSON body"""
    return orchestrator.search(request.query, request.to_options())


@router.get("/tokens")
def debug_tokens(q: str = Query(..., description="Query to tokenize")):
    """
    Debug endpoint for query tokenization

    Useful for testing and debugging card number and type detection.
    Never touches the store.
    """
    tokens = parse_query_tokens(q)

    return {
        "query": q,
        "tokens": tokens.to_dict(),
        "item_search_triggered": tokens.has_item_signals,
    }


@router.get("/health")
def search_health():
    """Search health check"""
    return {
        "status": "ok",
        "service": "catalog-search",
        "description": "Unified entity query with conditional card drill-down",
    }
