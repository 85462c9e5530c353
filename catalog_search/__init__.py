"""
Catalog Search
Federated search over players, teams, sets, series and cards
"""
from .errors import CatalogSearchError, InputError, SearchFailure, StoreError, TransientStoreError
from .models.requests import SearchOptions
from .models.responses import SearchEnvelope
from .services.orchestrator import SearchOrchestrator, search

__version__ = "1.0.0"

__all__ = [
    "CatalogSearchError",
    "InputError",
    "SearchFailure",
    "StoreError",
    "TransientStoreError",
    "SearchOptions",
    "SearchEnvelope",
    "SearchOrchestrator",
    "search",
]
