"""
Catalog Search Errors
Exception taxonomy shared by the store, the executors and the orchestrator
"""
from typing import Any, Dict, Optional


class CatalogSearchError(Exception):
    """Base exception for catalog search errors."""
    def __init__(self, code: str, message: str, status_code: int = 500):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InputError(CatalogSearchError):
    """Raised when the query is missing or shorter than the minimum length.

    Reported before any store access and never retried.
    """
    def __init__(self, message: str):
        super().__init__("INVALID_QUERY", message, status_code=400)


class StoreError(CatalogSearchError):
    """Raised when the backing store rejects a query."""
    def __init__(self, message: str, code: str = "STORE_ERROR"):
        super().__init__(code, message, status_code=503)


class TransientStoreError(StoreError):
    """Raised on network, timeout or contention failures. Safe to retry."""
    def __init__(self, message: str):
        super().__init__(message, code="STORE_UNAVAILABLE")


class SearchFailure(CatalogSearchError):
    """Raised when a search phase cannot complete after retries.

    Carries the timings gathered so far so callers never mistake a failed
    search for an empty one.
    """
    def __init__(
        self,
        phase: str,
        elapsed_ms: int,
        phase_timings: Dict[str, int],
        round_trip_count: int,
        cause: Optional[BaseException] = None,
    ):
        reason = str(cause) if cause else "unknown error"
        super().__init__(
            "SEARCH_FAILED",
            f"Search failed during {phase}: {reason}",
            status_code=503,
        )
        self.phase = phase
        self.elapsed_ms = elapsed_ms
        self.phase_timings = phase_timings
        self.round_trip_count = round_trip_count
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "phase": self.phase,
            "elapsed_ms": self.elapsed_ms,
            "phase_timings": dict(self.phase_timings),
            "round_trip_count": self.round_trip_count,
        }
